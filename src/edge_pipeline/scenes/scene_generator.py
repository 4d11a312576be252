"""
scene_generator.py - synthetic RGBA test frames and an image-file frame source

WHAT THIS MODULE PROVIDES
-------------------------
Frame sources standing in for the file decoder / camera:
  • Step edge       - one vertical intensity step; exact Sobel response is known
  • Slanted edge    - edge traversing pixel phases; smooth magnitude profile
  • Checkerboard    - strong edges in both directions, corners
  • Colour gradient - horizontal RGB ramp; tone/rounding checks for grayscale
  • Colour bars     - saturated bars whose luminances differ
  • Constant        - flat frame; no edges anywhere
  • load_frame()    - decode an image file with matplotlib.image.imread

RETURNS
-------
Every generator returns a PixelBuffer with alpha = 255.

© 2025 Ali Pouya - Edge Pipeline
"""

from __future__ import annotations
from pathlib import Path
from typing import Sequence, Tuple
import numpy as np
from matplotlib import image as mpimg

from edge_pipeline.buffer.pixel_buffer import PixelBuffer

__all__ = [
    "generate_scene",
    "generate_step_edge",
    "generate_slanted_edge",
    "generate_checker",
    "generate_gradient",
    "generate_color_bars",
    "generate_constant",
    "load_frame",
]

# Saturated sRGB primaries/secondaries, ordered by decreasing luminance
COLOR_BARS: Tuple[Tuple[int, int, int], ...] = (
    (255, 255, 255),
    (255, 255, 0),
    (0, 255, 255),
    (0, 255, 0),
    (255, 0, 255),
    (255, 0, 0),
    (0, 0, 255),
    (0, 0, 0),
)


# -----------------------------------------------------------------------------
# Utilities
# -----------------------------------------------------------------------------
def _to_uint8(img01: np.ndarray) -> np.ndarray:
    """Float [0, 1] → uint8 [0, 255] (rounded, clipped)."""
    img = np.clip(np.asarray(img01, dtype=np.float32), 0.0, 1.0)
    return np.rint(img * 255.0).astype(np.uint8)


def _gray_frame(img01: np.ndarray, low: int = 0, high: int = 255) -> PixelBuffer:
    """Map a [0, 1] mask onto [low, high] in all three colour channels."""
    level = low + (high - low) * np.clip(np.asarray(img01, dtype=np.float64), 0.0, 1.0)
    return PixelBuffer.from_array(np.rint(level).astype(np.uint8))


# -----------------------------------------------------------------------------
# Scene generators
# -----------------------------------------------------------------------------
def generate_step_edge(
    width: int = 64,
    height: int = 64,
    step_col: int | None = None,
    low: int = 0,
    high: int = 255,
) -> PixelBuffer:
    """
    Vertical step: columns < step_col hold `low`, the rest `high`.

    With width=height=3 and step_col=1 this is the classic 3x3 case whose
    single interior pixel has Gx = 4*(high-low) and Gy = 0.
    """
    w, h = int(width), int(height)
    col = w // 2 if step_col is None else int(step_col)
    mask = (np.arange(w)[None, :] >= col).astype(np.float32)
    return _gray_frame(np.tile(mask, (h, 1)), low=low, high=high)


def generate_slanted_edge(
    size: int = 256,
    angle_deg: float = 5.0,
    threshold: float = 0.0,
) -> PixelBuffer:
    """
    Slanted binary edge (angle 0 = vertical).

    Small angles (≈ 3–7°) make the edge cross many pixel phases, so the
    smoothed gradient magnitude varies along the edge.
    """
    h = w = int(size)
    xv, yv = np.meshgrid(np.arange(w), np.arange(h))
    ramp = (xv * np.cos(np.deg2rad(angle_deg)) + yv * np.sin(np.deg2rad(angle_deg))) - threshold
    return _gray_frame((ramp > w // 2).astype(np.float32))


def generate_checker(
    size: int = 256,
    square_px: int = 16,
    invert: bool = False,
) -> PixelBuffer:
    """Checkerboard with square_px tiles."""
    h = w = int(size)
    y, x = np.indices((h, w))
    tiles = ((x // max(int(square_px), 1)) + (y // max(int(square_px), 1))) % 2
    img = 1.0 - tiles if invert else tiles
    return _gray_frame(img.astype(np.float32))


def generate_gradient(
    width: int = 256,
    height: int = 256,
    horizontal: bool = True,
    tint: Sequence[float] = (1.0, 0.5, 0.25),
) -> PixelBuffer:
    """
    Colour ramp, 0 → tint * 255 along +x (or +y).

    Each channel scales the ramp by its tint factor, so R, G and B differ and
    the grayscale stage has real work to do.
    """
    w, h = int(width), int(height)
    if horizontal:
        ramp = np.tile(np.linspace(0.0, 1.0, w, dtype=np.float32), (h, 1))
    else:
        ramp = np.tile(np.linspace(0.0, 1.0, h, dtype=np.float32)[:, None], (1, w))
    rgb = np.stack([ramp * float(t) for t in tint], axis=2)
    return PixelBuffer.from_array(_to_uint8(rgb))


def generate_color_bars(
    width: int = 256,
    height: int = 128,
    colors: Sequence[Tuple[int, int, int]] = COLOR_BARS,
) -> PixelBuffer:
    """Vertical bars of the given RGB colours, equal widths (last bar takes the remainder)."""
    w, h = int(width), int(height)
    n = max(len(colors), 1)
    idx = np.minimum(np.arange(w) * n // max(w, 1), n - 1)
    palette = np.asarray(colors, dtype=np.uint8).reshape(-1, 3)
    row = palette[idx]
    return PixelBuffer.from_array(np.tile(row[None, :, :], (h, 1, 1)))


def generate_constant(
    width: int = 64,
    height: int = 64,
    rgb: Tuple[int, int, int] = (0, 0, 0),
    alpha: int = 255,
) -> PixelBuffer:
    """Flat frame of a single colour."""
    w, h = int(width), int(height)
    samples = np.empty((h, w, 4), dtype=np.uint8)
    samples[:, :, :3] = np.asarray(rgb, dtype=np.uint8)
    samples[:, :, 3] = alpha
    return PixelBuffer(w, h, samples)


# -----------------------------------------------------------------------------
# File source
# -----------------------------------------------------------------------------
def load_frame(path: str | Path) -> PixelBuffer:
    """
    Decode an image file into a PixelBuffer.

    matplotlib returns float [0, 1] for PNG and uint8 for JPEG (via Pillow);
    both are mapped to 0..255. Gray, RGB and RGBA inputs are accepted.
    """
    img = mpimg.imread(str(path))
    if img.dtype.kind == "f":
        img = _to_uint8(img)
    elif img.dtype != np.uint8:
        # 16-bit PNGs read through Pillow
        img = (img.astype(np.float64) / np.iinfo(img.dtype).max * 255.0).round().astype(np.uint8)
    return PixelBuffer.from_array(img)


# -----------------------------------------------------------------------------
# Dispatcher (public API)
# -----------------------------------------------------------------------------
def generate_scene(kind: str, size: int, **kwargs) -> PixelBuffer:
    """
    Dispatch frame generation by name.

    Parameters
    ----------
    kind : str
        'step_edge' | 'slanted_edge' | 'checker' | 'gradient' | 'color_bars' | 'constant'
        Also accepts aliases: 'step', 'edge', 'checkerboard', 'bars', 'black'.
    size : int
        Square canvas size (pixels); color_bars uses size//2 rows.

    Returns
    -------
    PixelBuffer
    """
    k = (kind or "").lower().strip()
    size = int(size)

    if k in ("step_edge", "step"):
        return generate_step_edge(
            width=size, height=size,
            step_col=kwargs.get("step_col"),
            low=int(kwargs.get("low", 0)),
            high=int(kwargs.get("high", 255)),
        )

    if k in ("slanted_edge", "edge"):
        return generate_slanted_edge(
            size=size,
            angle_deg=float(kwargs.get("angle_deg", 5.0)),
            threshold=float(kwargs.get("threshold", 0.0)),
        )

    if k in ("checker", "checkerboard"):
        return generate_checker(
            size=size,
            square_px=int(kwargs.get("square_px", 16)),
            invert=bool(kwargs.get("invert", False)),
        )

    if k in ("color_bars", "bars"):
        return generate_color_bars(width=size, height=int(kwargs.get("height", max(1, size // 2))))

    if k in ("constant", "black"):
        return generate_constant(width=size, height=size, rgb=tuple(kwargs.get("rgb", (0, 0, 0))))

    # "gradient", and the fallback for unknown names
    return generate_gradient(
        width=size,
        height=size,
        horizontal=bool(kwargs.get("horizontal", True)),
    )
