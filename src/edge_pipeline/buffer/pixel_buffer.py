"""
pixel_buffer.py - RGBA 8-bit frame container shared by every pipeline stage

WHAT THIS MODULE PROVIDES
-------------------------
  • PixelBuffer: width, height and a (height, width, 4) uint8 sample grid
    laid out as R, G, B, A.
  • Constructors for the layouts frame sources hand us:
      - from_flat  : canvas-style flat RGBA vector (len = 4*width*height)
      - from_array : (H, W) gray, (H, W, 3) RGB or (H, W, 4) RGBA arrays
      - blank      : all-black frame
  • validate_buffer(): re-check the size invariant right before processing.

OWNERSHIP
---------
Stages never write into a buffer they were handed. Each one returns a fresh
PixelBuffer, so the caller's source frame survives and the same source can be
re-processed with new parameters.

© 2025 Ali Pouya - Edge Pipeline
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence, Tuple
import numpy as np

from edge_pipeline.errors import MalformedBufferError

CHANNELS = 4
OPAQUE = 255


def _check_dimensions(width: int, height: int) -> Tuple[int, int]:
    if isinstance(width, bool) or isinstance(height, bool):
        raise MalformedBufferError("width/height must be integers, not booleans.")
    try:
        w, h = int(width), int(height)
    except (TypeError, ValueError) as exc:
        raise MalformedBufferError(f"width/height must be integers: {width!r}x{height!r}") from exc
    if w != width or h != height:
        raise MalformedBufferError(f"width/height must be integers: {width!r}x{height!r}")
    if w <= 0 or h <= 0:
        raise MalformedBufferError(f"Buffer dimensions must be positive, got {w}x{h}.")
    return w, h


def _as_uint8(array: np.ndarray) -> np.ndarray:
    """Convert integer or float (0..255) samples to uint8, rejecting out-of-range values."""
    a = np.asarray(array)
    if a.dtype == np.uint8:
        return a
    if a.dtype.kind not in ("u", "i", "f", "b"):
        raise MalformedBufferError(f"Unsupported sample dtype: {a.dtype}")
    if a.dtype.kind == "f" and not np.all(np.isfinite(a)):
        raise MalformedBufferError("Samples must be finite.")
    if a.size and (a.min() < 0 or a.max() > 255):
        raise MalformedBufferError("Samples must lie in the 0..255 range.")
    return np.rint(a).astype(np.uint8) if a.dtype.kind == "f" else a.astype(np.uint8)


# -----------------------------------------------------------------------------
# Container
# -----------------------------------------------------------------------------
@dataclass(eq=False)
class PixelBuffer:
    """
    Fixed-size grid of RGBA uint8 samples.

    Attributes
    ----------
    width, height : int
        Frame size in pixels (both > 0).
    samples : (height, width, 4) uint8 ndarray
        Channel order R, G, B, A.
    """
    width: int
    height: int
    samples: np.ndarray

    def __post_init__(self) -> None:
        self.width, self.height = _check_dimensions(self.width, self.height)
        samples = _as_uint8(self.samples)
        expected = (self.height, self.width, CHANNELS)
        if samples.shape != expected:
            if samples.ndim == 1 and samples.size == self.width * self.height * CHANNELS:
                samples = samples.reshape(expected)
            else:
                raise MalformedBufferError(
                    f"Expected {self.width * self.height} RGBA pixels for a {self.width}x{self.height} "
                    f"buffer, got array of shape {samples.shape}."
                )
        self.samples = np.ascontiguousarray(samples)

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------
    @classmethod
    def from_flat(cls, width: int, height: int, data: Sequence[int] | np.ndarray) -> "PixelBuffer":
        """Build from a flat R,G,B,A,R,G,B,A,... sequence (canvas ImageData layout)."""
        w, h = _check_dimensions(width, height)
        flat = np.asarray(data).ravel()
        if flat.size != w * h * CHANNELS:
            raise MalformedBufferError(
                f"Flat RGBA data has {flat.size} values; a {w}x{h} buffer needs {w * h * CHANNELS}."
            )
        return cls(w, h, _as_uint8(flat).reshape(h, w, CHANNELS))

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelBuffer":
        """
        Build from a gray, RGB or RGBA image array.

        Gray input is replicated into R, G, B. Missing alpha becomes 255.
        """
        a = np.asarray(array)
        if a.ndim == 2:
            a = np.repeat(a[:, :, None], 3, axis=2)
        if a.ndim != 3 or a.shape[2] not in (3, CHANNELS):
            raise MalformedBufferError(f"Expected (H, W), (H, W, 3) or (H, W, 4) array, got {a.shape}.")
        h, w = a.shape[:2]
        _check_dimensions(w, h)
        rgba = np.empty((h, w, CHANNELS), dtype=np.uint8)
        rgba[:, :, : a.shape[2]] = _as_uint8(a)
        if a.shape[2] == 3:
            rgba[:, :, 3] = OPAQUE
        return cls(w, h, rgba)

    @classmethod
    def blank(cls, width: int, height: int, alpha: int = OPAQUE) -> "PixelBuffer":
        """All-black frame with a uniform alpha."""
        w, h = _check_dimensions(width, height)
        samples = np.zeros((h, w, CHANNELS), dtype=np.uint8)
        samples[:, :, 3] = alpha
        return cls(w, h, samples)

    # ------------------------------------------------------------------
    # Views & conversions
    # ------------------------------------------------------------------
    @property
    def shape(self) -> Tuple[int, int]:
        """(height, width), numpy order."""
        return self.height, self.width

    @property
    def rgb(self) -> np.ndarray:
        return self.samples[:, :, :3]

    @property
    def red(self) -> np.ndarray:
        return self.samples[:, :, 0]

    @property
    def alpha(self) -> np.ndarray:
        return self.samples[:, :, 3]

    def pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        """(r, g, b, a) at column x, row y."""
        r, g, b, a = (int(v) for v in self.samples[y, x])
        return r, g, b, a

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(self.width, self.height, self.samples.copy())

    def to_flat(self) -> np.ndarray:
        """Flat RGBA uint8 vector, length 4*width*height."""
        return self.samples.reshape(-1).copy()

    def __len__(self) -> int:
        return self.width * self.height

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.samples, other.samples)
        )

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self.width}, height={self.height})"


def validate_buffer(buffer: PixelBuffer) -> None:
    """
    Re-check the size invariant.

    The samples array is a public attribute, so it can be replaced after
    construction; the orchestrator calls this before any stage runs.
    """
    if not isinstance(buffer, PixelBuffer):
        raise MalformedBufferError(f"Expected a PixelBuffer, got {type(buffer).__name__}.")
    _check_dimensions(buffer.width, buffer.height)
    s = buffer.samples
    if not isinstance(s, np.ndarray) or s.dtype != np.uint8:
        raise MalformedBufferError("PixelBuffer.samples must be a uint8 ndarray.")
    if s.shape != (buffer.height, buffer.width, CHANNELS):
        raise MalformedBufferError(
            f"PixelBuffer.samples has shape {s.shape}; expected "
            f"{(buffer.height, buffer.width, CHANNELS)}."
        )
