"""
metrics_module.py - rough comparison of edge maps and frames

WHAT THIS MODULE PROVIDES
-------------------------
• compute_psnr(img, ref)
    Frame-level PSNR over the colour channels. Handy to check how far the
    smoothing output drifts from a reference blur, or one pipeline's output
    from another's.

• edge_agreement(ours, ref) / compare_edge_maps(ours, ref)
    Fraction of pixels assigned the same edge level (0 / 128 / 255), overall
    and per level. Meant for comparing this pipeline against the companion
    native (camera-driven) pipeline, whose kernels differ slightly; expect
    high but not perfect agreement.

• class_counts(edge_buffer)
    Pixel counts per edge level.

• plot_magnitude_histogram(magnitude, low, high)
    Histogram of gradient magnitudes with both thresholds marked; the quickest
    way to pick sensible thresholds for a new scene.

NOTES
-----
• Agreement is a per-pixel score. A one-pixel shift of an otherwise identical
  edge halves it; it is not a contour-matching metric.

© 2025 Ali Pouya - Edge Pipeline
"""

from __future__ import annotations
from typing import Dict
import numpy as np
import matplotlib.pyplot as plt

from edge_pipeline.buffer.pixel_buffer import PixelBuffer
from edge_pipeline.errors import MalformedBufferError
from edge_pipeline.stages.classification import EDGE_NONE, EDGE_STRONG, EDGE_WEAK

LEVEL_NAMES = {EDGE_NONE: "none", EDGE_WEAK: "weak", EDGE_STRONG: "strong"}


def _levels(edges: PixelBuffer | np.ndarray) -> np.ndarray:
    """Edge levels as (H, W) uint8, from an edge PixelBuffer or a 2-D level array."""
    if isinstance(edges, PixelBuffer):
        return edges.red
    a = np.asarray(edges)
    if a.ndim == 3:
        a = a[:, :, 0]
    if a.ndim != 2:
        raise MalformedBufferError(f"Expected a 2-D edge map, got shape {a.shape}.")
    return a


def _same_shape(a: np.ndarray, b: np.ndarray) -> None:
    if a.shape[:2] != b.shape[:2]:
        raise MalformedBufferError(f"Frame sizes differ: {a.shape[:2]} vs {b.shape[:2]}.")


# -----------------------------------------------------------------------------
# Frame-level PSNR
# -----------------------------------------------------------------------------
def compute_psnr(img: PixelBuffer, ref: PixelBuffer) -> float:
    """
    PSNR in dB over R, G, B:

        PSNR = 10 * log10( 255^2 / MSE )

    Returns inf for identical colour channels.
    """
    y = img.rgb.astype(np.float64)
    r = ref.rgb.astype(np.float64)
    _same_shape(y, r)
    mse = float(np.mean((y - r) ** 2))
    if mse == 0.0:
        return float("inf")
    return float(10.0 * np.log10(255.0**2 / mse))


# -----------------------------------------------------------------------------
# Edge-map agreement
# -----------------------------------------------------------------------------
def class_counts(edges: PixelBuffer | np.ndarray) -> Dict[str, int]:
    """Pixel count per level: {'none': n0, 'weak': n128, 'strong': n255}."""
    lv = _levels(edges)
    return {name: int(np.count_nonzero(lv == level)) for level, name in LEVEL_NAMES.items()}


def edge_agreement(ours: PixelBuffer | np.ndarray, ref: PixelBuffer | np.ndarray) -> float:
    """Fraction (0..1) of pixels with the same edge level in both maps."""
    a, b = _levels(ours), _levels(ref)
    _same_shape(a, b)
    return float(np.mean(a == b))


def compare_edge_maps(ours: PixelBuffer | np.ndarray, ref: PixelBuffer | np.ndarray) -> Dict[str, object]:
    """
    Summary of how two edge maps differ.

    Returns
    -------
    dict with
      agreement      : overall fraction of matching pixels
      per_level      : {level name: fraction of ref pixels at that level that
                        ours assigns the same level; nan if ref has none}
      counts_ours,
      counts_ref     : class_counts() of each map
    """
    a, b = _levels(ours), _levels(ref)
    _same_shape(a, b)
    per_level: Dict[str, float] = {}
    for level, name in LEVEL_NAMES.items():
        sel = b == level
        per_level[name] = float(np.mean(a[sel] == level)) if sel.any() else float("nan")
    return {
        "agreement": float(np.mean(a == b)),
        "per_level": per_level,
        "counts_ours": class_counts(a),
        "counts_ref": class_counts(b),
    }


# -----------------------------------------------------------------------------
# Histogram helper
# -----------------------------------------------------------------------------
def plot_magnitude_histogram(
    magnitude: np.ndarray,
    low: float,
    high: float,
    title: str = "Gradient magnitude",
    bins: int = 64,
) -> plt.Figure:
    """
    Histogram of interior-pixel magnitudes with the two thresholds marked.

    Border pixels are always 0 and would swamp the first bin, so they are
    left out when the frame has an interior.
    """
    m = np.asarray(magnitude, dtype=np.float64)
    if m.shape[0] > 2 and m.shape[1] > 2:
        m = m[1:-1, 1:-1]
    fig, ax = plt.subplots()
    ax.hist(m.ravel(), bins=int(bins), log=True)
    ax.axvline(low, color="tab:orange", linestyle="--", label=f"low = {low:g}")
    ax.axvline(high, color="tab:red", linestyle="--", label=f"high = {high:g}")
    ax.set_title(title)
    ax.set_xlabel("Magnitude")
    ax.set_ylabel("Count")
    ax.legend()
    fig.tight_layout()
    return fig
