"""
classification.py - static double threshold on gradient magnitude

    magnitude >  high            -> 255  (strong edge)
    low < magnitude <= high      -> 128  (weak edge)
    magnitude <= low             ->   0  (no edge)

Levels go into R, G and B; alpha is forced to 255 on every pixel, border
included. There is no hysteresis: a weak pixel stays weak even when it touches
a strong one, so the output is not a set of linked contours.
"""

from __future__ import annotations
import numpy as np

from edge_pipeline.buffer.pixel_buffer import OPAQUE, PixelBuffer
from edge_pipeline.errors import InvalidConfigError

EDGE_NONE = 0
EDGE_WEAK = 128
EDGE_STRONG = 255


def classify_magnitude(magnitude: np.ndarray, low: float, high: float) -> np.ndarray:
    """
    Map magnitudes to edge levels.

    Parameters
    ----------
    magnitude : (H, W) array
        Output of gradient_magnitude().
    low, high : float
        Thresholds with low <= high.

    Returns
    -------
    levels : (H, W) uint8 array with values in {0, 128, 255}.
    """
    if low > high:
        raise InvalidConfigError(f"low threshold ({low}) must not exceed high threshold ({high}).")
    m = np.asarray(magnitude, dtype=np.float64)
    levels = np.full(m.shape, EDGE_NONE, dtype=np.uint8)
    levels[m > low] = EDGE_WEAK
    levels[m > high] = EDGE_STRONG
    return levels


def classify_edges(magnitude: np.ndarray, low: float, high: float) -> PixelBuffer:
    """Classified edge map as an opaque RGBA frame of the magnitude's size."""
    levels = classify_magnitude(magnitude, low, high)
    h, w = levels.shape
    samples = np.empty((h, w, 4), dtype=np.uint8)
    samples[:, :, :3] = levels[:, :, None]
    samples[:, :, 3] = OPAQUE
    return PixelBuffer(w, h, samples)
