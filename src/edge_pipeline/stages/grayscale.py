"""
grayscale.py - perceptual luminance reduction (BT.601 weights)

    Y = 0.299 R + 0.587 G + 0.114 B

Y is rounded to the nearest integer (ties to even, numpy.rint), clamped to
0..255 and written back into R, G and B. Alpha is untouched. Because the three
weights sum to 1, a pixel with R == G == B maps to itself, which makes the
stage idempotent.

Runs for grayscale display and ahead of edge detection, which reads a single
channel.
"""

from __future__ import annotations
import numpy as np

from edge_pipeline.buffer.pixel_buffer import PixelBuffer

LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114], dtype=np.float64)


def luminance(rgb: np.ndarray) -> np.ndarray:
    """Per-pixel luminance of an (..., 3) array, float64, unrounded."""
    rgb = np.asarray(rgb, dtype=np.float64)
    return rgb[..., 0] * LUMA_WEIGHTS[0] + rgb[..., 1] * LUMA_WEIGHTS[1] + rgb[..., 2] * LUMA_WEIGHTS[2]


def convert_to_grayscale(buffer: PixelBuffer) -> PixelBuffer:
    """
    Return a new buffer with R = G = B = round(luminance), alpha preserved.

    Parameters
    ----------
    buffer : PixelBuffer
        Source frame; not modified.

    Returns
    -------
    PixelBuffer
        Same width/height as the input.
    """
    gray = np.clip(np.rint(luminance(buffer.rgb)), 0, 255).astype(np.uint8)
    out = buffer.samples.copy()
    out[:, :, 0] = gray
    out[:, :, 1] = gray
    out[:, :, 2] = gray
    return PixelBuffer(buffer.width, buffer.height, out)
