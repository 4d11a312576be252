"""
gradient.py - 3x3 Sobel derivatives and gradient magnitude

Kernels (applied as correlation: the top kernel row reads the row above the
pixel, the left column reads the column to its left):

    Gx = [-1 0 1; -2 0 2; -1 0 1]      Gy = [-1 -2 -1; 0 0 0; 1 2 1]

    magnitude = sqrt(Gx^2 + Gy^2)

Only the red channel is read; after the grayscale stage R == G == B.

BORDER POLICY
-------------
Row 0, the last row, column 0 and the last column are never evaluated and
hold 0 in Gx, Gy and the magnitude. Frames less than 3 pixels wide or tall are
all border. Magnitudes are float64 and are not clamped (max is 1020*sqrt(2)).
"""

from __future__ import annotations
from typing import Tuple
import numpy as np
from scipy.ndimage import correlate

from edge_pipeline.buffer.pixel_buffer import PixelBuffer

SOBEL_X = np.array([[-1, 0, 1],
                    [-2, 0, 2],
                    [-1, 0, 1]], dtype=np.float64)
SOBEL_Y = np.array([[-1, -2, -1],
                    [0, 0, 0],
                    [1, 2, 1]], dtype=np.float64)
SOBEL_X.flags.writeable = False
SOBEL_Y.flags.writeable = False


def _zero_border(a: np.ndarray) -> np.ndarray:
    a[0, :] = 0.0
    a[-1, :] = 0.0
    a[:, 0] = 0.0
    a[:, -1] = 0.0
    return a


def sobel_gradients(buffer: PixelBuffer) -> Tuple[np.ndarray, np.ndarray]:
    """
    Horizontal and vertical derivatives of the red channel.

    Returns
    -------
    gx, gy : (H, W) float64 arrays, zero on the 1-pixel border.
    """
    plane = buffer.red.astype(np.float64)
    if buffer.height < 3 or buffer.width < 3:
        zeros = np.zeros_like(plane)
        return zeros, zeros.copy()

    # mode only affects the border, which is overwritten below
    gx = correlate(plane, SOBEL_X, mode="nearest")
    gy = correlate(plane, SOBEL_Y, mode="nearest")
    return _zero_border(gx), _zero_border(gy)


def gradient_magnitude(buffer: PixelBuffer) -> np.ndarray:
    """Per-pixel sqrt(Gx^2 + Gy^2), float64, zero on the border."""
    gx, gy = sobel_gradients(buffer)
    return np.sqrt(gx * gx + gy * gy)
