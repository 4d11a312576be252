"""
smoothing.py - neighbourhood averaging ahead of gradient estimation

WHAT THIS MODULE DOES
---------------------
Replaces every colour sample by the weighted mean of the samples inside a
(2r+1) x (2r+1) square centred on it. Two weighting policies:
  • "uniform"  : box blur, every in-bounds neighbour counts once
  • "gaussian" : w(dx, dy) = exp(-(dx^2 + dy^2) / (2 σ^2)),  σ = r / 3

BORDER POLICY
-------------
Neighbours that fall outside the frame are *excluded*, not clamped, reflected
or wrapped. The divisor is the sum of the in-bounds weights, so a corner pixel
of a box blur is the plain mean of the (r+1)^2 samples that exist. We get
this by convolving both the channel and an all-ones image with the same
kernel (zero fill outside) and dividing the two.

COST
----
Direct 2-D convolution is O(W·H·r^2). Both kernels are outer products of a
1-D profile with itself, so the default path runs two 1-D passes (rows, then
columns) at O(W·H·r). Results agree with the 2-D path up to float rounding
before the final round-to-uint8.

Radius 0 is the identity: the 1x1 kernel has a single weight and σ = 0 would
otherwise divide by zero.

© 2025 Ali Pouya - Edge Pipeline
"""

from __future__ import annotations
from typing import Tuple
import numpy as np
from scipy.signal import convolve2d

from edge_pipeline.buffer.pixel_buffer import PixelBuffer
from edge_pipeline.errors import InvalidConfigError

WEIGHTINGS: Tuple[str, ...] = ("uniform", "gaussian")


def _check_params(radius: int, weighting: str) -> int:
    try:
        r = int(radius)
    except (TypeError, ValueError) as exc:
        raise InvalidConfigError(f"Blur radius must be an integer, got {radius!r}.") from exc
    if isinstance(radius, bool) or r != radius:
        raise InvalidConfigError(f"Blur radius must be an integer, got {radius!r}.")
    if r < 0:
        raise InvalidConfigError(f"Blur radius must be >= 0, got {r}.")
    if weighting not in WEIGHTINGS:
        raise InvalidConfigError(f"Unknown blur weighting {weighting!r}; expected one of {WEIGHTINGS}.")
    return r


# =============================================================================
# Kernels
# =============================================================================
def build_kernel_1d(radius: int, weighting: str = "uniform") -> np.ndarray:
    """
    1-D weight profile of length 2r+1 (unnormalized; normalization happens
    per pixel over the in-bounds weights).
    """
    r = _check_params(radius, weighting)
    if r == 0:
        k = np.ones(1, dtype=np.float64)
    elif weighting == "uniform":
        k = np.ones(2 * r + 1, dtype=np.float64)
    else:
        sigma = r / 3.0
        ax = np.arange(-r, r + 1, dtype=np.float64)
        k = np.exp(-(ax**2) / (2.0 * sigma**2))
    k.flags.writeable = False
    return k


def build_kernel(radius: int, weighting: str = "uniform") -> np.ndarray:
    """
    Square (2r+1, 2r+1) weight kernel, read-only.

    For "gaussian" this samples exp(-(dx^2+dy^2)/(2σ^2)) with σ = r/3, i.e. the
    same surface as a sampled Gaussian PSF, but left unnormalized.
    """
    k1 = build_kernel_1d(radius, weighting)
    k = np.outer(k1, k1)
    k.flags.writeable = False
    return k


# =============================================================================
# Convolution helpers
# =============================================================================
def _convolve_same(plane: np.ndarray, kernel: np.ndarray) -> np.ndarray:
    # zero fill outside the frame == excluded samples in the numerator
    return convolve2d(plane, kernel, mode="same", boundary="fill", fillvalue=0.0)


def _weighted_sum(plane: np.ndarray, radius: int, weighting: str, separable: bool) -> np.ndarray:
    if separable:
        k1 = build_kernel_1d(radius, weighting)
        rows = _convolve_same(plane, k1[None, :])
        return _convolve_same(rows, k1[:, None])
    return _convolve_same(plane, build_kernel(radius, weighting))


# =============================================================================
# Public API
# =============================================================================
def smooth(
    buffer: PixelBuffer,
    radius: int,
    weighting: str = "uniform",
    *,
    separable: bool = True,
) -> PixelBuffer:
    """
    Blur the colour channels of a frame with border exclusion.

    Parameters
    ----------
    buffer : PixelBuffer
        Source frame; not modified.
    radius : int
        Neighbourhood half-width r (>= 0). 0 returns an unchanged copy.
    weighting : {"uniform", "gaussian"}
        Box average or Gaussian falloff with σ = r/3.
    separable : bool
        Two 1-D passes (default) instead of a single 2-D convolution.

    Returns
    -------
    PixelBuffer
        Same size; alpha copied from the input.
    """
    r = _check_params(radius, weighting)
    if r == 0:
        return buffer.copy()

    h, w = buffer.shape
    weight_sum = _weighted_sum(np.ones((h, w), dtype=np.float64), r, weighting, separable)

    out = buffer.samples.copy()
    for c in range(3):
        plane = buffer.samples[:, :, c].astype(np.float64)
        mean = _weighted_sum(plane, r, weighting, separable) / weight_sum
        out[:, :, c] = np.clip(np.rint(mean), 0, 255).astype(np.uint8)
    return PixelBuffer(buffer.width, buffer.height, out)
