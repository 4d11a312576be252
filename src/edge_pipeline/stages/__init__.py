"""
edge_pipeline.stages
--------------------
The four pixel stages, in pipeline order:
    grayscale → smoothing → gradient → classification
Each stage is a plain function that takes a PixelBuffer (or the gradient
magnitude array) and returns a new one; inputs are never modified.
"""

from edge_pipeline.stages.grayscale import convert_to_grayscale, luminance
from edge_pipeline.stages.smoothing import WEIGHTINGS, build_kernel, build_kernel_1d, smooth
from edge_pipeline.stages.gradient import SOBEL_X, SOBEL_Y, gradient_magnitude, sobel_gradients
from edge_pipeline.stages.classification import (
    EDGE_NONE,
    EDGE_STRONG,
    EDGE_WEAK,
    classify_edges,
    classify_magnitude,
)

__all__ = [
    "convert_to_grayscale",
    "luminance",
    "WEIGHTINGS",
    "build_kernel",
    "build_kernel_1d",
    "smooth",
    "SOBEL_X",
    "SOBEL_Y",
    "gradient_magnitude",
    "sobel_gradients",
    "EDGE_NONE",
    "EDGE_WEAK",
    "EDGE_STRONG",
    "classify_edges",
    "classify_magnitude",
]
