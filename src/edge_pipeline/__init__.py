"""
edge_pipeline
================================================
Frame → classified edge map, one frame at a time:
    grayscale → smoothing → gradient → double-threshold classification
Subpackages:
    buffer    : RGBA PixelBuffer container
    stages    : the four pixel stages
    pipeline  : ProcessingConfig + EdgePipeline orchestrator
    scenes    : synthetic test frames and an image-file loader
    utils     : comparison metrics against a reference edge map

© 2025 Ali Pouya - Edge Pipeline
"""

from edge_pipeline.buffer.pixel_buffer import PixelBuffer
from edge_pipeline.errors import (
    EdgePipelineError,
    InvalidConfigError,
    MalformedBufferError,
    PipelineBusyError,
)
from edge_pipeline.pipeline.config import ProcessingConfig, config_from_options
from edge_pipeline.pipeline.orchestrator import EdgePipeline, process

__version__ = "0.1.0"

__all__ = [
    "PixelBuffer",
    "ProcessingConfig",
    "config_from_options",
    "EdgePipeline",
    "process",
    "EdgePipelineError",
    "InvalidConfigError",
    "MalformedBufferError",
    "PipelineBusyError",
]
