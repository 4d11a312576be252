"""
errors.py - exception taxonomy for the edge pipeline

All failures inside the core are deterministic functions of the input, so
nothing here is retried. Callers catch these, keep the previously displayed
frame and surface the message.
"""

from __future__ import annotations


class EdgePipelineError(Exception):
    """Base class for every error raised by edge_pipeline."""


class MalformedBufferError(EdgePipelineError, ValueError):
    """Buffer dimensions are non-positive or the sample count does not match width*height."""


class InvalidConfigError(EdgePipelineError, ValueError):
    """Processing parameters violate 0 <= low <= high, radius >= 0, or name an unknown weighting."""


class PipelineBusyError(EdgePipelineError, RuntimeError):
    """A second invocation was started before the first one completed."""
