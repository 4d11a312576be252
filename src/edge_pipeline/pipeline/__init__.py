"""
edge_pipeline.pipeline
----------------------
Processing parameters and the per-frame orchestrator.
"""

from edge_pipeline.pipeline.config import ProcessingConfig, config_from_options
from edge_pipeline.pipeline.orchestrator import EdgePipeline, process

__all__ = ["ProcessingConfig", "config_from_options", "EdgePipeline", "process"]
