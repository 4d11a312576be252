"""
edge_pipeline.buffer
--------------------
The RGBA frame container every stage consumes and produces.
"""

from edge_pipeline.buffer.pixel_buffer import PixelBuffer, validate_buffer

__all__ = ["PixelBuffer", "validate_buffer"]
