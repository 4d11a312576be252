"""
orchestrator.py - runs the stages for one frame and times the run

STATE MACHINE (per invocation)
------------------------------
    Idle → Grayscale? → Smoothing? → Gradient? → Classification? → Done

  • grayscale stage  : grayscale_enabled OR edge_detection_enabled
  • smoothing stage  : edge_detection_enabled AND blur_radius > 0
  • gradient + class.: edge_detection_enabled
  • neither switch   : the output is a copy of the input

Buffer and config are validated before any stage runs; an invalid input
raises and produces no output. The caller's buffer is never modified, so the
same source frame can be re-processed after every parameter change.

TIMING
------
time.perf_counter() brackets the whole sequence (validation included).
`elapsed_ms` holds the last duration, `processing_time()` the rounded value
a status bar would show, `stage_times_ms` the per-stage split.
A call rejected by validation leaves elapsed_ms at 0 and stage_times_ms
empty; a call rejected as busy leaves both to the run in progress.

© 2025 Ali Pouya - Edge Pipeline
"""

from __future__ import annotations
import logging
import threading
import time
from typing import Dict, Tuple, Union
import numpy as np

from edge_pipeline.buffer.pixel_buffer import PixelBuffer, validate_buffer
from edge_pipeline.errors import PipelineBusyError
from edge_pipeline.pipeline.config import ProcessingConfig
from edge_pipeline.stages.classification import classify_edges
from edge_pipeline.stages.gradient import gradient_magnitude
from edge_pipeline.stages.grayscale import convert_to_grayscale
from edge_pipeline.stages.smoothing import smooth

logger = logging.getLogger(__name__)


class EdgePipeline:
    """
    Frame → (grayscale | classified edge map) processor.

    One instance serves one caller. It keeps only the timings of the last
    run; no frame, magnitude array or config is retained between calls.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.elapsed_ms: float = 0.0
        self.stage_times_ms: Dict[str, float] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def process(
        self,
        buffer: PixelBuffer,
        config: ProcessingConfig,
        *,
        return_magnitude: bool = False,
    ) -> Union[PixelBuffer, Tuple[PixelBuffer, np.ndarray | None]]:
        """
        Run the enabled stages on `buffer`.

        Parameters
        ----------
        buffer : PixelBuffer
            Source frame. Not modified.
        config : ProcessingConfig
            Switches and parameters for this run only.
        return_magnitude : bool
            Also hand back the gradient magnitude array (None when edge
            detection is off). The pipeline keeps no reference to it.

        Returns
        -------
        PixelBuffer, or (PixelBuffer, magnitude) with return_magnitude=True
            New frame with the input's width and height.

        Raises
        ------
        MalformedBufferError, InvalidConfigError
            Before any stage runs.
        PipelineBusyError
            If called again (from any thread) while a run is in progress.
        """
        if not self._lock.acquire(blocking=False):
            raise PipelineBusyError("EdgePipeline.process() called while a frame is still being processed.")
        try:
            frame, magnitude = self._run(buffer, config)
        finally:
            self._lock.release()
        return (frame, magnitude) if return_magnitude else frame

    def processing_time(self) -> int:
        """Last run's wall time in whole milliseconds."""
        return int(round(self.elapsed_ms))

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _run(self, buffer: PixelBuffer, config: ProcessingConfig) -> Tuple[PixelBuffer, np.ndarray | None]:
        # a rejected call must not leave the previous run's timings behind
        self.elapsed_ms = 0.0
        self.stage_times_ms = {}

        start = time.perf_counter()
        validate_buffer(buffer)
        config.validate()

        timings: Dict[str, float] = {}
        magnitude = None
        frame = buffer

        if config.runs_grayscale:
            frame = self._timed("grayscale", timings, convert_to_grayscale, frame)

        if config.edge_detection_enabled:
            if config.blur_radius > 0:
                frame = self._timed("smoothing", timings, smooth, frame,
                                    config.blur_radius, config.blur_weighting)
            else:
                logger.debug("smoothing skipped (blur_radius=0)")
            magnitude = self._timed("gradient", timings, gradient_magnitude, frame)
            frame = self._timed("classification", timings, classify_edges, magnitude,
                                config.low_threshold, config.high_threshold)

        if frame is buffer:
            frame = buffer.copy()

        self.stage_times_ms = timings
        self.elapsed_ms = max(0.0, (time.perf_counter() - start) * 1000.0)
        logger.info("processed %dx%d frame (stages: %s) in %.2f ms",
                    buffer.width, buffer.height, ", ".join(timings) or "none", self.elapsed_ms)
        return frame, magnitude

    @staticmethod
    def _timed(name: str, timings: Dict[str, float], fn, *args):
        t0 = time.perf_counter()
        result = fn(*args)
        timings[name] = (time.perf_counter() - t0) * 1000.0
        logger.debug("%s stage: %.3f ms", name, timings[name])
        return result


def process(buffer: PixelBuffer, config: ProcessingConfig | None = None) -> Tuple[PixelBuffer, float]:
    """One-shot helper: returns (output frame, elapsed milliseconds)."""
    pipeline = EdgePipeline()
    out = pipeline.process(buffer, config if config is not None else ProcessingConfig())
    return out, pipeline.elapsed_ms
