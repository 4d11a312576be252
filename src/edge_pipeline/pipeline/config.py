"""
config.py - immutable processing parameters for one pipeline invocation

The UI layer owns the parameters and rebuilds them on every control change;
the pipeline receives a ProcessingConfig by value and never keeps it.
Partial updates ("just change the high threshold") become
`config.with_overrides(high_threshold=...)`, which returns a new object.
"""

from __future__ import annotations
from dataclasses import dataclass, fields, replace
import math
import numbers
from typing import Any, Mapping

from edge_pipeline.errors import InvalidConfigError
from edge_pipeline.stages.smoothing import WEIGHTINGS


# -----------------------------------------------------------------------------
# Parameters
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ProcessingConfig:
    """
    Stage switches and parameters.

    Switches
    --------
    grayscale_enabled : show the luminance frame
    edge_detection_enabled : run smoothing, gradient and classification
        (implies the grayscale stage)

    Classification
    --------------
    low_threshold, high_threshold : magnitude cutoffs, 0 <= low <= high

    Smoothing
    ---------
    blur_radius : neighbourhood half-width in pixels, 0 = no smoothing
    blur_weighting : "uniform" (box) or "gaussian" (σ = r/3)
    """
    grayscale_enabled: bool = False
    edge_detection_enabled: bool = False

    low_threshold: float = 50.0
    high_threshold: float = 150.0

    blur_radius: int = 5
    blur_weighting: str = "uniform"

    def validate(self) -> "ProcessingConfig":
        """Raise InvalidConfigError unless every invariant holds; returns self."""
        for name in ("low_threshold", "high_threshold"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real) or not math.isfinite(value):
                raise InvalidConfigError(f"{name} must be a finite number, got {value!r}.")
        if self.low_threshold < 0:
            raise InvalidConfigError(f"low_threshold must be >= 0, got {self.low_threshold}.")
        if self.low_threshold > self.high_threshold:
            raise InvalidConfigError(
                f"low_threshold ({self.low_threshold}) must not exceed high_threshold ({self.high_threshold})."
            )
        r = self.blur_radius
        if isinstance(r, bool) or not isinstance(r, numbers.Integral) or r < 0:
            raise InvalidConfigError(f"blur_radius must be a non-negative integer, got {r!r}.")
        if self.blur_weighting not in WEIGHTINGS:
            raise InvalidConfigError(
                f"Unknown blur_weighting {self.blur_weighting!r}; expected one of {WEIGHTINGS}."
            )
        return self

    def with_overrides(self, **changes: Any) -> "ProcessingConfig":
        """New validated config with the given fields replaced."""
        unknown = set(changes) - {f.name for f in fields(self)}
        if unknown:
            raise InvalidConfigError(f"Unknown config field(s): {sorted(unknown)}")
        return replace(self, **changes).validate()

    @property
    def runs_grayscale(self) -> bool:
        return self.grayscale_enabled or self.edge_detection_enabled


# -----------------------------------------------------------------------------
# Adapter from UI option names
# -----------------------------------------------------------------------------
_OPTION_ALIASES = {
    "grayscale": "grayscale_enabled",
    "edgeDetection": "edge_detection_enabled",
    "edge_detection": "edge_detection_enabled",
    "threshold1": "low_threshold",
    "lowThreshold": "low_threshold",
    "threshold2": "high_threshold",
    "highThreshold": "high_threshold",
    "blurSize": "blur_radius",
    "blurRadius": "blur_radius",
    "blurWeighting": "blur_weighting",
    "weighting": "blur_weighting",
}


def config_from_options(options: Mapping[str, Any] | None = None,
                        base: ProcessingConfig | None = None) -> ProcessingConfig:
    """
    Build a ProcessingConfig from UI-style option dicts.

    Accepted keys (examples):
      - grayscale / grayscale_enabled: True
      - edgeDetection / edge_detection_enabled: True
      - threshold1 / lowThreshold / low_threshold: 50
      - threshold2 / highThreshold / high_threshold: 150
      - blurSize / blurRadius / blur_radius: 5
      - blurWeighting / weighting / blur_weighting: "gaussian"

    Keys not listed raise InvalidConfigError. Fields missing from `options`
    keep the value from `base` (or the defaults).
    """
    base = base or ProcessingConfig()
    changes: dict[str, Any] = {}
    for key, value in (options or {}).items():
        name = _OPTION_ALIASES.get(key, key)
        if name in ("grayscale_enabled", "edge_detection_enabled"):
            value = bool(value)
        elif name in ("low_threshold", "high_threshold") and isinstance(value, int) and not isinstance(value, bool):
            value = float(value)
        elif name == "blur_radius" and isinstance(value, float) and value.is_integer():
            value = int(value)
        changes[name] = value
    return base.with_overrides(**changes)
