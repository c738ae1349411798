"""Measure Validator - threshold checks for photogrammetric control measures"""

__version__ = "0.1.0"

from .errors import ConfigurationError, ImagingError, MeasureValidatorError
from .results import (
    EdgeDistance,
    FailureKind,
    MeasureContext,
    MeasureFailure,
    Residuals,
    ValidationResult,
)
from .thresholds import ThresholdConfig
from .validator import MeasureValidator

__all__ = [
    "ConfigurationError",
    "EdgeDistance",
    "FailureKind",
    "ImagingError",
    "MeasureContext",
    "MeasureFailure",
    "MeasureValidator",
    "MeasureValidatorError",
    "Residuals",
    "ThresholdConfig",
    "ValidationResult",
]
