"""Measure validation result types.

This package contains the shared types and constants used by the threshold
configuration and the validator.
"""

from .types import (
    EdgeDistance,
    FailureKind,
    MeasureContext,
    MeasureFailure,
    Residuals,
    ValidationResult,
)

__all__ = [
    'EdgeDistance',
    'FailureKind',
    'MeasureContext',
    'MeasureFailure',
    'Residuals',
    'ValidationResult',
]
