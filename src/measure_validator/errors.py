"""Exception types raised by the measure validator.

Threshold violations are not exceptions; they are reported as entries of a
``ValidationResult``. Only configuration and geometry problems raise.
"""

__all__ = ['MeasureValidatorError', 'ConfigurationError', 'ImagingError']


class MeasureValidatorError(Exception):
    """Base class for all measure validator errors."""


class ConfigurationError(MeasureValidatorError):
    """Malformed or contradictory threshold configuration."""


class ImagingError(MeasureValidatorError):
    """The camera cannot resolve ground geometry at a requested pixel."""
