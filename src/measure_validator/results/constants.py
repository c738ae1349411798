"""Shared constants for measure validation."""

import math

import numpy as np


def _float32_from_bits(bits: int) -> float:
    return float(np.array([bits], dtype=np.uint32).view(np.float32)[0])


# Special pixel sentinels (32-bit real rasters)
NULL = _float32_from_bits(0xFF7FFFFB)  # No data
LOW_REPR_SAT = _float32_from_bits(0xFF7FFFFC)  # Low representation saturation
LOW_INSTR_SAT = _float32_from_bits(0xFF7FFFFD)  # Low instrument saturation
HIGH_INSTR_SAT = _float32_from_bits(0xFF7FFFFE)  # High instrument saturation
HIGH_REPR_SAT = _float32_from_bits(0xFF7FFFFF)  # High representation saturation
SPECIAL_PIXELS = (NULL, LOW_REPR_SAT, LOW_INSTR_SAT, HIGH_INSTR_SAT, HIGH_REPR_SAT)

# Valid DN range; every special pixel lies below VALID_MINIMUM
VALID_MINIMUM = _float32_from_bits(0xFF7FFFFA)
VALID_MAXIMUM = _float32_from_bits(0x7F7FFFFF)

# Default thresholds
MIN_ANGLE = 0.0
MAX_ANGLE = 135.0  # Upper limit of the accepted angle range (degrees)
DEFAULT_MIN_RESOLUTION = 0.0
DEFAULT_MAX_RESOLUTION = math.inf
DEFAULT_PIXELS_FROM_EDGE = 0
DEFAULT_METERS_FROM_EDGE = 0.0
DEFAULT_RESIDUAL_TOLERANCE = math.inf

# Configuration group
GROUP_NAME = "ValidMeasure"
KEY_MIN_DN = "MinDN"
KEY_MAX_DN = "MaxDN"
KEY_MIN_EMISSION = "MinEmission"
KEY_MAX_EMISSION = "MaxEmission"
KEY_MIN_INCIDENCE = "MinIncidence"
KEY_MAX_INCIDENCE = "MaxIncidence"
KEY_MIN_RESOLUTION = "MinResolution"
KEY_MAX_RESOLUTION = "MaxResolution"
KEY_PIXELS_FROM_EDGE = "PixelsFromEdge"
KEY_METERS_FROM_EDGE = "MetersFromEdge"
KEY_SAMPLE_RESIDUAL = "SampleResidual"
KEY_LINE_RESIDUAL = "LineResidual"
KEY_RESIDUAL_MAGNITUDE = "ResidualMagnitude"


def is_special(dn: float) -> bool:
    """Return True if ``dn`` is a special pixel sentinel or NaN."""
    return math.isnan(dn) or dn < VALID_MINIMUM
