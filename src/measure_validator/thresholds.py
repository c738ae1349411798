"""Threshold configuration for measure validation.

Every threshold has a documented default. A configuration group overrides
only the keywords it contains; the result is checked for range and
consistency problems and then never changes.
"""

import logging
import math
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import Field, ValidationError, ValidationInfo, field_validator
from pydantic.dataclasses import dataclass

from measure_validator.config_loader import load_threshold_group
from measure_validator.errors import ConfigurationError
from measure_validator.results import constants as C

logger = logging.getLogger(__name__)

__all__ = ['ThresholdConfig']

# Keyword -> field, for every float-valued keyword of the group
_FLOAT_KEYWORDS = {
    C.KEY_MIN_DN: "min_dn",
    C.KEY_MAX_DN: "max_dn",
    C.KEY_MIN_EMISSION: "min_emission_angle",
    C.KEY_MAX_EMISSION: "max_emission_angle",
    C.KEY_MIN_INCIDENCE: "min_incidence_angle",
    C.KEY_MAX_INCIDENCE: "max_incidence_angle",
    C.KEY_MIN_RESOLUTION: "min_resolution",
    C.KEY_MAX_RESOLUTION: "max_resolution",
    C.KEY_METERS_FROM_EDGE: "meters_from_edge",
    C.KEY_SAMPLE_RESIDUAL: "sample_residual_tolerance",
    C.KEY_LINE_RESIDUAL: "line_residual_tolerance",
    C.KEY_RESIDUAL_MAGNITUDE: "residual_magnitude_tolerance",
}

# Field -> keyword, for error messages
_FIELD_KEYWORDS = {field: keyword for keyword, field in _FLOAT_KEYWORDS.items()}
_FIELD_KEYWORDS["pixels_from_edge"] = C.KEY_PIXELS_FROM_EDGE


def _as_float(keyword: str, value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{keyword} must be numeric, got {value!r}")
    if math.isnan(number):
        raise ConfigurationError(f"{keyword} must be a number, got NaN")
    return number


def _as_int(keyword: str, value: Any) -> int:
    number = _as_float(keyword, value)
    if not math.isfinite(number):
        raise ConfigurationError(f"{keyword} must be finite, got {value!r}")
    return int(number)


@dataclass(frozen=True)
class ThresholdConfig:
    """
    Named thresholds a control measure must satisfy.

    Build it from a configuration group with :meth:`from_group`, from a
    definition file with :meth:`from_file`, or directly with keywords.
    Invalid values, NaN and non-numeric input raise ``ConfigurationError``;
    negative edge distances are clamped to zero.

    The two residual strategies are exclusive. :meth:`from_group` rejects a
    group that names both, whatever the values. Keyword construction cannot
    tell an explicit ``inf`` from the default, so it rejects only an axis
    tolerance and a magnitude tolerance that are both finite.
    """

    min_dn: float = Field(default=C.VALID_MINIMUM)
    max_dn: float = Field(default=C.VALID_MAXIMUM)
    min_emission_angle: float = Field(default=C.MIN_ANGLE)
    max_emission_angle: float = Field(default=C.MAX_ANGLE)
    min_incidence_angle: float = Field(default=C.MIN_ANGLE)
    max_incidence_angle: float = Field(default=C.MAX_ANGLE)
    min_resolution: float = Field(default=C.DEFAULT_MIN_RESOLUTION)
    max_resolution: float = Field(default=C.DEFAULT_MAX_RESOLUTION)
    pixels_from_edge: int = Field(default=C.DEFAULT_PIXELS_FROM_EDGE)
    meters_from_edge: float = Field(default=C.DEFAULT_METERS_FROM_EDGE)
    sample_residual_tolerance: float = Field(default=C.DEFAULT_RESIDUAL_TOLERANCE)
    line_residual_tolerance: float = Field(default=C.DEFAULT_RESIDUAL_TOLERANCE)
    residual_magnitude_tolerance: float = Field(default=C.DEFAULT_RESIDUAL_TOLERANCE)

    @field_validator("*", mode="before")
    @classmethod
    def coerce_number(cls, v, info: ValidationInfo):
        keyword = _FIELD_KEYWORDS[info.field_name]
        if info.field_name == "pixels_from_edge":
            return _as_int(keyword, v)
        return _as_float(keyword, v)

    @field_validator("pixels_from_edge", "meters_from_edge")
    @classmethod
    def clamp_edge_distance(cls, v):
        """Negative edge distances mean "no margin"."""
        if v < 0:
            logger.warning(f"Negative edge distance {v} clamped to 0")
            return type(v)(0)
        return v

    def __post_init__(self):
        """Check ranges and cross-field consistency."""
        if self.max_dn < self.min_dn:
            raise ConfigurationError("MinDN must be less than MaxDN")

        self._check_angles("Emission", self.min_emission_angle, self.max_emission_angle)
        self._check_angles(
            "Incidence", self.min_incidence_angle, self.max_incidence_angle
        )

        if self.min_resolution < 0 or self.max_resolution < 0:
            raise ConfigurationError(
                "Invalid Resolution value(s), Resolution must be greater than zero"
            )
        if self.max_resolution < self.min_resolution:
            raise ConfigurationError("MinResolution must be less than MaxResolution")

        for name, tolerance in (
            ("Sample Residual", self.sample_residual_tolerance),
            ("Line Residual", self.line_residual_tolerance),
            ("Residual Magnitude", self.residual_magnitude_tolerance),
        ):
            if tolerance < 0:
                raise ConfigurationError(
                    f"Invalid {name} tolerance {tolerance}, must be greater than zero"
                )

        axis_set = math.isfinite(self.sample_residual_tolerance) or math.isfinite(
            self.line_residual_tolerance
        )
        if axis_set and math.isfinite(self.residual_magnitude_tolerance):
            raise ConfigurationError(
                "Cannot have both Sample/Line Residuals and Residual Magnitude. "
                "Choose either Sample/Line Residual or Residual Magnitude"
            )

    @staticmethod
    def _check_angles(name: str, minimum: float, maximum: float) -> None:
        for label, angle in (("Min", minimum), ("Max", maximum)):
            if angle < C.MIN_ANGLE or angle > C.MAX_ANGLE:
                raise ConfigurationError(
                    f"Invalid {label} {name} Angle {angle}, "
                    f"Valid Range is [{C.MIN_ANGLE:g}-{C.MAX_ANGLE:g}]"
                )
        if maximum < minimum:
            raise ConfigurationError(
                f"Min {name}Angle must be less than Max {name}Angle"
            )

    @classmethod
    def from_group(cls, group: Optional[Mapping[str, Any]] = None) -> "ThresholdConfig":
        """
        Build a configuration from a flat keyword group.

        Keywords are matched case-insensitively; absent keywords keep their
        defaults. Setting a sample or line residual together with a residual
        magnitude is rejected whatever the values.

        Args:
            group: Mapping of keyword to number or numeric string, or None
                for all defaults

        Returns:
            Validated ThresholdConfig
        """
        if group is None:
            config = cls()
            logger.info("Using default measure thresholds")
            return config

        lookup = {str(key).casefold(): value for key, value in group.items()}

        def present(keyword: str) -> bool:
            return keyword.casefold() in lookup

        values: Dict[str, Any] = {}
        for keyword, field in _FLOAT_KEYWORDS.items():
            if present(keyword):
                values[field] = _as_float(keyword, lookup[keyword.casefold()])
        if present(C.KEY_PIXELS_FROM_EDGE):
            values["pixels_from_edge"] = _as_int(
                C.KEY_PIXELS_FROM_EDGE, lookup[C.KEY_PIXELS_FROM_EDGE.casefold()]
            )

        axis_set = present(C.KEY_SAMPLE_RESIDUAL) or present(C.KEY_LINE_RESIDUAL)
        if axis_set and present(C.KEY_RESIDUAL_MAGNITUDE):
            raise ConfigurationError(
                "Cannot have both Sample/Line Residuals and Residual Magnitude. "
                "Choose either Sample/Line Residual or Residual Magnitude"
            )

        try:
            config = cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid measure thresholds: {e}") from e

        logger.info(f"Loaded measure thresholds: {config.to_standard_options()}")
        return config

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ThresholdConfig":
        """Build a configuration from the ValidMeasure table of a TOML file."""
        return cls.from_group(load_threshold_group(path))

    def to_standard_options(self) -> Dict[str, Union[int, float]]:
        """Effective thresholds keyed by configuration keyword."""
        return {
            C.KEY_MIN_DN: self.min_dn,
            C.KEY_MAX_DN: self.max_dn,
            C.KEY_MIN_EMISSION: self.min_emission_angle,
            C.KEY_MAX_EMISSION: self.max_emission_angle,
            C.KEY_MIN_INCIDENCE: self.min_incidence_angle,
            C.KEY_MAX_INCIDENCE: self.max_incidence_angle,
            C.KEY_MIN_RESOLUTION: self.min_resolution,
            C.KEY_MAX_RESOLUTION: self.max_resolution,
            C.KEY_PIXELS_FROM_EDGE: self.pixels_from_edge,
            C.KEY_METERS_FROM_EDGE: self.meters_from_edge,
            C.KEY_SAMPLE_RESIDUAL: self.sample_residual_tolerance,
            C.KEY_LINE_RESIDUAL: self.line_residual_tolerance,
            C.KEY_RESIDUAL_MAGNITUDE: self.residual_magnitude_tolerance,
        }
