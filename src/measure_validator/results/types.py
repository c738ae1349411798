"""Shared types for measure validation results."""

from enum import Enum
from typing import List, NamedTuple, Optional, Tuple


class FailureKind(str, Enum):
    """Kind of threshold a measure failed."""

    EMISSION_ANGLE = "EmissionAngle"
    INCIDENCE_ANGLE = "IncidenceAngle"
    DN_VALUE = "DNValue"
    RESOLUTION = "Resolution"
    PIXELS_FROM_EDGE = "PixelsFromEdge"
    METERS_FROM_EDGE = "MetersFromEdge"
    SAMPLE_RESIDUAL = "SampleResidual"
    LINE_RESIDUAL = "LineResidual"
    RESIDUAL_MAGNITUDE = "ResidualMagnitude"

    @property
    def is_residual(self) -> bool:
        """True for the three residual tolerance kinds."""
        return self in (
            FailureKind.SAMPLE_RESIDUAL,
            FailureKind.LINE_RESIDUAL,
            FailureKind.RESIDUAL_MAGNITUDE,
        )


class Residuals(NamedTuple):
    """Residual triple of an existing measurement, in pixels."""

    sample: float
    line: float
    magnitude: float


class MeasureContext(NamedTuple):
    """Quantities observed at the point under test."""

    sample: float
    line: float
    emission_angle: float  # degrees
    incidence_angle: float  # degrees
    resolution: float  # ground units per pixel
    dn: float  # raw pixel value, possibly a special pixel
    residuals: Optional[Residuals] = None


class EdgeDistance(NamedTuple):
    """Outcome of walking from a point toward one image border."""

    direction: str  # "top", "bottom", "left" or "right"
    distance: float  # accumulated ground distance
    steps: int  # pixels visited
    satisfied: bool  # distance reached the threshold before the border


class MeasureFailure(NamedTuple):
    """A single violated threshold."""

    kind: FailureKind
    observed: float
    minimum: Optional[float] = None  # lower bound, when the check has one
    maximum: Optional[float] = None  # upper bound, when the check has one
    comparison: Optional[str] = None  # "less" or "greater" for one-sided checks
    detail: Optional[str] = None  # e.g. the violated border

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "observed": self.observed,
            "minimum": self.minimum,
            "maximum": self.maximum,
            "comparison": self.comparison,
            "detail": self.detail,
        }

    def __str__(self) -> str:
        if self.comparison == "greater":
            bound = f"greater than {self.maximum}"
        elif self.comparison == "less":
            bound = f"less than {self.minimum}"
        else:
            bound = f"outside [{self.minimum}, {self.maximum}]"
        where = f" ({self.detail})" if self.detail else ""
        return f"{self.kind.value} {self.observed} is {bound}{where}"


class ValidationResult(NamedTuple):
    """Ordered failures for one point, plus what was observed there.

    An empty ``failures`` tuple means the point is valid.
    """

    failures: Tuple[MeasureFailure, ...]
    context: MeasureContext

    @property
    def is_valid(self) -> bool:
        return not self.failures

    def failures_of(self, kind: FailureKind) -> List[MeasureFailure]:
        """Return the failures of one kind, in order."""
        return [failure for failure in self.failures if failure.kind == kind]

    def to_report(self) -> List[dict]:
        """Serializable list of ``{kind, observed, bounds...}`` entries."""
        return [failure.to_dict() for failure in self.failures]

    def __str__(self) -> str:
        if self.is_valid:
            return "Valid"
        return "Invalid: " + "; ".join(str(failure) for failure in self.failures)
