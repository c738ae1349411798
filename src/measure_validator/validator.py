"""Measure Validator - threshold checks for control measures on an image.

Each validation samples the camera geometry and the raster at one point and
compares what it finds against a ThresholdConfig:
1. Emission angle within bounds
2. Incidence angle within bounds
3. DN value valid and within bounds
4. Ground resolution within bounds
5. Far enough from the image borders, in pixels
6. Far enough from the image borders, in ground distance
7. Sample, line and magnitude residuals within tolerance
"""

import logging
from typing import List, Optional, Sequence, Union

from pydantic import Field
from pydantic.dataclasses import dataclass

from measure_validator.edge_distance import (
    meters_from_edge_violation,
    pixels_from_edge_violation,
)
from measure_validator.interfaces import Camera, ControlMeasure, Cube, resolve
from measure_validator.results import (
    FailureKind,
    MeasureContext,
    MeasureFailure,
    Residuals,
    ValidationResult,
)
from measure_validator.results.constants import is_special
from measure_validator.thresholds import ThresholdConfig

logger = logging.getLogger(__name__)

__all__ = ['MeasureValidator']


@dataclass(frozen=True)
class MeasureValidator:
    """
    Decides whether an image location is usable as a control measurement.

    The validator holds no per-point state; every call returns a fresh
    ValidationResult. The camera and cube passed in are moved and read, so
    concurrent calls must not share them.
    """

    thresholds: ThresholdConfig = Field(default_factory=ThresholdConfig)

    def valid_emission_angle(self, angle: float) -> bool:
        t = self.thresholds
        return t.min_emission_angle <= angle <= t.max_emission_angle

    def valid_incidence_angle(self, angle: float) -> bool:
        t = self.thresholds
        return t.min_incidence_angle <= angle <= t.max_incidence_angle

    def valid_dn_value(self, dn: float) -> bool:
        """Special pixels are never valid, whatever the DN bounds."""
        t = self.thresholds
        return not is_special(dn) and t.min_dn <= dn <= t.max_dn

    def valid_resolution(self, resolution: float) -> bool:
        t = self.thresholds
        return t.min_resolution <= resolution <= t.max_resolution

    def pixels_from_edge(self, sample: float, line: float, cube: Cube) -> bool:
        return (
            pixels_from_edge_violation(
                int(sample),
                int(line),
                cube.width(),
                cube.height(),
                self.thresholds.pixels_from_edge,
            )
            is None
        )

    def meters_from_edge(
        self, sample: float, line: float, camera: Camera, cube: Cube
    ) -> bool:
        """Walks the camera toward all borders; raises ImagingError on bad geometry."""
        return (
            meters_from_edge_violation(
                camera,
                int(sample),
                int(line),
                cube.width(),
                cube.height(),
                self.thresholds.meters_from_edge,
            )
            is None
        )

    def validate(
        self,
        sample: float,
        line: float,
        camera: Camera,
        cube: Cube,
        residuals: Optional[Union[Residuals, Sequence[float]]] = None,
    ) -> ValidationResult:
        """
        Validate an image coordinate against every threshold.

        Args:
            sample: Sample coordinate (1-based)
            line: Line coordinate (1-based)
            camera: Camera of the image
            cube: Raster of the image
            residuals: (sample, line, magnitude) residuals of an existing
                measurement; residual checks are skipped when None

        Returns:
            ValidationResult whose failures are empty when the point is valid

        Raises:
            ImagingError: the camera cannot resolve the point, or a pixel
                visited by the ground-distance edge walk
        """
        resolve(camera, sample, line)
        context = MeasureContext(
            sample=sample,
            line=line,
            emission_angle=float(camera.emission_angle()),
            incidence_angle=float(camera.incidence_angle()),
            resolution=float(camera.pixel_resolution()),
            dn=float(cube.read_pixel(sample, line)),
            residuals=Residuals(*residuals) if residuals is not None else None,
        )
        logger.debug(f"Observed at ({sample}, {line}): {context}")

        failures = self._check_point(context)
        failures.extend(self._check_edges(context, camera, cube))
        if context.residuals is not None:
            failures.extend(self._check_residuals(context.residuals))

        result = ValidationResult(failures=tuple(failures), context=context)
        logger.info(f"Measure at ({sample}, {line}): {result}")
        return result

    def validate_measure(
        self, measure: ControlMeasure, camera: Camera, cube: Cube
    ) -> ValidationResult:
        """Validate an existing measurement at its own location and residuals."""
        residuals = Residuals(
            measure.sample_residual, measure.line_residual, measure.residual_magnitude
        )
        return self.validate(measure.sample, measure.line, camera, cube, residuals)

    def _check_point(self, context: MeasureContext) -> List[MeasureFailure]:
        t = self.thresholds
        failures = []

        if not self.valid_emission_angle(context.emission_angle):
            failures.append(
                MeasureFailure(
                    FailureKind.EMISSION_ANGLE,
                    context.emission_angle,
                    minimum=t.min_emission_angle,
                    maximum=t.max_emission_angle,
                )
            )

        if not self.valid_incidence_angle(context.incidence_angle):
            failures.append(
                MeasureFailure(
                    FailureKind.INCIDENCE_ANGLE,
                    context.incidence_angle,
                    minimum=t.min_incidence_angle,
                    maximum=t.max_incidence_angle,
                )
            )

        if not self.valid_dn_value(context.dn):
            failures.append(
                MeasureFailure(
                    FailureKind.DN_VALUE,
                    context.dn,
                    minimum=t.min_dn,
                    maximum=t.max_dn,
                    detail="special pixel" if is_special(context.dn) else None,
                )
            )

        if not self.valid_resolution(context.resolution):
            failures.append(
                MeasureFailure(
                    FailureKind.RESOLUTION,
                    context.resolution,
                    minimum=t.min_resolution,
                    maximum=t.max_resolution,
                )
            )

        return failures

    def _check_edges(
        self, context: MeasureContext, camera: Camera, cube: Cube
    ) -> List[MeasureFailure]:
        t = self.thresholds
        failures = []
        sample, line = int(context.sample), int(context.line)
        width, height = cube.width(), cube.height()

        violation = pixels_from_edge_violation(
            sample, line, width, height, t.pixels_from_edge
        )
        if violation is not None:
            border, margin = violation
            failures.append(
                MeasureFailure(
                    FailureKind.PIXELS_FROM_EDGE,
                    margin,
                    minimum=t.pixels_from_edge,
                    comparison="less",
                    detail=border,
                )
            )

        edge = meters_from_edge_violation(
            camera, sample, line, width, height, t.meters_from_edge
        )
        if edge is not None:
            failures.append(
                MeasureFailure(
                    FailureKind.METERS_FROM_EDGE,
                    edge.distance,
                    minimum=t.meters_from_edge,
                    comparison="less",
                    detail=edge.direction,
                )
            )

        return failures

    def _check_residuals(self, residuals: Residuals) -> List[MeasureFailure]:
        # All three are compared; unconfigured tolerances are infinite
        t = self.thresholds
        failures = []
        for kind, observed, tolerance in (
            (FailureKind.SAMPLE_RESIDUAL, residuals.sample, t.sample_residual_tolerance),
            (FailureKind.LINE_RESIDUAL, residuals.line, t.line_residual_tolerance),
            (
                FailureKind.RESIDUAL_MAGNITUDE,
                residuals.magnitude,
                t.residual_magnitude_tolerance,
            ),
        ):
            if observed > tolerance:
                failures.append(
                    MeasureFailure(
                        kind, observed, maximum=tolerance, comparison="greater"
                    )
                )
        return failures
