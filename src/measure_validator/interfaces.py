"""Collaborator contracts consumed by the validator.

Sample and line are 1-based pixel-center coordinates throughout.

Camera and cube handles are stateful and single-owner: every ``set_image``
call moves the camera. Validating several points concurrently against the
same handles is unsafe; serialize access or give each thread its own handles.
"""

from typing import Optional, Protocol, runtime_checkable

from measure_validator.errors import ImagingError

__all__ = ['Camera', 'Cube', 'ControlMeasure', 'resolve']


@runtime_checkable
class Camera(Protocol):
    """Sensor geometry model of one image."""

    def set_image(self, sample: float, line: float) -> Optional[bool]:
        """Move to an image coordinate.

        Implementations either raise ``ImagingError`` or return ``False`` when
        the coordinate has no ground intersection.
        """
        ...

    def emission_angle(self) -> float: ...

    def incidence_angle(self) -> float: ...

    def pixel_resolution(self) -> float: ...


@runtime_checkable
class Cube(Protocol):
    """Raster pixel access."""

    def width(self) -> int: ...

    def height(self) -> int: ...

    def read_pixel(self, sample: float, line: float) -> float: ...


class ControlMeasure(Protocol):
    """An existing measurement of a control point on an image."""

    sample: float
    line: float
    sample_residual: float
    line_residual: float
    residual_magnitude: float


def resolve(camera: Camera, sample: float, line: float) -> None:
    """Set the camera to an image coordinate or raise ``ImagingError``."""
    resolved = camera.set_image(sample, line)
    if resolved is not None and not resolved:
        raise ImagingError(
            f"No ground intersection at sample {sample}, line {line}"
        )
