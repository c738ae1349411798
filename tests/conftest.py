"""Stub collaborators for validator tests."""

from typing import Callable, List, NamedTuple, Optional, Tuple

import pytest


class StubCamera:
    """Camera with fixed geometry at the point under test.

    ``walk_resolution`` is returned at every other pixel. ``invalid`` marks
    pixels with no ground intersection; they make ``set_image`` return False.
    """

    def __init__(
        self,
        point: Tuple[int, int] = (50, 50),
        emission: float = 10.0,
        incidence: float = 20.0,
        resolution: float = 5.0,
        walk_resolution: Optional[float] = None,
        invalid: Optional[Callable[[float, float], bool]] = None,
    ):
        self.point = point
        self.emission = emission
        self.incidence = incidence
        self.resolution = resolution
        self.walk_resolution = resolution if walk_resolution is None else walk_resolution
        self.invalid = invalid
        self.calls: List[Tuple[float, float]] = []
        self._position: Optional[Tuple[float, float]] = None

    def set_image(self, sample, line):
        self.calls.append((sample, line))
        if self.invalid is not None and self.invalid(sample, line):
            return False
        self._position = (sample, line)
        return True

    def emission_angle(self):
        return self.emission

    def incidence_angle(self):
        return self.incidence

    def pixel_resolution(self):
        if self._position == self.point:
            return self.resolution
        return self.walk_resolution


class StubCube:
    """Raster of constant DN."""

    def __init__(self, width: int = 100, height: int = 100, dn: float = 100.0):
        self._width = width
        self._height = height
        self.dn = dn

    def width(self):
        return self._width

    def height(self):
        return self._height

    def read_pixel(self, sample, line):
        return self.dn


class StubMeasure(NamedTuple):
    sample: float
    line: float
    sample_residual: float = 0.0
    line_residual: float = 0.0
    residual_magnitude: float = 0.0


@pytest.fixture
def camera():
    return StubCamera()


@pytest.fixture
def cube():
    return StubCube()
