"""In-memory camera and cube backed by numpy arrays.

Arrays are indexed ``[line - 1, sample - 1]``; coordinates round to the
nearest pixel center.
"""

import logging
from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np
from PIL import Image

from measure_validator.errors import ImagingError
from measure_validator.results.constants import NULL

logger = logging.getLogger(__name__)

__all__ = ['ArrayCube', 'ArrayCamera']


def _pixel_index(sample: float, line: float, shape: Tuple[int, int]) -> Optional[Tuple[int, int]]:
    row = int(np.floor(line + 0.5)) - 1
    col = int(np.floor(sample + 0.5)) - 1
    if 0 <= row < shape[0] and 0 <= col < shape[1]:
        return row, col
    return None


class ArrayCube:
    """Single-band raster held in memory."""

    def __init__(self, data: np.ndarray):
        data = np.asarray(data)
        if data.ndim != 2:
            raise ValueError(f"Expected a 2D raster, got shape {data.shape}")
        self.data = data

    @classmethod
    def from_image(cls, image_path: Union[str, Path]) -> "ArrayCube":
        """
        Load an image file as a grayscale raster of raw DN values.

        Args:
            image_path: Path to an image file readable by Pillow

        Returns:
            ArrayCube with float32 DNs (not normalized)
        """
        path = Path(image_path)
        if not path.exists():
            raise FileNotFoundError(f"Image not found: {image_path}")

        try:
            img = Image.open(path)
            if img.mode not in ("L", "I", "F", "I;16"):
                img = img.convert("L")
            data = np.array(img, dtype=np.float32)
        except OSError as e:
            raise ValueError(f"Failed to load image {image_path}: {e}")

        logger.debug(f"Loaded raster {image_path}: {data.shape}")
        return cls(data)

    def width(self) -> int:
        return int(self.data.shape[1])

    def height(self) -> int:
        return int(self.data.shape[0])

    def read_pixel(self, sample: float, line: float) -> float:
        """DN at the nearest pixel; Null outside the raster."""
        index = _pixel_index(sample, line, self.data.shape)
        if index is None:
            return NULL
        return float(self.data[index])


class ArrayCamera:
    """
    Camera whose geometry is sampled on the pixel grid.

    NaN resolution marks pixels without a ground intersection.
    """

    def __init__(
        self,
        emission: np.ndarray,
        incidence: np.ndarray,
        resolution: np.ndarray,
    ):
        self.emission = np.asarray(emission, dtype=np.float64)
        self.incidence = np.asarray(incidence, dtype=np.float64)
        self.resolution = np.asarray(resolution, dtype=np.float64)
        if not (self.emission.shape == self.incidence.shape == self.resolution.shape):
            raise ValueError(
                "Emission, incidence and resolution grids must share a shape, got "
                f"{self.emission.shape}, {self.incidence.shape}, {self.resolution.shape}"
            )
        self._index: Optional[Tuple[int, int]] = None

    @classmethod
    def uniform(
        cls,
        width: int,
        height: int,
        emission: float = 0.0,
        incidence: float = 0.0,
        resolution: float = 1.0,
    ) -> "ArrayCamera":
        """Camera with the same geometry at every pixel."""
        shape = (height, width)
        return cls(
            np.full(shape, emission), np.full(shape, incidence), np.full(shape, resolution)
        )

    def set_image(self, sample: float, line: float) -> bool:
        index = _pixel_index(sample, line, self.resolution.shape)
        if index is None or np.isnan(self.resolution[index]):
            self._index = None
            raise ImagingError(f"No ground intersection at sample {sample}, line {line}")
        self._index = index
        return True

    def _current(self, grid: np.ndarray) -> float:
        if self._index is None:
            raise ImagingError("Camera has no image position set")
        return float(grid[self._index])

    def emission_angle(self) -> float:
        return self._current(self.emission)

    def incidence_angle(self) -> float:
        return self._current(self.incidence)

    def pixel_resolution(self) -> float:
        return self._current(self.resolution)
