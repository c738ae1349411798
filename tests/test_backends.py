"""Tests for numpy-backed camera and cube."""

import numpy as np
import pytest
from PIL import Image

from measure_validator.backends import ArrayCamera, ArrayCube
from measure_validator.errors import ImagingError
from measure_validator.interfaces import Camera, Cube
from measure_validator.results.constants import NULL, is_special


def test_array_cube_read_pixel():
    """Test 1-based reads rounded to the nearest pixel."""
    data = np.arange(12, dtype=np.float32).reshape(3, 4)
    cube = ArrayCube(data)
    assert cube.width() == 4
    assert cube.height() == 3
    assert cube.read_pixel(1, 1) == 0.0
    assert cube.read_pixel(4, 3) == 11.0
    assert cube.read_pixel(2.4, 1.6) == 5.0
    assert isinstance(cube, Cube)


def test_array_cube_outside_is_null():
    """Test reads outside the raster."""
    cube = ArrayCube(np.ones((3, 3)))
    assert cube.read_pixel(0, 1) == NULL
    assert cube.read_pixel(1, 4) == NULL
    assert is_special(cube.read_pixel(10, 10))


def test_array_cube_rejects_non_2d():
    """Test that only single-band rasters are accepted."""
    with pytest.raises(ValueError, match="2D raster"):
        ArrayCube(np.ones((2, 2, 3)))


def test_array_cube_from_image(tmp_path):
    """Test loading an image file as raw DNs."""
    img = Image.new("RGB", (30, 20), color=(200, 200, 200))
    img_path = tmp_path / "test.png"
    img.save(img_path)

    cube = ArrayCube.from_image(img_path)

    assert cube.width() == 30
    assert cube.height() == 20
    assert cube.data.dtype == np.float32
    assert cube.read_pixel(15, 10) == 200.0


def test_array_cube_from_image_not_found():
    """Test error handling for missing files."""
    with pytest.raises(FileNotFoundError):
        ArrayCube.from_image("nonexistent.png")


def test_array_cube_from_image_invalid(tmp_path):
    """Test error handling for files that are not images."""
    invalid_path = tmp_path / "test.png"
    invalid_path.write_text("not an image")
    with pytest.raises(ValueError, match="Failed to load image"):
        ArrayCube.from_image(invalid_path)


def test_array_camera_geometry():
    """Test per-pixel geometry lookups."""
    emission = np.array([[1.0, 2.0], [3.0, 4.0]])
    camera = ArrayCamera(emission, emission * 10, emission * 100)
    assert camera.set_image(2, 1) is True
    assert camera.emission_angle() == 2.0
    assert camera.incidence_angle() == 20.0
    assert camera.pixel_resolution() == 200.0
    assert isinstance(camera, Camera)


def test_array_camera_missing_geometry():
    """Test NaN resolution and out-of-grid positions."""
    camera = ArrayCamera.uniform(3, 3, resolution=1.0)
    camera.resolution[1, 1] = np.nan
    with pytest.raises(ImagingError):
        camera.set_image(2, 2)
    with pytest.raises(ImagingError):
        camera.set_image(4, 1)
    with pytest.raises(ImagingError, match="no image position"):
        camera.pixel_resolution()


def test_array_camera_shape_mismatch():
    """Test grids of different shapes."""
    with pytest.raises(ValueError, match="share a shape"):
        ArrayCamera(np.zeros((2, 2)), np.zeros((2, 2)), np.zeros((3, 2)))
