"""Validate candidate control points against a definition file."""

import argparse
import logging
from pathlib import Path

import numpy as np

from measure_validator import ImagingError, MeasureValidator, ThresholdConfig
from measure_validator.backends import ArrayCamera, ArrayCube

# Configure logging
logging.basicConfig(level=logging.INFO)


def synthetic_camera(width: int, height: int) -> ArrayCamera:
    """Camera whose resolution coarsens toward the right edge (oblique view)."""
    columns = np.linspace(0.0, 1.0, width)
    resolution = np.tile(10.0 + 40.0 * columns**2, (height, 1))
    emission = np.tile(5.0 + 70.0 * columns, (height, 1))
    incidence = np.full((height, width), 30.0)
    # No ground intersection in the top-right corner
    resolution[: height // 10, -width // 10 :] = np.nan
    return ArrayCamera(emission, incidence, resolution)


def main():
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("image", type=Path, help="Image file to read DNs from")
    parser.add_argument("--config", type=Path, help="TOML file with a [ValidMeasure] table")
    parser.add_argument("--step", type=int, default=50, help="Grid spacing in pixels")
    args = parser.parse_args()

    thresholds = (
        ThresholdConfig.from_file(args.config) if args.config else ThresholdConfig()
    )
    validator = MeasureValidator(thresholds)
    cube = ArrayCube.from_image(args.image)
    camera = synthetic_camera(cube.width(), cube.height())

    valid = 0
    total = 0
    for line in range(1, cube.height() + 1, args.step):
        for sample in range(1, cube.width() + 1, args.step):
            total += 1
            try:
                result = validator.validate(sample, line, camera, cube)
            except ImagingError as e:
                print(f"({sample}, {line}): skipped, {e}")
                continue
            if result.is_valid:
                valid += 1
            else:
                print(f"({sample}, {line}): {result}")

    print(f"\n{valid} of {total} points valid")


if __name__ == "__main__":
    main()
