"""Distance from a point to the image borders.

Margins are counted in whole pixels between the point and a border: a point
at sample 1 has no pixels to its left, a point at sample ``width`` none to
its right. Coordinates are truncated to integers before counting.

The ground-distance variant walks from the point toward each border one pixel
at a time, adding the camera's resolution at every visited pixel, so the
margin follows the ground sampling distance across the frame.
"""

import logging
from typing import Dict, Optional, Tuple

from measure_validator.errors import ImagingError
from measure_validator.interfaces import Camera, resolve
from measure_validator.results import EdgeDistance

logger = logging.getLogger(__name__)

__all__ = [
    'DIRECTIONS',
    'edge_margins',
    'pixels_from_edge_violation',
    'walk_to_edge',
    'meters_from_edge_violation',
]

# Direction -> (sample step, line step), in walking order
DIRECTIONS: Dict[str, Tuple[int, int]] = {
    "top": (0, -1),
    "bottom": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}


def edge_margins(sample: int, line: int, width: int, height: int) -> Dict[str, int]:
    """Whole pixels between the point and each border."""
    return {
        "right": width - sample,
        "left": sample - 1,
        "bottom": height - line,
        "top": line - 1,
    }


def pixels_from_edge_violation(
    sample: int, line: int, width: int, height: int, threshold: int
) -> Optional[Tuple[str, int]]:
    """
    Find the first border closer than ``threshold`` pixels.

    Returns:
        (border, margin) for the first violated border, or None if the point
        is far enough from all four. A threshold of 0 or less always passes.
    """
    if threshold <= 0:
        return None
    for border, margin in edge_margins(sample, line, width, height).items():
        if margin < threshold:
            return border, margin
    return None


def walk_to_edge(
    camera: Camera,
    sample: int,
    line: int,
    width: int,
    height: int,
    direction: str,
    threshold: float,
) -> EdgeDistance:
    """
    Accumulate ground distance from a point toward one border.

    Starts one pixel away from the point and stops as soon as the running
    total reaches ``threshold`` or the next pixel would leave the image.

    Args:
        camera: Camera of the image; its state is moved by the walk
        sample: Starting sample (1-based)
        line: Starting line (1-based)
        width: Image width in samples
        height: Image height in lines
        direction: One of ``DIRECTIONS``
        threshold: Ground distance to reach

    Returns:
        EdgeDistance with the accumulated distance and whether it suffices

    Raises:
        ImagingError: a visited pixel has no ground intersection
    """
    step_sample, step_line = DIRECTIONS[direction]
    distance = 0.0
    steps = 0
    s, l = sample + step_sample, line + step_line
    while 0 < s <= width and 0 < l <= height:
        try:
            resolve(camera, s, l)
        except ImagingError as e:
            raise ImagingError(
                f"Cannot resolve ground distance {direction} of "
                f"sample {sample}, line {line}: no geometry at sample {s}, line {l}"
            ) from e
        distance += camera.pixel_resolution()
        steps += 1
        if distance >= threshold:
            return EdgeDistance(direction, distance, steps, True)
        s += step_sample
        l += step_line
    return EdgeDistance(direction, distance, steps, False)


def meters_from_edge_violation(
    camera: Camera, sample: int, line: int, width: int, height: int, threshold: float
) -> Optional[EdgeDistance]:
    """
    Walk toward each border in turn and return the first that falls short.

    A threshold of 0 or less always passes without touching the camera.
    Directions after the first failure are not walked.
    """
    if threshold <= 0:
        return None
    for direction in DIRECTIONS:
        edge = walk_to_edge(camera, sample, line, width, height, direction, threshold)
        logger.debug(
            f"Edge walk {direction} from ({sample}, {line}): "
            f"{edge.distance:.3f} over {edge.steps} pixels"
        )
        if not edge.satisfied:
            return edge
    return None
