# src/margee_lib/transform/runner.py
from __future__ import annotations

import logging
from typing import Union

from ..simplify import simplify
from .config import OperationKind, TransformRequest
from .operations import Coordinates, rotate_coordinates, translate_coordinates

logger = logging.getLogger(__name__)

TransformResult = Union[Coordinates, list[Coordinates]]


def _single(request: TransformRequest, fraction: float) -> Coordinates:
    coords = request.coordinates
    if request.kind is OperationKind.ROTATE:
        return rotate_coordinates(coords, request.pole, request.azimuth * fraction)
    return translate_coordinates(coords, request.bearing, request.distance * fraction)


def apply(request: TransformRequest) -> TransformResult:
    """
    Apply a transform request to its coordinates.

    With steps == 1 the transformed coordinates are returned. With more
    steps a list of steps + 1 frames is returned: frame i applies i/steps
    of the angle (or distance), so frame 0 is the input and the last frame
    is the full transform.

    Args:
        request: Validated transform parameters and coordinates

    Returns:
        List of (lat, lon) tuples, or a list of such lists for stepped requests
    """
    if request.kind is OperationKind.SIMPLIFY:
        return simplify(request.coordinates, request.kink)

    if request.steps == 1:
        return _single(request, 1.0)

    frames = [_single(request, step / request.steps) for step in range(request.steps + 1)]
    logger.debug(
        "Built %d frames of %d points for %s",
        len(frames),
        len(request.coordinates),
        request.kind.name.lower(),
    )
    return frames
