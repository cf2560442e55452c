"""
Euler pole recovery.

Given the same two points observed before and after an unknown rigid
rotation of the sphere, find the rotation pole and the signed angle.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from margee_lib.config import MainConfig
from margee_lib.core.exceptions import (
    DegenerateBearingError,
    IndeterminatePoleError,
    ValidationError,
)
from margee_lib.core.helpers import normalize_angle
from margee_lib.core.point import PointLike, SphericalPoint, to_point

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CorrespondencePair:
    """One point before (start) and after (end) the rotation."""

    start: SphericalPoint
    end: SphericalPoint

    @staticmethod
    def of(pair: CorrespondencePair | Sequence[PointLike]) -> CorrespondencePair:
        if isinstance(pair, CorrespondencePair):
            return pair
        try:
            start, end = pair
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Expected a (start, end) pair, got {pair!r}") from e
        return CorrespondencePair(to_point(start), to_point(end))


@dataclass(frozen=True)
class EulerPoleResult:
    """
    Rotation pole and signed angle.

    Rotating a point about pole by angle degrees (clockwise looking down on
    the pole) reproduces the observed motion.
    """

    pole: SphericalPoint
    angle: float

    def antipodal(self) -> EulerPoleResult:
        """The same physical rotation expressed about the antipodal pole."""
        return EulerPoleResult(self.pole.antipode(), -self.angle)


def _bisector(pair: CorrespondencePair, label: str):
    # Great circle of points equidistant from start and end
    if pair.start.to_vector().cross(pair.end.to_vector()).length() < MainConfig.epsilon:
        raise IndeterminatePoleError(
            f"{label}: start and end coincide or are antipodal, the bisector is undefined"
        )
    mid = pair.start.midpoint_to(pair.end)
    bearing = mid.bearing_to(pair.end)
    return mid, bearing + 90.0


def solve_euler_pole(
    pair1: CorrespondencePair | Sequence[PointLike],
    pair2: CorrespondencePair | Sequence[PointLike],
) -> tuple[EulerPoleResult, EulerPoleResult]:
    """
    Recover the rotation that moves each pair's start onto its end.

    The pole is the intersection of the perpendicular bisectors of the two
    pairs. Both solutions, (pole, angle) and (antipode, -angle), describe the
    same rotation and are both returned.

    Args:
        pair1: First (start, end) correspondence
        pair2: Second (start, end) correspondence

    Returns:
        Tuple of the intersection-pole solution and its antipodal twin

    Raises:
        IndeterminatePoleError: If a pair does not move, or the bisectors coincide
    """
    pair1 = CorrespondencePair.of(pair1)
    pair2 = CorrespondencePair.of(pair2)

    mid1, bearing1 = _bisector(pair1, "first pair")
    mid2, bearing2 = _bisector(pair2, "second pair")

    pole = SphericalPoint.intersection(mid1, bearing1, mid2, bearing2)

    try:
        angle = normalize_angle(pole.bearing_to(pair1.end) - pole.bearing_to(pair1.start))
    except DegenerateBearingError as e:
        raise IndeterminatePoleError(f"Rotation angle is undefined about {pole}") from e

    result = EulerPoleResult(pole, angle)
    logger.debug("Euler pole %.6f, %.6f angle %.6f", pole.lat, pole.lon, angle)
    return result, result.antipodal()


def solve_from_shapes(
    before: Sequence[PointLike],
    after: Sequence[PointLike],
    indices: tuple[int, int] = MainConfig.euler_indices,
) -> tuple[EulerPoleResult, EulerPoleResult]:
    """
    Solve the Euler pole from two placements of the same shape.

    Vertices at the given indices of each placement are paired up.

    Args:
        before: Vertices of the shape in its original position
        after: Vertices of the same shape after the rotation
        indices: Two vertex indices to use as correspondence points

    Raises:
        ValidationError: If the shapes differ in size, are too small, or
            do not contain the requested vertices
    """
    if len(before) != len(after):
        raise ValidationError(
            f"Shapes do not match in number of points ({len(before)} vs {len(after)})"
        )
    if len(before) < 3:
        raise ValidationError("At least a path or polygon with 3 points is needed")

    first, second = indices
    if first == second:
        raise ValidationError("Correspondence indices must differ")
    for index in indices:
        if not -len(before) <= index < len(before):
            raise ValidationError(f"Vertex index {index} is out of range for {len(before)} points")

    return solve_euler_pole(
        (before[first], after[first]),
        (before[second], after[second]),
    )
