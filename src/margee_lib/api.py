"""
Functional entry points.

Points may be given as SphericalPoint instances or (lat, lon) pairs;
coordinates as sequences of (lat, lon) pairs.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from margee_lib.core.point import PointLike, SphericalPoint, to_point
from margee_lib.euler import solve_euler_pole
from margee_lib.simplify import simplify
from margee_lib.transform.config import TransformRequest
from margee_lib.transform.runner import TransformResult, apply

Path = tuple[PointLike, Any]


def _end_or_bearing(value: Any):
    if isinstance(value, SphericalPoint) or isinstance(value, Sequence):
        return to_point(value)
    return value


def distance(p1: PointLike, p2: PointLike) -> float:
    """Great-circle distance in km."""
    return to_point(p1).distance_to(to_point(p2))


def bearing(p1: PointLike, p2: PointLike) -> float:
    """Initial bearing from p1 to p2 in degrees [0, 360)."""
    return to_point(p1).bearing_to(to_point(p2))


def midpoint(p1: PointLike, p2: PointLike) -> SphericalPoint:
    return to_point(p1).midpoint_to(to_point(p2))


def destination(p: PointLike, bearing: float, distance: float) -> SphericalPoint:
    """Point reached from p after distance km on the initial bearing."""
    return to_point(p).destination_point(bearing, distance)


def intersect(path1: Path, path2: Path) -> SphericalPoint:
    """
    Intersection of two paths.

    Each path is (start, end) or (start, bearing).
    """
    start1, end1 = path1
    start2, end2 = path2
    return SphericalPoint.intersection(
        to_point(start1), _end_or_bearing(end1), to_point(start2), _end_or_bearing(end2)
    )


def cross_track(p: PointLike, path_start: PointLike, path_end_or_bearing: Any) -> float:
    """Signed distance in km from p to a path, positive to the right."""
    return to_point(p).cross_track_distance_to(
        to_point(path_start), _end_or_bearing(path_end_or_bearing)
    )


def enclosed(p: PointLike, polygon: Iterable[PointLike]) -> bool:
    """Whether p lies inside a convex polygon."""
    return to_point(p).enclosed_by([to_point(v) for v in polygon])


def centroid(points: Iterable[PointLike]) -> SphericalPoint:
    return SphericalPoint.mean_of(to_point(p) for p in points)


def apply_rotation(
    coords: Any, pole: PointLike, azimuth: float, steps: int = 1
) -> TransformResult:
    """Rotate coordinates about pole by azimuth degrees, optionally in steps."""
    return apply(TransformRequest.rotation(coords, pole, azimuth, steps))


def apply_translation(
    coords: Any, bearing: float, distance: float, steps: int = 1
) -> TransformResult:
    """Translate coordinates by distance km along bearing, optionally in steps."""
    return apply(TransformRequest.translation(coords, bearing, distance, steps))


__all__ = [
    "apply_rotation",
    "apply_translation",
    "bearing",
    "centroid",
    "cross_track",
    "destination",
    "distance",
    "enclosed",
    "intersect",
    "midpoint",
    "simplify",
    "solve_euler_pole",
]
