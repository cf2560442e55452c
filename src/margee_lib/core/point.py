"""
Latitude/longitude points on a spherical model of the earth.

All calculations go through n-vectors (unit normals to the sphere) instead of
spherical trigonometry, so the poles and the antimeridian need no special
handling except where a quantity is algebraically undefined.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from numbers import Real
from typing import Union

from margee_lib.config import MainConfig
from margee_lib.core.dms import to_lat, to_lon
from margee_lib.core.exceptions import (
    DegenerateBearingError,
    IndeterminatePoleError,
    NonConvexPolygonError,
    ValidationError,
)
from margee_lib.core.helpers import as_float, as_latitude, normalize_longitude
from margee_lib.core.vector import Vector3d

NORTH_POLE = Vector3d(0.0, 0.0, 1.0)

EPSILON = MainConfig.epsilon


@dataclass(frozen=True)
class SphericalPoint:
    """
    Geodetic point on a sphere.

    Attributes:
        lat: Latitude in degrees, within [-90, 90]
        lon: Longitude in degrees (not normalised on input)
        height: Height above the sphere in km, carried along but not used
        radius: Sphere radius in km, clamped to [6353, 6384]

    Example:
        >>> p1 = SphericalPoint(52.205, 0.119)
        >>> round(p1.distance_to(SphericalPoint(48.857, 2.351)), 1)
        404.3
    """

    lat: float
    lon: float
    height: float = 0.0
    radius: float = MainConfig.earth_radius_km

    def __post_init__(self):
        radius = as_float(self.radius, "radius")
        radius = min(max(radius, MainConfig.min_radius_km), MainConfig.max_radius_km)

        object.__setattr__(self, "lat", as_latitude(self.lat, "lat"))
        object.__setattr__(self, "lon", as_float(self.lon, "lon"))
        object.__setattr__(self, "height", as_float(self.height, "height"))
        object.__setattr__(self, "radius", radius)

    def to_vector(self) -> Vector3d:
        """
        Convert this point to an n-vector.

        Right-handed: x -> 0°E,0°N; y -> 90°E,0°N; z -> 90°N.
        """
        phi = math.radians(self.lat)
        lam = math.radians(self.lon)
        return Vector3d(
            math.cos(phi) * math.cos(lam),
            math.cos(phi) * math.sin(lam),
            math.sin(phi),
        )

    @staticmethod
    def from_vector(
        v: Vector3d, height: float = 0.0, radius: float = MainConfig.earth_radius_km
    ) -> SphericalPoint:
        """Convert an n-vector back to a point; the longitude lands in (-180, 180]."""
        phi = math.atan2(v.z, math.sqrt(v.x * v.x + v.y * v.y))
        lam = math.atan2(v.y, v.x)
        return SphericalPoint(math.degrees(phi), math.degrees(lam), height, radius)

    def great_circle(self, bearing: float) -> Vector3d:
        """
        Normal of the great circle obtained by heading on bearing from this point.

        Args:
            bearing: Compass bearing in degrees

        Returns:
            Unit vector normal to the great-circle plane
        """
        phi = math.radians(self.lat)
        lam = math.radians(self.lon)
        theta = math.radians(as_float(bearing, "bearing"))

        x = math.sin(lam) * math.cos(theta) - math.sin(phi) * math.cos(lam) * math.sin(theta)
        y = -math.cos(lam) * math.cos(theta) - math.sin(phi) * math.sin(lam) * math.sin(theta)
        z = math.cos(phi) * math.sin(theta)

        return Vector3d(x, y, z)

    def distance_to(self, point: SphericalPoint) -> float:
        """Great-circle distance to point in km."""
        return self.to_vector().angle_to(point.to_vector()) * self.radius

    def bearing_to(self, point: SphericalPoint) -> float:
        """
        Initial bearing from this point to point.

        Returns:
            Compass bearing in degrees within [0, 360)

        Raises:
            DegenerateBearingError: If the points coincide or are antipodal
        """
        p1 = self.to_vector()
        p2 = point.to_vector()

        c1 = p1.cross(p2)  # great circle through p1 & p2
        if c1.length() < EPSILON:
            raise DegenerateBearingError(
                f"Bearing from {self} to {point} is undefined (coincident or antipodal points)"
            )

        c2 = p1.cross(NORTH_POLE)  # great circle through p1 & north pole
        if c2.length() < EPSILON:
            bearing = self._polar_bearing(c1.cross(p1))
        else:
            bearing = math.degrees(c1.angle_to(c2, p1))

        return (bearing + 360.0) % 360.0

    def _polar_bearing(self, direction: Vector3d) -> float:
        # On a pole north is taken along the meridian of this point's longitude
        phi = math.radians(self.lat)
        lam = math.radians(self.lon)
        north = Vector3d(
            -math.sin(phi) * math.cos(lam), -math.sin(phi) * math.sin(lam), math.cos(phi)
        )
        east = Vector3d(-math.sin(lam), math.cos(lam), 0.0)
        return math.degrees(math.atan2(direction.dot(east), direction.dot(north)))

    def midpoint_to(self, point: SphericalPoint) -> SphericalPoint:
        """
        Midpoint between this point and point.

        Raises:
            DegenerateBearingError: If the points are antipodal
        """
        mid = self.to_vector() + point.to_vector()
        if mid.length() < EPSILON:
            raise DegenerateBearingError(f"No unique midpoint between antipodes {self} and {point}")
        return SphericalPoint.from_vector(mid.unit(), radius=self.radius)

    def destination_point(self, bearing: float, distance: float) -> SphericalPoint:
        """
        Destination reached after travelling distance along the great circle
        leaving this point on the given initial bearing.

        Args:
            bearing: Initial bearing in degrees
            distance: Distance in km

        Returns:
            Destination point, with this point's height and radius
        """
        delta = as_float(distance, "distance") / self.radius  # angular distance

        c = self.great_circle(bearing)
        p1 = self.to_vector()

        x = p1 * math.cos(delta)  # component of p2 parallel to p1
        y = c.cross(p1) * math.sin(delta)  # component of p2 perpendicular to p1

        return SphericalPoint.from_vector((x + y).unit(), self.height, self.radius)

    @staticmethod
    def intersection(
        path1_start: SphericalPoint,
        path1_end_or_bearing: SphericalPoint | float,
        path2_start: SphericalPoint,
        path2_end_or_bearing: SphericalPoint | float,
    ) -> SphericalPoint:
        """
        Intersection of two paths, each given by two points or a start point and bearing.

        Two antipodal intersections exist; the one along c1 x c2 is returned.
        Negate its n-vector for the other.

        Raises:
            IndeterminatePoleError: If both paths lie on the same great circle
        """
        c1 = great_circle_normal(path1_start, path1_end_or_bearing)
        c2 = great_circle_normal(path2_start, path2_end_or_bearing)

        intersection = c1.cross(c2)
        if intersection.length() <= EPSILON * c1.length() * c2.length():
            raise IndeterminatePoleError(
                "Paths lie on the same great circle; no unique intersection"
            )

        return SphericalPoint.from_vector(intersection.unit(), radius=path1_start.radius)

    def cross_track_distance_to(
        self, path_start: SphericalPoint, path_end_or_bearing: SphericalPoint | float
    ) -> float:
        """
        Signed distance from this point to the great circle through path_start.

        Returns:
            Distance in km, negative to the left and positive to the right of the path
        """
        p = self.to_vector()
        gc = great_circle_normal(path_start, path_end_or_bearing)

        alpha = gc.angle_to(p, p.cross(gc))  # signed angle between point & normal
        alpha = -math.pi / 2 - alpha if alpha < 0 else math.pi / 2 - alpha

        return alpha * self.radius

    def enclosed_by(self, points: Sequence[SphericalPoint]) -> bool:
        """
        Whether this point lies within the convex polygon given by points.

        A closing vertex equal to the first is ignored. Either winding order
        is accepted; points on an edge count as enclosed.

        Raises:
            ValidationError: If fewer than 3 vertices are given
            NonConvexPolygonError: If the polygon is not convex
        """
        vertices = [to_point(p) for p in points]
        if len(vertices) > 1 and vertices[0] == vertices[-1]:
            vertices = vertices[:-1]
        if len(vertices) < 3:
            raise ValidationError(f"A polygon needs at least 3 vertices, got {len(vertices)}")

        vectors = [p.to_vector() for p in vertices]
        n = len(vectors)
        edges = [vectors[i].cross(vectors[(i + 1) % n]) for i in range(n)]

        reference = _sum_vectors(vectors).unit()
        turns = [edges[i].angle_to(edges[(i + 1) % n], reference) for i in range(n)]
        winding = math.copysign(1.0, sum(turns))
        if any(turn * winding < -EPSILON for turn in turns):
            raise NonConvexPolygonError("Polygon is not convex")

        v = self.to_vector()
        for edge in edges:
            side = edge.dot(v)
            if side * winding < -EPSILON * edge.length():
                return False
        return True

    @staticmethod
    def mean_of(points: Iterable[SphericalPoint]) -> SphericalPoint:
        """Geographic mean (spherical centroid) of points, on the first point's sphere."""
        points = list(points)
        if not points:
            raise ValidationError("Cannot take the mean of no points")
        mean = _sum_vectors([p.to_vector() for p in points]).unit()
        return SphericalPoint.from_vector(mean, radius=points[0].radius)

    def antipode(self) -> SphericalPoint:
        """Diametrically opposite point, longitude in (-180, 180]."""
        return replace(self, lat=-self.lat, lon=normalize_longitude(self.lon + 180.0))

    def equals(self, point: SphericalPoint) -> bool:
        return self == point

    def to_string(self, fmt: str = "dms", dp: int | None = None) -> str:
        """Comma-separated latitude/longitude formatted as 'd', 'dm' or 'dms'."""
        return f"{to_lat(self.lat, fmt, dp)}, {to_lon(self.lon, fmt, dp)}"

    def __str__(self) -> str:
        return self.to_string()

    def as_tuple(self) -> tuple[float, float]:
        return (self.lat, self.lon)


PointLike = Union[SphericalPoint, Sequence[float]]


def to_point(value: PointLike) -> SphericalPoint:
    """
    Accept a SphericalPoint or a (lat, lon[, height]) sequence.

    Raises:
        ValidationError: If value cannot be read as a point
    """
    if isinstance(value, SphericalPoint):
        return value
    if isinstance(value, (str, bytes)):
        raise ValidationError(f"Expected a point or (lat, lon) pair, got {value!r}")
    try:
        values = tuple(value)
    except TypeError as e:
        raise ValidationError(f"Expected a point or (lat, lon) pair, got {value!r}") from e
    if len(values) not in (2, 3):
        raise ValidationError(f"Expected a (lat, lon) pair, got {len(values)} values")
    return SphericalPoint(*values)


def great_circle_normal(start: SphericalPoint, end_or_bearing: PointLike | float) -> Vector3d:
    """
    Normal of the great circle along a path.

    Raises:
        DegenerateBearingError: If the path is given by two coincident or antipodal points
    """
    if isinstance(end_or_bearing, Real) and not isinstance(end_or_bearing, bool):
        return start.great_circle(end_or_bearing)

    end = to_point(end_or_bearing)
    normal = start.to_vector().cross(end.to_vector())
    if normal.length() < EPSILON:
        raise DegenerateBearingError(f"Path from {start} to {end} does not define a great circle")
    return normal


def _sum_vectors(vectors: Iterable[Vector3d]) -> Vector3d:
    total = Vector3d(0.0, 0.0, 0.0)
    for v in vectors:
        total = total + v
    return total
