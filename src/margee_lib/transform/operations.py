# src/margee_lib/transform/operations.py
"""Rigid rotation and translation of coordinate sequences."""

from __future__ import annotations

import math
from collections.abc import Iterable

from margee_lib.config import MainConfig
from margee_lib.core.point import SphericalPoint

Coordinates = list[tuple[float, float]]


def rotate_point(point: SphericalPoint, pole: SphericalPoint, azimuth: float) -> SphericalPoint:
    """
    Rotate a point about an Euler pole.

    The bearing from the pole to the point is turned by azimuth and the
    point is re-projected from the pole at the same angular distance.

    Args:
        point: Point to rotate
        pole: Euler pole
        azimuth: Rotation angle in degrees, clockwise looking down on the pole

    Returns:
        Rotated point with the original height and radius. The pole and its
        antipode are fixed points and come back unchanged.
    """
    if azimuth == 0:
        return point

    p = pole.to_vector()
    v = point.to_vector()
    if p.cross(v).length() < MainConfig.epsilon:
        return point

    distance = p.angle_to(v) * pole.radius
    bearing = pole.bearing_to(point) + azimuth

    moved = pole.destination_point(bearing, distance)
    return SphericalPoint(moved.lat, moved.lon, point.height, point.radius)


def rotate_coordinates(
    coordinates: Iterable[tuple[float, float]], pole: SphericalPoint, azimuth: float
) -> Coordinates:
    """Rotate every (lat, lon) pair about pole by azimuth degrees."""
    if azimuth == 0:
        return [(lat, lon) for lat, lon in coordinates]

    rotated = []
    for lat, lon in coordinates:
        moved = rotate_point(SphericalPoint(lat, lon), pole, azimuth)
        rotated.append((moved.lat, moved.lon))
    return rotated


def translation_pole(first: tuple[float, float], bearing: float) -> SphericalPoint:
    """Pole a quarter circle to the right of the heading from the first coordinate."""
    start = SphericalPoint(*first)
    return start.destination_point(bearing + 90.0, start.radius * math.pi / 2)


def translate_coordinates(
    coordinates: Iterable[tuple[float, float]], bearing: float, distance: float
) -> Coordinates:
    """
    Translate every (lat, lon) pair by distance km along bearing.

    The move is a rotation about translation_pole() of the first
    coordinate, so the whole shape moves rigidly.
    """
    coordinates = list(coordinates)
    if not coordinates or distance == 0:
        return [(lat, lon) for lat, lon in coordinates]

    pole = translation_pole(coordinates[0], bearing)
    azimuth = math.degrees(distance / MainConfig.earth_radius_km)
    return rotate_coordinates(coordinates, pole, azimuth)
