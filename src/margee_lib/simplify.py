"""
Stack-based Douglas-Peucker line simplification on geographic coordinates.

Distances are measured on a local equirectangular approximation: longitude
differences are scaled by the cosine of the mean latitude of the two points
involved, and a longitude jump over the antimeridian is folded back.

The kink is the height of the triangle formed by a candidate point and the
two ends of the working section; points whose kink exceeds the threshold
are kept.
"""

from __future__ import annotations

import logging
import math
from typing import Any

import numpy as np

from margee_lib.config import MainConfig
from margee_lib.core.exceptions import ValidationError
from margee_lib.core.helpers import as_coordinates, as_float

logger = logging.getLogger(__name__)

HALF_DEG_TO_RAD = math.pi / 180.0 * 0.5


def band_squared(kink: float) -> float:
    """Squared kink threshold in degrees for a kink given in meters."""
    band = kink * 360.0 / (2.0 * math.pi * MainConfig.wgs84_semi_major_m)
    return band * band


def _scaled_delta(lat_a, lon_a, lat_b, lon_b):
    # Longitude delta scaled by the mean latitude, folded across the antimeridian
    dx = np.mod(lon_a - lon_b + 180.0, 360.0) - 180.0
    dx = dx * np.cos(HALF_DEG_TO_RAD * (lat_a + lat_b))
    dy = lat_a - lat_b
    return dx, dy


def _max_deviation(lat: np.ndarray, lon: np.ndarray, start: int, end: int) -> tuple[int, float]:
    """Index and squared deviation of the most deviant point strictly between start and end."""
    x12, y12 = _scaled_delta(lat[end], lon[end], lat[start], lon[start])
    d12 = x12 * x12 + y12 * y12

    inner_lat = lat[start + 1 : end]
    inner_lon = lon[start + 1 : end]

    x13, y13 = _scaled_delta(inner_lat, inner_lon, lat[start], lon[start])
    d13 = x13 * x13 + y13 * y13

    x23, y23 = _scaled_delta(inner_lat, inner_lon, lat[end], lon[end])
    d23 = x23 * x23 + y23 * y23

    with np.errstate(divide="ignore", invalid="ignore"):
        triangle = (x13 * y12 - y13 * x12) ** 2 / d12

    # Points projecting beyond either end are measured to the nearer end
    dev_sqr = np.where(d13 >= d12 + d23, d23, np.where(d23 >= d12 + d13, d13, triangle))

    sig = int(np.argmax(dev_sqr))
    return start + 1 + sig, float(dev_sqr[sig])


def simplify_indices(coords: Any, kink: float = MainConfig.default_kink_m) -> list[int]:
    """
    Indices of the points kept by the simplification.

    Args:
        coords: Sequence of (lat, lon) pairs in decimal degrees
        kink: Minimum deviation in meters for an intermediate point to be kept

    Returns:
        Increasing list of indices, always including the first and last

    Raises:
        ValidationError: If coords or kink are not valid numbers
    """
    arr = as_coordinates(coords)
    kink = as_float(kink, "kink")
    if kink < 0:
        raise ValidationError(f"kink must not be negative, got {kink}")

    n_source = len(arr)
    if n_source < 3:
        return list(range(n_source))

    lat = arr[:, 0]
    lon = arr[:, 1]
    band_sqr = band_squared(kink)

    index: list[int] = []
    stack: list[tuple[int, int]] = [(0, n_source - 1)]

    while stack:
        start, end = stack.pop()

        if end - start > 1:
            sig, max_dev_sqr = _max_deviation(lat, lon, start, end)

            if max_dev_sqr < band_sqr:
                index.append(start)
            else:
                # left half goes on top so output stays in order
                stack.append((sig, end))
                stack.append((start, sig))
        else:
            index.append(start)

    index.append(n_source - 1)

    logger.debug("Simplified %d points to %d (kink %.1f m)", n_source, len(index), kink)
    return index


def simplify(coords: Any, kink: float = MainConfig.default_kink_m) -> list[tuple[float, float]]:
    """
    Reduce a line with Douglas-Peucker using a real-world kink threshold.

    Lines of fewer than 3 points are returned unchanged. The output is a
    subsequence of the input that always keeps its first and last points.

    Args:
        coords: Sequence of (lat, lon) pairs in decimal degrees
        kink: Minimum deviation in meters for an intermediate point to be kept

    Returns:
        List of (lat, lon) tuples
    """
    arr = as_coordinates(coords)
    return [(float(arr[i, 0]), float(arr[i, 1])) for i in simplify_indices(arr, kink)]
