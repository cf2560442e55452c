"""Input validation shared by the value types and the transform functions."""

from __future__ import annotations

import math
from numbers import Real
from typing import Any

import numpy as np

from margee_lib.core.exceptions import ValidationError


def as_float(value: Any, name: str = "value") -> float:
    """
    Coerce a real number to float, rejecting anything else.

    Args:
        value: Candidate number
        name: Field name used in the error message

    Returns:
        The value as a Python float

    Raises:
        ValidationError: If the value is not a finite real number
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValidationError(f"{name} must be a number, got {type(value).__name__}: {value!r}")
    result = float(value)
    if not math.isfinite(result):
        raise ValidationError(f"{name} must be finite, got {result}")
    return result


def as_latitude(value: Any, name: str = "latitude") -> float:
    """Validate a latitude in decimal degrees."""
    lat = as_float(value, name)
    if not -90.0 <= lat <= 90.0:
        raise ValidationError(f"{name} must be within [-90, 90], got {lat}")
    return lat


def as_coordinates(coords: Any) -> np.ndarray:
    """
    Validate a sequence of (lat, lon) pairs.

    Args:
        coords: List/tuple of pairs or an array of shape (N, 2)

    Returns:
        Float array of shape (N, 2)

    Raises:
        ValidationError: If the input is not a sequence of numeric pairs
    """
    try:
        arr = np.asarray(coords)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Coordinates must be (lat, lon) pairs: {e}") from e

    if arr.size == 0:
        return np.empty((0, 2), dtype=np.float64)

    if arr.dtype.kind not in "iuf":
        raise ValidationError(f"Coordinates must be numeric, got dtype {arr.dtype}")
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValidationError(f"Coordinates must have shape (N, 2), got {arr.shape}")

    arr = arr.astype(np.float64)
    if not np.all(np.isfinite(arr)):
        raise ValidationError("Coordinates must be finite")
    if np.any(np.abs(arr[:, 0]) > 90.0):
        raise ValidationError("Latitudes must be within [-90, 90]")
    return arr


def as_steps(value: Any, max_steps: int) -> int:
    """Validate an interpolation step count in [1, max_steps]."""
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ValidationError(f"steps must be an integer, got {value!r}")
    steps = int(value)
    if not 1 <= steps <= max_steps:
        raise ValidationError(f"steps must be within [1, {max_steps}], got {steps}")
    return steps


def normalize_longitude(lon: float) -> float:
    """Wrap a longitude into (-180, 180]."""
    lon = math.fmod(lon, 360.0)
    if lon <= -180.0:
        lon += 360.0
    elif lon > 180.0:
        lon -= 360.0
    return lon


def normalize_angle(angle: float) -> float:
    """Wrap a signed angle in degrees into (-180, 180]."""
    return normalize_longitude(angle)
