"""Core spherical geometry for margee-lib."""

from margee_lib.core.dms import parse_dms, to_bearing, to_dms, to_lat, to_lon
from margee_lib.core.exceptions import (
    DegenerateBearingError,
    GeometryError,
    IndeterminatePoleError,
    MargeeError,
    NonConvexPolygonError,
    ProjectionError,
    ValidationError,
)
from margee_lib.core.point import SphericalPoint, to_point
from margee_lib.core.vector import Vector3d

__all__ = [
    "Vector3d",
    "SphericalPoint",
    "to_point",
    "parse_dms",
    "to_dms",
    "to_lat",
    "to_lon",
    "to_bearing",
    "MargeeError",
    "ValidationError",
    "GeometryError",
    "NonConvexPolygonError",
    "IndeterminatePoleError",
    "DegenerateBearingError",
    "ProjectionError",
]
