"""margee-lib: spherical rotation, translation and simplification of shapes."""

__version__ = "0.1.0"

from .api import (
    apply_rotation,
    apply_translation,
    bearing,
    centroid,
    cross_track,
    destination,
    distance,
    enclosed,
    intersect,
    midpoint,
    simplify,
    solve_euler_pole,
)
from .config import MainConfig
from .core import (
    DegenerateBearingError,
    GeometryError,
    IndeterminatePoleError,
    MargeeError,
    NonConvexPolygonError,
    ProjectionError,
    SphericalPoint,
    ValidationError,
    Vector3d,
    parse_dms,
    to_bearing,
    to_dms,
    to_lat,
    to_lon,
)
from .euler import CorrespondencePair, EulerPoleResult, solve_from_shapes
from .transform import BatchCommand, OperationKind, TransformRequest, parse_batch

__all__ = [
    "__version__",
    "MainConfig",
    "SphericalPoint",
    "Vector3d",
    "TransformRequest",
    "OperationKind",
    "BatchCommand",
    "CorrespondencePair",
    "EulerPoleResult",
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
    "solve_from_shapes",
    "parse_batch",
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
