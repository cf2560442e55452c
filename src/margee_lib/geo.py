"""Shapely and GeoPandas adapters for margee-lib.

Geometries use shapely's (x=lon, y=lat) axis order. Geometries in a
projected CRS are moved to EPSG:4326, transformed, and projected back.

Note: transform_geodataframe requires GeoPandas.
Install with: pip install margee-lib[geo]
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Union

import numpy as np
import shapely
from shapely.geometry import (
    GeometryCollection,
    LinearRing,
    LineString,
    MultiLineString,
    MultiPolygon,
    Polygon,
)
from shapely.geometry.base import BaseGeometry

from margee_lib.config import MainConfig
from margee_lib.core.exceptions import ValidationError
from margee_lib.core.point import PointLike
from margee_lib.core.projector import Projector, is_geographic
from margee_lib.simplify import simplify_indices
from margee_lib.transform.config import OperationKind, TransformRequest
from margee_lib.transform.runner import apply

try:
    import geopandas as gpd

    HAS_GEO = True
except ImportError:
    HAS_GEO = False
    gpd = None

logger = logging.getLogger(__name__)

CoordinateFn = Callable[[list], Any]
GeometryResult = Union[BaseGeometry, list[BaseGeometry]]


def _check_geo_available():
    """Check if geospatial dependencies are available."""
    if not HAS_GEO:
        raise ImportError(
            "Geospatial dependencies not installed. Install with: pip install margee-lib[geo]"
        )


def _is_frames(result: Any) -> bool:
    return len(result) > 0 and isinstance(result[0], list)


def _rigid(geom: BaseGeometry, fn: CoordinateFn) -> GeometryResult:
    """
    Move every vertex of geom with one call to fn.

    All parts are passed together so a translation uses a single implicit
    pole and the geometry moves rigidly.
    """
    has_z = geom.has_z
    xyz = shapely.get_coordinates(geom, include_z=has_z)
    latlon = [(float(y), float(x)) for x, y in xyz[:, :2]]

    result = fn(latlon)
    frames = result if _is_frames(result) else [result]

    geoms = []
    for frame in frames:
        if len(frame) != len(xyz):
            raise ValidationError(
                f"Transform returned {len(frame)} coordinates for {len(xyz)} vertices"
            )
        moved = np.array(frame, dtype=np.float64).reshape(-1, 2)
        out = xyz.copy()
        out[:, 0] = moved[:, 1]
        out[:, 1] = moved[:, 0]
        geoms.append(shapely.transform(geom, lambda _, out=out: out, include_z=has_z))

    return geoms if _is_frames(result) else geoms[0]


def _simplified(geom: BaseGeometry, kink: float) -> BaseGeometry:
    """Simplify each line and ring of geom on its own; points pass through."""
    if isinstance(geom, (LineString, LinearRing)):
        xyz = np.asarray(geom.coords)
        if len(xyz) < 3:
            return geom
        keep = simplify_indices(xyz[:, [1, 0]], kink)
        if isinstance(geom, LinearRing):
            # a ring needs 4 coordinates including the closing one
            return geom if len(keep) < 4 else LinearRing(xyz[keep])
        return LineString(xyz[keep])
    if isinstance(geom, Polygon):
        if geom.is_empty:
            return geom
        return Polygon(
            _simplified(geom.exterior, kink),
            [_simplified(ring, kink) for ring in geom.interiors],
        )
    if isinstance(geom, (MultiLineString, MultiPolygon, GeometryCollection)):
        return type(geom)([_simplified(part, kink) for part in geom.geoms])
    return geom


def transform_geometry(
    geom: BaseGeometry,
    request_or_fn: TransformRequest | CoordinateFn,
    crs: Any = None,
) -> GeometryResult:
    """
    Apply a transform to a shapely geometry.

    Args:
        geom: Point, line, ring, polygon, multi-part geometry or collection
        request_or_fn: A TransformRequest (its coordinates are ignored), or a
            callable taking a list of (lat, lon) pairs and returning the
            moved pairs, or a list of such lists for several frames
        crs: CRS of geom; None means EPSG:4326

    Returns:
        The transformed geometry, or one geometry per frame for stepped
        requests

    Raises:
        ProjectionError: If crs cannot be interpreted
        ValidationError: If a coordinate is not a valid latitude/longitude
    """
    projector = None if is_geographic(crs) else Projector.from_crs(crs)
    source = projector.to_wgs84(geom) if projector else geom

    if isinstance(request_or_fn, TransformRequest):
        request = request_or_fn
        if request.kind is OperationKind.SIMPLIFY:
            result = _simplified(source, request.kink)
        elif source.is_empty:
            result = [source] * (request.steps + 1) if request.steps > 1 else source
        else:
            result = _rigid(source, lambda coords: apply(request.with_coordinates(coords)))
    elif source.is_empty:
        result = source
    else:
        result = _rigid(source, request_or_fn)

    if projector is None:
        return result
    if isinstance(result, list):
        return [projector.to_native(g) for g in result]
    return projector.to_native(result)


def rotate_geometry(
    geom: BaseGeometry, pole: PointLike, azimuth: float, steps: int = 1, crs: Any = None
) -> GeometryResult:
    """Rotate geom about pole by azimuth degrees."""
    return transform_geometry(geom, TransformRequest.rotation((), pole, azimuth, steps), crs)


def translate_geometry(
    geom: BaseGeometry, bearing: float, distance: float, steps: int = 1, crs: Any = None
) -> GeometryResult:
    """Translate geom by distance km along bearing."""
    return transform_geometry(geom, TransformRequest.translation((), bearing, distance, steps), crs)


def simplify_geometry(
    geom: BaseGeometry, kink: float = MainConfig.default_kink_m, crs: Any = None
) -> BaseGeometry:
    """Douglas-Peucker simplification of every line and ring in geom, kink in meters."""
    return transform_geometry(geom, TransformRequest.simplification((), kink), crs)


def transform_geodataframe(
    gdf: gpd.GeoDataFrame, request_or_fn: TransformRequest | CoordinateFn
) -> gpd.GeoDataFrame | list[gpd.GeoDataFrame]:
    """
    Apply a transform to every geometry of a GeoDataFrame.

    Attributes and CRS are kept. Missing geometries pass through.

    Returns:
        A new GeoDataFrame, or one per frame for stepped transforms

    Raises:
        ImportError: If GeoPandas is not installed.
    """
    _check_geo_available()

    results = [
        None if geom is None else transform_geometry(geom, request_or_fn, gdf.crs)
        for geom in gdf.geometry
    ]

    n_frames = None
    for result in results:
        if isinstance(result, list):
            n_frames = len(result)
            break
    if n_frames is None and isinstance(request_or_fn, TransformRequest):
        if request_or_fn.kind is not OperationKind.SIMPLIFY and request_or_fn.steps > 1:
            n_frames = request_or_fn.steps + 1

    def frame(i: int | None) -> gpd.GeoDataFrame:
        geoms = [r[i] if isinstance(r, list) else r for r in results] if i is not None else results
        out = gdf.copy()
        out[gdf.geometry.name] = gpd.GeoSeries(geoms, index=gdf.index, crs=gdf.crs)
        return out

    logger.debug("Transformed %d geometries into %s frame(s)", len(gdf), n_frames or 1)
    if n_frames is None:
        return frame(None)
    return [frame(i) for i in range(n_frames)]
