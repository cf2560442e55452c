"""Projection utilities for moving geometries between their CRS and WGS84."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pyproj import CRS, Transformer
from pyproj.exceptions import CRSError
from shapely.geometry.base import BaseGeometry
from shapely.ops import transform as shp_transform

from margee_lib.core.exceptions import ProjectionError

WGS84 = CRS.from_epsg(4326)


@dataclass
class Projector:
    """Handles coordinate transformations between a native CRS and WGS84."""

    fwd: Transformer
    rev: Transformer

    @staticmethod
    def from_crs(crs: Any) -> Projector:
        """
        Create a Projector for geometries stored in crs.

        Args:
            crs: Anything pyproj.CRS.from_user_input accepts (EPSG code, WKT, CRS)

        Returns:
            A Projector whose fwd transformer goes to WGS84 (lon, lat order)

        Raises:
            ProjectionError: If the CRS cannot be interpreted
        """
        try:
            native = CRS.from_user_input(crs)
            return Projector(
                Transformer.from_crs(native, WGS84, always_xy=True),
                Transformer.from_crs(WGS84, native, always_xy=True),
            )
        except CRSError as e:
            raise ProjectionError(f"Failed to create projector for {crs!r}: {e}") from e

    def to_wgs84(self, geom: BaseGeometry) -> BaseGeometry:
        """Transform geometry from the native CRS to WGS84."""
        return shp_transform(self.fwd.transform, geom)

    def to_native(self, geom: BaseGeometry) -> BaseGeometry:
        """Transform geometry from WGS84 back to the native CRS."""
        return shp_transform(self.rev.transform, geom)


def is_geographic(crs: Any) -> bool:
    """
    Whether crs is a geographic (lat/lon) CRS.

    A missing CRS is taken to be WGS84.

    Raises:
        ProjectionError: If the CRS cannot be interpreted
    """
    if crs is None:
        return True
    try:
        return CRS.from_user_input(crs).is_geographic
    except CRSError as e:
        raise ProjectionError(f"Unrecognised CRS {crs!r}: {e}") from e
