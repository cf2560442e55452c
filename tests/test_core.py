"""Tests for core functionality."""

import math

import numpy as np
import pytest
from shapely.geometry import Point, Polygon

from margee_lib.config import MainConfig
from margee_lib.core.exceptions import (
    DegenerateBearingError,
    GeometryError,
    IndeterminatePoleError,
    MargeeError,
    NonConvexPolygonError,
    ProjectionError,
    ValidationError,
)
from margee_lib.core.helpers import (
    as_coordinates,
    as_float,
    as_latitude,
    as_steps,
    normalize_angle,
    normalize_longitude,
)
from margee_lib.core.projector import Projector, is_geographic


class TestProjector:
    """Tests for Projector class."""

    def test_from_crs(self):
        """Test projector creation for web mercator."""
        projector = Projector.from_crs("EPSG:3857")

        assert projector.fwd is not None
        assert projector.rev is not None

    def test_to_wgs84(self):
        """Test a projected point lands on lon/lat."""
        projector = Projector.from_crs(3857)
        point = projector.to_wgs84(Point(6378137.0 * math.pi / 180.0, 0.0))

        assert point.x == pytest.approx(1.0)
        assert point.y == pytest.approx(0.0, abs=1e-9)

    def test_round_trip(self):
        """Test round-trip transformation."""
        projector = Projector.from_crs("EPSG:32630")
        polygon = Polygon([(500000, 5700000), (501000, 5700000), (501000, 5701000)])

        back = projector.to_native(projector.to_wgs84(polygon))
        for (x1, y1), (x2, y2) in zip(polygon.exterior.coords, back.exterior.coords):
            assert x1 == pytest.approx(x2, abs=1e-4)
            assert y1 == pytest.approx(y2, abs=1e-4)

    def test_invalid_crs(self):
        """Test an unknown CRS."""
        with pytest.raises(ProjectionError, match="Failed to create projector"):
            Projector.from_crs("not a crs")

    def test_is_geographic(self):
        """Test geographic detection."""
        assert is_geographic(None)
        assert is_geographic("EPSG:4326")
        assert not is_geographic("EPSG:3857")

    def test_is_geographic_invalid(self):
        """Test an unknown CRS."""
        with pytest.raises(ProjectionError, match="Unrecognised CRS"):
            is_geographic("not a crs")


class TestExceptions:
    """Test the exception hierarchy."""

    @pytest.mark.parametrize(
        "error", [ValidationError, ProjectionError, GeometryError, NonConvexPolygonError]
    )
    def test_root(self, error):
        """Test every error derives from MargeeError."""
        assert issubclass(error, MargeeError)

    @pytest.mark.parametrize(
        "error", [NonConvexPolygonError, IndeterminatePoleError, DegenerateBearingError]
    )
    def test_geometry_errors(self, error):
        """Test geometric failures derive from GeometryError."""
        assert issubclass(error, GeometryError)

    def test_message(self):
        """Test errors carry their message."""
        with pytest.raises(MargeeError, match="bad input"):
            raise ValidationError("bad input")


class TestHelpers:
    """Test input validation helpers."""

    def test_as_float(self):
        """Test numbers are accepted."""
        assert as_float(3) == 3.0
        assert as_float(np.float32(1.5)) == 1.5

    @pytest.mark.parametrize("value", [True, "1", None, float("nan"), float("inf")])
    def test_as_float_rejects(self, value):
        """Test booleans, strings and non-finite values are rejected."""
        with pytest.raises(ValidationError):
            as_float(value, "x")

    def test_as_latitude(self):
        """Test latitude range."""
        assert as_latitude(-90) == -90.0
        with pytest.raises(ValidationError, match="within"):
            as_latitude(90.5)

    def test_as_coordinates(self):
        """Test coordinate arrays."""
        arr = as_coordinates([(1, 2), (3, 4)])

        assert arr.shape == (2, 2)
        assert arr.dtype == np.float64
        assert as_coordinates([]).shape == (0, 2)

    def test_as_coordinates_rejects(self):
        """Test malformed coordinates."""
        with pytest.raises(ValidationError, match="shape"):
            as_coordinates([1.0, 2.0])
        with pytest.raises(ValidationError, match="finite"):
            as_coordinates([(0.0, float("nan"))])
        with pytest.raises(ValidationError):
            as_coordinates([(0.0, 1.0), (2.0,)])

    def test_as_steps(self):
        """Test step counts."""
        assert as_steps(np.int64(3), 50) == 3
        with pytest.raises(ValidationError, match="within"):
            as_steps(0, 50)
        with pytest.raises(ValidationError, match="integer"):
            as_steps(True, 50)

    @pytest.mark.parametrize(
        "lon, expected",
        [
            (0.0, 0.0),
            (180.0, 180.0),
            (-180.0, 180.0),
            (190.0, -170.0),
            (-190.0, 170.0),
            (720.0, 0.0),
        ],
    )
    def test_normalize_longitude(self, lon, expected):
        """Test longitudes wrap into (-180, 180]."""
        assert normalize_longitude(lon) == pytest.approx(expected)

    def test_normalize_angle(self):
        """Test signed angles wrap the same way."""
        assert normalize_angle(-350.0) == pytest.approx(10.0)


class TestMainConfig:
    """Test library constants."""

    def test_defaults(self):
        """Test configured constants."""
        assert MainConfig.earth_radius_km == 6371.0
        assert MainConfig.min_radius_km == 6353.0
        assert MainConfig.max_radius_km == 6384.0
        assert MainConfig.wgs84_semi_major_m == 6378137.0
        assert MainConfig.max_steps == 50
        assert MainConfig.default_kink_m == 1000.0
        assert MainConfig.euler_indices == (0, 3)
