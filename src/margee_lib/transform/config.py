# src/margee_lib/transform/config.py
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional

from margee_lib.config import MainConfig
from margee_lib.core.exceptions import ValidationError
from margee_lib.core.helpers import as_coordinates, as_float, as_steps
from margee_lib.core.point import PointLike, SphericalPoint, to_point
from margee_lib.transform.operations import translation_pole


class OperationKind(str, Enum):
    """Kinds of transform a request can carry."""

    ROTATE = "r"
    TRANSLATE = "t"
    SIMPLIFY = "s"


@dataclass(frozen=True)
class TransformRequest:
    """
    Parameters of one rotate, translate or simplify call.

    Built per call through the rotation(), translation() and
    simplification() factories; nothing here is persisted.

    Attributes:
        kind: Operation to perform
        coordinates: Input (lat, lon) pairs in decimal degrees
        pole: Euler pole for rotations
        azimuth: Rotation angle in degrees, clockwise looking down on the pole
        bearing: Translation heading in degrees
        distance: Translation distance in km
        kink: Simplification threshold in meters
        steps: Number of interpolation steps, 1 for a single result
    """

    kind: OperationKind
    coordinates: tuple[tuple[float, float], ...] = ()
    pole: Optional[SphericalPoint] = None
    azimuth: float = 0.0
    bearing: float = 0.0
    distance: float = 0.0
    kink: float = MainConfig.default_kink_m
    steps: int = 1

    def __post_init__(self):
        try:
            kind = OperationKind(self.kind)
        except ValueError as e:
            raise ValidationError(f"Unknown operation {self.kind!r}") from e
        coords = tuple((float(lat), float(lon)) for lat, lon in as_coordinates(self.coordinates))

        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "coordinates", coords)
        object.__setattr__(self, "azimuth", as_float(self.azimuth, "azimuth"))
        object.__setattr__(self, "bearing", as_float(self.bearing, "bearing"))
        object.__setattr__(self, "distance", as_float(self.distance, "distance"))
        object.__setattr__(self, "kink", as_float(self.kink, "kink"))
        object.__setattr__(self, "steps", as_steps(self.steps, MainConfig.max_steps))

        if kind is OperationKind.ROTATE:
            if self.pole is None:
                raise ValidationError("A rotation needs an Euler pole")
            object.__setattr__(self, "pole", to_point(self.pole))
        if kind is OperationKind.SIMPLIFY:
            if self.kink < 0:
                raise ValidationError(f"kink must not be negative, got {self.kink}")
            if self.steps != 1:
                raise ValidationError("Simplification does not support intermediate steps")

    @classmethod
    def rotation(
        cls, coordinates: Any, pole: PointLike, azimuth: float, steps: int = 1
    ) -> TransformRequest:
        return cls(OperationKind.ROTATE, coordinates, pole=pole, azimuth=azimuth, steps=steps)

    @classmethod
    def translation(
        cls, coordinates: Any, bearing: float, distance: float, steps: int = 1
    ) -> TransformRequest:
        return cls(
            OperationKind.TRANSLATE, coordinates, bearing=bearing, distance=distance, steps=steps
        )

    @classmethod
    def simplification(
        cls, coordinates: Any, kink: float = MainConfig.default_kink_m
    ) -> TransformRequest:
        return cls(OperationKind.SIMPLIFY, coordinates, kink=kink)

    @classmethod
    def translation_between(
        cls, coordinates: Any, start: PointLike, end: PointLike, steps: int = 1
    ) -> TransformRequest:
        """Translation that carries start onto end, applied to coordinates."""
        start = to_point(start)
        end = to_point(end)
        return cls.translation(coordinates, start.bearing_to(end), start.distance_to(end), steps)

    def with_coordinates(self, coordinates: Any) -> TransformRequest:
        """Same parameters applied to other coordinates."""
        return replace(self, coordinates=coordinates)

    def implicit_pole(self) -> SphericalPoint:
        """
        Pole about which a translation rotates the coordinates.

        It lies a quarter circle away from the first coordinate, at right
        angles to the heading.
        """
        if not self.coordinates:
            raise ValidationError("A translation needs at least one coordinate")
        return translation_pole(self.coordinates[0], self.bearing)

    def translation_angle(self) -> float:
        """Rotation angle, in degrees, equivalent to the translation distance."""
        return math.degrees(self.distance / MainConfig.earth_radius_km)

    def as_rotation(self) -> TransformRequest:
        """Express a translation as the equivalent rotation about its implicit pole."""
        if self.kind is OperationKind.ROTATE:
            return self
        if self.kind is not OperationKind.TRANSLATE:
            raise ValidationError(f"Cannot express {self.kind.name.lower()} as a rotation")
        return TransformRequest.rotation(
            self.coordinates, self.implicit_pole(), self.translation_angle(), self.steps
        )

    def inverse(self, coordinates: Any = None) -> TransformRequest:
        """
        Request that undoes this one.

        Args:
            coordinates: Transformed coordinates to move back; defaults to
                this request's coordinates

        Returns:
            A single-step rotation by the negated angle. Translations are
            inverted about their own implicit pole so the undo is exact.

        Raises:
            ValidationError: For simplifications, which cannot be undone
        """
        if self.kind is OperationKind.SIMPLIFY:
            raise ValidationError("A simplification cannot be inverted")
        rotation = self.as_rotation()
        return TransformRequest.rotation(
            self.coordinates if coordinates is None else coordinates,
            rotation.pole,
            -rotation.azimuth,
        )
