# src/margee_lib/transform/batch.py
"""
Plain-text batch commands.

One command per line:

    r <lat> <lon> <angle> [<n> [<start> <stop>]]   rotation about an Euler pole
    t <heading> <distance> [<n> [<start> <stop>]]  translation (distance in km)

n is the number of intermediate steps (0 for none). start and stop are
timeline values passed through untouched for the caller.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional

from margee_lib.config import MainConfig
from margee_lib.core.exceptions import ValidationError
from margee_lib.core.helpers import as_steps
from margee_lib.core.point import SphericalPoint

from .config import OperationKind, TransformRequest

USAGE = (
    "Try: 'r lat lon angle' for a rotation in decimal degrees, "
    "or 't heading distance' for a translation in decimal degrees and km"
)


@dataclass(frozen=True)
class BatchCommand:
    """A parsed batch line, ready to be applied to any coordinates."""

    line: int
    kind: OperationKind
    pole: Optional[SphericalPoint] = None
    azimuth: float = 0.0
    bearing: float = 0.0
    distance: float = 0.0
    steps: int = 1
    timespan: Optional[tuple[float, float]] = None

    def to_request(self, coordinates: Any) -> TransformRequest:
        if self.kind is OperationKind.ROTATE:
            return TransformRequest.rotation(coordinates, self.pole, self.azimuth, self.steps)
        return TransformRequest.translation(coordinates, self.bearing, self.distance, self.steps)


def clean_batch(text: str) -> list[tuple[int, str]]:
    """
    Strip everything but numbers and operation letters.

    Returns:
        (line number, cleaned line) for every non-empty line
    """
    cleaned = re.sub(r"[^0-9.rt\-\n]", " ", text)
    lines = []
    for number, line in enumerate(cleaned.split("\n"), start=1):
        line = re.sub(r"\s+", " ", line.strip())
        if line:
            lines.append((number, line))
    return lines


def _number(token: Optional[str]) -> Optional[float]:
    if token is None:
        return None
    try:
        return float(token)
    except ValueError:
        return None


def parse_line(line: str, number: int = 1) -> BatchCommand:
    """
    Parse one cleaned batch line.

    Raises:
        ValidationError: If the operation or its arguments are malformed
    """
    args = line.split(" ")
    op = args[0]
    if op not in (OperationKind.ROTATE.value, OperationKind.TRANSLATE.value):
        raise ValidationError(f"Line {number}: no operation defined. {USAGE}")

    def arg(i: int) -> Optional[str]:
        return args[i] if i < len(args) else None

    extra_at = 4 if op == OperationKind.ROTATE.value else 3
    intermediate = _number(arg(extra_at))
    start = _number(arg(extra_at + 1)) or 0.0
    stop = _number(arg(extra_at + 2)) or 0.0

    if intermediate is None:
        intermediate = 0.0
    if not intermediate.is_integer():
        raise ValidationError(f"Line {number}: number of steps must be a whole number")
    try:
        steps = as_steps(int(intermediate) + 1, MainConfig.max_steps)
    except ValidationError as e:
        raise ValidationError(f"Line {number}: {e}") from e
    timespan = (start, stop) if start != stop else None

    if op == OperationKind.ROTATE.value:
        lat, lon, angle = _number(arg(1)), _number(arg(2)), _number(arg(3))
        if lat is None:
            raise ValidationError(f"Line {number}: second argument must be latitude in degrees")
        if lon is None:
            raise ValidationError(f"Line {number}: third argument must be longitude in degrees")
        if angle is None:
            raise ValidationError(f"Line {number}: fourth argument must be the angle in degrees")
        try:
            pole = SphericalPoint(lat, lon)
        except ValidationError as e:
            raise ValidationError(f"Line {number}: {e}") from e
        return BatchCommand(
            number, OperationKind.ROTATE, pole=pole, azimuth=angle, steps=steps, timespan=timespan
        )

    heading, distance = _number(arg(1)), _number(arg(2))
    if heading is None:
        raise ValidationError(f"Line {number}: second argument must be heading in degrees")
    if distance is None:
        raise ValidationError(f"Line {number}: third argument must be distance in km")
    return BatchCommand(
        number,
        OperationKind.TRANSLATE,
        bearing=heading,
        distance=distance,
        steps=steps,
        timespan=timespan,
    )


def parse_batch(text: str) -> list[BatchCommand]:
    """Parse every command in a batch text."""
    return [parse_line(line, number) for number, line in clean_batch(text)]
