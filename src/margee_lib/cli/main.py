"""CLI for margee-lib."""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from margee_lib.config import MainConfig
from margee_lib.core.dms import parse_dms, to_bearing
from margee_lib.core.exceptions import MargeeError
from margee_lib.euler import solve_euler_pole
from margee_lib.transform.batch import parse_batch
from margee_lib.transform.config import TransformRequest
from margee_lib.transform.runner import apply

console = Console()

EPILOG = (
    "Coordinates are LAT,LON in decimal degrees or DMS (e.g. 51°28′40″N,0°00′05″W). "
    "Put '--' before the first coordinate if it starts with a minus sign."
)


def latlon(value: str) -> tuple[float, float]:
    """argparse type for a LAT,LON pair."""
    parts = value.split(",")
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"expected LAT,LON, got {value!r}")
    try:
        return parse_dms(parts[0]), parse_dms(parts[1])
    except MargeeError as e:
        raise argparse.ArgumentTypeError(f"{value!r}: {e}") from e


def _coords_table(title: str, result) -> Table:
    table = Table(title=title)
    frames = result if result and isinstance(result[0], list) else None

    if frames is not None:
        table.add_column("Frame", style="cyan", justify="right")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Latitude", style="magenta", justify="right")
    table.add_column("Longitude", style="magenta", justify="right")

    for f, frame in enumerate(frames if frames is not None else [result]):
        for i, (lat, lon) in enumerate(frame):
            row = [str(i), f"{lat:.6f}", f"{lon:.6f}"]
            table.add_row(*([str(f)] + row if frames is not None else row))
    return table


def _last_frame(result):
    return result[-1] if result and isinstance(result[0], list) else result


def _rotate(args) -> None:
    request = TransformRequest.rotation(args.points, args.pole, args.angle, args.steps)
    console.print(_coords_table("Rotation", apply(request)))
    print(f"✔ Rotated {len(args.points)} point(s) by {args.angle}° about {request.pole}")


def _translate(args) -> None:
    request = TransformRequest.translation(args.points, args.bearing, args.distance, args.steps)
    console.print(_coords_table("Translation", apply(request)))
    print(
        f"✔ Translated {len(args.points)} point(s) {args.distance} km "
        f"on bearing {to_bearing(args.bearing, 'd', 1)}"
    )


def _simplify(args) -> None:
    result = apply(TransformRequest.simplification(args.points, args.kink))
    console.print(_coords_table("Simplification", result))
    print(f"✔ Simplified {len(args.points)} point(s) to {len(result)}")


def _euler(args) -> None:
    solutions = solve_euler_pole((args.start1, args.end1), (args.start2, args.end2))

    table = Table(title="Euler pole")
    table.add_column("Solution", style="cyan", justify="right")
    table.add_column("Latitude", style="magenta", justify="right")
    table.add_column("Longitude", style="magenta", justify="right")
    table.add_column("Angle", style="magenta", justify="right")
    table.add_column("DMS")
    for i, result in enumerate(solutions, start=1):
        table.add_row(
            str(i),
            f"{result.pole.lat:.6f}",
            f"{result.pole.lon:.6f}",
            f"{result.angle:.6f}",
            str(result.pole),
        )
    console.print(table)
    print("✔ Found both Euler pole solutions")


def _batch(args) -> None:
    text = sys.stdin.read() if args.file == "-" else Path(args.file).read_text(encoding="utf-8")
    commands = parse_batch(text)
    if not commands:
        raise MargeeError("Batch contains no commands")

    coords = args.points
    for command in commands:
        result = apply(command.to_request(coords))
        title = f"Line {command.line}"
        if command.timespan is not None:
            title += f" ({command.timespan[0]:g} to {command.timespan[1]:g})"
        console.print(_coords_table(title, result))
        coords = _last_frame(result)
    print(f"✔ Applied {len(commands)} batch command(s)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="margee",
        description="Rotate, translate and simplify shapes on the sphere",
        epilog=EPILOG,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    rotate = sub.add_parser("rotate", help="Rotate points about an Euler pole", epilog=EPILOG)
    rotate.add_argument("--pole", type=latlon, required=True, help="Euler pole LAT,LON")
    rotate.add_argument("--angle", type=float, required=True, help="Rotation angle (degrees)")
    rotate.add_argument("--steps", type=int, default=1, help="Interpolation steps")
    rotate.add_argument("points", type=latlon, nargs="+", metavar="LAT,LON")
    rotate.set_defaults(handler=_rotate)

    translate = sub.add_parser("translate", help="Move points along a heading", epilog=EPILOG)
    translate.add_argument("--bearing", type=float, required=True, help="Heading (degrees)")
    translate.add_argument("--distance", type=float, required=True, help="Distance (km)")
    translate.add_argument("--steps", type=int, default=1, help="Interpolation steps")
    translate.add_argument("points", type=latlon, nargs="+", metavar="LAT,LON")
    translate.set_defaults(handler=_translate)

    simplify = sub.add_parser("simplify", help="Douglas-Peucker line simplification")
    simplify.add_argument(
        "--kink", type=float, default=MainConfig.default_kink_m, help="Kink threshold (meters)"
    )
    simplify.add_argument("points", type=latlon, nargs="+", metavar="LAT,LON")
    simplify.set_defaults(handler=_simplify)

    euler = sub.add_parser("euler", help="Find the Euler pole from two moved points")
    for name in ("start1", "end1", "start2", "end2"):
        euler.add_argument(name, type=latlon, metavar=name.upper())
    euler.set_defaults(handler=_euler)

    batch = sub.add_parser("batch", help="Apply a batch of r/t commands in sequence")
    batch.add_argument("file", type=str, help="Batch file, or '-' for stdin")
    batch.add_argument("points", type=latlon, nargs="+", metavar="LAT,LON")
    batch.set_defaults(handler=_batch)

    return parser


def main(argv=None):
    """margee CLI entry point."""
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "batch" and args.file != "-" and not Path(args.file).exists():
        print(f"✖ Batch file not found: {args.file}", file=sys.stderr)
        sys.exit(1)

    try:
        args.handler(args)
    except MargeeError as e:
        print(f"✖ {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
