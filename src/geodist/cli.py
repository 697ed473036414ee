"""
geodist CLI entrypoint.

Two subcommands:
- `distance`: great-circle distance between a reference point and one target
- `annotate`: add a distance column to a CSV coordinate table (optionally filtered by radius)

Defaults for unit, column names and strategy come from settings (`defaults.yaml`).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from geodist.catalog.loader import load_coordinates
from geodist.config.settings import get_settings
from geodist.core.errors import InvalidInputError
from geodist.core.geo import EARTH_RADIUS, GeoPoint, distance_scalar
from geodist.core.logging import configure_logging
from geodist.domain.models import Coordinate, DistanceReport
from geodist.features.strategies import STRATEGIES, annotate_distances, within_radius

logger = logging.getLogger(__name__)


def _cmd_distance(args: argparse.Namespace) -> int:
    """Handle the `distance` subcommand."""
    settings = get_settings()
    unit = args.unit or settings.distance.default_unit
    strict = bool(args.strict or settings.distance.strict)

    d = distance_scalar(args.ref_lat, args.ref_lon, args.lat, args.lon, unit, strict=strict)
    reference = Coordinate(lat=args.ref_lat, lon=args.ref_lon)
    target = Coordinate(lat=args.lat, lon=args.lon)
    report = DistanceReport(reference=reference, target=target, unit=unit, distance=d)

    if args.json:
        print(json.dumps(report.model_dump(mode="json"), indent=2))
        return 0

    print(f"{report.distance:.6f} {report.unit}")
    return 0


def _cmd_annotate(args: argparse.Namespace) -> int:
    """Handle the `annotate` subcommand."""
    settings = get_settings()
    unit = args.unit or settings.distance.default_unit
    strict = bool(args.strict or settings.distance.strict)
    strategy = args.strategy or settings.evaluation.default_strategy
    lat_col = args.lat_column or settings.dataset.lat_column
    lon_col = args.lon_column or settings.dataset.lon_column
    column = args.column or settings.dataset.distance_column

    frame = load_coordinates(args.csv, lat_column=lat_col, lon_column=lon_col)
    reference = GeoPoint(lat=float(args.ref_lat), lon=float(args.ref_lon))

    if args.within is not None:
        frame = within_radius(
            frame, reference, args.within, unit=unit, lat_column=lat_col, lon_column=lon_col, strict=strict
        )
        logger.info("%d rows within %s %s of (%s, %s)", len(frame), args.within, unit, reference.lat, reference.lon)

    out = annotate_distances(
        frame,
        reference,
        column=column,
        strategy=strategy,
        unit=unit,
        lat_column=lat_col,
        lon_column=lon_col,
        strict=strict,
    )

    if args.output:
        out.to_csv(args.output, index=False)
        logger.info("Wrote %d rows to %s", len(out), args.output)
    else:
        out.to_csv(sys.stdout, index=False)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the geodist CLI."""
    parser = argparse.ArgumentParser(prog="geodist")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override settings app.log_level",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    def _common(p: argparse.ArgumentParser) -> None:
        p.add_argument("--ref-lat", required=True, type=float, help="Reference latitude (degrees)")
        p.add_argument("--ref-lon", required=True, type=float, help="Reference longitude (degrees)")
        p.add_argument("--unit", choices=sorted(EARTH_RADIUS), default=None)
        p.add_argument("--strict", action="store_true", help="Reject out-of-range latitude/longitude")

    dist = sub.add_parser("distance", help="Great-circle distance between the reference point and one target.")
    _common(dist)
    dist.add_argument("--lat", required=True, type=float, help="Target latitude (degrees)")
    dist.add_argument("--lon", required=True, type=float, help="Target longitude (degrees)")
    dist.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    dist.set_defaults(func=_cmd_distance)

    ann = sub.add_parser("annotate", help="Add a distance column to a CSV coordinate table.")
    ann.add_argument("csv", help="Path to a CSV file with latitude/longitude columns")
    _common(ann)
    ann.add_argument("--strategy", choices=STRATEGIES, default=None)
    ann.add_argument("--lat-column", type=str, default=None)
    ann.add_argument("--lon-column", type=str, default=None)
    ann.add_argument("--column", type=str, default=None, help="Name of the added distance column")
    ann.add_argument("--within", type=float, default=None, help="Keep only rows within this radius (in --unit)")
    ann.add_argument("--output", type=str, default=None, help="Write CSV here instead of stdout")
    ann.set_defaults(func=_cmd_annotate)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m geodist.cli`."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(level=args.log_level)
    func: Any = getattr(args, "func")
    try:
        return int(func(args))
    except InvalidInputError as e:
        logger.error("%s", e)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
