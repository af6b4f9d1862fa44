"""
CLI entry point for running an availability query over JSON exports.

Usage:
    geoserv-availability --areas areas.json --lat 49.30 --lng -123.12
    geoserv-availability --areas areas.json --bookings bookings.json \\
        --lat 49.30 --lng -123.12 --day 2025-01-01
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from geoserv.availability.calculator import compute_availability
from geoserv.logging_context import get_request_logger, request_scope
from geoserv.schemas.service_area_schema import GeoPoint

logger = get_request_logger(__name__)


def _load_records(path: Path, key: str) -> list[Any]:
    """Read a JSON list, or an object holding the list under ``key``."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get(key, [])
    if not isinstance(data, list):
        raise ValueError(f"{path} does not contain a list of {key}")
    return data


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compute bookable days or slots for a location."
    )
    parser.add_argument(
        "--areas",
        type=str,
        required=True,
        help="Path to a JSON file with the company's service areas.",
    )
    parser.add_argument(
        "--bookings",
        type=str,
        default=None,
        help="Path to a JSON file with the company's bookings.",
    )
    parser.add_argument("--lat", type=float, required=True, help="Customer latitude.")
    parser.add_argument("--lng", type=float, required=True, help="Customer longitude.")
    parser.add_argument(
        "--zip",
        type=str,
        default=None,
        help="Customer postal code, used by ZIP areas.",
    )
    parser.add_argument(
        "--day",
        type=str,
        default=None,
        help="List open slots on this ISO day instead of listing days.",
    )
    parser.add_argument(
        "--lookahead",
        type=int,
        default=None,
        help="Number of days to list (default: LOOKAHEAD_DAYS).",
    )
    parser.add_argument(
        "--today",
        type=str,
        default=None,
        help="First ISO day of the listing window (default: today in UTC).",
    )
    parser.add_argument(
        "--company-id",
        type=str,
        default=None,
        help="Ignore bookings that belong to other companies.",
    )
    parser.add_argument(
        "--request-id",
        type=str,
        default=None,
        help="Correlation id stamped on log lines (default: a fresh one).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging output.",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    with request_scope(args.request_id):
        _run(args)


def _run(args: argparse.Namespace) -> None:
    areas_path = Path(args.areas)
    if not areas_path.exists():
        logger.error("Service area file not found: %s", areas_path)
        sys.exit(1)

    try:
        areas = _load_records(areas_path, "serviceAreas")
        bookings = _load_records(Path(args.bookings), "bookings") if args.bookings else []
        point = GeoPoint(lat=args.lat, lng=args.lng)
        result = compute_availability(
            areas,
            point,
            bookings,
            day=args.day,
            lookahead_days=args.lookahead,
            zip_code=args.zip,
            today=args.today,
            company_id=args.company_id,
        )
    except (OSError, ValueError) as exc:
        # Covers bad JSON and pydantic.ValidationError, both ValueErrors.
        logger.error("Cannot compute availability: %s", exc)
        sys.exit(1)

    logger.info(
        "Matched %d of %d service area(s)", len(result.matched_areas), len(areas)
    )
    sys.stdout.write(result.model_dump_json(indent=2, exclude_none=True) + "\n")


if __name__ == "__main__":
    main()
