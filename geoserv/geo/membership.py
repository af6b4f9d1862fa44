"""
Service-area membership: is a customer location served by an area?

This is the single place that turns a point and an area record into a
yes/no answer. Address validation, booking intake and availability all
call through here.
"""

import logging
from collections.abc import Iterable
from typing import Any, Optional

from geoserv.geo.geometry import distance, point_in_polygon
from geoserv.schemas.service_area_schema import (
    GeoPoint,
    PolygonArea,
    RadiusArea,
    ServiceArea,
    ZipArea,
    iter_service_areas,
    parse_service_area,
)
from geoserv.utils import normalize_zip_code

logger = logging.getLogger(__name__)


def _contains(point: GeoPoint, area: Any, zip_code: Optional[str]) -> bool:
    if isinstance(area, RadiusArea):
        return distance(point, area.center) <= area.radius_km
    if isinstance(area, PolygonArea):
        return point_in_polygon(point.as_lng_lat(), area.rings)
    if isinstance(area, ZipArea):
        if not zip_code or not area.zip_codes:
            return False
        return normalize_zip_code(zip_code) in area.zip_codes
    return False


def is_within_area(
    point: GeoPoint, area: Any, zip_code: Optional[str] = None
) -> bool:
    """
    Check whether ``point`` lies inside a service area.

    ``area`` may be a typed ServiceArea or a raw record. Records that are
    malformed for their type, or of an unknown type, never match. ZIP areas
    need the caller to supply the point's postal code via ``zip_code``.

    Raises:
        TypeError: If ``point`` is missing.
    """
    if point is None:
        raise TypeError("is_within_area() requires a GeoPoint, got None")

    parsed = parse_service_area(area)
    if parsed is None:
        return False
    return _contains(point, parsed, zip_code)


def matching_areas(
    point: GeoPoint, areas: Iterable[Any], zip_code: Optional[str] = None
) -> list[ServiceArea]:
    """Return the parsed areas that contain ``point``, in input order."""
    if point is None:
        raise TypeError("matching_areas() requires a GeoPoint, got None")

    matched = [
        area for area in iter_service_areas(areas) if _contains(point, area, zip_code)
    ]
    logger.debug(
        "Point (%.5f, %.5f) matched %d area(s)", point.lat, point.lng, len(matched)
    )
    return matched
