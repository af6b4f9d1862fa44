"""Shared test fixtures and helpers."""

from typing import Any, Optional

import pytest

from geoserv.schemas.service_area_schema import GeoPoint

VANCOUVER = GeoPoint(lat=49.2827, lng=-123.1207)
# Due north of VANCOUVER, roughly 3 km and 10 km away.
THREE_KM_NORTH = GeoPoint(lat=49.3097, lng=-123.1207)
TEN_KM_NORTH = GeoPoint(lat=49.3727, lng=-123.1207)

ALL_SLOTS = ["7–9", "9–11", "11–1", "1–3", "3–5"]

# Known UTC weekdays.
TUESDAY = "2024-12-31"
WEDNESDAY = "2025-01-01"
THURSDAY = "2025-01-02"
MONDAY = "2025-01-06"
NEXT_WEDNESDAY = "2025-01-08"

OUTER_RING = [
    [-123.25, 49.20],
    [-123.00, 49.20],
    [-123.00, 49.35],
    [-123.25, 49.35],
    [-123.25, 49.20],
]
HOLE_RING = [
    [-123.15, 49.26],
    [-123.10, 49.26],
    [-123.10, 49.30],
    [-123.15, 49.30],
    [-123.15, 49.26],
]


def make_radius_area(
    area_id: str = "area-radius",
    center: GeoPoint = VANCOUVER,
    radius_km: Optional[float] = 5.0,
    available_days: Optional[list[str]] = None,
    **overrides: Any,
) -> dict:
    """Persisted-row shaped RADIUS area with camelCase keys."""
    record = {
        "id": area_id,
        "name": "Downtown",
        "type": "RADIUS",
        "centerLat": center.lat,
        "centerLng": center.lng,
        "radiusKm": radius_km,
        "availableDays": ["Mon", "Wed", "Fri"] if available_days is None else available_days,
        "companyId": "company-1",
    }
    record.update(overrides)
    return record


def make_polygon_area(
    area_id: str = "area-polygon",
    polygon: Any = None,
    available_days: Optional[list[str]] = None,
) -> dict:
    if polygon is None:
        polygon = {"type": "Polygon", "coordinates": [OUTER_RING, HOLE_RING]}
    return {
        "id": area_id,
        "name": "East Side",
        "type": "POLYGON",
        "polygon": polygon,
        "availableDays": ["Sat", "Sun"] if available_days is None else available_days,
    }


def make_zip_area(
    area_id: str = "area-zip",
    zip_codes: Any = None,
    available_days: Optional[list[str]] = None,
) -> dict:
    if zip_codes is None:
        zip_codes = [{"zipCode": "V6B 1A1"}, "V5K0A1"]
    return {
        "id": area_id,
        "name": "Postal",
        "type": "ZIP",
        "zipCodes": zip_codes,
        "availableDays": ["Tue", "Thu"] if available_days is None else available_days,
    }


def make_booking(
    date: str,
    slot: str,
    status: str = "confirmed",
    company_id: str = "company-1",
) -> dict:
    return {"date": date, "slot": slot, "status": status, "companyId": company_id}


@pytest.fixture
def radius_area():
    return make_radius_area()


@pytest.fixture
def polygon_area():
    return make_polygon_area()


@pytest.fixture
def zip_area():
    return make_zip_area()
