"""
Availability calculator.

Turns a company's service areas, a customer location and the company's
bookings into bookable choices. Two query modes:

- single day: which of the fixed slots are still open on a given day
- multi day: which days in the lookahead window can still be booked

All day arithmetic is on UTC calendar days. Results describe read time
only: two customers can still race for the same slot, and the booking
store's unique (company, date, slot) constraint has the final say.
"""

import logging
from collections.abc import Iterable
from datetime import date, timedelta
from typing import Any, Optional

from geoserv.availability.slots import (
    active_bookings,
    booked_slots_on,
    bookings_per_day,
    get_slot_catalog,
)
from geoserv.config import settings
from geoserv.geo.membership import matching_areas
from geoserv.schemas.availability_schema import (
    AvailabilityReason,
    AvailabilityResult,
    DaySlots,
)
from geoserv.schemas.booking_schema import Booking
from geoserv.schemas.service_area_schema import GeoPoint, ServiceArea
from geoserv.utils import DayLike, normalize_weekday, to_utc_day, utc_today, weekday_label

logger = logging.getLogger(__name__)


def allowed_weekdays(areas: Iterable[ServiceArea]) -> frozenset[str]:
    """Union of the served weekdays of the given areas."""
    days: set[str] = set()
    for area in areas:
        days |= area.allowed_weekdays
    return frozenset(days)


def compute_availability(
    service_areas: Iterable[Any],
    point: Optional[GeoPoint],
    existing_bookings: Iterable[Any] = (),
    *,
    day: Optional[DayLike] = None,
    lookahead_days: Optional[int] = None,
    zip_code: Optional[str] = None,
    today: Optional[DayLike] = None,
    company_id: Optional[str] = None,
    slots: Optional[Iterable[str]] = None,
) -> AvailabilityResult:
    """
    Compute bookable slots (when ``day`` is given) or bookable days.

    A None ``point`` stands for an address the geocoder could not resolve
    and matches no area. A company with no areas matches nothing.

    Raises:
        ValueError: If ``lookahead_days`` is below 1 or a day string is not ISO.
    """
    catalog = get_slot_catalog(slots)
    bookings = active_bookings(existing_bookings, company_id=company_id)
    matched = matching_areas(point, service_areas, zip_code) if point is not None else []

    if day is not None:
        return _single_day(matched, bookings, to_utc_day(day), catalog)

    if lookahead_days is None:
        lookahead_days = settings.availability.lookahead_days
    if lookahead_days < 1:
        raise ValueError(f"lookahead_days must be >= 1, got {lookahead_days}")
    start = to_utc_day(today) if today is not None else utc_today()
    return _multi_day(matched, bookings, start, lookahead_days, catalog)


def _single_day(
    matched: list[ServiceArea],
    bookings: list[Booking],
    day: date,
    catalog: tuple[str, ...],
) -> AvailabilityResult:
    if not matched:
        return AvailabilityResult(
            available_slots=[], reason=AvailabilityReason.OUT_OF_SERVICE_AREA
        )

    weekday = weekday_label(day)
    if weekday not in allowed_weekdays(matched):
        logger.debug("%s (%s) is not in any matched area's schedule", day, weekday)
        return AvailabilityResult(
            matched_areas=matched,
            available_slots=[],
            reason=AvailabilityReason.DAY_NOT_IN_SCHEDULE,
        )

    booked = booked_slots_on(bookings, day)
    return AvailabilityResult(
        matched_areas=matched,
        available_slots=[slot for slot in catalog if slot not in booked],
        booked_slots=[slot for slot in catalog if slot in booked],
    )


def _multi_day(
    matched: list[ServiceArea],
    bookings: list[Booking],
    start: date,
    lookahead_days: int,
    catalog: tuple[str, ...],
) -> AvailabilityResult:
    if not matched:
        return AvailabilityResult(
            available_days=[],
            fully_booked_days=[],
            reason=AvailabilityReason.OUT_OF_SERVICE_AREA,
        )

    weekdays = allowed_weekdays(matched)
    counts = bookings_per_day(bookings)

    available: list[str] = []
    full: list[str] = []
    for offset in range(lookahead_days):
        current = start + timedelta(days=offset)
        if counts[current] >= len(catalog):
            full.append(current.isoformat())
            continue
        if weekday_label(current) in weekdays:
            available.append(current.isoformat())

    logger.debug(
        "%d bookable day(s) from %s over %d day(s)", len(available), start, lookahead_days
    )
    return AvailabilityResult(
        matched_areas=matched,
        available_days=available,
        fully_booked_days=full,
    )


def fully_booked_days(
    bookings: Iterable[Any],
    company_id: Optional[str] = None,
    slots: Optional[Iterable[str]] = None,
) -> list[str]:
    """ISO days whose active bookings fill every slot, in chronological order."""
    catalog = get_slot_catalog(slots)
    counts = bookings_per_day(active_bookings(bookings, company_id=company_id))
    return [day.isoformat() for day in sorted(counts) if counts[day] >= len(catalog)]


def list_open_slots(
    bookings: Iterable[Any],
    *,
    days: Optional[int] = None,
    today: Optional[DayLike] = None,
    allowed: Optional[Iterable[str]] = None,
    company_id: Optional[str] = None,
    slots: Optional[Iterable[str]] = None,
) -> list[DaySlots]:
    """
    Open slots for each of the next ``days`` days, skipping days with none.

    ``allowed`` restricts the listing to those weekdays. Without it, every
    weekday is listed.
    """
    if days is None:
        days = settings.availability.listing_days
    if days < 1:
        raise ValueError(f"days must be >= 1, got {days}")

    catalog = get_slot_catalog(slots)
    active = active_bookings(bookings, company_id=company_id)
    start = to_utc_day(today) if today is not None else utc_today()
    weekdays = None
    if allowed is not None:
        weekdays = {label for label in map(normalize_weekday, allowed) if label}

    listing = []
    for offset in range(days):
        current = start + timedelta(days=offset)
        weekday = weekday_label(current)
        if weekdays is not None and weekday not in weekdays:
            continue
        booked = booked_slots_on(active, current)
        open_slots = [slot for slot in catalog if slot not in booked]
        if open_slots:
            listing.append(DaySlots(date=current.isoformat(), weekday=weekday, slots=open_slots))
    return listing
