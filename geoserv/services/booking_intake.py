"""
Booking-intake check for a requested day and slot.

Runs the same membership and occupancy rules as the availability
calculator, so a slot offered to a customer is a slot intake accepts.
This is a read-time check. The caller must still insert the booking
under the store's unique (company, date, slot) constraint and treat a
conflict there as SLOT_TAKEN.
"""

from collections.abc import Iterable
from typing import Any, Optional

from geoserv.availability.calculator import allowed_weekdays
from geoserv.availability.slots import active_bookings, booked_slots_on, is_known_slot
from geoserv.geo.membership import matching_areas
from geoserv.logging_context import get_request_logger
from geoserv.schemas.booking_schema import BookingCheck, BookingRejection
from geoserv.schemas.service_area_schema import GeoPoint
from geoserv.utils import DayLike, to_utc_day, weekday_label

logger = get_request_logger(__name__)


def check_booking_request(
    service_areas: Iterable[Any],
    point: Optional[GeoPoint],
    day: DayLike,
    slot: str,
    existing_bookings: Iterable[Any] = (),
    *,
    zip_code: Optional[str] = None,
    company_id: Optional[str] = None,
    slots: Optional[Iterable[str]] = None,
) -> BookingCheck:
    """
    Decide whether a booking for ``slot`` on ``day`` can be taken.

    Checks, in order: the slot exists, the location is served, the day is
    on a matched area's schedule, and no active booking holds the slot.
    """
    if slots is not None:
        slots = tuple(slots)
    if not is_known_slot(slot, slots):
        return BookingCheck(
            accepted=False,
            reason=BookingRejection.UNKNOWN_SLOT,
            message=f"'{slot}' is not a bookable time slot.",
        )

    matched = matching_areas(point, service_areas, zip_code) if point is not None else []
    if not matched:
        return BookingCheck(
            accepted=False,
            reason=BookingRejection.OUT_OF_SERVICE_AREA,
            message="This address is outside the company's service areas.",
        )

    booking_day = to_utc_day(day)
    weekday = weekday_label(booking_day)
    if weekday not in allowed_weekdays(matched):
        return BookingCheck(
            accepted=False,
            reason=BookingRejection.DAY_NOT_IN_SCHEDULE,
            matched_areas=matched,
            message=f"No service on {weekday} at this address.",
        )

    taken = booked_slots_on(active_bookings(existing_bookings, company_id), booking_day)
    if slot in taken:
        logger.info("Slot %s on %s already held", slot, booking_day)
        return BookingCheck(
            accepted=False,
            reason=BookingRejection.SLOT_TAKEN,
            matched_areas=matched,
            message="This time slot has already been booked.",
        )

    return BookingCheck(
        accepted=True,
        matched_areas=matched,
        message=f"Slot {slot} on {booking_day.isoformat()} is available.",
    )
