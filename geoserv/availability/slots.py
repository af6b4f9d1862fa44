"""Slot catalog and booking occupancy helpers."""

import logging
from collections import Counter
from collections.abc import Iterable
from datetime import date
from typing import Any, Optional

from pydantic import ValidationError

from geoserv.config import settings
from geoserv.schemas.booking_schema import Booking

logger = logging.getLogger(__name__)


def get_slot_catalog(slots: Optional[Iterable[str]] = None) -> tuple[str, ...]:
    """The ordered daily slot labels, or ``slots`` when overridden."""
    if slots is None:
        return settings.slots.labels
    return tuple(slots)


def is_known_slot(slot: str, slots: Optional[Iterable[str]] = None) -> bool:
    return slot in get_slot_catalog(slots)


def active_bookings(
    bookings: Iterable[Any], company_id: Optional[str] = None
) -> list[Booking]:
    """Coerce booking records and keep the ones that occupy a slot.

    Canceled and completed bookings are dropped. With ``company_id``, so are
    bookings that belong to another company. Rows that are not valid
    bookings are skipped.
    """
    active = []
    for record in bookings:
        if isinstance(record, Booking):
            booking = record
        else:
            try:
                booking = Booking.model_validate(record)
            except ValidationError as exc:
                logger.debug("Skipping malformed booking: %s", exc.errors()[0]["msg"])
                continue
        if not booking.is_active:
            continue
        if company_id is not None and booking.company_id not in (None, str(company_id)):
            continue
        active.append(booking)
    return active


def booked_slots_on(bookings: Iterable[Booking], day: date) -> set[str]:
    """Slot labels taken on ``day`` by already-filtered active bookings."""
    return {b.slot for b in bookings if b.day == day}


def bookings_per_day(bookings: Iterable[Booking]) -> Counter:
    """Count of already-filtered active bookings per calendar day."""
    return Counter(b.day for b in bookings)
