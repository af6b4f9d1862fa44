from geoserv.availability.calculator import (
    allowed_weekdays,
    compute_availability,
    fully_booked_days,
    list_open_slots,
)
from geoserv.availability.slots import active_bookings, get_slot_catalog, is_known_slot

__all__ = [
    "compute_availability",
    "fully_booked_days",
    "list_open_slots",
    "allowed_weekdays",
    "active_bookings",
    "get_slot_catalog",
    "is_known_slot",
]
