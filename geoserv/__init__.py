"""GeoServ service-area membership and slot availability engine."""

from geoserv.geo import (
    distance,
    extract_polygon_rings,
    is_within_area,
    matching_areas,
    point_in_polygon,
    point_in_ring,
)
from geoserv.availability import compute_availability, fully_booked_days, list_open_slots
from geoserv.schemas.availability_schema import (
    AddressValidationResult,
    AvailabilityReason,
    AvailabilityResult,
    DaySlots,
)
from geoserv.schemas.booking_schema import (
    ACTIVE_STATUSES,
    Booking,
    BookingCheck,
    BookingRejection,
    BookingStatus,
)
from geoserv.schemas.service_area_schema import (
    GeoPoint,
    PolygonArea,
    RadiusArea,
    ServiceArea,
    ServiceAreaType,
    ZipArea,
    parse_service_area,
)
from geoserv.services import (
    availability_for_address,
    check_booking_request,
    validate_address,
)

__all__ = [
    "distance", "point_in_ring", "point_in_polygon", "extract_polygon_rings",
    "is_within_area", "matching_areas", "parse_service_area",
    "compute_availability", "fully_booked_days", "list_open_slots",
    "validate_address", "availability_for_address", "check_booking_request",
    "GeoPoint", "ServiceArea", "ServiceAreaType", "RadiusArea", "PolygonArea", "ZipArea",
    "Booking", "BookingStatus", "ACTIVE_STATUSES", "BookingCheck", "BookingRejection",
    "AvailabilityReason", "AvailabilityResult", "DaySlots", "AddressValidationResult",
]
