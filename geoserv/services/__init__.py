from geoserv.services.address_validation import (
    Geocoder,
    ZipLookup,
    availability_for_address,
    resolve_point,
    validate_address,
)
from geoserv.services.booking_intake import check_booking_request

__all__ = [
    "Geocoder",
    "ZipLookup",
    "resolve_point",
    "validate_address",
    "availability_for_address",
    "check_booking_request",
]
