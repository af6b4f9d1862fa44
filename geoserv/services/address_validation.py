"""
Address-level entry points: resolve an address, then check it against a
company's service areas.

Geocoding and reverse zip lookup are external collaborators injected as
plain callables. A geocoder returns None for an address it cannot resolve;
exceptions it raises propagate to the caller.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Callable, Optional, Union

from geoserv.availability.calculator import compute_availability
from geoserv.config import settings
from geoserv.geo.membership import matching_areas
from geoserv.logging_context import get_request_logger
from geoserv.schemas.availability_schema import (
    AddressValidationResult,
    AvailabilityReason,
    AvailabilityResult,
)
from geoserv.schemas.service_area_schema import (
    GeoPoint,
    ServiceArea,
    ZipArea,
    iter_service_areas,
)
from geoserv.utils import DayLike

logger = get_request_logger(__name__)

Geocoder = Callable[[str], Optional[Union[GeoPoint, Mapping[str, Any]]]]
ZipLookup = Callable[[GeoPoint], Optional[str]]


def resolve_point(address: str, geocoder: Geocoder) -> Optional[GeoPoint]:
    """Geocode ``address``. Returns None when it cannot be resolved."""
    if not address or not address.strip():
        return None

    result = geocoder(address.strip())
    if result is None:
        logger.info("Address could not be geocoded: %r", address)
        return None
    if isinstance(result, GeoPoint):
        return result
    return GeoPoint(lat=result["lat"], lng=result["lng"])


def _zip_for(
    point: GeoPoint, areas: list[ServiceArea], zip_lookup: Optional[ZipLookup]
) -> Optional[str]:
    """Reverse-lookup the postal code, but only if some area is zip-based."""
    if zip_lookup is None or not any(isinstance(a, ZipArea) for a in areas):
        return None
    return zip_lookup(point)


def validate_address(
    address: str,
    service_areas: Iterable[Any],
    geocoder: Geocoder,
    zip_lookup: Optional[ZipLookup] = None,
) -> AddressValidationResult:
    """Check whether a customer address is served by any of the given areas."""
    point = resolve_point(address, geocoder)
    if point is None:
        return AddressValidationResult(
            valid=False, reason=AvailabilityReason.INVALID_ADDRESS
        )

    areas = list(iter_service_areas(service_areas))
    matched = matching_areas(point, areas, _zip_for(point, areas, zip_lookup))
    if not matched:
        logger.info("Address outside all %d service area(s)", len(areas))
        return AddressValidationResult(
            valid=False, point=point, reason=AvailabilityReason.OUT_OF_SERVICE_AREA
        )

    logger.info("Address served by %s", ", ".join(a.name or a.type for a in matched))
    return AddressValidationResult(valid=True, point=point, matched_areas=matched)


def availability_for_address(
    address: str,
    service_areas: Iterable[Any],
    existing_bookings: Iterable[Any],
    geocoder: Geocoder,
    zip_lookup: Optional[ZipLookup] = None,
    *,
    lookahead_days: Optional[int] = None,
    today: Optional[DayLike] = None,
    company_id: Optional[str] = None,
) -> AvailabilityResult:
    """Bookable days for an address, over the address lookahead window."""
    point = resolve_point(address, geocoder)
    if point is None:
        return AvailabilityResult(
            available_days=[],
            fully_booked_days=[],
            reason=AvailabilityReason.INVALID_ADDRESS,
        )

    areas = list(iter_service_areas(service_areas))
    if lookahead_days is None:
        lookahead_days = settings.availability.address_lookahead_days
    return compute_availability(
        areas,
        point,
        existing_bookings,
        lookahead_days=lookahead_days,
        zip_code=_zip_for(point, areas, zip_lookup),
        today=today,
        company_id=company_id,
    )
