"""Tests for address validation, availability by address and booking intake."""

import pytest

from geoserv.schemas.availability_schema import AvailabilityReason
from geoserv.schemas.booking_schema import BookingRejection
from geoserv.schemas.service_area_schema import GeoPoint
from geoserv.services.address_validation import (
    availability_for_address,
    resolve_point,
    validate_address,
)
from geoserv.services.booking_intake import check_booking_request
from tests.conftest import (
    ALL_SLOTS,
    MONDAY,
    TEN_KM_NORTH,
    THREE_KM_NORTH,
    THURSDAY,
    TUESDAY,
    VANCOUVER,
    WEDNESDAY,
    make_booking,
    make_radius_area,
    make_zip_area,
)

ADDRESSES = {
    "800 Robson St, Vancouver": {"lat": THREE_KM_NORTH.lat, "lng": THREE_KM_NORTH.lng},
    "Far Away Rd": TEN_KM_NORTH,
}


class StubGeocoder:
    def __init__(self, results=None):
        self.results = ADDRESSES if results is None else results
        self.calls = []

    def __call__(self, address):
        self.calls.append(address)
        return self.results.get(address)


class StubZipLookup:
    def __init__(self, zip_code="V6B 1A1"):
        self.zip_code = zip_code
        self.calls = 0

    def __call__(self, point):
        self.calls += 1
        return self.zip_code


class TestResolvePoint:
    def test_mapping_result(self):
        point = resolve_point("800 Robson St, Vancouver", StubGeocoder())
        assert point == THREE_KM_NORTH

    def test_geopoint_result(self):
        assert resolve_point("Far Away Rd", StubGeocoder()) == TEN_KM_NORTH

    def test_unknown_address(self):
        assert resolve_point("nowhere", StubGeocoder()) is None

    def test_blank_address_not_geocoded(self):
        geocoder = StubGeocoder()
        assert resolve_point("   ", geocoder) is None
        assert geocoder.calls == []

    def test_geocoder_errors_propagate(self):
        def failing(address):
            raise ConnectionError("geocoder down")

        with pytest.raises(ConnectionError):
            resolve_point("800 Robson St, Vancouver", failing)


class TestValidateAddress:
    def setup_method(self):
        self.areas = [make_radius_area()]

    def test_served_address(self):
        result = validate_address("800 Robson St, Vancouver", self.areas, StubGeocoder())
        assert result.valid is True
        assert result.point == THREE_KM_NORTH
        assert result.matched_areas[0].name == "Downtown"

    def test_unresolvable_address(self):
        result = validate_address("nowhere", self.areas, StubGeocoder())
        assert result.valid is False
        assert result.reason == AvailabilityReason.INVALID_ADDRESS

    def test_out_of_area(self):
        result = validate_address("Far Away Rd", self.areas, StubGeocoder())
        assert result.valid is False
        assert result.reason == AvailabilityReason.OUT_OF_SERVICE_AREA

    def test_zip_area_uses_lookup_once(self):
        lookup = StubZipLookup()
        areas = [make_zip_area(area_id="z1"), make_zip_area(area_id="z2")]
        result = validate_address("Far Away Rd", areas, StubGeocoder(), lookup)
        assert result.valid is True
        assert [a.id for a in result.matched_areas] == ["z1", "z2"]
        assert lookup.calls == 1

    def test_zip_lookup_skipped_without_zip_areas(self):
        lookup = StubZipLookup()
        validate_address("800 Robson St, Vancouver", self.areas, StubGeocoder(), lookup)
        assert lookup.calls == 0

    def test_zip_area_without_lookup_never_matches(self):
        result = validate_address("Far Away Rd", [make_zip_area()], StubGeocoder())
        assert result.valid is False


class TestAvailabilityForAddress:
    def test_uses_address_lookahead(self):
        area = make_radius_area(available_days=["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"])
        result = availability_for_address(
            "800 Robson St, Vancouver", [area], [], StubGeocoder(), today=MONDAY
        )
        assert len(result.available_days) == 60

    def test_invalid_address(self):
        result = availability_for_address("nowhere", [make_radius_area()], [], StubGeocoder())
        assert result.available_days == []
        assert result.reason == AvailabilityReason.INVALID_ADDRESS

    def test_out_of_area(self):
        result = availability_for_address(
            "Far Away Rd", [make_radius_area()], [], StubGeocoder(), today=MONDAY
        )
        assert result.reason == AvailabilityReason.OUT_OF_SERVICE_AREA

    def test_zip_area_schedule(self):
        result = availability_for_address(
            "Far Away Rd", [make_zip_area()], [], StubGeocoder(), StubZipLookup(),
            lookahead_days=7, today=MONDAY,
        )
        assert result.available_days == ["2025-01-07", "2025-01-09"]


class TestCheckBookingRequest:
    def setup_method(self):
        self.areas = [make_radius_area()]

    def test_accepts_open_slot(self):
        check = check_booking_request(self.areas, VANCOUVER, WEDNESDAY, "9–11")
        assert check.accepted is True
        assert check.reason is None

    def test_unknown_slot(self):
        check = check_booking_request(self.areas, VANCOUVER, WEDNESDAY, "5–7")
        assert check.reason == BookingRejection.UNKNOWN_SLOT

    def test_out_of_area(self):
        check = check_booking_request(self.areas, TEN_KM_NORTH, WEDNESDAY, "9–11")
        assert check.reason == BookingRejection.OUT_OF_SERVICE_AREA

    def test_unresolved_point(self):
        check = check_booking_request(self.areas, None, WEDNESDAY, "9–11")
        assert check.reason == BookingRejection.OUT_OF_SERVICE_AREA

    def test_day_not_scheduled(self):
        check = check_booking_request(self.areas, VANCOUVER, TUESDAY, "9–11")
        assert check.reason == BookingRejection.DAY_NOT_IN_SCHEDULE

    def test_slot_taken(self):
        bookings = [make_booking(WEDNESDAY, "9–11", "pending")]
        check = check_booking_request(self.areas, VANCOUVER, WEDNESDAY, "9–11", bookings)
        assert check.accepted is False
        assert check.reason == BookingRejection.SLOT_TAKEN

    def test_canceled_slot_can_be_rebooked(self):
        bookings = [make_booking(WEDNESDAY, "9–11", "canceled")]
        check = check_booking_request(self.areas, VANCOUVER, WEDNESDAY, "9–11", bookings)
        assert check.accepted is True

    def test_zip_area_booking(self):
        check = check_booking_request(
            [make_zip_area()], VANCOUVER, THURSDAY, ALL_SLOTS[0], zip_code="V6B1A1"
        )
        assert check.accepted is True

    def test_custom_slot_catalog(self):
        check = check_booking_request(
            self.areas, GeoPoint(lat=49.28, lng=-123.12), WEDNESDAY, "am", slots=["am", "pm"]
        )
        assert check.accepted is True
