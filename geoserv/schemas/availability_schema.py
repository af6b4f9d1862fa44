"""Availability and address-validation result models."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from geoserv.schemas.service_area_schema import GeoPoint, ServiceArea


class AvailabilityReason(str, Enum):
    OUT_OF_SERVICE_AREA = "OUT_OF_SERVICE_AREA"
    DAY_NOT_IN_SCHEDULE = "DAY_NOT_IN_SCHEDULE"
    INVALID_ADDRESS = "INVALID_ADDRESS"


class AvailabilityResult(BaseModel):
    """Outcome of an availability query.

    Single-day queries fill ``available_slots`` and ``booked_slots``.
    Multi-day queries fill ``available_days`` and ``fully_booked_days``.
    Fields that do not apply to the query are None.
    """

    matched_areas: list[ServiceArea] = Field(default_factory=list)
    available_days: Optional[list[str]] = None
    available_slots: Optional[list[str]] = None
    booked_slots: Optional[list[str]] = None
    fully_booked_days: Optional[list[str]] = None
    reason: Optional[AvailabilityReason] = None


class DaySlots(BaseModel):
    """Open slots on one calendar day."""

    date: str
    weekday: str
    slots: list[str]


class AddressValidationResult(BaseModel):
    """Whether a customer address falls inside any of a company's areas."""

    valid: bool
    point: Optional[GeoPoint] = None
    matched_areas: list[ServiceArea] = Field(default_factory=list)
    reason: Optional[AvailabilityReason] = None
