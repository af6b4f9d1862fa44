"""Booking records consumed by availability, and booking-intake results."""

from datetime import date
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from geoserv.schemas.service_area_schema import ServiceArea
from geoserv.utils import to_utc_day


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELED = "canceled"


# Only these statuses hold a slot.
ACTIVE_STATUSES = frozenset({BookingStatus.PENDING, BookingStatus.CONFIRMED})


class Booking(BaseModel):
    """A stored booking, read-only from this package's point of view.

    ``day`` is the UTC calendar day of the booking (input key ``date``).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: Optional[str] = None
    day: date = Field(alias="date")
    slot: str
    status: BookingStatus = BookingStatus.PENDING
    company_id: Optional[str] = Field(default=None, alias="companyId")

    @field_validator("id", "company_id", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        return None if value is None else str(value)

    @field_validator("day", mode="before")
    @classmethod
    def _utc_day(cls, value: Any) -> Any:
        if isinstance(value, (str, date)):
            return to_utc_day(value)
        return value

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip().lower()
            if value == "cancelled":
                return BookingStatus.CANCELED
        return value

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES


class BookingRejection(str, Enum):
    UNKNOWN_SLOT = "UNKNOWN_SLOT"
    OUT_OF_SERVICE_AREA = "OUT_OF_SERVICE_AREA"
    DAY_NOT_IN_SCHEDULE = "DAY_NOT_IN_SCHEDULE"
    SLOT_TAKEN = "SLOT_TAKEN"


class BookingCheck(BaseModel):
    """Read-time verdict on a requested (day, slot) for a customer location."""

    accepted: bool
    reason: Optional[BookingRejection] = None
    matched_areas: list[ServiceArea] = Field(default_factory=list)
    message: str = ""
