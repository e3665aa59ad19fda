from pydantic import BaseModel, ConfigDict, Field, field_validator
from enum import Enum
from datetime import date as Date
from typing import Any, List, Optional

class BookingStatus(str, Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    CANCELLED = "Cancelled"

class SeatingPreference(str, Enum):
    INDOOR = "Indoor"
    OUTDOOR = "Outdoor"
    ANY = "Any"

class BookingIntent(str, Enum):
    BOOKING_REQUEST = "booking_request"            # collecting slots
    CONFIRMATION_REQUEST = "confirmation_request"  # awaiting confirmation
    CONFIRMED = "confirmed"

    @classmethod
    def parse(cls, value: Any) -> "BookingIntent":
        """Unknown values fall back to BOOKING_REQUEST."""
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.BOOKING_REQUEST

REQUIRED_SLOTS = ("name", "date", "time", "guests", "seating")
DEFAULT_CUISINE = "Any"
DEFAULT_SPECIAL_REQUESTS = "None"

_NULL_STRINGS = {"", "null", "none", "n/a", "unknown"}

class BookingSnapshot(BaseModel):
    """Booking slots gathered so far. Partial until every required slot is set."""

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    date: Optional[Date] = None
    time: Optional[str] = None
    guests: Optional[int] = Field(default=None, gt=0)
    seating: Optional[SeatingPreference] = None
    cuisine: str = DEFAULT_CUISINE
    special_requests: str = Field(default=DEFAULT_SPECIAL_REQUESTS, alias="specialRequests")

    @field_validator("name", "date", "guests", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and value.strip().lower() in _NULL_STRINGS:
            return None
        return value

    @field_validator("time", mode="before")
    @classmethod
    def normalize_time(cls, value: Any) -> Any:
        if value is None:
            return None
        value = str(value).strip()
        return None if value.lower() in _NULL_STRINGS else value

    @field_validator("seating", mode="before")
    @classmethod
    def normalize_seating(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
            return None if value.lower() in _NULL_STRINGS else value.capitalize()
        return value

    @field_validator("cuisine", mode="before")
    @classmethod
    def default_cuisine(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and value.strip().lower() in _NULL_STRINGS):
            return DEFAULT_CUISINE
        return value

    @field_validator("special_requests", mode="before")
    @classmethod
    def default_special_requests(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and value.strip().lower() in _NULL_STRINGS):
            return DEFAULT_SPECIAL_REQUESTS
        return value

    def missing_slots(self) -> List[str]:
        return [slot for slot in REQUIRED_SLOTS if getattr(self, slot) is None]

    def is_complete(self) -> bool:
        return not self.missing_slots()

    def merge(self, newer: "BookingSnapshot") -> "BookingSnapshot":
        """
        Overlay a newer extraction on top of this snapshot.

        A null in the newer snapshot never erases a known value, and the
        optional slots only replace ours when they differ from the defaults.
        """
        merged = self.model_dump()
        for slot in REQUIRED_SLOTS:
            value = getattr(newer, slot)
            if value is not None:
                merged[slot] = value
        if newer.cuisine != DEFAULT_CUISINE:
            merged["cuisine"] = newer.cuisine
        if newer.special_requests != DEFAULT_SPECIAL_REQUESTS:
            merged["special_requests"] = newer.special_requests
        return BookingSnapshot.model_validate(merged)
