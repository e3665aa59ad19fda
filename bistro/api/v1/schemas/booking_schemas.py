from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from uuid import UUID
from datetime import date as Date, datetime
from typing import Any, Dict, Optional
from bistro.domain.booking.value_objects import BookingStatus, SeatingPreference

class BookingBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # The web client posts customerName, bookingDate, ... when it saves a booking itself
    name: str = Field(default="Guest", validation_alias=AliasChoices("name", "customerName"))
    date: Date = Field(validation_alias=AliasChoices("date", "bookingDate"))
    time: str = Field(default="19:00", validation_alias=AliasChoices("time", "bookingTime"))
    guests: int = Field(default=2, gt=0, validation_alias=AliasChoices("guests", "numberOfGuests"))
    seating: SeatingPreference = Field(
        default=SeatingPreference.ANY,
        validation_alias=AliasChoices("seating", "seatingPreference")
    )
    cuisine: str = Field(default="Any", validation_alias=AliasChoices("cuisine", "cuisinePreference"))
    special_requests: str = Field(
        default="None",
        alias="specialRequests",
        validation_alias=AliasChoices("specialRequests", "special_requests")
    )

    @field_validator("date", mode="before")
    @classmethod
    def date_from_timestamp(cls, value: Any) -> Any:
        # "2024-06-02T18:30:00.000Z" -> "2024-06-02"
        if isinstance(value, str) and len(value) > 10 and value[10] == "T":
            return value[:10]
        return value

    @field_validator("seating", mode="before")
    @classmethod
    def capitalize_seating(cls, value: Any) -> Any:
        return value.strip().capitalize() if isinstance(value, str) else value

class BookingCreate(BookingBase):
    status: BookingStatus = BookingStatus.PENDING
    weather_info: Dict[str, Any] = Field(default_factory=dict, alias="weatherInfo")

class BookingResponse(BookingBase):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    status: str # Using string to avoid validation issues if enum changes
    weather_info: Dict[str, Any] = Field(default_factory=dict, alias="weatherInfo")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")
