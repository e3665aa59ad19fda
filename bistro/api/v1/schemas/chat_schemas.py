from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional

from bistro.domain.booking.value_objects import BookingIntent, BookingSnapshot
from bistro.domain.conversation.value_objects import Message
from bistro.domain.weather.value_objects import LocationHint

class TurnRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    utterance: str = Field(validation_alias=AliasChoices("utterance", "message"))
    history: List[Message] = []
    location_hint: Optional[LocationHint] = Field(
        default=None,
        validation_alias=AliasChoices("locationHint", "userLocation", "location_hint")
    )
    # Last snapshot the client received; lets slots survive a forgetful extraction
    booking_details: Optional[BookingSnapshot] = Field(
        default=None,
        validation_alias=AliasChoices("bookingDetails", "booking_details")
    )

    @field_validator("utterance")
    @classmethod
    def utterance_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("utterance must not be blank")
        return value

class TurnResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    reply: str
    booking_details: BookingSnapshot = Field(serialization_alias="bookingDetails")
    intent: BookingIntent
    booking_id: Optional[str] = Field(default=None, serialization_alias="bookingId")
