from datetime import date
from typing import TypedDict, List, Optional

from bistro.domain.booking.value_objects import BookingIntent, BookingSnapshot
from bistro.domain.conversation.value_objects import Message
from bistro.domain.weather.value_objects import LocationHint, WeatherAdvisory

class TurnState(TypedDict, total=False):
    # Input, as sent by the client
    utterance: str
    history: List[Message]
    today: date
    location_hint: Optional[LocationHint]
    previous_details: Optional[BookingSnapshot]

    # Filled in by the nodes
    reply: str
    extracted_details: Optional[BookingSnapshot]
    extracted_intent: Optional[BookingIntent]
    booking_details: Optional[BookingSnapshot]
    intent: Optional[BookingIntent]
    weather: Optional[WeatherAdvisory]
    booking_id: Optional[str]
    error: Optional[str]
