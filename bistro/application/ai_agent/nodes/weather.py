import asyncio
import logging
from typing import Sequence, Tuple

from langchain_core.runnables import RunnableConfig

from bistro.core.config import settings
from bistro.application.ai_agent.state import TurnState
from bistro.domain.booking.value_objects import BookingSnapshot, SeatingPreference
from bistro.domain.conversation.value_objects import Message
from bistro.domain.weather.value_objects import WeatherAdvisory
from bistro.infrastructure.external.openweather_api import ForecastError

logger = logging.getLogger(__name__)

WEATHER_KEYWORDS = ("forecast", "weather")
INDOOR_RECOMMENDATION = " I recommend indoor seating, so I've noted that for you."

def mentions_weather(text: str) -> bool:
    lowered = text.lower()
    return any(keyword in lowered for keyword in WEATHER_KEYWORDS)

def weather_already_discussed(history: Sequence[Message]) -> bool:
    # Any earlier agent message counts, not just the last one
    return any(msg.is_agent and mentions_weather(msg.text) for msg in history)

def should_check_weather(state: TurnState) -> bool:
    details = state.get("booking_details")
    if details is None or details.date is None:
        return False
    return not weather_already_discussed(state.get("history", []))

def apply_advisory(reply: str, details: BookingSnapshot, advisory: WeatherAdvisory) -> Tuple[str, BookingSnapshot]:
    """Appends the forecast sentence and, on rain with no seating chosen, moves the booking indoors."""
    if not advisory.found or mentions_weather(reply):
        return reply, details

    reply = (
        f"{reply.rstrip()} By the way, the forecast for {details.date:%A, %B} {details.date.day} "
        f"is {advisory.condition} at around {advisory.rounded_temperature}°C."
    )

    if advisory.is_rainy and details.seating is None:
        details = details.model_copy(update={"seating": SeatingPreference.INDOOR})
        reply += INDOOR_RECOMMENDATION

    return reply, details

async def weather_node(state: TurnState, config: RunnableConfig) -> dict:
    details = state["booking_details"]
    forecast_client = config["configurable"].get("forecast_client")
    if forecast_client is None:
        return {}

    hint = state.get("location_hint")
    try:
        advisory = await asyncio.wait_for(
            forecast_client.get_forecast_for_date(
                details.date,
                lat=hint.lat if hint else None,
                lon=hint.lon if hint else None,
            ),
            timeout=settings.FORECAST_TIMEOUT_SECONDS,
        )
    except asyncio.TimeoutError:
        logger.warning(f"Forecast lookup for {details.date} timed out")
        return {}
    except ForecastError as e:
        logger.warning(f"Forecast lookup for {details.date} failed: {e}")
        return {}

    if not advisory.found:
        logger.info(f"No forecast entry covers {details.date}")
        return {"weather": advisory}

    reply, details = apply_advisory(state["reply"], details, advisory)
    return {"reply": reply, "booking_details": details, "weather": advisory}
