import logging
from datetime import date
from typing import Any, Optional

from bistro.application.ai_agent.context import restaurant_today
from bistro.application.ai_agent.graph import agent_graph
from bistro.application.ai_agent.state import TurnState
from bistro.api.v1.schemas.chat_schemas import TurnRequest, TurnResponse
from bistro.domain.booking.value_objects import BookingIntent
from bistro.infrastructure.external.openweather_api import OpenWeatherAPIClient
from bistro.infrastructure.repositories.booking_repository import BookingRepository

logger = logging.getLogger(__name__)

class ProcessTurnUseCase:
    """Runs one dialogue turn: extraction, intent, weather advisory, commit."""

    def __init__(
        self,
        llm: Any,
        forecast_client: Optional[OpenWeatherAPIClient],
        booking_repo: BookingRepository
    ):
        self.llm = llm
        self.forecast_client = forecast_client
        self.booking_repo = booking_repo

    async def execute(self, request: TurnRequest, today: Optional[date] = None) -> TurnResponse:
        initial_state: TurnState = {
            "utterance": request.utterance,
            "history": list(request.history),
            "today": today or restaurant_today(),
            "location_hint": request.location_hint,
            "previous_details": request.booking_details,
        }
        config = {
            "configurable": {
                "llm": self.llm,
                "forecast_client": self.forecast_client,
                "booking_repository": self.booking_repo,
            }
        }

        # ExtractionError propagates: the turn fails as a whole
        output = await agent_graph.ainvoke(initial_state, config=config)

        intent = output.get("intent", BookingIntent.BOOKING_REQUEST)
        if output.get("error"):
            logger.warning(f"Turn finished with {intent.value} but {output['error']}")

        return TurnResponse(
            reply=output["reply"],
            booking_details=output["booking_details"],
            intent=intent,
            booking_id=output.get("booking_id"),
        )
