import logging

from langchain_core.runnables import RunnableConfig

from bistro.application.ai_agent.state import TurnState
from bistro.application.booking.use_cases import CommitBookingUseCase
from bistro.infrastructure.repositories.base_repository import PersistenceError

logger = logging.getLogger(__name__)

async def commit_node(state: TurnState, config: RunnableConfig) -> dict:
    booking_repo = config["configurable"]["booking_repository"]
    use_case = CommitBookingUseCase(booking_repo)

    try:
        booking = await use_case.execute(
            state["booking_details"],
            weather=state.get("weather"),
            today=state.get("today"),
        )
    except PersistenceError:
        # The reply already reads as a success; the client only sees bookingId=None
        logger.exception("Commit failed for a confirmed booking")
        return {"booking_id": None, "error": "commit_failed"}

    return {"booking_id": str(booking.id)}
