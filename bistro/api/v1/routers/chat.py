import logging
from fastapi import APIRouter, Depends, HTTPException, status
from langchain_core.language_models.chat_models import BaseChatModel

from bistro.api.v1.dependencies import get_booking_repository, get_extraction_llm, get_forecast_client
from bistro.api.v1.schemas.chat_schemas import TurnRequest, TurnResponse
from bistro.application.ai_agent.nodes.extraction import ExtractionError
from bistro.application.chat.use_cases import ProcessTurnUseCase
from bistro.infrastructure.external.openweather_api import OpenWeatherAPIClient
from bistro.infrastructure.repositories.booking_repository import BookingRepository

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("", response_model=TurnResponse)
async def chat(
    data: TurnRequest,
    llm: BaseChatModel = Depends(get_extraction_llm),
    forecast_client: OpenWeatherAPIClient = Depends(get_forecast_client),
    booking_repo: BookingRepository = Depends(get_booking_repository)
):
    """
    Process one conversation turn.

    The client sends the whole history every time; nothing about the
    conversation is kept on the server between calls.
    """
    use_case = ProcessTurnUseCase(llm, forecast_client, booking_repo)
    try:
        return await use_case.execute(data)
    except ExtractionError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to process request"
        )
