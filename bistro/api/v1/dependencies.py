from typing import AsyncGenerator
from fastapi import Depends
from langchain_core.language_models.chat_models import BaseChatModel
from sqlalchemy.ext.asyncio import AsyncSession

from bistro.core.database import get_db
from bistro.application.ai_agent.llm_factory import LLMFactory
from bistro.infrastructure.external.openweather_api import OpenWeatherAPIClient
from bistro.infrastructure.repositories.booking_repository import BookingRepository

def get_booking_repository(db: AsyncSession = Depends(get_db)) -> BookingRepository:
    return BookingRepository(db)

def get_extraction_llm() -> BaseChatModel:
    return LLMFactory.create_llm(temperature=0.0)

async def get_forecast_client() -> AsyncGenerator[OpenWeatherAPIClient, None]:
    client = OpenWeatherAPIClient()
    try:
        yield client
    finally:
        await client.close()
