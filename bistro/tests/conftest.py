import json
import uuid
from datetime import date, datetime, timezone
from types import SimpleNamespace
from typing import Any, AsyncGenerator, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import AsyncClient, ASGITransport

from bistro.main import app
from bistro.api.v1.dependencies import get_booking_repository, get_extraction_llm, get_forecast_client
from bistro.domain.weather.value_objects import WeatherAdvisory

# The LLM and the forecast service are external; tests script their replies.

def llm_reply(reply: str = "Sure, what name should I put the booking under?", intent: str = "booking_request", **details: Any) -> str:
    booking_details = {
        "name": None,
        "date": None,
        "time": None,
        "guests": None,
        "seating": None,
        "cuisine": None,
        "specialRequests": None,
    }
    booking_details.update(details)
    return json.dumps({"reply": reply, "bookingDetails": booking_details, "intent": intent})

def make_llm(content: str) -> MagicMock:
    llm = MagicMock()
    llm.ainvoke = AsyncMock(return_value=MagicMock(content=content))
    return llm

def make_forecast_client(advisory: Optional[WeatherAdvisory] = None, side_effect: Any = None) -> MagicMock:
    client = MagicMock()
    client.get_forecast_for_date = AsyncMock(return_value=advisory, side_effect=side_effect)
    return client

class FakeBookingRepository:
    """In-memory stand-in with the BookingRepository surface."""

    def __init__(self):
        self.records: Dict[uuid.UUID, SimpleNamespace] = {}

    async def create(self, data: Dict[str, Any]) -> SimpleNamespace:
        record = SimpleNamespace(
            id=uuid.uuid4(),
            created_at=datetime.now(timezone.utc),
            updated_at=None,
            **data,
        )
        self.records[record.id] = record
        return record

    async def get_by_id(self, id: uuid.UUID) -> Optional[SimpleNamespace]:
        return self.records.get(id)

    async def list_newest_first(self, status: Optional[str] = None, skip: int = 0, limit: int = 100) -> List[SimpleNamespace]:
        # dicts keep insertion order, which is creation order here
        records = [r for r in reversed(list(self.records.values())) if not status or r.status == status]
        return records[skip:skip + limit]

    async def delete(self, id: uuid.UUID) -> bool:
        return self.records.pop(id, None) is not None

@pytest.fixture
def today() -> date:
    return date(2024, 6, 1)

@pytest.fixture
def booking_repo() -> FakeBookingRepository:
    return FakeBookingRepository()

@pytest.fixture
def clear_forecast() -> WeatherAdvisory:
    return WeatherAdvisory(condition="clear sky", temperature_c=31.6, found=True)

@pytest.fixture
def rainy_forecast() -> WeatherAdvisory:
    return WeatherAdvisory(condition="light rain", temperature_c=24.4, found=True)

@pytest.fixture
def overrides(booking_repo):
    """Dependency overrides; tests set overrides['llm'] / overrides['forecast'] before calling the API."""
    state = {
        "llm": make_llm(llm_reply()),
        "forecast": make_forecast_client(WeatherAdvisory.not_found()),
    }
    app.dependency_overrides[get_extraction_llm] = lambda: state["llm"]
    app.dependency_overrides[get_forecast_client] = lambda: state["forecast"]
    app.dependency_overrides[get_booking_repository] = lambda: booking_repo
    yield state
    app.dependency_overrides.clear()

@pytest.fixture
async def client(overrides) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
