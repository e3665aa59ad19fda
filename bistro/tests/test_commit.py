from datetime import date
from unittest.mock import AsyncMock

import pytest

from bistro.application.ai_agent.nodes.commit import commit_node
from bistro.application.booking.use_cases import CommitBookingUseCase, build_booking_record
from bistro.domain.booking.value_objects import BookingSnapshot
from bistro.domain.weather.value_objects import WeatherAdvisory
from bistro.infrastructure.repositories.base_repository import PersistenceError

def test_defaults_fill_missing_slots():
    record = build_booking_record(BookingSnapshot(date="2024-06-02"))
    assert record["name"] == "Guest"
    assert record["guests"] == 2
    assert record["time"] == "19:00"
    assert record["seating"] == "Any"
    assert record["cuisine"] == "Any"
    assert record["special_requests"] == "None"
    assert record["status"] == "Confirmed"
    assert record["weather_info"] == {}

def test_missing_date_falls_back_to_today():
    record = build_booking_record(BookingSnapshot(), today=date(2024, 6, 1))
    assert record["date"] == date(2024, 6, 1)

def test_known_slots_are_kept():
    snapshot = BookingSnapshot(
        name="Sam", date="2024-06-02", time="20:30", guests=5, seating="Indoor", specialRequests="Window table"
    )
    record = build_booking_record(snapshot, WeatherAdvisory(condition="haze", temperature_c=30.2, found=True))
    assert record["name"] == "Sam"
    assert record["date"] == date(2024, 6, 2)
    assert record["time"] == "20:30"
    assert record["guests"] == 5
    assert record["seating"] == "Indoor"
    assert record["special_requests"] == "Window table"
    assert record["weather_info"] == {"condition": "haze", "temp": 30.2}

@pytest.mark.asyncio
async def test_committed_record_round_trips(booking_repo):
    snapshot = BookingSnapshot(date="2024-06-02", time="19:00", guests=4, seating="Outdoor")
    weather = WeatherAdvisory(condition="clear sky", temperature_c=31.0, found=True)

    booking = await CommitBookingUseCase(booking_repo).execute(snapshot, weather)
    fetched = await booking_repo.get_by_id(booking.id)

    assert fetched.status == "Confirmed"
    assert fetched.name == "Guest"
    assert fetched.date == date(2024, 6, 2)
    assert fetched.time == "19:00"
    assert fetched.guests == 4
    assert fetched.seating == "Outdoor"
    assert fetched.cuisine == "Any"
    assert fetched.special_requests == "None"
    assert fetched.weather_info == {"condition": "clear sky", "temp": 31.0}

@pytest.mark.asyncio
async def test_commit_node_reports_booking_id(booking_repo, today):
    state = {"booking_details": BookingSnapshot(name="Sam", date="2024-06-02"), "today": today}
    update = await commit_node(state, {"configurable": {"booking_repository": booking_repo}})
    assert update["booking_id"] in {str(id) for id in booking_repo.records}

@pytest.mark.asyncio
async def test_commit_node_swallows_persistence_failure(today):
    repo = AsyncMock()
    repo.create.side_effect = PersistenceError("database down")
    state = {"booking_details": BookingSnapshot(name="Sam", date="2024-06-02"), "today": today}

    update = await commit_node(state, {"configurable": {"booking_repository": repo}})

    assert update == {"booking_id": None, "error": "commit_failed"}
