import logging
from uuid import UUID
from typing import Any, Dict, List, Optional
from datetime import date
from fastapi import HTTPException

from bistro.infrastructure.repositories.booking_repository import BookingRepository
from bistro.api.v1.schemas.booking_schemas import BookingCreate
from bistro.infrastructure.persistence.models import Booking
from bistro.domain.booking.value_objects import BookingSnapshot, BookingStatus
from bistro.domain.weather.value_objects import WeatherAdvisory

logger = logging.getLogger(__name__)

# Safety net for slots still missing at commit time
COMMIT_DEFAULTS = {
    "name": "Guest",
    "guests": 2,
    "time": "19:00",
    "seating": "Any",
    "cuisine": "Any",
    "special_requests": "None",
}

def build_booking_record(
    snapshot: BookingSnapshot,
    weather: Optional[WeatherAdvisory] = None,
    today: Optional[date] = None
) -> Dict[str, Any]:
    data = snapshot.model_dump(mode="json")
    for field, default in COMMIT_DEFAULTS.items():
        if data.get(field) is None:
            data[field] = default

    if snapshot.date is None:
        data["date"] = today or date.today()
    else:
        data["date"] = snapshot.date

    data.update({
        "status": BookingStatus.CONFIRMED.value,
        "weather_info": weather.to_record() if weather else {},
    })
    return data

class CommitBookingUseCase:
    def __init__(self, booking_repo: BookingRepository):
        self.booking_repo = booking_repo

    async def execute(
        self,
        snapshot: BookingSnapshot,
        weather: Optional[WeatherAdvisory] = None,
        today: Optional[date] = None
    ) -> Booking:
        record = build_booking_record(snapshot, weather, today)
        booking = await self.booking_repo.create(record)
        logger.info(f"Committed booking {booking.id} for {record['name']} on {record['date']} at {record['time']}")
        return booking

class CreateBookingUseCase:
    def __init__(self, booking_repo: BookingRepository):
        self.booking_repo = booking_repo

    async def execute(self, data: BookingCreate) -> Booking:
        booking_data = data.model_dump(mode="json")
        booking_data["date"] = data.date
        return await self.booking_repo.create(booking_data)

class GetBookingQuery:
    def __init__(self, booking_repo: BookingRepository):
        self.booking_repo = booking_repo

    async def execute(self, booking_id: UUID) -> Booking:
        booking = await self.booking_repo.get_by_id(booking_id)
        if not booking:
            raise HTTPException(status_code=404, detail="Booking not found")
        return booking

class GetBookingsQuery:
    def __init__(self, booking_repo: BookingRepository):
        self.booking_repo = booking_repo

    async def execute(self, status: Optional[str] = None) -> List[Booking]:
        return await self.booking_repo.list_newest_first(status)

class CancelBookingUseCase:
    def __init__(self, booking_repo: BookingRepository):
        self.booking_repo = booking_repo

    async def execute(self, booking_id: UUID) -> None:
        deleted = await self.booking_repo.delete(booking_id)
        if not deleted:
            raise HTTPException(status_code=404, detail="Booking not found")
