from sqlalchemy import select, desc
from sqlalchemy.ext.asyncio import AsyncSession
from bistro.infrastructure.repositories.base_repository import BaseRepository, DATABASE_ERRORS, PersistenceError
from bistro.infrastructure.persistence.models import Booking
from typing import List, Optional

class BookingRepository(BaseRepository[Booking]):
    def __init__(self, session: AsyncSession):
        super().__init__(Booking, session)

    async def list_newest_first(self, status: Optional[str] = None, skip: int = 0, limit: int = 100) -> List[Booking]:
        query = select(Booking)
        if status:
            query = query.where(Booking.status == status)
        query = query.order_by(desc(Booking.created_at)).offset(skip).limit(limit)
        try:
            result = await self.session.execute(query)
        except DATABASE_ERRORS as e:
            raise PersistenceError(f"Failed to list bookings: {e}") from e
        return list(result.scalars().all())
