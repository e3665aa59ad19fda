from fastapi import APIRouter, Depends, status, HTTPException
from typing import List, Optional
from uuid import UUID

from bistro.api.v1.dependencies import get_booking_repository
from bistro.api.v1.schemas.booking_schemas import BookingCreate, BookingResponse
from bistro.infrastructure.repositories.booking_repository import BookingRepository
from bistro.infrastructure.repositories.base_repository import PersistenceError
from bistro.application.booking.use_cases import (
    CreateBookingUseCase,
    GetBookingQuery,
    GetBookingsQuery,
    CancelBookingUseCase
)

router = APIRouter()

@router.get("/", response_model=List[BookingResponse])
async def get_bookings(
    status: Optional[str] = None,
    booking_repo: BookingRepository = Depends(get_booking_repository)
):
    query = GetBookingsQuery(booking_repo)
    try:
        return await query.execute(status)
    except PersistenceError:
        raise HTTPException(status_code=500, detail="Failed to fetch bookings")

@router.post("/", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    data: BookingCreate,
    booking_repo: BookingRepository = Depends(get_booking_repository)
):
    use_case = CreateBookingUseCase(booking_repo)
    try:
        return await use_case.execute(data)
    except PersistenceError:
        raise HTTPException(status_code=500, detail="Failed to create booking")

@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: UUID,
    booking_repo: BookingRepository = Depends(get_booking_repository)
):
    query = GetBookingQuery(booking_repo)
    try:
        return await query.execute(booking_id)
    except PersistenceError:
        raise HTTPException(status_code=500, detail="Error fetching booking")

@router.delete("/{booking_id}")
async def cancel_booking(
    booking_id: UUID,
    booking_repo: BookingRepository = Depends(get_booking_repository)
):
    use_case = CancelBookingUseCase(booking_repo)
    try:
        await use_case.execute(booking_id)
    except PersistenceError:
        raise HTTPException(status_code=500, detail="Error cancelling booking")
    return {"message": "Booking cancelled successfully"}
