from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from travelmarket.core.database import get_db
from travelmarket.dependencies.auth import get_current_user, require_role
from travelmarket.models.booking.booking import BookingStatus
from travelmarket.models.user.user import User, UserRole
from travelmarket.schemas.booking.booking import (
    BookingCreate, BookingResponse, BookingDecision, BookingReject, ConflictCheckResponse
)
from travelmarket.services.bookings.booking_service import BookingService

router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.post("/check", response_model=ConflictCheckResponse)
async def check_booking_dates(
    data: BookingCreate,
    db: AsyncSession = Depends(get_db)
):
    return await BookingService.preview(db, data)


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    data: BookingCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await BookingService.create_booking(db, current_user, data)


@router.get("/my", response_model=list[BookingResponse])
async def my_bookings(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await BookingService.list_my_bookings(db, current_user)


@router.get("/provider", response_model=list[BookingResponse])
async def incoming_bookings(
    booking_status: Optional[BookingStatus] = Query(None, alias="status"),
    user: User = Depends(require_role(UserRole.provider)),
    db: AsyncSession = Depends(get_db)
):
    return await BookingService.list_provider_bookings(db, user, booking_status)


@router.post("/{booking_id}/accept", response_model=BookingResponse)
async def accept_booking(
    booking_id: int,
    decision: BookingDecision = BookingDecision(),
    user: User = Depends(require_role(UserRole.provider)),
    db: AsyncSession = Depends(get_db)
):
    return await BookingService.accept_booking(db, user, booking_id, decision)


@router.post("/{booking_id}/quote", response_model=BookingResponse)
async def quote_booking(
    booking_id: int,
    decision: BookingDecision,
    user: User = Depends(require_role(UserRole.provider)),
    db: AsyncSession = Depends(get_db)
):
    return await BookingService.quote_booking(db, user, booking_id, decision)


@router.post("/{booking_id}/reject", response_model=BookingResponse)
async def reject_booking(
    booking_id: int,
    data: BookingReject = BookingReject(),
    user: User = Depends(require_role(UserRole.provider)),
    db: AsyncSession = Depends(get_db)
):
    return await BookingService.reject_booking(db, user, booking_id, data.note)


@router.post("/{booking_id}/cancel", response_model=BookingResponse)
async def cancel_booking(
    booking_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await BookingService.cancel_booking(db, current_user, booking_id)


@router.post("/{booking_id}/confirm", response_model=BookingResponse)
async def confirm_booking(
    booking_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await BookingService.confirm_booking(db, current_user, booking_id)
