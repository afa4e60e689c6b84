from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from travelmarket.core.database import get_db
from travelmarket.dependencies.auth import require_role
from travelmarket.models.user.user import User, UserRole
from travelmarket.schemas.availability.availability import CalendarDay, BlockedDatesUpdate, BlockedDatesSaved
from travelmarket.services.availability.calendar_service import ProviderCalendarService

router = APIRouter(prefix="/me/calendar", tags=["Provider Calendar"])


@router.get("/booked-dates", response_model=list[CalendarDay])
async def my_booked_dates(
    date_from: Optional[date] = Query(None, alias="from"),
    date_to: Optional[date] = Query(None, alias="to"),
    user: User = Depends(require_role(UserRole.provider)),
    db: AsyncSession = Depends(get_db)
):
    return await ProviderCalendarService.list_booked(user, db, date_from, date_to)


@router.get("/blocked-dates", response_model=list[CalendarDay])
async def my_blocked_dates(
    date_from: Optional[date] = Query(None, alias="from"),
    date_to: Optional[date] = Query(None, alias="to"),
    user: User = Depends(require_role(UserRole.provider)),
    db: AsyncSession = Depends(get_db)
):
    return await ProviderCalendarService.list_blocked(user, db, date_from, date_to)


@router.put("/blocked-dates", response_model=BlockedDatesSaved)
async def replace_blocked_dates(
    data: BlockedDatesUpdate,
    user: User = Depends(require_role(UserRole.provider)),
    db: AsyncSession = Depends(get_db)
):
    return await ProviderCalendarService.replace_blocked(user, data.dates, db)
