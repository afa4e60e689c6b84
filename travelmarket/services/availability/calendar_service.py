from datetime import date, datetime, timezone
from typing import List, Optional

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from travelmarket.core.logger import logger
from travelmarket.models.booking.blocked_date import ProviderBlockedDate
from travelmarket.models.booking.booking import BookingStatus
from travelmarket.models.user.user import User
from travelmarket.services.auth.provider_profile import ProviderProfileService
from travelmarket.services.availability.availability_service import (
    blocked_dates, booked_dates, lock_provider_calendar
)


class ProviderCalendarService:

    @staticmethod
    async def list_booked(
        user: User,
        db: AsyncSession,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> List[dict]:
        """Days held by confirmed (active) bookings. Defaults to today onwards."""
        provider = await ProviderProfileService.get_by_user(user, db)
        if date_from is None and date_to is None:
            date_from = datetime.now(timezone.utc).date()
        days = await booked_dates(
            db,
            provider.id,
            statuses=(BookingStatus.active,),
            date_from=date_from,
            date_to=date_to,
        )
        return [{"date": d} for d in days]

    @staticmethod
    async def list_blocked(
        user: User,
        db: AsyncSession,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> List[dict]:
        provider = await ProviderProfileService.get_by_user(user, db)
        days = await blocked_dates(db, provider.id, date_from=date_from, date_to=date_to)
        return [{"date": d} for d in days]

    @staticmethod
    async def replace_blocked(user: User, days: List[date], db: AsyncSession) -> dict:
        """Replace the provider's whole blackout set in one transaction."""
        provider = await ProviderProfileService.get_by_user(user, db)
        unique_days = sorted(set(days))

        await lock_provider_calendar(db, provider.id)
        await db.execute(
            delete(ProviderBlockedDate).where(ProviderBlockedDate.provider_id == provider.id)
        )
        db.add_all([ProviderBlockedDate(provider_id=provider.id, day=d) for d in unique_days])
        await db.commit()

        logger.info(f"Provider {provider.id} blocked dates replaced ({len(unique_days)} days)")
        return {"ok": True, "count": len(unique_days)}
