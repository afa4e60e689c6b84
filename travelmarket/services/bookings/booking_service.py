from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from travelmarket.core.config import settings
from travelmarket.core.exceptions import BookingConflict, InvalidRequest, NotFound
from travelmarket.core.logger import logger
from travelmarket.models.booking.booking import (
    Booking, BookingDate, BookingKind, BookingStatus, HOLDING_STATUSES
)
from travelmarket.models.service.service_provider import ServiceProvider
from travelmarket.models.user.user import User
from travelmarket.schemas.booking.booking import (
    BookingCreate, BookingDecision, RangeSelection
)
from travelmarket.services.auth.provider_profile import ProviderProfileService
from travelmarket.services.availability.availability_service import (
    lock_provider_calendar, resolve_provider_id
)
from travelmarket.services.availability.conflicts import check_conflicts, requested_days


async def _fetch_booking(db: AsyncSession, booking_id: int) -> Optional[Booking]:
    result = await db.execute(
        select(Booking)
        .options(selectinload(Booking.booking_dates))
        .where(Booking.id == booking_id)
    )
    return result.scalar_one_or_none()


class BookingService:

    @staticmethod
    async def preview(db: AsyncSession, data: BookingCreate) -> dict:
        """Advisory conflict check for a would-be booking. Nothing is written."""
        provider_id = await resolve_provider_id(db, data.provider_id, data.service_id)
        days = requested_days(data.selection)
        conflicts = await check_conflicts(db, provider_id, days)
        return {"available": not conflicts, "conflicts": conflicts}

    @staticmethod
    async def create_booking(db: AsyncSession, requester: User, data: BookingCreate) -> Booking:
        provider_id = await resolve_provider_id(db, data.provider_id, data.service_id)
        provider = await db.get(ServiceProvider, provider_id)
        if provider.provider_type not in settings.BOOKABLE_PROVIDER_TYPES:
            raise InvalidRequest(
                f"Date bookings are only available for: {', '.join(settings.BOOKABLE_PROVIDER_TYPES)}"
            )

        days = requested_days(data.selection)
        if isinstance(data.selection, RangeSelection):
            kind = BookingKind.range
        else:
            kind = BookingKind.dates

        await lock_provider_calendar(db, provider_id)
        conflicts = await check_conflicts(db, provider_id, days)
        if conflicts:
            await db.rollback()
            logger.warning(f"Booking rejected for provider {provider_id}: {len(conflicts)} conflicting day(s)")
            raise BookingConflict(conflicts=conflicts)

        booking = Booking(
            provider_id=provider_id,
            service_id=data.service_id,
            requester_id=requester.id,
            kind=kind,
            start_date=days[0],
            end_date=days[-1],
            status=BookingStatus.pending,
            note=data.note,
            attachments=[a.model_dump() for a in data.attachments],
            booking_dates=[BookingDate(provider_id=provider_id, day=d, held=True) for d in days],
        )
        db.add(booking)
        try:
            await db.commit()
        except IntegrityError:
            # Another request took one of the days between our check and our insert.
            await db.rollback()
            conflicts = await check_conflicts(db, provider_id, days)
            logger.warning(f"Concurrent booking for provider {provider_id} lost the race on {days}")
            raise BookingConflict(detail="Dates were booked concurrently", conflicts=conflicts)

        logger.info(
            f"Booking {booking.id} created by user {requester.id} for provider {provider_id} "
            f"({len(days)} day(s), {days[0]}..{days[-1]})"
        )
        return await _fetch_booking(db, booking.id)

    @staticmethod
    async def list_my_bookings(db: AsyncSession, user: User) -> List[Booking]:
        result = await db.execute(
            select(Booking)
            .options(selectinload(Booking.booking_dates))
            .where(Booking.requester_id == user.id)
            .order_by(Booking.created_at.desc(), Booking.id.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def list_provider_bookings(
        db: AsyncSession,
        user: User,
        booking_status: Optional[BookingStatus] = None,
    ) -> List[Booking]:
        provider = await ProviderProfileService.get_by_user(user, db)
        stmt = (
            select(Booking)
            .options(selectinload(Booking.booking_dates))
            .where(Booking.provider_id == provider.id)
        )
        if booking_status is not None:
            stmt = stmt.where(Booking.status == booking_status)
        result = await db.execute(stmt.order_by(Booking.start_date, Booking.id))
        return list(result.scalars().all())

    @staticmethod
    async def _get_incoming(db: AsyncSession, user: User, booking_id: int) -> Booking:
        provider = await ProviderProfileService.get_by_user(user, db)
        booking = await _fetch_booking(db, booking_id)
        if booking is None:
            raise NotFound("Booking not found")
        if booking.provider_id != provider.id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not your booking")
        return booking

    @staticmethod
    def _require_status(booking: Booking, allowed, action: str) -> None:
        if booking.status not in allowed:
            raise BookingConflict(detail=f"Cannot {action} a booking that is {booking.status.value}")

    @staticmethod
    def _release_days(booking: Booking) -> None:
        for booking_date in booking.booking_dates:
            booking_date.held = False

    @staticmethod
    async def accept_booking(
        db: AsyncSession,
        user: User,
        booking_id: int,
        decision: BookingDecision,
    ) -> Booking:
        booking = await BookingService._get_incoming(db, user, booking_id)
        BookingService._require_status(booking, (BookingStatus.pending,), "accept")

        await lock_provider_calendar(db, booking.provider_id)
        conflicts = await check_conflicts(
            db, booking.provider_id, booking.dates, exclude_booking_id=booking.id
        )
        if conflicts:
            await db.rollback()
            logger.warning(f"Booking {booking_id} cannot be accepted: {len(conflicts)} conflicting day(s)")
            raise BookingConflict(conflicts=conflicts)

        booking.status = BookingStatus.active
        if decision.price is not None:
            booking.provider_price = decision.price
        if decision.currency is not None:
            booking.currency = decision.currency.upper()
        if decision.note is not None:
            booking.provider_note = decision.note
        await db.commit()

        logger.info(f"Booking {booking_id} accepted by provider {booking.provider_id}")
        return await _fetch_booking(db, booking_id)

    @staticmethod
    async def quote_booking(
        db: AsyncSession,
        user: User,
        booking_id: int,
        decision: BookingDecision,
    ) -> Booking:
        booking = await BookingService._get_incoming(db, user, booking_id)
        BookingService._require_status(booking, (BookingStatus.pending,), "quote")
        if decision.price is None:
            raise InvalidRequest("price is required for a quote")

        booking.provider_price = decision.price
        booking.currency = (decision.currency or booking.currency or "USD").upper()
        if decision.note is not None:
            booking.provider_note = decision.note
        await db.commit()

        logger.info(f"Booking {booking_id} quoted at {booking.provider_price} {booking.currency}")
        return await _fetch_booking(db, booking_id)

    @staticmethod
    async def reject_booking(
        db: AsyncSession,
        user: User,
        booking_id: int,
        note: Optional[str] = None,
    ) -> Booking:
        booking = await BookingService._get_incoming(db, user, booking_id)
        BookingService._require_status(booking, (BookingStatus.pending,), "reject")

        booking.status = BookingStatus.rejected
        if note is not None:
            booking.provider_note = note
        BookingService._release_days(booking)
        await db.commit()

        logger.info(f"Booking {booking_id} rejected by provider {booking.provider_id}")
        return await _fetch_booking(db, booking_id)

    @staticmethod
    async def cancel_booking(db: AsyncSession, user: User, booking_id: int) -> Booking:
        booking = await _fetch_booking(db, booking_id)
        if booking is None:
            raise NotFound("Booking not found")
        if booking.requester_id != user.id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not your booking")
        BookingService._require_status(booking, HOLDING_STATUSES, "cancel")

        booking.status = BookingStatus.cancelled
        BookingService._release_days(booking)
        await db.commit()

        logger.info(f"Booking {booking_id} cancelled by user {user.id}")
        return await _fetch_booking(db, booking_id)

    @staticmethod
    async def confirm_booking(db: AsyncSession, user: User, booking_id: int) -> Booking:
        """Requester accepts the provider's quote; the days are re-checked before activation."""
        booking = await _fetch_booking(db, booking_id)
        if booking is None:
            raise NotFound("Booking not found")
        if booking.requester_id != user.id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not your booking")
        BookingService._require_status(booking, (BookingStatus.pending,), "confirm")

        await lock_provider_calendar(db, booking.provider_id)
        conflicts = await check_conflicts(
            db, booking.provider_id, booking.dates, exclude_booking_id=booking.id
        )
        if conflicts:
            await db.rollback()
            logger.warning(f"Booking {booking_id} cannot be confirmed: {len(conflicts)} conflicting day(s)")
            raise BookingConflict(conflicts=conflicts)

        booking.status = BookingStatus.active
        await db.commit()

        logger.info(f"Booking {booking_id} confirmed by user {user.id}")
        return await _fetch_booking(db, booking_id)
