from datetime import date
from typing import Iterable, List, Optional, Sequence

from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from travelmarket.core.exceptions import InvalidRequest, NotFound, ServiceUnavailable
from travelmarket.core.logger import logger
from travelmarket.models.booking.blocked_date import ProviderBlockedDate
from travelmarket.models.booking.booking import Booking, BookingDate, BookingStatus, HOLDING_STATUSES
from travelmarket.models.service.service_provider import Service, ServiceProvider

# First key of the two-key postgres advisory lock; the provider id is the second.
CALENDAR_LOCK_NAMESPACE = 4201


async def lock_provider_calendar(db: AsyncSession, provider_id: int) -> None:
    """Serialize check-and-write on one provider calendar until the transaction ends."""
    if db.bind.dialect.name == "postgresql":
        await db.execute(
            text("SELECT pg_advisory_xact_lock(:ns, :pid)"),
            {"ns": CALENDAR_LOCK_NAMESPACE, "pid": provider_id},
        )


async def resolve_provider_id(
    db: AsyncSession,
    provider_id: Optional[int] = None,
    service_id: Optional[int] = None,
) -> int:
    """Resolve the provider whose calendar a request targets.

    A service id resolves to its owning provider. When both ids are given
    they must agree.
    """
    if provider_id is None and service_id is None:
        raise InvalidRequest("providerId or serviceId required")

    if service_id is not None:
        owner_id = await db.scalar(select(Service.provider_id).where(Service.id == service_id))
        if owner_id is None:
            raise NotFound("Service not found")
        if provider_id is not None and provider_id != owner_id:
            raise InvalidRequest("serviceId does not belong to providerId")
        return owner_id

    exists = await db.scalar(select(ServiceProvider.id).where(ServiceProvider.id == provider_id))
    if exists is None:
        raise NotFound("Provider not found")
    return provider_id


async def booked_dates(
    db: AsyncSession,
    provider_id: int,
    within: Optional[Iterable[date]] = None,
    exclude_booking_id: Optional[int] = None,
    statuses: Sequence[BookingStatus] = HOLDING_STATUSES,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> List[date]:
    """Distinct days referenced by the provider's bookings in ``statuses``."""
    stmt = (
        select(BookingDate.day)
        .join(Booking, Booking.id == BookingDate.booking_id)
        .where(Booking.provider_id == provider_id, Booking.status.in_(list(statuses)))
    )
    if within is not None:
        stmt = stmt.where(BookingDate.day.in_(list(within)))
    if exclude_booking_id is not None:
        stmt = stmt.where(Booking.id != exclude_booking_id)
    if date_from is not None:
        stmt = stmt.where(BookingDate.day >= date_from)
    if date_to is not None:
        stmt = stmt.where(BookingDate.day <= date_to)

    result = await db.execute(stmt.distinct().order_by(BookingDate.day))
    return list(result.scalars().all())


async def blocked_dates(
    db: AsyncSession,
    provider_id: int,
    within: Optional[Iterable[date]] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> List[date]:
    """Distinct manual blackout days of the provider."""
    stmt = select(ProviderBlockedDate.day).where(ProviderBlockedDate.provider_id == provider_id)
    if within is not None:
        stmt = stmt.where(ProviderBlockedDate.day.in_(list(within)))
    if date_from is not None:
        stmt = stmt.where(ProviderBlockedDate.day >= date_from)
    if date_to is not None:
        stmt = stmt.where(ProviderBlockedDate.day <= date_to)

    result = await db.execute(stmt.distinct().order_by(ProviderBlockedDate.day))
    return list(result.scalars().all())


async def get_availability(
    db: AsyncSession,
    provider_id: Optional[int] = None,
    service_id: Optional[int] = None,
) -> dict:
    """Booked and blocked days of a provider (or of the provider owning a service)."""
    try:
        pid = await resolve_provider_id(db, provider_id=provider_id, service_id=service_id)
        booked = await booked_dates(db, pid)
        blocked = await blocked_dates(db, pid)
    except SQLAlchemyError as e:
        logger.error(f"Availability read failed for provider={provider_id} service={service_id}: {e}")
        raise ServiceUnavailable() from e

    logger.info(f"Availability for provider {pid}: {len(booked)} booked, {len(blocked)} blocked")
    return {"booked": booked, "blocked": blocked}
