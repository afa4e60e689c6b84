from datetime import date, timedelta
from typing import Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from travelmarket.core.config import settings
from travelmarket.core.exceptions import InvalidRequest
from travelmarket.schemas.booking.booking import DatesSelection, RangeSelection
from travelmarket.services.availability.availability_service import booked_dates, blocked_dates

REASON_BOOKED = "booked"
REASON_BLOCKED = "blocked"


def normalize_dates(values: Iterable[date], max_days: Optional[int] = None) -> List[date]:
    days = sorted(set(values))
    if not days:
        raise InvalidRequest("At least one date is required")
    max_days = max_days or settings.MAX_BOOKING_DAYS
    if len(days) > max_days:
        raise InvalidRequest(f"A booking can cover at most {max_days} days")
    return days


def expand_range(start: date, end: date, max_days: Optional[int] = None) -> List[date]:
    """Every day from ``start`` to ``end`` inclusive."""
    if end < start:
        raise InvalidRequest("endDate must not be before startDate")
    span = (end - start).days + 1
    max_days = max_days or settings.MAX_BOOKING_DAYS
    if span > max_days:
        raise InvalidRequest(f"A booking can cover at most {max_days} days")
    return [start + timedelta(days=offset) for offset in range(span)]


def requested_days(selection) -> List[date]:
    if isinstance(selection, RangeSelection):
        return expand_range(selection.start_date, selection.end_date)
    if isinstance(selection, DatesSelection):
        return normalize_dates(selection.dates)
    raise InvalidRequest("Unsupported date selection")


def find_conflicts(
    requested: Iterable[date],
    booked: Iterable[date],
    blocked: Iterable[date],
) -> List[dict]:
    """
    requested ∩ (booked ∪ blocked), one entry per day, ordered by day.
    A day that is both booked and blocked is reported as booked.
    """
    booked_set = set(booked)
    blocked_set = set(blocked)
    conflicts = []
    for day in sorted(set(requested)):
        if day in booked_set:
            conflicts.append({"date": day, "reason": REASON_BOOKED})
        elif day in blocked_set:
            conflicts.append({"date": day, "reason": REASON_BLOCKED})
    return conflicts


async def check_conflicts(
    db: AsyncSession,
    provider_id: int,
    requested: Iterable[date],
    exclude_booking_id: Optional[int] = None,
) -> List[dict]:
    days = sorted(set(requested))
    booked = await booked_dates(db, provider_id, within=days, exclude_booking_id=exclude_booking_id)
    blocked = await blocked_dates(db, provider_id, within=days)
    return find_conflicts(days, booked, blocked)
