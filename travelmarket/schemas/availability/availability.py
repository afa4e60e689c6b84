from pydantic import BaseModel
from typing import List
from datetime import date


class AvailabilityResponse(BaseModel):
    booked: List[date]
    blocked: List[date]


class CalendarDay(BaseModel):
    date: date


class BlockedDatesUpdate(BaseModel):
    dates: List[date] = []


class BlockedDatesSaved(BaseModel):
    ok: bool = True
    count: int
