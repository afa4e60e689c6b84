from pydantic import BaseModel, Field, model_validator
from typing import Optional, List, Literal, Union, Annotated
from datetime import date, datetime
from travelmarket.models.booking.booking import BookingKind, BookingStatus


class Attachment(BaseModel):
    name: str
    content_type: Optional[str] = None
    data: str  # opaque encoded payload


class DatesSelection(BaseModel):
    kind: Literal["dates"] = "dates"
    dates: List[date] = Field(..., min_length=1)


class RangeSelection(BaseModel):
    kind: Literal["range"] = "range"
    start_date: date
    end_date: date

    @model_validator(mode="after")
    def check_order(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


BookingSelection = Annotated[Union[DatesSelection, RangeSelection], Field(discriminator="kind")]


def _pop_first(data: dict, *keys):
    value = None
    for key in keys:
        found = data.pop(key, None)
        if value is None:
            value = found
    return value


class BookingCreate(BaseModel):
    """
    Accepts the flat client body ({dates: [...]} or {startDate, endDate})
    and folds it into a tagged ``selection``.
    """
    provider_id: Optional[int] = None
    service_id: Optional[int] = None
    selection: BookingSelection
    note: Optional[str] = Field(None, max_length=2000)
    attachments: List[Attachment] = []

    @model_validator(mode="before")
    @classmethod
    def build_selection(cls, data):
        if not isinstance(data, dict) or "selection" in data:
            return data

        data = dict(data)
        dates = data.pop("dates", None)
        start = _pop_first(data, "startDate", "start_date")
        end = _pop_first(data, "endDate", "end_date")
        if data.get("note") is None and "message" in data:
            data["note"] = data.pop("message")

        if dates is not None and (start is not None or end is not None):
            raise ValueError("Provide either dates or startDate/endDate, not both")
        if dates is not None:
            data["selection"] = {"kind": "dates", "dates": dates}
        elif start is not None or end is not None:
            data["selection"] = {"kind": "range", "start_date": start, "end_date": end}
        else:
            raise ValueError("dates or startDate/endDate required")
        return data


class ConflictItem(BaseModel):
    date: date
    reason: Literal["booked", "blocked"]


class ConflictCheckResponse(BaseModel):
    available: bool
    conflicts: List[ConflictItem]


class BookingResponse(BaseModel):
    id: int
    provider_id: int
    service_id: Optional[int] = None
    requester_id: int
    kind: BookingKind
    status: BookingStatus
    start_date: date
    end_date: date
    dates: List[date]
    note: Optional[str] = None
    attachments: List[Attachment] = []
    provider_price: Optional[float] = None
    currency: Optional[str] = None
    provider_note: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class BookingDecision(BaseModel):
    price: Optional[float] = Field(None, ge=0)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    note: Optional[str] = None


class BookingReject(BaseModel):
    note: Optional[str] = None
