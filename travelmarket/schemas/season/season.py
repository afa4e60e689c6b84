from pydantic import BaseModel, Field, model_validator
from typing import Optional
from datetime import date, datetime


class SeasonBase(BaseModel):
    label: str = Field("low", min_length=1, max_length=32)
    start_date: date
    end_date: date

    @model_validator(mode="after")
    def check_order(self):
        if self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self


class SeasonCreate(SeasonBase):
    pass


class SeasonUpdate(BaseModel):
    label: Optional[str] = Field(None, min_length=1, max_length=32)
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class SeasonResponse(SeasonBase):
    id: int
    provider_id: int
    created_at: datetime

    class Config:
        from_attributes = True


class SeasonResolveResponse(BaseModel):
    date: date
    label: str
