from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ServiceBase(BaseModel):
    type: str  # tour, transfer, room, etc.
    title: str
    description: Optional[str] = None
    location: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    currency: Optional[str] = Field("USD", min_length=3, max_length=3)
    is_available: Optional[bool] = True


class ServiceCreate(ServiceBase):
    pass


class ServiceResponse(ServiceBase):
    id: int
    provider_id: int
    created_at: datetime

    class Config:
        from_attributes = True


class ServiceUpdate(BaseModel):
    type: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    is_available: Optional[bool] = None
