from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from travelmarket.core.database import get_db
from travelmarket.schemas.availability.availability import AvailabilityResponse
from travelmarket.services.availability.availability_service import get_availability

router = APIRouter(tags=["Availability"])


@router.get("/availability", response_model=AvailabilityResponse)
async def read_availability(
    service_id: Optional[int] = Query(None, alias="serviceId"),
    provider_id: Optional[int] = Query(None, alias="providerId"),
    db: AsyncSession = Depends(get_db)
):
    return await get_availability(db, provider_id=provider_id, service_id=service_id)


@router.get("/providers/{provider_id}/calendar", response_model=AvailabilityResponse)
async def read_provider_calendar(provider_id: int, db: AsyncSession = Depends(get_db)):
    return await get_availability(db, provider_id=provider_id)
