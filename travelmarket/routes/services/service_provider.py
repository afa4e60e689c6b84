from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from travelmarket.core.database import get_db
from travelmarket.dependencies.auth import require_role
from travelmarket.models.user.user import User, UserRole
from travelmarket.schemas.services.service_schema import ServiceCreate, ServiceUpdate, ServiceResponse
from travelmarket.services.service.provider_Service import ServiceProviderService


router = APIRouter(prefix="/me/services", tags=["Provider Services"])
public_router = APIRouter(prefix="/services", tags=["Services"])


@router.post("", response_model=ServiceResponse, status_code=status.HTTP_201_CREATED)
async def create_service(
    data: ServiceCreate,
    user: User = Depends(require_role(UserRole.provider)),
    db: AsyncSession = Depends(get_db)
):
    return await ServiceProviderService.create_service(user, data, db)


@router.get("", response_model=list[ServiceResponse])
async def list_my_services(
    user: User = Depends(require_role(UserRole.provider)),
    db: AsyncSession = Depends(get_db)
):
    return await ServiceProviderService.list_my_services(user, db)


@router.put("/{service_id}", response_model=ServiceResponse)
async def update_service(
    service_id: int,
    data: ServiceUpdate,
    user: User = Depends(require_role(UserRole.provider)),
    db: AsyncSession = Depends(get_db)
):
    return await ServiceProviderService.update_service(user, service_id, data, db)


@router.delete("/{service_id}")
async def delete_service(
    service_id: int,
    user: User = Depends(require_role(UserRole.provider)),
    db: AsyncSession = Depends(get_db)
):
    return await ServiceProviderService.delete_service(user, service_id, db)


@public_router.get("/{service_id}", response_model=ServiceResponse)
async def get_service(service_id: int, db: AsyncSession = Depends(get_db)):
    return await ServiceProviderService.get_service(service_id, db)
