from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from fastapi import HTTPException

from travelmarket.core.logger import logger
from travelmarket.models.service.service_provider import Service
from travelmarket.schemas.services.service_schema import ServiceCreate, ServiceUpdate
from travelmarket.models.user.user import User

from travelmarket.services.auth.provider_profile import ProviderProfileService


class ServiceProviderService:

    @staticmethod
    async def create_service(user: User, data: ServiceCreate, db: AsyncSession) -> Service:
        provider = await ProviderProfileService.get_by_user(user, db)

        new_service = Service(provider_id=provider.id, **data.model_dump())

        db.add(new_service)
        await db.commit()
        await db.refresh(new_service)
        logger.info(f"Service {new_service.id} created for provider {provider.id}")
        return new_service

    @staticmethod
    async def list_my_services(user: User, db: AsyncSession) -> list[Service]:
        provider = await ProviderProfileService.get_by_user(user, db)
        result = await db.execute(
            select(Service).where(Service.provider_id == provider.id).order_by(Service.id)
        )
        return result.scalars().all()

    @staticmethod
    async def get_service(service_id: int, db: AsyncSession) -> Service:
        service = await db.get(Service, service_id)
        if not service:
            raise HTTPException(status_code=404, detail="Service not found")
        return service

    @staticmethod
    async def _get_own(user: User, service_id: int, db: AsyncSession) -> Service:
        provider = await ProviderProfileService.get_by_user(user, db)
        result = await db.execute(
            select(Service).where(Service.id == service_id, Service.provider_id == provider.id)
        )
        service = result.scalar_one_or_none()
        if not service:
            raise HTTPException(status_code=404, detail="Service not found")
        return service

    @staticmethod
    async def update_service(user: User, service_id: int, data: ServiceUpdate, db: AsyncSession) -> Service:
        service = await ServiceProviderService._get_own(user, service_id, db)

        update_fields = data.model_dump(exclude_unset=True)
        if not update_fields:
            raise HTTPException(status_code=400, detail="No fields provided to update.")

        for key, value in update_fields.items():
            setattr(service, key, value)

        await db.commit()
        await db.refresh(service)
        return service

    @staticmethod
    async def delete_service(user: User, service_id: int, db: AsyncSession):
        service = await ServiceProviderService._get_own(user, service_id, db)
        await db.delete(service)
        await db.commit()
        logger.info(f"Service {service_id} deleted")
        return {"message": "Service deleted successfully"}
