from sqlalchemy.ext.asyncio import AsyncSession
from travelmarket.models.user.user import User
from fastapi import HTTPException
from sqlalchemy.future import select
from travelmarket.core.logger import logger
from travelmarket.models.service.service_provider import ServiceProvider
from travelmarket.schemas.user.user import ProviderProfileCreate


class ProviderProfileService:

    @staticmethod
    async def create_or_update(user: User, data: ProviderProfileCreate, db: AsyncSession) -> ServiceProvider:
        result = await db.execute(
            select(ServiceProvider).where(ServiceProvider.user_id == user.id)
        )
        provider = result.scalar_one_or_none()

        if provider:
            for key, value in data.model_dump(exclude_unset=True).items():
                setattr(provider, key, value)
        else:
            provider = ServiceProvider(user_id=user.id, **data.model_dump())
            db.add(provider)

        await db.commit()
        await db.refresh(provider)
        logger.info(f"Provider profile {provider.id} saved for user {user.id}")
        return provider

    @staticmethod
    async def get_by_user(user: User, db: AsyncSession) -> ServiceProvider:
        result = await db.execute(
            select(ServiceProvider).where(ServiceProvider.user_id == user.id)
        )
        provider = result.scalar_one_or_none()

        if not provider:
            raise HTTPException(status_code=404, detail="Provider profile not found")

        return provider
