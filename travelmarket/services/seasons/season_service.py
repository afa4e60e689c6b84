from datetime import date
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from travelmarket.core.config import settings
from travelmarket.core.exceptions import InvalidRequest, NotFound
from travelmarket.core.logger import logger
from travelmarket.models.season.season import ProviderSeason
from travelmarket.models.service.service_provider import ServiceProvider
from travelmarket.models.user.user import User
from travelmarket.schemas.season.season import SeasonCreate, SeasonUpdate
from travelmarket.services.auth.provider_profile import ProviderProfileService
from travelmarket.utils.seasons import find_season_overlaps, resolve_season


class SeasonService:

    @staticmethod
    async def list_for_provider(provider_id: int, db: AsyncSession) -> List[ProviderSeason]:
        if await db.get(ServiceProvider, provider_id) is None:
            raise NotFound("Provider not found")
        result = await db.execute(
            select(ProviderSeason)
            .where(ProviderSeason.provider_id == provider_id)
            .order_by(ProviderSeason.start_date, ProviderSeason.id)
        )
        return list(result.scalars().all())

    @staticmethod
    async def _ensure_no_overlap(db: AsyncSession, season: ProviderSeason) -> None:
        stmt = select(ProviderSeason).where(ProviderSeason.provider_id == season.provider_id)
        if season.id is not None:
            stmt = stmt.where(ProviderSeason.id != season.id)
        result = await db.execute(stmt)
        for other in result.scalars().all():
            if find_season_overlaps([other, season]):
                raise InvalidRequest(
                    f"Season overlaps '{other.label}' ({other.start_date}..{other.end_date})"
                )

    @staticmethod
    async def create_season(user: User, data: SeasonCreate, db: AsyncSession) -> ProviderSeason:
        provider = await ProviderProfileService.get_by_user(user, db)
        season = ProviderSeason(provider_id=provider.id, **data.model_dump())
        await SeasonService._ensure_no_overlap(db, season)

        db.add(season)
        await db.commit()
        await db.refresh(season)
        logger.info(f"Season {season.id} '{season.label}' created for provider {provider.id}")
        return season

    @staticmethod
    async def _get_own(user: User, season_id: int, db: AsyncSession) -> ProviderSeason:
        provider = await ProviderProfileService.get_by_user(user, db)
        result = await db.execute(
            select(ProviderSeason).where(
                ProviderSeason.id == season_id,
                ProviderSeason.provider_id == provider.id,
            )
        )
        season = result.scalar_one_or_none()
        if not season:
            raise NotFound("Season not found")
        return season

    @staticmethod
    async def update_season(user: User, season_id: int, data: SeasonUpdate, db: AsyncSession) -> ProviderSeason:
        season = await SeasonService._get_own(user, season_id, db)
        update_fields = data.model_dump(exclude_unset=True, exclude_none=True)
        if not update_fields:
            raise InvalidRequest("No fields provided to update.")

        for key, value in update_fields.items():
            setattr(season, key, value)
        if season.start_date > season.end_date:
            await db.rollback()
            raise InvalidRequest("start_date must not be after end_date")
        await SeasonService._ensure_no_overlap(db, season)

        await db.commit()
        await db.refresh(season)
        logger.info(f"Season {season_id} updated")
        return season

    @staticmethod
    async def delete_season(user: User, season_id: int, db: AsyncSession) -> dict:
        season = await SeasonService._get_own(user, season_id, db)
        await db.delete(season)
        await db.commit()
        logger.info(f"Season {season_id} deleted")
        return {"ok": True}

    @staticmethod
    async def resolve_label(provider_id: int, day: date, db: AsyncSession) -> dict:
        seasons = await SeasonService.list_for_provider(provider_id, db)
        label = resolve_season(day, seasons, default=settings.DEFAULT_SEASON_LABEL)
        return {"date": day, "label": label}
