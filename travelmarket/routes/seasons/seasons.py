from datetime import date
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from travelmarket.core.database import get_db
from travelmarket.dependencies.auth import require_role
from travelmarket.models.user.user import User, UserRole
from travelmarket.schemas.season.season import (
    SeasonCreate, SeasonUpdate, SeasonResponse, SeasonResolveResponse
)
from travelmarket.services.seasons.season_service import SeasonService

router = APIRouter(tags=["Seasons"])


@router.get("/providers/{provider_id}/seasons", response_model=list[SeasonResponse])
async def list_provider_seasons(provider_id: int, db: AsyncSession = Depends(get_db)):
    return await SeasonService.list_for_provider(provider_id, db)


@router.get("/providers/{provider_id}/seasons/resolve", response_model=SeasonResolveResponse)
async def resolve_provider_season(
    provider_id: int,
    day: date = Query(..., alias="date"),
    db: AsyncSession = Depends(get_db)
):
    return await SeasonService.resolve_label(provider_id, day, db)


@router.post("/me/seasons", response_model=SeasonResponse, status_code=status.HTTP_201_CREATED)
async def create_season(
    data: SeasonCreate,
    user: User = Depends(require_role(UserRole.provider)),
    db: AsyncSession = Depends(get_db)
):
    return await SeasonService.create_season(user, data, db)


@router.put("/me/seasons/{season_id}", response_model=SeasonResponse)
async def update_season(
    season_id: int,
    data: SeasonUpdate,
    user: User = Depends(require_role(UserRole.provider)),
    db: AsyncSession = Depends(get_db)
):
    return await SeasonService.update_season(user, season_id, data, db)


@router.delete("/me/seasons/{season_id}")
async def delete_season(
    season_id: int,
    user: User = Depends(require_role(UserRole.provider)),
    db: AsyncSession = Depends(get_db)
):
    return await SeasonService.delete_season(user, season_id, db)
