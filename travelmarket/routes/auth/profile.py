from fastapi import APIRouter, Depends

from travelmarket.dependencies.auth import get_current_user, require_role
from travelmarket.core.database import get_db
from sqlalchemy.ext.asyncio import AsyncSession

from travelmarket.models.user.user import User, UserRole
from travelmarket.schemas.user.user import UserOut, ProviderProfileCreate, ProviderProfileResponse
from travelmarket.services.auth.provider_profile import ProviderProfileService

router = APIRouter(prefix="/me", tags=["Profile"])


@router.get("", response_model=UserOut)
async def get_my_profile(current_user: User = Depends(get_current_user)):
    return current_user


@router.post("/provider-profile", response_model=ProviderProfileResponse)
async def setup_profile(
    data: ProviderProfileCreate,
    user: User = Depends(require_role(UserRole.provider)),
    db: AsyncSession = Depends(get_db)
):
    return await ProviderProfileService.create_or_update(user, data, db)


@router.get("/provider-profile", response_model=ProviderProfileResponse)
async def get_my_provider_profile(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_role(UserRole.provider))
):
    return await ProviderProfileService.get_by_user(user, db)
