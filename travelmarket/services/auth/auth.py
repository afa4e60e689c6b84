from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import IntegrityError
from fastapi import HTTPException, status
from travelmarket.models.user.user import User, UserRole
from travelmarket.schemas.user.user import UserCreate
from travelmarket.core.config import settings
from travelmarket.core.logger import logger
from travelmarket.core.security import hash_password, verify_password, create_access_token


async def register_user(user_data: UserCreate, db: AsyncSession) -> User:
    result = await db.execute(select(User).where(User.email == user_data.email))
    if result.scalar():
        raise HTTPException(status_code=400, detail="Email already registered")

    result = await db.execute(select(User).where(User.username == user_data.username))
    if result.scalar():
        raise HTTPException(status_code=400, detail="Username already taken")

    if len(user_data.password) < settings.PASSWORD_MIN_LENGTH:
        raise HTTPException(
            status_code=400,
            detail=f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters"
        )

    new_user = User(
        email=user_data.email,
        username=user_data.username,
        hashed_password=hash_password(user_data.password),
        role=UserRole(user_data.role),
    )

    db.add(new_user)
    try:
        await db.commit()
        await db.refresh(new_user)
    except IntegrityError:
        # Race between the two lookups above and the insert
        await db.rollback()
        raise HTTPException(status_code=400, detail="Email or username already exists")

    logger.info(f"User {new_user.id} registered as {new_user.role.value}")
    return new_user


async def login_user(email: str, password: str, db: AsyncSession) -> dict:
    result = await db.execute(select(User).where(User.email == email))
    user = result.scalar()

    if not user:
        raise HTTPException(status_code=401, detail="User not registered.")

    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User is disabled")

    if not user.hashed_password or not verify_password(password, user.hashed_password):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = create_access_token(data={"sub": str(user.id), "role": user.role.value})
    return {
        "access_token": token,
        "token_type": "bearer",
        "role": user.role.value,
    }
