from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import NullPool
from travelmarket.core.config import settings

db_url = settings.DATABASE_URL


def _engine_options(url: str) -> dict:
    # aiosqlite connections must not outlive the event loop that opened them
    if url.startswith("sqlite"):
        return {"poolclass": NullPool, "connect_args": {"timeout": 30}}
    return {
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_pre_ping": True,
    }


# One engine (and pool) per process, disposed on shutdown.
engine = create_async_engine(db_url, echo=settings.DB_ECHO, **_engine_options(db_url))
SessionLocal = sessionmaker(
    bind=engine,
    expire_on_commit=False,
    class_=AsyncSession
)

Base = declarative_base()


async def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        await db.close()


async def close_db():
    await engine.dispose()
