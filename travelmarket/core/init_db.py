from travelmarket.core.database import engine, Base
from travelmarket.core.logger import logger
import travelmarket.models  # noqa: F401  registers every table on Base.metadata


async def init_db():
    """Create missing tables. Runs once at startup, before any request."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ready")
