import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from regional_blog.config import settings

logger = logging.getLogger(__name__)


def _engine_options() -> dict:
    if settings.environment == "production":
        return {"pool_size": 20, "max_overflow": 30, "pool_timeout": 30, "pool_recycle": 1800}
    return {"echo": settings.debug, "pool_pre_ping": True}


engine = create_async_engine(settings.database_url, **_engine_options())

# Request sessions come from get_db; best-effort tracking opens its own
# sessions from the same factory since it outlives the request.
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    autoflush=False,
    expire_on_commit=False,
)

Base = declarative_base()


async def get_db():
    async with AsyncSessionLocal() as db:
        try:
            yield db
        except Exception as e:
            logger.error(f"Database session error: {e}")
            await db.rollback()
            raise
