"""
Database.

Async SQLAlchemy engine and session factory for the SQL key-value store.
Both are created on first use, so importing the package never touches
the filesystem.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from noteku.core.logging import get_logger
from noteku.models.base import Base

logger = get_logger(__name__)

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    """Engine for the URL in database.yaml."""
    global _engine
    if _engine is None:
        from noteku.core.config import get_app_config, get_database_url

        url = get_database_url()
        _engine = create_async_engine(url, echo=get_app_config().database.echo)
        logger.debug("Database engine created", url=url)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
        )
    return _session_factory


async def init_db() -> None:
    """Create the key-value table if it does not exist yet."""
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """Close pooled connections and forget the engine."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
