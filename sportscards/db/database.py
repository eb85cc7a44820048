"""
Database engine and session management.

The default engine is bound to settings.database_url when this module is
first imported. Other databases (tests, alternative configs) get their own
session factory from create_session_factory().
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from sportscards.config import settings
from sportscards.models.db import Base


def create_engine_for(database_url: str, echo: bool = False) -> AsyncEngine:
    return create_async_engine(database_url, echo=echo, pool_pre_ping=True)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Sessions keep loaded documents readable after commit."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


engine = create_engine_for(settings.database_url, echo=settings.debug)
async_session_factory = create_session_factory(engine)


async def init_db(target: AsyncEngine | None = None) -> None:
    """
    Create the document tables if they do not exist.

    Args:
        target: Engine to initialize (defaults to the configured engine)
    """
    async with (target or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
