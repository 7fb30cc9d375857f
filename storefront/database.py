"""Database configuration and session management."""

from pathlib import Path
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, AsyncEngine
from sqlalchemy.orm import sessionmaker

from .config import config
from .catalog.models import Base
from .checkout import models as checkout_models  # noqa: F401  registers cart/order tables


def get_database_url(db_path: str = None) -> str:
    """Get database URL from path or configuration."""
    if db_path is None:
        db_path = config.database_path

    # Ensure directory exists
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    return f"sqlite+aiosqlite:///{db_path}"


def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine(db_path: str = None) -> AsyncEngine:
    """Create async database engine with foreign keys enforced."""
    url = get_database_url(db_path)
    engine = create_async_engine(url, echo=False)
    # cart lines must point at catalog products
    event.listen(engine.sync_engine, "connect", _enable_foreign_keys)
    return engine


async def init_db(engine: AsyncEngine) -> None:
    """Create catalog, cart and order tables if missing."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@asynccontextmanager
async def get_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Get async database session."""
    async_session = sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
