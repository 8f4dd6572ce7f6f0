# bike_inventory/core/database.py

"""
Database connection and session management.

- Creates the SQLModel async engine (one pool per process).
- Provides the request-scoped session generator used by FastAPI dependencies.
- Provides a standalone session context manager for ARQ tasks and scripts.
- Creates tables at startup in development (Alembic is used otherwise).
"""

import logging
from typing import AsyncGenerator, Any, Dict
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine
from sqlalchemy.orm import sessionmaker

from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from bike_inventory.core.config import settings

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> Dict[str, Any]:
    """Pool options; SQLite (tests, local runs) uses its own pool classes."""
    options: Dict[str, Any] = {"echo": settings.DEBUG_MODE, "future": True}
    if not url.startswith("sqlite"):
        options.update(
            pool_recycle=3600,  # recycle connections hourly
            pool_size=10,
            max_overflow=20,
            pool_pre_ping=True,
        )
    return options


DATABASE_URL = settings.DATABASE_URL.get_secret_value()

engine: AsyncEngine = create_async_engine(DATABASE_URL, **_engine_options(DATABASE_URL))

# session factory; expire_on_commit=False keeps attributes readable after commit
AsyncSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

metadata = SQLModel.metadata


# =============================================================================
# Table creation (development)
# =============================================================================
async def create_db_and_tables() -> None:
    """
    Creates every table registered on SQLModel.metadata.
    Existing tables are left untouched.
    """
    # all domain models must be imported before create_all
    from bike_inventory.domains import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database tables created (or already present).")


# =============================================================================
# Session dependencies
# =============================================================================
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Async session generator for FastAPI dependency injection.
    One session per request; the session is closed (and its connection
    returned to the pool) when the request finishes.
    """
    async with AsyncSessionLocal() as session:
        yield session


@asynccontextmanager
async def get_async_session_context() -> AsyncGenerator[AsyncSession, None]:
    """
    Standalone session for ARQ tasks and scripts.
    Commits on success, rolls back on error.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
