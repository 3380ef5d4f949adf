"""Async database engine, session dependency, and startup schema setup."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncGenerator
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from intake import models  # noqa: F401  # register tables on SQLModel.metadata
from intake.core.config import PROJECT_ROOT, settings
from intake.core.logging import get_logger

logger = get_logger(__name__)

ALEMBIC_INI = PROJECT_ROOT / "alembic.ini"

engine = create_async_engine(settings.database_url, echo=settings.db_echo, pool_pre_ping=True)
async_session_maker = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a request-scoped session; uncommitted work is rolled back on exit."""
    async with async_session_maker() as session:
        yield session


def _ensure_sqlite_directory(database_url: str) -> None:
    url = make_url(database_url)
    if not url.get_backend_name().startswith("sqlite"):
        return
    database = url.database or ""
    if not database or database == ":memory:":
        return
    Path(database).expanduser().resolve().parent.mkdir(parents=True, exist_ok=True)


def _alembic_config() -> Config:
    config = Config(str(ALEMBIC_INI))
    config.set_main_option("script_location", str(PROJECT_ROOT / "migrations"))
    return config


async def init_db() -> None:
    """Prepare the schema: Alembic upgrade when enabled, otherwise ``create_all``."""
    _ensure_sqlite_directory(settings.database_url)
    if settings.db_auto_migrate:
        logger.info("db.migrate.start", extra={"revision": "head"})
        # env.py drives its own event loop, so run the upgrade off this one.
        await asyncio.to_thread(command.upgrade, _alembic_config(), "head")
        logger.info("db.migrate.complete")
        return
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("db.create_all.complete")
