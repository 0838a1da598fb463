"""Database base configuration for SQLAlchemy with SQLModel.

This module provides engine construction for the async SQLAlchemy engine
behind the mapping store. It includes:
- Engine configuration per environment
- Session factory setup
- Idempotent schema creation
"""

from typing import Any, Dict, Optional, Union
import logging

from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from shortlink.core.config import settings
from shortlink.models import URLMapping  # noqa: F401  registers the table

logger = logging.getLogger(__name__)

# Mapping of environment to SQLAlchemy engine configurations
ENGINE_CONFIGS: Dict[str, Dict[str, Any]] = {
    "development": {"echo": settings.DB_ECHO, "pool_pre_ping": True},
    "staging": {"echo": False, "pool_pre_ping": True},
    "production": {"echo": False, "pool_pre_ping": True},
    "testing": {"echo": False},
}


def is_memory_url(database_url: Union[str, URL]) -> bool:
    """Whether the URL points at a private in-memory SQLite database."""
    url = make_url(database_url)
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def get_engine_config(database_url: str) -> Dict[str, Any]:
    """Get the engine configuration for the current environment and URL.

    Returns:
        Dict: Engine configuration parameters.
    """
    env = settings.ENVIRONMENT.value
    config = dict(ENGINE_CONFIGS.get(env, ENGINE_CONFIGS["development"]))

    if database_url.startswith("sqlite"):
        config["connect_args"] = {"check_same_thread": False}
    if is_memory_url(database_url):
        # Every connection to :memory: is a new database; share a single one
        config["poolclass"] = StaticPool
        config.pop("pool_pre_ping", None)
    return config


def get_engine(database_url: Optional[str] = None) -> AsyncEngine:
    """Create and configure an async SQLAlchemy engine.

    Args:
        database_url: Override for settings.DATABASE_URL

    Returns:
        AsyncEngine: Configured SQLAlchemy async engine instance.
    """
    engine_url = database_url or settings.DATABASE_URL
    engine_config = get_engine_config(engine_url)

    logger.info(f"Creating database engine with URL: {engine_url}")

    return create_async_engine(engine_url, **engine_config)


def get_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """Build the session factory bound to ``engine``."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create every registered table that does not exist yet.

    create_all checks for existing tables first, so calling this on every
    startup is safe.
    """
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
