"""Session management for database operations.

This module provides a transaction context for SQLAlchemy async sessions
with commit on success and rollback on error.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator
import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

logger = logging.getLogger(__name__)


@asynccontextmanager
async def transaction_context(
    session_factory: async_sessionmaker,
) -> AsyncGenerator[AsyncSession, None]:
    """Context manager for a database session with transaction support.

    Automatically commits on successful completion or rolls back on error.

    Yields:
        AsyncSession: SQLAlchemy async session

    Example:
        ```python
        async with transaction_context(factory) as session:
            session.add(URLMapping(token="AbC123xy", target="https://example.com"))
            # Commits automatically on context exit if no errors
        ```
    """
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def read_context(
    session_factory: async_sessionmaker,
) -> AsyncGenerator[AsyncSession, None]:
    """Session for read-only work; nothing is committed."""
    async with session_factory() as session:
        yield session
