"""URL Repository for the URL shortener.

This module provides the URLRepository class, the mapping store behind the
service. Following the Repository pattern, it abstracts database interactions
for creating and resolving token to target mappings.
"""

import asyncio
import logging
from contextlib import nullcontext

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.sql import text

from shortlink.core.exceptions import (
    DuplicateKeyError,
    InvalidInputError,
    NotFoundError,
    StorageError,
)
from shortlink.db.base import create_schema, get_session_factory, is_memory_url
from shortlink.db.session import read_context, transaction_context
from shortlink.models.url import URLMapping

logger = logging.getLogger(__name__)


def _is_unique_violation(error: IntegrityError) -> bool:
    message = str(error.orig if error.orig is not None else error).lower()
    return "unique constraint" in message or "duplicate key" in message


class URLRepository:
    """
    Repository for URLMapping database operations.

    One instance is created at startup and shared by every request. Each
    operation runs in its own session. An in-memory database lives on a
    single shared connection, so there operations are serialized to keep
    one request's rollback from discarding another's pending insert.
    """

    def __init__(self, engine: AsyncEngine):
        """
        Initialize the repository.

        Args:
            engine: Async engine for the backing database
        """
        self.engine = engine
        self.model_type = URLMapping
        self._session_factory = get_session_factory(engine)
        self._lock = asyncio.Lock() if is_memory_url(engine.url) else None

    def _serialized(self):
        return self._lock if self._lock is not None else nullcontext()

    async def initialize(self) -> None:
        """
        Open the database and create the mapping table if it is missing.

        Safe to call on every startup.

        Raises:
            StorageError: If the database cannot be opened or the schema cannot be created
        """
        try:
            await create_schema(self.engine)
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Error initializing mapping store: {e}")
            raise StorageError(f"Failed to initialize mapping store: {e}") from e
        logger.info(f"Mapping store ready (table '{self.model_type.__tablename__}')")

    async def save(self, token: str, target: str) -> URLMapping:
        """
        Insert a new mapping.

        Args:
            token: Unique token for the mapping
            target: The original URL, stored verbatim

        Returns:
            The created URLMapping

        Raises:
            InvalidInputError: If token or target is empty
            DuplicateKeyError: If the token already exists
            StorageError: On other database errors
        """
        if not token:
            raise InvalidInputError("token must not be empty")
        if not target:
            raise InvalidInputError("target must not be empty")

        mapping = self.model_type(token=token, target=target)
        try:
            async with self._serialized(), transaction_context(self._session_factory) as db:
                db.add(mapping)
        except IntegrityError as e:
            if _is_unique_violation(e):
                raise DuplicateKeyError(token) from e
            logger.error(f"Integrity error saving mapping for token {token}: {e}")
            raise StorageError(f"Database error saving mapping: {e}") from e
        except SQLAlchemyError as e:
            logger.error(f"Error saving mapping for token {token}: {e}")
            raise StorageError(f"Database error saving mapping: {e}") from e
        return mapping

    async def resolve(self, token: str) -> str:
        """
        Look up the target URL for a token.

        Args:
            token: The token to look up

        Returns:
            The stored target URL

        Raises:
            NotFoundError: If no mapping exists for the token
            StorageError: On database errors
        """
        if not token:
            raise NotFoundError(token)
        try:
            async with self._serialized(), read_context(self._session_factory) as db:
                query = select(self.model_type.target).where(self.model_type.token == token)
                result = await db.execute(query)
                target = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error resolving token {token}: {e}")
            raise StorageError(f"Database error resolving token: {e}") from e

        if target is None:
            raise NotFoundError(token)
        return target

    async def ping(self) -> bool:
        """Check that the database answers a trivial query."""
        try:
            async with self._serialized(), read_context(self._session_factory) as db:
                result = await db.execute(text("SELECT 1"))
                return result.scalar_one() == 1
        except SQLAlchemyError as e:
            logger.error(f"Database health check failed: {e}")
            return False

    async def close(self) -> None:
        """Release every pooled connection."""
        await self.engine.dispose()
