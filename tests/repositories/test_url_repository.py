"""Tests for the URL repository."""

import asyncio
from unittest.mock import patch

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from shortlink.core.exceptions import (
    DuplicateKeyError,
    InvalidInputError,
    NotFoundError,
    StorageError,
)
from shortlink.db.base import get_engine
from shortlink.repositories.url_repository import URLRepository
from tests.utils import random_url


async def count_rows(repository: URLRepository) -> int:
    async with repository.engine.connect() as conn:
        result = await conn.execute(text("SELECT COUNT(*) FROM urls"))
        return result.scalar_one()


@pytest.mark.repository
class TestURLRepository:
    """Test suite for the mapping store."""

    @pytest.mark.asyncio
    async def test_save_and_resolve(self, url_repository):
        target = random_url()

        mapping = await url_repository.save("AbC123xy", target)

        assert mapping.token == "AbC123xy"
        assert mapping.target == target
        assert await url_repository.resolve("AbC123xy") == target

    @pytest.mark.asyncio
    async def test_target_is_stored_verbatim(self, url_repository):
        target = "  HTTPS://Example.COM/a b?q=1&q=2#Frag  "

        await url_repository.save("verbatim", target)

        assert await url_repository.resolve("verbatim") == target

    @pytest.mark.asyncio
    async def test_save_duplicate_token(self, url_repository):
        first_target = random_url()
        await url_repository.save("duplicat", first_target)

        with pytest.raises(DuplicateKeyError) as excinfo:
            await url_repository.save("duplicat", random_url())

        assert excinfo.value.token == "duplicat"
        assert await url_repository.resolve("duplicat") == first_target
        assert await count_rows(url_repository) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token,target", [("", "https://example.com"), ("AbC123xy", "")])
    async def test_save_rejects_empty_values(self, url_repository, token, target):
        with pytest.raises(InvalidInputError):
            await url_repository.save(token, target)

        assert await count_rows(url_repository) == 0

    @pytest.mark.asyncio
    async def test_resolve_unknown_token(self, url_repository):
        with pytest.raises(NotFoundError) as excinfo:
            await url_repository.resolve("doesNotExist")

        assert excinfo.value.token == "doesNotExist"

    @pytest.mark.asyncio
    async def test_resolve_empty_token(self, url_repository):
        with pytest.raises(NotFoundError):
            await url_repository.resolve("")

    @pytest.mark.asyncio
    async def test_tokens_are_case_sensitive(self, url_repository):
        await url_repository.save("AbC123xy", "https://example.com/upper")

        with pytest.raises(NotFoundError):
            await url_repository.resolve("abc123xy")

    @pytest.mark.asyncio
    async def test_ping(self, url_repository):
        assert await url_repository.ping() is True

    @pytest.mark.asyncio
    async def test_concurrent_saves_survive_duplicate_rollbacks(self, url_repository):
        for i in range(50):
            await url_repository.save(f"dup{i:05d}", random_url())

        saves = []
        for i in range(50):
            saves.append(url_repository.save(f"new{i:05d}", f"https://example.com/{i}"))
            saves.append(url_repository.save(f"dup{i:05d}", random_url()))
        results = await asyncio.gather(*saves, return_exceptions=True)

        for i in range(50):
            assert not isinstance(results[2 * i], Exception)
            assert isinstance(results[2 * i + 1], DuplicateKeyError)
            assert await url_repository.resolve(f"new{i:05d}") == f"https://example.com/{i}"
        assert await count_rows(url_repository) == 100

    @pytest.mark.asyncio
    async def test_file_database_is_not_serialized(self, tmp_path):
        database_url = f"sqlite+aiosqlite:///{tmp_path}/urls.db"
        repository = URLRepository(get_engine(database_url))
        try:
            assert repository._lock is None
        finally:
            await repository.close()


@pytest.mark.repository
class TestURLRepositoryErrorHandling:
    """Tests for error handling in the mapping store."""

    @pytest.mark.asyncio
    async def test_initialize_unopenable_database(self, tmp_path):
        engine = get_engine(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'urls.db'}")
        repository = URLRepository(engine)

        try:
            with pytest.raises(StorageError):
                await repository.initialize()
        finally:
            await repository.close()

    @pytest.mark.asyncio
    async def test_resolve_database_error(self, url_repository):
        with patch(
            "sqlalchemy.ext.asyncio.AsyncSession.execute",
            side_effect=SQLAlchemyError("Test database error"),
        ):
            with pytest.raises(StorageError) as excinfo:
                await url_repository.resolve("AbC123xy")

        assert "Test database error" in str(excinfo.value)

    @pytest.mark.asyncio
    async def test_save_database_error_is_not_a_duplicate(self, url_repository):
        failure = OperationalError("INSERT INTO urls", {}, Exception("disk I/O error"))

        with patch("sqlalchemy.ext.asyncio.AsyncSession.commit", side_effect=failure):
            with pytest.raises(StorageError) as excinfo:
                await url_repository.save("AbC123xy", random_url())

        assert not isinstance(excinfo.value, DuplicateKeyError)
        assert await count_rows(url_repository) == 0

    @pytest.mark.asyncio
    async def test_ping_reports_failure(self, url_repository):
        with patch(
            "sqlalchemy.ext.asyncio.AsyncSession.execute",
            side_effect=SQLAlchemyError("Test database error"),
        ):
            assert await url_repository.ping() is False
