"""Basic tests to verify schema setup."""

import pytest
from sqlalchemy import text

from shortlink.repositories.url_repository import URLRepository


@pytest.mark.asyncio
async def test_table_layout(url_repository):
    """The mapping table has token as primary key and target beside it."""
    async with url_repository.engine.connect() as conn:
        result = await conn.execute(text("PRAGMA table_info('urls')"))
        columns = {row[1]: row for row in result.fetchall()}

    assert set(columns) == {"token", "target"}
    # PRAGMA table_info: (cid, name, type, notnull, dflt_value, pk)
    assert columns["token"][5] == 1
    assert columns["target"][5] == 0
    assert columns["target"][3] == 1


@pytest.mark.asyncio
async def test_initialize_is_idempotent(test_engine):
    repository = URLRepository(test_engine)

    await repository.initialize()
    await repository.save("AbC123xy", "https://example.com/page")
    await repository.initialize()
    await repository.initialize()

    async with test_engine.connect() as conn:
        result = await conn.execute(
            text("SELECT COUNT(*) FROM sqlite_master WHERE type='table' AND name='urls'")
        )
        assert result.scalar_one() == 1

    assert await repository.resolve("AbC123xy") == "https://example.com/page"
