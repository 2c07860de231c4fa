"""
asyncpg repository tests against a live PostgreSQL database.
Requires TEST_DATABASE_URL; the posts table is truncated before each test.
"""

import os

import asyncpg
import pytest
import pytest_asyncio

from database.connection import init_database, close_database, get_db_pool
from models.post import Post
from repositories.post_repository import AsyncpgPostRepository

TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL")

pytestmark = pytest.mark.skipif(
    not TEST_DATABASE_URL,
    reason="TEST_DATABASE_URL not set - skipping PostgreSQL repository tests",
)


@pytest_asyncio.fixture
async def repository():
    await init_database(TEST_DATABASE_URL)
    async with get_db_pool().acquire() as conn:
        await conn.execute("TRUNCATE posts RESTART IDENTITY")
    yield AsyncpgPostRepository()
    await close_database()


@pytest.mark.asyncio
async def test_add_assigns_id_and_reads_back(repository):
    first = await repository.add(Post(external_id=10, title="A", body="a"))
    second = await repository.add(Post(external_id=11, user_id=3, title="B", body="b"))

    assert first.id is not None
    assert second.id > first.id
    assert await repository.get_by_id(second.id) == second
    assert [p.external_id for p in await repository.get_all()] == [10, 11]


@pytest.mark.asyncio
async def test_get_by_user_id_filters(repository):
    await repository.add(Post(external_id=1, user_id=1))
    await repository.add(Post(external_id=2, user_id=2))
    await repository.add(Post(external_id=3, user_id=1))

    posts = await repository.get_by_user_id(1)

    assert [p.external_id for p in posts] == [1, 3]


@pytest.mark.asyncio
async def test_duplicate_external_id_rejected(repository):
    await repository.add(Post(external_id=5))

    with pytest.raises(asyncpg.UniqueViolationError):
        await repository.add(Post(external_id=5))


@pytest.mark.asyncio
async def test_update_and_delete(repository):
    post = await repository.add(Post(external_id=7, title="Old"))

    post.title = "New"
    post.user_id = 9
    await repository.update(post)
    assert (await repository.get_by_id(post.id)).title == "New"

    await repository.delete(post.id)
    assert await repository.get_by_id(post.id) is None
