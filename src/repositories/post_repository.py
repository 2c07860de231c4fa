"""
Post persistence: repository interface and its asyncpg implementation
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

import asyncpg

from database.connection import get_db_pool
from models.post import Post

logger = logging.getLogger(__name__)

POST_COLUMNS = "id, external_id, user_id, title, body"


class PostRepository(ABC):
    """Persistence gateway for posts"""

    @abstractmethod
    async def get_all(self) -> List[Post]:
        ...

    @abstractmethod
    async def get_by_id(self, post_id: int) -> Optional[Post]:
        ...

    @abstractmethod
    async def get_by_user_id(self, user_id: int) -> List[Post]:
        ...

    @abstractmethod
    async def add(self, post: Post) -> Post:
        """Insert a post and return it with the store-assigned id"""
        ...

    @abstractmethod
    async def update(self, post: Post) -> None:
        ...

    @abstractmethod
    async def delete(self, post_id: int) -> None:
        ...


class AsyncpgPostRepository(PostRepository):
    """PostgreSQL-backed repository using the shared asyncpg pool"""

    def __init__(self, pool: Optional[asyncpg.Pool] = None):
        self._pool = pool

    @property
    def pool(self) -> asyncpg.Pool:
        pool = self._pool or get_db_pool()
        if pool is None:
            raise RuntimeError("Database pool is not initialized")
        return pool

    @staticmethod
    def _to_post(row: asyncpg.Record) -> Post:
        return Post(**dict(row))

    async def get_all(self) -> List[Post]:
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(f"SELECT {POST_COLUMNS} FROM posts ORDER BY id")
        return [self._to_post(row) for row in rows]

    async def get_by_id(self, post_id: int) -> Optional[Post]:
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(
                f"SELECT {POST_COLUMNS} FROM posts WHERE id = $1",
                post_id
            )
        return self._to_post(row) if row else None

    async def get_by_user_id(self, user_id: int) -> List[Post]:
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(
                f"SELECT {POST_COLUMNS} FROM posts WHERE user_id = $1 ORDER BY id",
                user_id
            )
        return [self._to_post(row) for row in rows]

    async def add(self, post: Post) -> Post:
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(f"""
                INSERT INTO posts (external_id, user_id, title, body)
                VALUES ($1, $2, $3, $4)
                RETURNING {POST_COLUMNS}
            """,
            post.external_id, post.user_id, post.title, post.body)
        logger.debug(f"Inserted post {row['id']} (external_id={post.external_id})")
        return self._to_post(row)

    async def update(self, post: Post) -> None:
        async with self.pool.acquire() as conn:
            await conn.execute("""
                UPDATE posts
                SET external_id = $2, user_id = $3, title = $4, body = $5
                WHERE id = $1
            """,
            post.id, post.external_id, post.user_id, post.title, post.body)

    async def delete(self, post_id: int) -> None:
        async with self.pool.acquire() as conn:
            await conn.execute("DELETE FROM posts WHERE id = $1", post_id)
