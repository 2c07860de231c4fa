"""
pytest configuration and shared test doubles
In-memory repository and mock HTTP transport; no database or network needed.
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import asyncpg
import httpx
import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from models.post import Post
from repositories.post_repository import PostRepository
from services.post_mapper import PostMapper
from services.posts_source import PostsSourceClient

SOURCE_URL = "https://posts.example.test/posts"


class InMemoryPostRepository(PostRepository):
    """List-backed repository enforcing the external_id unique constraint"""

    def __init__(self, posts: Optional[List[Post]] = None):
        self._rows: List[Post] = []
        self._next_id = 1
        self.add_calls = 0
        self.update_calls = 0
        self.delete_calls = 0
        for post in posts or []:
            self._rows.append(post.model_copy())
            self._next_id = max(self._next_id, (post.id or 0) + 1)

    def _check_unique(self, external_id: int, own_id: Optional[int] = None):
        for row in self._rows:
            if row.external_id == external_id and row.id != own_id:
                raise asyncpg.UniqueViolationError(
                    'duplicate key value violates unique constraint "posts_external_id_key"'
                )

    async def get_all(self) -> List[Post]:
        return [row.model_copy() for row in self._rows]

    async def get_by_id(self, post_id: int) -> Optional[Post]:
        for row in self._rows:
            if row.id == post_id:
                return row.model_copy()
        return None

    async def get_by_user_id(self, user_id: int) -> List[Post]:
        return [row.model_copy() for row in self._rows if row.user_id == user_id]

    async def add(self, post: Post) -> Post:
        self.add_calls += 1
        self._check_unique(post.external_id)
        stored = post.model_copy(update={"id": self._next_id})
        self._next_id += 1
        self._rows.append(stored)
        return stored.model_copy()

    async def update(self, post: Post) -> None:
        self.update_calls += 1
        self._check_unique(post.external_id, own_id=post.id)
        self._rows = [post.model_copy() if row.id == post.id else row for row in self._rows]

    async def delete(self, post_id: int) -> None:
        self.delete_calls += 1
        self._rows = [row for row in self._rows if row.id != post_id]


def make_source(payload: Optional[List[Dict[str, Any]]], status_code: int = 200) -> PostsSourceClient:
    """PostsSourceClient answering every request with payload; None means an empty body"""

    def handler(request: httpx.Request) -> httpx.Response:
        if payload is None:
            return httpx.Response(status_code)
        return httpx.Response(status_code, json=payload)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return PostsSourceClient(url=SOURCE_URL, client=client)


@pytest.fixture
def source_factory():
    return make_source


@pytest.fixture
def mapper():
    return PostMapper()


@pytest.fixture
def stored_posts():
    """Two stored posts for users 1 and 2"""
    return [
        Post(id=1, external_id=1, user_id=1, title="Post 1", body="Body 1"),
        Post(id=2, external_id=2, user_id=2, title="Post 2", body="Body 2"),
    ]


@pytest.fixture
def memory_repository(stored_posts):
    return InMemoryPostRepository(stored_posts)
