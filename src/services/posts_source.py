"""
HTTP client for the remote posts source
"""

import logging
from typing import List, Optional

import httpx

from config.settings import POSTS_SOURCE_URL, POSTS_SOURCE_TIMEOUT
from models.post import PostDto

logger = logging.getLogger(__name__)


class PostsSourceClient:
    """
    Fetches the published post list from the remote source.

    An httpx.AsyncClient may be injected (tests pass one built on
    httpx.MockTransport); otherwise a client is opened per fetch.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None
    ):
        self.url = url or POSTS_SOURCE_URL
        self.client = client
        self.timeout = timeout if timeout is not None else POSTS_SOURCE_TIMEOUT

    async def fetch_posts(self) -> List[PostDto]:
        """
        Fetch all remote posts

        Returns:
            List of PostDto, empty when the response body is empty or null

        Raises:
            httpx.HTTPStatusError: on a non-2xx response
            ValueError: if the body is not a JSON array
        """
        logger.info(f"Fetching posts from {self.url}")

        if self.client is not None:
            response = await self.client.get(self.url)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(self.url)

        response.raise_for_status()
        posts = self._parse(response)

        logger.info(f"Fetched {len(posts)} posts from source")
        return posts

    @staticmethod
    def _parse(response: httpx.Response) -> List[PostDto]:
        if not response.content or not response.content.strip():
            return []

        data = response.json()
        if data is None:
            return []
        if not isinstance(data, list):
            raise ValueError(f"Unexpected posts response format: {type(data).__name__}")

        return [PostDto.model_validate(item) for item in data]
