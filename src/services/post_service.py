"""
Post service - synchronization with the remote source and post management
"""

import logging
from typing import List, Optional

from models.post import PostDto, PostTableDto
from repositories.post_repository import PostRepository, AsyncpgPostRepository
from services.post_mapper import PostMapper
from services.posts_source import PostsSourceClient

logger = logging.getLogger(__name__)


class PostService:
    """Service for post synchronization and management operations"""

    def __init__(
        self,
        repository: PostRepository,
        source: PostsSourceClient,
        mapper: Optional[PostMapper] = None
    ):
        self.repository = repository
        self.source = source
        self.mapper = mapper or PostMapper()

    async def fetch_and_save_posts(self) -> List[PostDto]:
        """
        Add every remote post whose id is not yet stored as an external_id

        Store errors propagate as raised; posts added before a failing
        add stay in place.

        Returns:
            The newly added posts in their remote form, in remote order
        """
        remote_posts = await self.source.fetch_posts()
        if not remote_posts:
            logger.info("Remote source returned no posts, nothing to sync")
            return []

        local_posts = await self.repository.get_all()
        known_ids = {post.external_id for post in local_posts}

        added = []
        for dto in remote_posts:
            if dto.id in known_ids:
                continue
            await self.repository.add(self.mapper.to_entity(dto))
            known_ids.add(dto.id)
            added.append(dto)

        logger.info(f"Synced posts: {len(added)} added, {len(remote_posts) - len(added)} already stored")
        return added

    async def get_all_posts(self) -> List[PostTableDto]:
        posts = await self.repository.get_all()
        return [self.mapper.to_table_dto(post) for post in posts]

    async def get_posts_by_user_id(self, user_id: int) -> List[PostTableDto]:
        posts = await self.repository.get_by_user_id(user_id)
        return [self.mapper.to_table_dto(post) for post in posts]

    async def get_post_by_id(self, post_id: int) -> Optional[PostTableDto]:
        post = await self.repository.get_by_id(post_id)
        return self.mapper.to_table_dto(post) if post else None

    async def update(self, post_id: int, dto: PostTableDto) -> Optional[PostTableDto]:
        """
        Overwrite title, body, external_id and user_id of a stored post

        Args:
            post_id: Local id of the post
            dto: New field values; dto.id is ignored

        Returns:
            The updated post, or None if no post has this id
        """
        post = await self.repository.get_by_id(post_id)
        if post is None:
            logger.warning(f"Update skipped, post {post_id} not found")
            return None

        self.mapper.apply_update(post, dto)
        await self.repository.update(post)

        logger.info(f"Updated post {post_id}")
        return self.mapper.to_table_dto(post)

    async def delete(self, post_id: int) -> bool:
        """Delete a post by local id; False if it does not exist"""
        post = await self.repository.get_by_id(post_id)
        if post is None:
            logger.warning(f"Delete skipped, post {post_id} not found")
            return False

        await self.repository.delete(post_id)

        logger.info(f"Deleted post {post_id}")
        return True


# Global service instance
_post_service = None

def get_post_service() -> PostService:
    """Get the global post service instance"""
    global _post_service
    if _post_service is None:
        _post_service = PostService(AsyncpgPostRepository(), PostsSourceClient())
    return _post_service
