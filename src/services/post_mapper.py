"""
Conversions between remote post records, API records and stored posts
"""

from models.post import Post, PostDto, PostTableDto


class PostMapper:
    """Maps post shapes across the remote source, storage and API boundaries"""

    def to_entity(self, dto: PostDto) -> Post:
        """Remote record -> new entity. The remote id becomes external_id; the local id is left for the store."""
        return Post(external_id=dto.id, title=dto.title, body=dto.body)

    def to_dto(self, post: Post) -> PostDto:
        return PostDto(id=post.external_id, title=post.title, body=post.body)

    def to_table_dto(self, post: Post) -> PostTableDto:
        return PostTableDto(
            id=post.id,
            external_id=post.external_id,
            title=post.title,
            body=post.body,
            user_id=post.user_id
        )

    def apply_update(self, post: Post, dto: PostTableDto) -> Post:
        """Overwrite the mutable fields of post in place; post.id is never touched"""
        post.title = dto.title
        post.body = dto.body
        post.external_id = dto.external_id
        post.user_id = dto.user_id
        return post
