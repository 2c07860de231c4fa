"""
Post-related Pydantic models
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class Post(BaseModel):
    """Stored post row"""
    id: Optional[int] = None
    external_id: int
    user_id: Optional[int] = None
    title: str = ""
    body: str = ""


class PostDto(BaseModel):
    """Post as published by the remote source; id is the remote identifier"""
    model_config = ConfigDict(extra="ignore")

    id: int
    title: str = ""
    body: str = ""


class PostTableDto(BaseModel):
    """Post as read and updated through the API"""
    id: Optional[int] = Field(None, description="Local id; ignored on update")
    external_id: int
    title: str = ""
    body: str = ""
    user_id: Optional[int] = None


class PostSyncResponse(BaseModel):
    """Response model for a synchronization run"""
    added_count: int
    posts: List[PostDto]


class PostDeleteResponse(BaseModel):
    message: str
    deleted_post_id: int
