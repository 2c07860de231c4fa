"""
Post API routes
Synchronization with the remote source plus read, update and delete of stored posts.
Store and upstream failures propagate to the centralized exception handlers.
"""

import logging
from typing import List
from fastapi import APIRouter, HTTPException, Depends

from models.post import PostTableDto, PostSyncResponse, PostDeleteResponse
from services.post_service import PostService, get_post_service

router = APIRouter()
logger = logging.getLogger(__name__)

@router.post("/sync", response_model=PostSyncResponse)
async def sync_posts(post_service: PostService = Depends(get_post_service)):
    """Fetch remote posts and store the ones not seen before"""
    added = await post_service.fetch_and_save_posts()
    return PostSyncResponse(added_count=len(added), posts=added)

@router.get("", response_model=List[PostTableDto])
async def list_posts(post_service: PostService = Depends(get_post_service)):
    """List all stored posts"""
    return await post_service.get_all_posts()

@router.get("/user/{user_id}", response_model=List[PostTableDto])
async def list_posts_by_user(
    user_id: int,
    post_service: PostService = Depends(get_post_service)
):
    """List stored posts owned by a user"""
    return await post_service.get_posts_by_user_id(user_id)

@router.get("/{post_id}", response_model=PostTableDto)
async def get_post(
    post_id: int,
    post_service: PostService = Depends(get_post_service)
):
    post = await post_service.get_post_by_id(post_id)
    if post is None:
        raise HTTPException(status_code=404, detail="Post not found")
    return post

@router.put("/{post_id}", response_model=PostTableDto)
async def update_post(
    post_id: int,
    request: PostTableDto,
    post_service: PostService = Depends(get_post_service)
):
    """Overwrite title, body, external_id and user_id of a post"""
    updated = await post_service.update(post_id, request)
    if updated is None:
        raise HTTPException(status_code=404, detail="Post not found")
    return updated

@router.delete("/{post_id}", response_model=PostDeleteResponse)
async def delete_post(
    post_id: int,
    post_service: PostService = Depends(get_post_service)
):
    deleted = await post_service.delete(post_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Post not found")
    return PostDeleteResponse(
        message="Post deleted successfully",
        deleted_post_id=post_id
    )
