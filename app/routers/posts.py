# =============================================================================
# app/routers/posts.py - Post and Like Endpoints
# =============================================================================
# Post creation, deletion, lookup, listings, and likes.
# All endpoints require authentication.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path

from app.auth import get_current_user, AuthUser
from core.services.post_service import PostService
from core.models.post import (
    AuthoredPostSummary,
    MessageResponse,
    PostCreate,
    PostResponse,
    PostSummary,
    PostWithComments,
)

router = APIRouter()

PostId = Annotated[UUID, Path(description="Post UUID")]


# =============================================================================
# Posts
# =============================================================================

@router.post("/posts", response_model=PostResponse)
def create_post(
    request: PostCreate,
    user: AuthUser = Depends(get_current_user),
):
    """Create a post authored by the caller."""
    return PostService.create_post(request.title, request.description, user.email)


@router.delete("/posts/{post_id}", response_model=MessageResponse)
def delete_post(
    post_id: PostId,
    user: AuthUser = Depends(get_current_user),
):
    """
    Delete a post.

    Only the author may delete a post; anyone else gets 401.
    """
    return PostService.delete_post(post_id, user.email)


@router.get("/posts/{post_id}", response_model=PostSummary)
def get_post(
    post_id: PostId,
    user: AuthUser = Depends(get_current_user),
):
    """Get a post with its like and comment counts."""
    return PostService.get_post_summary(post_id)


@router.get("/posts", response_model=list[PostWithComments])
def list_posts(
    user: AuthUser = Depends(get_current_user),
):
    """List every post with its comments."""
    return PostService.list_posts()


@router.get("/all_posts", response_model=list[AuthoredPostSummary])
def list_my_posts(
    user: AuthUser = Depends(get_current_user),
):
    """List the caller's own posts, newest first."""
    return PostService.list_author_posts(user.email)


# =============================================================================
# Likes
# =============================================================================

@router.post("/like/{post_id}", response_model=PostResponse)
def like_post(
    post_id: PostId,
    user: AuthUser = Depends(get_current_user),
):
    """
    Like a post.

    Liking the same post twice returns 400 ALREADY_LIKED.
    """
    return PostService.like_post(post_id, user.email)


@router.post("/unlike/{post_id}", response_model=PostResponse)
def unlike_post(
    post_id: PostId,
    user: AuthUser = Depends(get_current_user),
):
    """
    Remove your like from a post.

    Unliking a post you haven't liked returns 400 NOT_LIKED.
    """
    return PostService.unlike_post(post_id, user.email)
