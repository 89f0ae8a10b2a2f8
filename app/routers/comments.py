# =============================================================================
# app/routers/comments.py - Comment Endpoints
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path

from app.auth import get_current_user, AuthUser
from core.services.comment_service import CommentService
from core.models.comment import CommentCreate, CommentCreated, CommentWithAuthor

router = APIRouter()


@router.post("/comment/{post_id}", response_model=CommentCreated)
def add_comment(
    post_id: Annotated[UUID, Path(description="Post to comment on")],
    request: CommentCreate,
    user: AuthUser = Depends(get_current_user),
):
    """
    Comment on a post.

    Returns {"commentId": ...}. Commenting on a missing post returns 400.
    """
    return CommentService.add_comment(post_id, user.email, request.text)


@router.get("/posts/{post_id}/comments", response_model=list[CommentWithAuthor])
def list_comments(
    post_id: Annotated[UUID, Path(description="Post UUID")],
    user: AuthUser = Depends(get_current_user),
):
    """List a post's comments, oldest first, with author names."""
    return CommentService.list_comments(post_id)
