# =============================================================================
# app/routers/users.py - Follow / Profile Endpoints
# =============================================================================
# Follow relationships and the caller's profile summary.
# All endpoints require authentication.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path

from app.auth import get_current_user, AuthUser
from core.services.user_service import UserService
from core.models.user import ProfileResponse, UserResponse

router = APIRouter()


@router.post("/follow/{user_id}", response_model=UserResponse)
def follow_user(
    user_id: Annotated[UUID, Path(description="User to follow")],
    user: AuthUser = Depends(get_current_user),
):
    """
    Follow a user.

    Following someone you already follow changes nothing.
    """
    return UserService.follow(user_id, user.email)


@router.post("/unfollow/{user_id}", response_model=UserResponse)
def unfollow_user(
    user_id: Annotated[UUID, Path(description="User to unfollow")],
    user: AuthUser = Depends(get_current_user),
):
    """
    Unfollow a user.

    Unfollowing someone you don't follow is not an error.
    """
    return UserService.unfollow(user_id, user.email)


@router.get("/user", response_model=ProfileResponse)
def get_profile(
    user: AuthUser = Depends(get_current_user),
):
    """Get the caller's name and follower / following counts."""
    return UserService.get_profile(user.email)
