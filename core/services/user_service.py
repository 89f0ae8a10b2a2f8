# =============================================================================
# core/services/user_service.py - User Directory
# =============================================================================
# Follow / unfollow and the caller's profile summary.
# Follower sets are keyed by identity email.
# =============================================================================

import logging
from uuid import UUID

from lib.supabase_client import SupabaseClient
from core.models.user import ProfileResponse, UserResponse
from app.exceptions import ProfileNotFoundError, UserNotFoundError

logger = logging.getLogger(__name__)


class UserService:
    """
    Service for the user directory.

    Set mutations are single atomic store calls, so following twice or
    unfollowing a non-follower never fails.
    """

    @staticmethod
    def follow(user_id: str | UUID, follower_email: str) -> UserResponse:
        """
        Add the caller to a user's followers.

        Args:
            user_id: The user being followed
            follower_email: Identity of the caller

        Returns:
            The updated target user

        Raises:
            UserNotFoundError: If the target doesn't exist
        """
        user = SupabaseClient.add_follower(user_id, follower_email)
        if user is None:
            raise UserNotFoundError(str(user_id))

        logger.info(f"{follower_email} follows user {user_id}")
        return UserResponse.from_db_row(user)

    @staticmethod
    def unfollow(user_id: str | UUID, follower_email: str) -> UserResponse:
        """
        Remove the caller from a user's followers.

        Raises:
            UserNotFoundError: If the target doesn't exist
        """
        user = SupabaseClient.remove_follower(user_id, follower_email)
        if user is None:
            raise UserNotFoundError(str(user_id))

        logger.info(f"{follower_email} unfollowed user {user_id}")
        return UserResponse.from_db_row(user)

    @staticmethod
    def get_profile(email: str) -> ProfileResponse:
        """
        Get the profile summary of the user with this identity.

        Raises:
            ProfileNotFoundError: If no user record has this email
        """
        user = SupabaseClient.fetch_user_by_email(email)
        if user is None:
            raise ProfileNotFoundError(email)

        return ProfileResponse(
            name=user.get("name") or "",
            followers=len(user.get("followers") or []),
            following=len(user.get("following") or []),
        )
