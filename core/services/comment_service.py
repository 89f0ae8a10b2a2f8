# =============================================================================
# core/services/comment_service.py - Comment Store
# =============================================================================
# Adding comments to posts and listing a post's comments with their
# authors resolved from the user directory.
# =============================================================================

import logging
from uuid import UUID

from lib.supabase_client import SupabaseClient
from core.models.comment import (
    CommentAuthor,
    CommentCreated,
    CommentWithAuthor,
)
from app.exceptions import CommentPostNotFoundError, PostNotFoundError

logger = logging.getLogger(__name__)


class CommentService:
    """Service for comment operations."""

    @staticmethod
    def add_comment(post_id: str | UUID, author_email: str, text: str) -> CommentCreated:
        """
        Add a comment to an existing post.

        The existence check and the insert are one store call.

        Returns:
            The new comment's id

        Raises:
            CommentPostNotFoundError: If the post doesn't exist
        """
        comment = SupabaseClient.create_comment(post_id, author_email, text)
        if comment is None:
            raise CommentPostNotFoundError(str(post_id))

        logger.info(f"Created comment: {comment['id']} on post {post_id}")
        return CommentCreated(comment_id=comment["id"])

    @staticmethod
    def list_comments(post_id: str | UUID) -> list[CommentWithAuthor]:
        """
        List a post's comments, oldest first, with authors expanded.

        Raises:
            PostNotFoundError: If the post doesn't exist
        """
        if SupabaseClient.fetch_post(post_id) is None:
            raise PostNotFoundError(str(post_id))

        rows = SupabaseClient.fetch_comments([post_id])
        users = SupabaseClient.fetch_users_by_email([row["author"] for row in rows])
        names = {user["email"]: user.get("name") for user in users}

        return [
            CommentWithAuthor(
                id=row["id"],
                text=row["text"],
                author=CommentAuthor(email=row["author"], name=names.get(row["author"])),
                post_id=row["post_id"],
                created_at=row.get("created_at"),
            )
            for row in rows
        ]
