# =============================================================================
# core/services/post_service.py - Post Store
# =============================================================================
# Handles post CRUD, likes, and the post listings.
# Separates HTTP concerns from database/business logic.
# =============================================================================

import logging
from collections import defaultdict
from uuid import UUID

from lib.supabase_client import SupabaseClient
from lib.utils import utc_now
from core.models.comment import CommentResponse
from core.models.post import (
    AuthoredPostSummary,
    MessageResponse,
    PostResponse,
    PostSummary,
    PostWithComments,
)
from app.exceptions import (
    AlreadyLikedError,
    NotLikedError,
    NotPostAuthorError,
    PostNotFoundError,
)

logger = logging.getLogger(__name__)


class PostService:
    """
    Service for post operations.

    Likes are keyed by identity email, the same key used for authorship.
    """

    @staticmethod
    def create_post(title: str, description: str, author_email: str) -> PostResponse:
        """
        Create a post stamped with the current time and the caller as author.

        Returns:
            The created post
        """
        post = SupabaseClient.insert_post({
            "title": title,
            "description": description,
            "author": author_email,
            "created_at": utc_now().isoformat(),
        })

        logger.info(f"Created post: {post['id']} by {author_email}")
        return PostResponse.from_db_row(post)

    @staticmethod
    def get_post(post_id: str | UUID) -> dict:
        """
        Fetch a raw post row.

        Raises:
            PostNotFoundError: If the post doesn't exist
        """
        post = SupabaseClient.fetch_post(post_id)
        if post is None:
            raise PostNotFoundError(str(post_id))
        return post

    @staticmethod
    def delete_post(post_id: str | UUID, caller_email: str) -> MessageResponse:
        """
        Delete a post the caller wrote.

        Raises:
            PostNotFoundError: If the post doesn't exist
            NotPostAuthorError: If the caller isn't the author
        """
        post = PostService.get_post(post_id)
        if post["author"] != caller_email:
            logger.warning(f"{caller_email} tried to delete post {post_id} owned by {post['author']}")
            raise NotPostAuthorError(str(post_id))

        # The delete itself is filtered on author, so a lost race reads as not found
        if not SupabaseClient.delete_post(post_id, caller_email):
            raise PostNotFoundError(str(post_id))

        logger.info(f"Deleted post: {post_id}")
        return MessageResponse(message="Post deleted successfully")

    @staticmethod
    def like_post(post_id: str | UUID, email: str) -> PostResponse:
        """
        Add the caller to the post's like set.

        Raises:
            PostNotFoundError: If the post doesn't exist
            AlreadyLikedError: If the caller already likes it
        """
        post = SupabaseClient.add_like(post_id, email)
        if post is None:
            # Nothing updated: either the post is gone or the like exists
            PostService.get_post(post_id)
            raise AlreadyLikedError(str(post_id))

        logger.debug(f"{email} liked post {post_id}")
        return PostResponse.from_db_row(post)

    @staticmethod
    def unlike_post(post_id: str | UUID, email: str) -> PostResponse:
        """
        Remove the caller from the post's like set.

        Raises:
            PostNotFoundError: If the post doesn't exist
            NotLikedError: If the caller doesn't like it
        """
        post = SupabaseClient.remove_like(post_id, email)
        if post is None:
            PostService.get_post(post_id)
            raise NotLikedError(str(post_id))

        logger.debug(f"{email} unliked post {post_id}")
        return PostResponse.from_db_row(post)

    @staticmethod
    def get_post_summary(post_id: str | UUID) -> PostSummary:
        """
        Get a post with its like and comment counts.

        Raises:
            PostNotFoundError: If the post doesn't exist
        """
        post = PostService.get_post(post_id)
        return PostSummary(
            id=post["id"],
            title=post["title"],
            description=post.get("description") or "",
            author=post["author"],
            created_at=post.get("created_at"),
            likes=len(post.get("likes") or []),
            comments=SupabaseClient.count_comments(post["id"]),
        )

    @staticmethod
    def list_posts() -> list[PostWithComments]:
        """List every post with its comments attached, in storage order."""
        posts = SupabaseClient.fetch_posts()
        comments_by_post = _group_comments([post["id"] for post in posts])

        return [
            PostWithComments(
                **PostResponse.from_db_row(post).model_dump(),
                comments=comments_by_post.get(str(post["id"]), []),
            )
            for post in posts
        ]

    @staticmethod
    def list_author_posts(author_email: str) -> list[AuthoredPostSummary]:
        """List the caller's posts, newest first."""
        posts = SupabaseClient.fetch_posts(author=author_email)
        comments_by_post = _group_comments([post["id"] for post in posts])

        return [
            AuthoredPostSummary(
                id=post["id"],
                title=post["title"],
                desc=post.get("description") or "",
                created_at=post.get("created_at"),
                comments=[c.id for c in comments_by_post.get(str(post["id"]), [])],
                likes=len(post.get("likes") or []),
            )
            for post in posts
        ]


def _group_comments(post_ids: list) -> dict[str, list[CommentResponse]]:
    """Fetch comments for many posts in one query, keyed by post id."""
    grouped: dict[str, list[CommentResponse]] = defaultdict(list)
    for row in SupabaseClient.fetch_comments(post_ids):
        grouped[str(row["post_id"])].append(CommentResponse.from_db_row(row))
    return grouped
