# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database operations.
# It implements the singleton pattern to reuse a single client connection
# and provides specialized methods for the three record collections:
# - users: follower / following sets
# - posts: posts and their like sets
# - comments: comments referencing a post
#
# Set mutations (follow, like, comment-on-existing-post) are executed as
# single SQL functions (see supabase/migrations/) so the condition and the
# write happen in one statement.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   post = SupabaseClient.fetch_post(post_id)
# =============================================================================

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from supabase import create_client, Client

from app.config import settings
from lib.utils import normalize_uuid

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgREST code for "no rows" on .single()
NO_ROWS_CODE = "PGRST116"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Carries a machine-readable code and, where possible, a hint on how to fix it.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        user = SupabaseClient.add_follower(user_id, "b@example.com")
        likes = len(SupabaseClient.fetch_post(post_id)["likes"])
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def _first(cls, response: Any) -> dict[str, Any] | None:
        """Return the first row of a response, or None if it has none."""
        rows = response.data or []
        if isinstance(rows, dict):
            return rows
        return rows[0] if rows else None

    @classmethod
    def _fetch_one(cls, table: str, column: str, value: str) -> dict[str, Any] | None:
        client = cls.get_client()
        try:
            response = (
                client.table(table)
                .select("*")
                .eq(column, value)
                .single()
                .execute()
            )
            return response.data
        except Exception as e:
            if NO_ROWS_CODE in str(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch from {table}: {e}",
                code="FETCH_FAILED",
                details={"table": table, column: value}
            )

    @classmethod
    def _call(cls, function: str, params: dict[str, Any]) -> dict[str, Any] | None:
        """
        Call a SQL function returning `setof <row>`.

        Returns the affected row, or None when the function's condition
        did not match any row.
        """
        client = cls.get_client()
        try:
            response = client.rpc(function, params).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to call {function}: {e}",
                code="RPC_FAILED",
                suggestion="Check that the migrations in supabase/migrations have been applied",
                details={"function": function, **params}
            )
        return cls._first(response)

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_user_by_email(cls, email: str) -> dict[str, Any] | None:
        """Fetch a user by identity email, or None if not found."""
        return cls._fetch_one("users", "email", email)

    @classmethod
    def fetch_users_by_email(cls, emails: list[str]) -> list[dict[str, Any]]:
        """
        Fetch several users by email in one query.

        Unknown emails are simply absent from the result.
        """
        if not emails:
            return []

        client = cls.get_client()
        try:
            response = (
                client.table("users")
                .select("id, name, email")
                .in_("email", sorted(set(emails)))
                .execute()
            )
            return response.data or []
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch users: {e}",
                code="FETCH_USERS_FAILED",
                details={"emails": emails}
            )

    @classmethod
    def add_follower(cls, user_id: str | UUID, email: str) -> dict[str, Any] | None:
        """
        Add `email` to the user's followers (and the user to the follower's
        following set). Idempotent.

        Returns:
            Updated target user, or None if the user doesn't exist
        """
        return cls._call(
            "follow_user",
            {"p_user_id": normalize_uuid(user_id), "p_email": email},
        )

    @classmethod
    def remove_follower(cls, user_id: str | UUID, email: str) -> dict[str, Any] | None:
        """
        Remove `email` from the user's followers. Removing a non-follower
        is a no-op.

        Returns:
            Updated target user, or None if the user doesn't exist
        """
        return cls._call(
            "unfollow_user",
            {"p_user_id": normalize_uuid(user_id), "p_email": email},
        )

    # -------------------------------------------------------------------------
    # Posts
    # -------------------------------------------------------------------------

    @classmethod
    def insert_post(cls, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a post row.

        Returns:
            The created post (with database-assigned id)
        """
        client = cls.get_client()
        try:
            response = client.table("posts").insert(data).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create post: {e}",
                code="INSERT_POST_FAILED",
                details={"author": data.get("author")}
            )

        post = cls._first(response)
        if post is None:
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_POST_FAILED",
                details={"author": data.get("author")}
            )
        return post

    @classmethod
    def fetch_post(cls, post_id: str | UUID) -> dict[str, Any] | None:
        """Fetch a post by ID, or None if not found."""
        return cls._fetch_one("posts", "id", normalize_uuid(post_id))

    @classmethod
    def fetch_posts(cls, author: str | None = None) -> list[dict[str, Any]]:
        """
        Fetch posts.

        Args:
            author: If given, only this author's posts, newest first.
                Otherwise every post in storage order.
        """
        client = cls.get_client()
        try:
            query = client.table("posts").select("*")
            if author is not None:
                query = query.eq("author", author).order("created_at", desc=True)
            response = query.execute()
            return response.data or []
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch posts: {e}",
                code="FETCH_POSTS_FAILED",
                details={"author": author}
            )

    @classmethod
    def delete_post(cls, post_id: str | UUID, author: str) -> bool:
        """
        Delete a post, but only if `author` wrote it.

        Returns:
            True if a row was deleted
        """
        client = cls.get_client()
        post_id_str = normalize_uuid(post_id)
        try:
            response = (
                client.table("posts")
                .delete()
                .eq("id", post_id_str)
                .eq("author", author)
                .execute()
            )
            return bool(response.data)
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete post: {e}",
                code="DELETE_POST_FAILED",
                details={"post_id": post_id_str}
            )

    @classmethod
    def add_like(cls, post_id: str | UUID, email: str) -> dict[str, Any] | None:
        """
        Add `email` to the post's like set if absent.

        Returns:
            Updated post, or None if the post is missing or already liked
        """
        return cls._call(
            "add_post_like",
            {"p_post_id": normalize_uuid(post_id), "p_email": email},
        )

    @classmethod
    def remove_like(cls, post_id: str | UUID, email: str) -> dict[str, Any] | None:
        """
        Remove `email` from the post's like set if present.

        Returns:
            Updated post, or None if the post is missing or wasn't liked
        """
        return cls._call(
            "remove_post_like",
            {"p_post_id": normalize_uuid(post_id), "p_email": email},
        )

    # -------------------------------------------------------------------------
    # Comments
    # -------------------------------------------------------------------------

    @classmethod
    def create_comment(
        cls,
        post_id: str | UUID,
        author: str,
        text: str,
    ) -> dict[str, Any] | None:
        """
        Insert a comment if the post exists.

        Returns:
            The created comment, or None if the post doesn't exist
        """
        return cls._call(
            "create_comment",
            {"p_post_id": normalize_uuid(post_id), "p_author": author, "p_text": text},
        )

    @classmethod
    def fetch_comments(cls, post_ids: list[str | UUID]) -> list[dict[str, Any]]:
        """Fetch every comment on the given posts, oldest first."""
        if not post_ids:
            return []

        client = cls.get_client()
        ids = [normalize_uuid(post_id) for post_id in post_ids]
        try:
            response = (
                client.table("comments")
                .select("*")
                .in_("post_id", ids)
                .order("created_at")
                .execute()
            )
            return response.data or []
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch comments: {e}",
                code="FETCH_COMMENTS_FAILED",
                details={"post_ids": ids}
            )

    @classmethod
    def count_comments(cls, post_id: str | UUID) -> int:
        """Count comments on a post without fetching them."""
        client = cls.get_client()
        post_id_str = normalize_uuid(post_id)
        try:
            response = (
                client.table("comments")
                .select("id", count="exact")
                .eq("post_id", post_id_str)
                .execute()
            )
            return response.count or 0
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to count comments: {e}",
                code="COUNT_COMMENTS_FAILED",
                details={"post_id": post_id_str}
            )

    # -------------------------------------------------------------------------
    # Health
    # -------------------------------------------------------------------------

    @classmethod
    def ping(cls) -> None:
        """Run a trivial query; raises SupabaseClientError if the store is unreachable."""
        client = cls.get_client()
        try:
            client.table("posts").select("id").limit(1).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Database unreachable: {e}",
                code="PING_FAILED",
            )
