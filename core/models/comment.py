# =============================================================================
# core/models/comment.py - Comment Schemas
# =============================================================================
# These models define the API contract for comments:
# - CommentCreate: Input for POST /comment/{post_id}
# - CommentCreated: The id of the new comment
# - CommentResponse: A stored comment (author as identity email)
# - CommentWithAuthor: A comment with its author expanded from the directory
#
# Comments are never edited; they disappear only with their post.
# =============================================================================

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class CommentCreate(BaseModel):
    """
    Schema for submitting a comment.

    Example:
        {"text": "hi"}
    """

    text: str = Field(
        ...,
        min_length=1,
        max_length=5000,
        description="Comment body"
    )


class CommentCreated(BaseModel):
    """
    Response for a newly created comment.

    Serialized as {"commentId": "..."}.
    """

    model_config = ConfigDict(populate_by_name=True)

    comment_id: UUID = Field(..., alias="commentId", description="ID of the new comment")


class CommentResponse(BaseModel):
    """A stored comment, as attached to posts in GET /posts."""

    id: UUID
    text: str
    author: str
    post_id: UUID
    created_at: datetime | None = None

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> "CommentResponse":
        """Create from a `comments` row."""
        return cls(
            id=row["id"],
            text=row["text"],
            author=row["author"],
            post_id=row["post_id"],
            created_at=row.get("created_at"),
        )


class CommentAuthor(BaseModel):
    """Author of a comment, resolved from the user directory."""

    email: str

    # None when the author has no user record
    name: str | None = None


class CommentWithAuthor(BaseModel):
    """
    A comment with its author expanded.

    Returned by GET /posts/{id}/comments.

    Example:
        {
            "id": "...",
            "text": "hi",
            "author": {"email": "c@example.com", "name": "Cleo"},
            "post_id": "...",
            "created_at": "2024-01-15T10:30:00Z"
        }
    """

    id: UUID
    text: str
    author: CommentAuthor
    post_id: UUID
    created_at: datetime | None = None
