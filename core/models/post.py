# =============================================================================
# core/models/post.py - Post Schemas
# =============================================================================
# These models define the API contract for post operations:
# - PostCreate: Input for POST /posts
# - PostResponse: A stored post with its like set
# - PostSummary: A single post with like and comment counts (GET /posts/{id})
# - PostWithComments: A post with its comments attached (GET /posts)
# - AuthoredPostSummary: One of the caller's own posts (GET /all_posts)
# - MessageResponse: Plain acknowledgement
#
# A post's author is fixed at creation; only the author may delete it.
# =============================================================================

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from .comment import CommentResponse


class PostCreate(BaseModel):
    """
    Schema for creating a new post.

    The author is taken from the token, never from the body.

    Example:
        {"title": "T", "description": "D"}
    """

    title: str = Field(
        ...,
        min_length=1,
        max_length=300,
        description="Post title"
    )

    description: str = Field(
        default="",
        max_length=10000,
        description="Post body"
    )


class PostResponse(BaseModel):
    """
    Schema for returning a stored post.

    Returned by:
    - POST /posts
    - POST /like/{id}
    - POST /unlike/{id}
    """

    id: UUID = Field(..., description="Unique post identifier")
    title: str
    description: str = ""

    # Identity email of the author
    author: str

    created_at: datetime | None = None

    # Emails of users who like the post
    likes: list[str] = Field(default_factory=list)

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> "PostResponse":
        """Create from a `posts` row; a null like set becomes an empty list."""
        return cls(
            id=row["id"],
            title=row["title"],
            description=row.get("description") or "",
            author=row["author"],
            created_at=row.get("created_at"),
            likes=row.get("likes") or [],
        )


class PostSummary(BaseModel):
    """
    A post with computed counts.

    Example:
        {
            "id": "...",
            "title": "T",
            "description": "D",
            "author": "a@example.com",
            "created_at": "2024-01-15T10:30:00Z",
            "likes": 0,
            "comments": 0
        }
    """

    id: UUID
    title: str
    description: str = ""
    author: str
    created_at: datetime | None = None
    likes: int = Field(default=0, ge=0, description="Number of likes")
    comments: int = Field(default=0, ge=0, description="Number of comments")


class PostWithComments(PostResponse):
    """A post with every comment on it attached."""

    comments: list[CommentResponse] = Field(default_factory=list)


class AuthoredPostSummary(BaseModel):
    """
    One of the caller's own posts, as listed by GET /all_posts.

    `comments` holds the ids of the comments on the post.
    """

    id: UUID
    title: str
    desc: str = ""
    created_at: datetime | None = None
    comments: list[UUID] = Field(default_factory=list)
    likes: int = Field(default=0, ge=0)


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str
