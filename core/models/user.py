# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# These models define the API contract for the user directory:
# - UserResponse: A user record with its follower / following sets
# - ProfileResponse: The caller's own profile summary (counts only)
#
# Follower and following sets hold identity emails, not user IDs.
# =============================================================================

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field


class UserResponse(BaseModel):
    """
    Schema for returning a user record to clients.

    Returned by:
    - POST /follow/{id}
    - POST /unfollow/{id}

    Example:
        {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "name": "Ada",
            "email": "ada@example.com",
            "followers": ["test@example.com"],
            "following": [],
            "created_at": "2024-01-15T10:30:00Z"
        }
    """

    id: UUID = Field(..., description="Unique user identifier")

    name: str = Field(..., description="Display name")

    # Identity key used for authorship and follow relationships
    email: str = Field(..., description="Identity email")

    followers: list[str] = Field(
        default_factory=list,
        description="Emails of users following this user"
    )

    following: list[str] = Field(
        default_factory=list,
        description="Emails of users this user follows"
    )

    created_at: datetime | None = Field(
        default=None,
        description="Timestamp when the user was created"
    )

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> "UserResponse":
        """Create from a `users` row; null sets become empty lists."""
        return cls(
            id=row["id"],
            name=row.get("name") or "",
            email=row["email"],
            followers=row.get("followers") or [],
            following=row.get("following") or [],
            created_at=row.get("created_at"),
        )


class ProfileResponse(BaseModel):
    """
    The authenticated user's profile summary.

    Returned by GET /user.

    Example:
        {"name": "Ada", "followers": 12, "following": 3}
    """

    name: str = Field(..., description="Display name")
    followers: int = Field(default=0, ge=0, description="Number of followers")
    following: int = Field(default=0, ge=0, description="Number of users followed")
