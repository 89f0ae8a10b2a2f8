# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - user.py: User records and profile summary
# - post.py: Post create/response/summary schemas
# - comment.py: Comment create/response schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

from .user import (
    ProfileResponse,
    UserResponse,
)

from .comment import (
    CommentAuthor,
    CommentCreate,
    CommentCreated,
    CommentResponse,
    CommentWithAuthor,
)

from .post import (
    AuthoredPostSummary,
    MessageResponse,
    PostCreate,
    PostResponse,
    PostSummary,
    PostWithComments,
)

__all__ = [
    # User
    "ProfileResponse",
    "UserResponse",
    # Comment
    "CommentAuthor",
    "CommentCreate",
    "CommentCreated",
    "CommentResponse",
    "CommentWithAuthor",
    # Post
    "AuthoredPostSummary",
    "MessageResponse",
    "PostCreate",
    "PostResponse",
    "PostSummary",
    "PostWithComments",
]
