# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .user_service import UserService
from .post_service import PostService
from .comment_service import CommentService

__all__ = [
    "UserService",
    "PostService",
    "CommentService",
]
