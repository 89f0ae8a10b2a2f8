# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - users.py: Follow / unfollow and the caller's profile
# - posts.py: Post CRUD, listings and likes
# - comments.py: Comment creation and listing
#
# Each router is mounted in main.py under settings.API_PREFIX.
#
# Handlers that reach the database are plain `def`: the Supabase client is
# synchronous, so they must run in FastAPI's threadpool, not on the event loop.
# =============================================================================

from . import health
from . import users
from . import posts
from . import comments

__all__ = [
    "health",
    "users",
    "posts",
    "comments",
]
