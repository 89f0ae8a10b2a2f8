# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides JWT bearer authentication.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   def protected(user: AuthUser = Depends(get_current_user)):
#       return {"email": user.email}
# =============================================================================

from app.auth.dependencies import get_current_user, get_credential_verifier
from app.auth.models import AuthUser

__all__ = [
    "get_current_user",
    "get_credential_verifier",
    "AuthUser",
]
