# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# The CredentialVerifier is built once from settings and injected with
# Depends(), so tests can swap it through app.dependency_overrides.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   def protected(user: AuthUser = Depends(get_current_user)):
#       return {"email": user.email}
# =============================================================================

import logging
from datetime import timedelta
from functools import lru_cache
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.config import settings
from app.auth.credentials import (
    AccountVerifier,
    CredentialConfig,
    CredentialVerifier,
    StaticAccountVerifier,
    SupabaseAccountVerifier,
    TokenError,
    TokenExpiredError,
)
from app.auth.models import AuthUser

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor; missing headers are handled below so that
# they get a 401 like every other token failure
security = HTTPBearer(auto_error=False)


def _build_account_verifier() -> AccountVerifier:
    if settings.AUTH_BACKEND == "supabase":
        return SupabaseAccountVerifier(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)
    return StaticAccountVerifier(settings.AUTH_EMAIL, settings.AUTH_PASSWORD)


@lru_cache
def get_credential_verifier() -> CredentialVerifier:
    """
    Get the process-wide CredentialVerifier.

    Built once at first use from settings.
    """
    config = CredentialConfig(
        secret_key=settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
        token_ttl=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )
    logger.info(f"Credential verifier using {settings.AUTH_BACKEND} accounts")
    return CredentialVerifier(config, _build_account_verifier())


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    verifier: CredentialVerifier = Depends(get_credential_verifier),
) -> AuthUser:
    """
    Extract and validate the user from the bearer token.

    This dependency:
    1. Extracts the Bearer token from the Authorization header
    2. Verifies the JWT signature
    3. Validates the token hasn't expired
    4. Returns an AuthUser carrying the identity email

    Raises:
        HTTPException: 401 if the header is missing or the token is invalid or expired
    """
    if credentials is None:
        logger.warning("Request without bearer token")
        raise _unauthorized("Not authenticated")

    try:
        user = verifier.verify(credentials.credentials)
    except TokenExpiredError:
        logger.warning("JWT token has expired")
        raise _unauthorized("Token has expired")
    except TokenError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise _unauthorized(str(e))

    logger.debug(f"Authenticated user: {user.email}")
    return user
