# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Token issuance and token checks.
# =============================================================================

import logging

from fastapi import APIRouter, Depends

from app.auth.credentials import CredentialVerifier
from app.auth.dependencies import get_credential_verifier, get_current_user
from app.auth.models import AuthenticateRequest, AuthUser, TokenResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/authenticate", response_model=TokenResponse)
def authenticate(
    request: AuthenticateRequest,
    verifier: CredentialVerifier = Depends(get_credential_verifier),
) -> TokenResponse:
    """
    Exchange email and password for a bearer token.

    Raises:
        401: If the credentials are rejected
    """
    return TokenResponse(token=verifier.issue(request.email, request.password))


@router.get("/auth/verify")
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """
    Verify that the current token is valid.

    Useful for checking if a stored token is still valid.

    Raises:
        401: If token is invalid or expired
    """
    return {
        "valid": True,
        "email": user.email,
        "expires_at": user.expires_at,
    }
