# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from typing import Optional

from pydantic import BaseModel, Field


class AuthUser(BaseModel):
    """
    Authenticated user extracted from a verified access token.

    The email is the identity key for authorship, follows and likes.
    """
    email: str
    issued_at: Optional[int] = None
    expires_at: Optional[int] = None

    class Config:
        frozen = True  # Make immutable


class TokenPayload(BaseModel):
    """Decoded access token claims."""
    sub: str  # Identity email
    email: str
    iat: int  # Issued at timestamp
    exp: int  # Expiration timestamp


class AuthenticateRequest(BaseModel):
    """Credentials posted to /authenticate."""
    # Missing or empty credentials are a mismatch like any other: 401 from issue()
    email: str = Field(default="", examples=["test@example.com"])
    password: str = Field(default="", examples=["password"])


class TokenResponse(BaseModel):
    """A freshly issued bearer token."""
    token: str
