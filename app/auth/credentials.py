# =============================================================================
# app/auth/credentials.py - Token Issuance and Verification
# =============================================================================
# Signs and verifies access tokens with python-jose.
#
# The verifier owns no global state: the signing secret and token lifetime
# come in through CredentialConfig, and credential checks are delegated to
# an AccountVerifier collaborator.
#
# Usage:
#   verifier = CredentialVerifier(config, StaticAccountVerifier(email, password))
#   token = verifier.issue("test@example.com", "password")
#   user = verifier.verify(token)
# =============================================================================

import hmac
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Protocol

from jose import jwt, JWTError, ExpiredSignatureError
from supabase import AuthApiError, Client, create_client

from app.auth.models import AuthUser, TokenPayload
from app.exceptions import UnauthorizedError
from lib.utils import utc_now

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_TTL = timedelta(hours=1)


class TokenError(Exception):
    """Raised when a token can't be verified."""


class TokenExpiredError(TokenError):
    """Raised when a token's signature is fine but it has expired."""


# =============================================================================
# Account Verification
# =============================================================================

class AccountVerifier(Protocol):
    """Checks an email/password pair against some account source."""

    def verify_credentials(self, email: str, password: str) -> bool:
        ...


class StaticAccountVerifier:
    """A single configured account."""

    def __init__(self, email: str, password: str):
        self.email = email
        self.password = password

    def verify_credentials(self, email: str, password: str) -> bool:
        # Compare both fields even when the first differs
        email_ok = hmac.compare_digest(email.encode(), self.email.encode())
        password_ok = hmac.compare_digest(password.encode(), self.password.encode())
        return email_ok and password_ok


class SupabaseAccountVerifier:
    """
    Delegates credential checks to Supabase Auth.

    Uses its own client so that sign-in sessions never attach to the
    shared service-role client used for data access.
    """

    def __init__(self, url: str, key: str):
        self.url = url
        self.key = key
        self._client: Client | None = None

    def _get_client(self) -> Client:
        if self._client is None:
            self._client = create_client(self.url, self.key)
        return self._client

    def verify_credentials(self, email: str, password: str) -> bool:
        try:
            response = self._get_client().auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthApiError as e:
            logger.info(f"Supabase Auth rejected {email}: {e}")
            return False
        return response.user is not None and response.user.email == email


# =============================================================================
# Credential Verifier
# =============================================================================

@dataclass(frozen=True)
class CredentialConfig:
    """Signing settings shared by issuance and verification."""
    secret_key: str
    algorithm: str = "HS256"
    token_ttl: timedelta = DEFAULT_TOKEN_TTL


class CredentialVerifier:
    """Issues and verifies bearer tokens carrying the identity email."""

    def __init__(self, config: CredentialConfig, accounts: AccountVerifier):
        self.config = config
        self.accounts = accounts

    def create_token(self, email: str, now: Optional[datetime] = None) -> str:
        """
        Sign a token for `email` without checking credentials.

        Args:
            email: Identity to embed
            now: Issue time (defaults to the current UTC time)
        """
        issued_at = now or utc_now()
        claims = {
            "sub": email,
            "email": email,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.config.token_ttl).timestamp()),
        }
        return jwt.encode(claims, self.config.secret_key, algorithm=self.config.algorithm)

    def issue(self, email: str, password: str) -> str:
        """
        Check credentials and issue a token.

        Raises:
            UnauthorizedError: If the account verifier rejects the credentials
        """
        if not self.accounts.verify_credentials(email, password):
            logger.warning(f"Rejected credentials for {email}")
            raise UnauthorizedError()

        logger.info(f"Issued token for {email}")
        return self.create_token(email)

    def verify(self, token: str) -> AuthUser:
        """
        Verify signature and expiry and return the embedded identity.

        Raises:
            TokenExpiredError: If the token has expired
            TokenError: If the token is malformed, badly signed, or lacks an email
        """
        try:
            payload = jwt.decode(
                token,
                self.config.secret_key,
                algorithms=[self.config.algorithm],
                options={"require_exp": True},
            )
        except ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except JWTError as e:
            raise TokenError(f"Invalid token: {e}") from e

        email = payload.get("email") or payload.get("sub")
        if not email:
            raise TokenError("Invalid token: missing email claim")

        claims = TokenPayload(
            sub=payload.get("sub", email),
            email=email,
            iat=payload.get("iat", 0),
            exp=payload["exp"],
        )
        return AuthUser(email=claims.email, issued_at=claims.iat, expires_at=claims.exp)
