# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every domain failure is raised as a SocialHubException subclass and turned
# into a structured JSON body here; nothing reaches the client as a raw fault.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class SocialHubException(Exception):
    """
    Base exception for the SocialHub API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "SOCIALHUB_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Authorization Exceptions
# =============================================================================

class UnauthorizedError(SocialHubException):
    """Raised when credentials are rejected."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(
            message=message,
            code="UNAUTHORIZED",
            status_code=401,
            suggestion="Check the email and password and try again",
        )


class NotPostAuthorError(SocialHubException):
    """Raised when a user acts on a post they did not write."""

    def __init__(self, post_id: str):
        super().__init__(
            message=f"Only the author can delete post: {post_id}",
            code="NOT_POST_AUTHOR",
            status_code=401,
            details={"post_id": post_id}
        )


# =============================================================================
# Lookup Exceptions
# =============================================================================

class UserNotFoundError(SocialHubException):
    """Raised when a user ID doesn't exist."""

    def __init__(self, user_id: str):
        super().__init__(
            message=f"User not found: {user_id}",
            code="USER_NOT_FOUND",
            status_code=404,
            suggestion="Check that the user_id is correct",
            details={"user_id": user_id}
        )


class PostNotFoundError(SocialHubException):
    """Raised when a post ID doesn't exist."""

    def __init__(self, post_id: str):
        super().__init__(
            message=f"Post not found: {post_id}",
            code="POST_NOT_FOUND",
            status_code=404,
            suggestion="Check that the post_id is correct and the post hasn't been deleted",
            details={"post_id": post_id}
        )


# =============================================================================
# Invalid Request Exceptions
# =============================================================================

class InvalidRequestError(SocialHubException):
    """Raised when input is malformed or a precondition fails."""

    def __init__(
        self,
        message: str,
        code: str = "INVALID_REQUEST",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=400,
            suggestion=suggestion,
            details=details,
        )


class ProfileNotFoundError(InvalidRequestError):
    """Raised when the caller has no user record."""

    def __init__(self, email: str):
        super().__init__(
            message=f"No user profile for: {email}",
            code="PROFILE_NOT_FOUND",
            suggestion="Create a user record for this email before requesting the profile",
            details={"email": email}
        )


class CommentPostNotFoundError(InvalidRequestError):
    """Raised when commenting on a post that doesn't exist."""

    def __init__(self, post_id: str):
        super().__init__(
            message=f"Cannot comment on missing post: {post_id}",
            code="COMMENT_POST_NOT_FOUND",
            suggestion="Check that the post still exists",
            details={"post_id": post_id}
        )


# =============================================================================
# Like State Exceptions
# =============================================================================

class AlreadyLikedError(InvalidRequestError):
    """Raised when liking a post the user already likes."""

    def __init__(self, post_id: str):
        super().__init__(
            message="Already liked this post",
            code="ALREADY_LIKED",
            details={"post_id": post_id}
        )


class NotLikedError(InvalidRequestError):
    """Raised when unliking a post the user hasn't liked."""

    def __init__(self, post_id: str):
        super().__init__(
            message="Post not liked yet",
            code="NOT_LIKED",
            suggestion="Like the post before trying to unlike it",
            details={"post_id": post_id}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def socialhub_exception_handler(
    request: Request,
    exc: SocialHubException
) -> JSONResponse:
    """
    Convert SocialHubException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request validation errors (bad path ids, missing body fields).

    These are reported as 400 so clients see one status for malformed input.
    """
    logger.debug(f"Validation error on {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": [
                {"loc": list(err.get("loc", [])), "msg": err.get("msg")}
                for err in exc.errors()
            ],
        }
    )
