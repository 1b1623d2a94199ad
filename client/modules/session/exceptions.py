"""
Session module exceptions.

Raised by the session service for local validation failures and for
auth flows whose failure the caller must handle distinctly.
"""

from typing import Any, Optional

from shared.exceptions import (
    AuthenticationError,
    RemoteRejectionError,
    ValidationError,
)


class WeakPasswordError(ValidationError):
    """Raised when a password does not meet the platform policy."""

    def __init__(self, message: str):
        super().__init__(message, code="WEAK_PASSWORD")


class PasswordMismatchError(ValidationError):
    """Raised when a password and its confirmation differ."""

    def __init__(self, message: str = "Passwords don't match!"):
        super().__init__(message, code="PASSWORD_MISMATCH")


class MissingEmailError(ValidationError):
    """Raised when an operation needs an email address and none was given."""

    def __init__(self):
        super().__init__("Please enter your email address", code="MISSING_EMAIL")


class OAuthCallbackError(AuthenticationError):
    """Raised when the OAuth redirect could not be turned into a session."""

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, code="OAUTH_CALLBACK_FAILED")


class VerificationExpiredError(RemoteRejectionError):
    """
    Raised when an email verification link has expired.

    Distinct from a generic failure so the caller can offer a resend.
    """

    def __init__(
        self,
        message: str = "Verification link has expired",
        status_code: int = 400,
        payload: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, status_code, payload=payload, code="VERIFICATION_EXPIRED")


class RateLimitedError(RemoteRejectionError):
    """Raised when the backend throttles a request (HTTP 429)."""

    def __init__(
        self,
        message: str = "Too many requests. Please wait before trying again.",
        payload: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, 429, payload=payload, code="RATE_LIMITED")
