"""
Base exception classes for the Unibro client.

Each module defines its own exceptions that inherit from these bases.
Every exception carries a display-ready message so callers can surface
it directly without inspecting HTTP status codes.
"""

from typing import Optional, Any


class UnibroError(Exception):
    """
    Base exception for all Unibro client errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for display or logging."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(UnibroError):
    """Local precondition failed. Never reaches the network."""

    pass


class AuthenticationError(UnibroError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(UnibroError):
    """Authorization failed (insufficient permissions)."""

    pass


class AuthRequiredError(AuthenticationError):
    """Raised when an authenticated operation is attempted without a stored token."""

    def __init__(self, message: str = "Please login to continue"):
        super().__init__(message, code="AUTH_REQUIRED")


class RemoteRejectionError(UnibroError):
    """
    The backend answered with a non-2xx status.

    The message is the backend's own ``message`` field when present,
    otherwise the operation's fallback message.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        payload: Optional[dict[str, Any]] = None,
        code: Optional[str] = None,
    ):
        super().__init__(
            message,
            code=code or "REMOTE_REJECTION",
            details={"status_code": status_code},
        )
        self.status_code = status_code
        self.payload = payload or {}


class ExternalServiceError(UnibroError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service


class NetworkFailureError(ExternalServiceError):
    """The request never produced a response (offline, DNS, refused, timeout)."""

    DEFAULT_MESSAGE = "Unable to reach the server. Please try again."

    def __init__(self, reason: Optional[str] = None, service: str = "api"):
        super().__init__(
            self.DEFAULT_MESSAGE,
            service=service,
            code="NETWORK_FAILURE",
            details={"reason": reason} if reason else {},
        )
