"""
Session module.

Handles credential storage, session caching, change notification and the
auth endpoints (register, login, logout, OAuth, password and email flows).

Public API:
- ISessionService / ITokenProvider: Interfaces for session operations
- SessionStore: Persisted token/user with a short-lived read cache
- SessionNotifier / BroadcastChannel: Change notification within and across contexts
- SessionView: A consumer's self-updating view of the session
- User, auth payload models and session exceptions
"""

from .interfaces import ISessionService, ITokenProvider
from .models import (
    User,
    UserRole,
    AuthPayload,
    LoginResponsePayload,
    RawUserPayload,
    AuthResponse,
    normalize_auth_payload,
    get_username_from_email,
)
from .notifier import (
    SessionEvent,
    SessionSignal,
    SessionNotifier,
    BroadcastChannel,
    Subscription,
)
from .store import SessionStore
from .view import SessionView
from .exceptions import (
    WeakPasswordError,
    PasswordMismatchError,
    MissingEmailError,
    OAuthCallbackError,
    VerificationExpiredError,
    RateLimitedError,
)

__all__ = [
    # Interfaces
    "ISessionService",
    "ITokenProvider",
    # Models
    "User",
    "UserRole",
    "AuthPayload",
    "LoginResponsePayload",
    "RawUserPayload",
    "AuthResponse",
    "normalize_auth_payload",
    "get_username_from_email",
    # Notification
    "SessionEvent",
    "SessionSignal",
    "SessionNotifier",
    "BroadcastChannel",
    "Subscription",
    # State
    "SessionStore",
    "SessionView",
    # Exceptions
    "WeakPasswordError",
    "PasswordMismatchError",
    "MissingEmailError",
    "OAuthCallbackError",
    "VerificationExpiredError",
    "RateLimitedError",
]
