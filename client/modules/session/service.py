"""
Session service implementation.

Talks to /api/auth/* and /api/users/* on the backend, persists returned
credentials in the SessionStore and announces every change through the
SessionNotifier.
"""

import logging
import re
from typing import Optional

from shared.config import get_settings
from shared.exceptions import (
    AuthRequiredError,
    NetworkFailureError,
    RemoteRejectionError,
)
from shared.http import ApiClient, get_api_client
from shared.models import ApiResponse, OperationResult
from shared.storage import create_storage

from .exceptions import (
    MissingEmailError,
    OAuthCallbackError,
    PasswordMismatchError,
    RateLimitedError,
    VerificationExpiredError,
    WeakPasswordError,
)
from .interfaces import ISessionService
from .models import (
    AuthResponse,
    CurrentUserResponse,
    RawUserPayload,
    ResendVerificationResponse,
    User,
)
from .notifier import SessionEvent, SessionNotifier
from .store import SessionStore

logger = logging.getLogger(__name__)

AUTH_PATH = "/api/auth"
USERS_PATH = "/api/users"

MIN_PASSWORD_LENGTH = 6


def validate_password(
    password: str,
    confirm_password: Optional[str] = None,
    label: str = "Password",
) -> None:
    """
    Enforce the platform password policy.

    Raises:
        WeakPasswordError: Shorter than six characters or no digit
        PasswordMismatchError: Confirmation given and different
    """
    if confirm_password is not None and password != confirm_password:
        raise PasswordMismatchError()
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise WeakPasswordError(f"{label} must be at least {MIN_PASSWORD_LENGTH} characters long")
    if not re.search(r"\d", password):
        raise WeakPasswordError(f"{label} must contain at least one number")


class SessionService(ISessionService):
    """Implementation of the session service."""

    def __init__(
        self,
        api: Optional[ApiClient] = None,
        store: Optional[SessionStore] = None,
        notifier: Optional[SessionNotifier] = None,
    ):
        """
        Initialize the session service.

        Args:
            api: Backend client. Defaults to the shared ApiClient.
            store: Session store. Defaults to one built from settings.
            notifier: Change notifier. Defaults to the store's notifier.
        """
        self._api = api or get_api_client()
        if store is None:
            settings = get_settings()
            notifier = notifier or SessionNotifier()
            store = SessionStore(
                storage=create_storage(settings.storage_path),
                notifier=notifier,
                cache_ttl=settings.user_cache_ttl,
            )
        self._store = store
        self._notifier = notifier or store.notifier or SessionNotifier()

    @property
    def store(self) -> SessionStore:
        return self._store

    @property
    def notifier(self) -> SessionNotifier:
        return self._notifier

    async def register(
        self,
        full_name: str,
        email: str,
        password: str,
        confirm_password: Optional[str] = None,
    ) -> AuthResponse:
        """Create an account and store the returned credentials."""
        validate_password(password, confirm_password)

        data = await self._api.post(
            f"{AUTH_PATH}/register",
            json={"fullName": full_name, "email": email, "password": password},
            error_message="Registration failed",
        )
        return self._accept_credentials(AuthResponse.model_validate(data))

    async def login(self, email: str, password: str, remember_me: bool = False) -> AuthResponse:
        """Sign in and store the returned credentials."""
        data = await self._api.post(
            f"{AUTH_PATH}/login",
            json={"email": email, "password": password, "rememberMe": remember_me},
            error_message="Login failed",
        )
        return self._accept_credentials(AuthResponse.model_validate(data))

    async def logout(self) -> OperationResult:
        """
        Sign out.

        The remote call is best effort. Local state is cleared whatever the
        outcome, so calling this twice in a row is safe.
        """
        token = self._store.get_stored_token()
        try:
            if token:
                await self._api.post(f"{AUTH_PATH}/logout", token=token, error_message="Logout failed")
        except (RemoteRejectionError, NetworkFailureError) as e:
            logger.warning(f"Remote logout failed, clearing local session anyway: {e.message}")
        finally:
            self._store.clear_auth_data()
            self._notifier.publish(SessionEvent.LOGGED_OUT)
        return OperationResult.ok()

    async def get_current_user(self, token: Optional[str] = None) -> User:
        """
        Fetch the signed-in user's profile.

        Args:
            token: Bearer token to use. Defaults to the stored token.

        Raises:
            AuthRequiredError: If no token is available
        """
        token = token or self._store.get_stored_token()
        if not token:
            raise AuthRequiredError("Not authenticated")

        data = await self._api.get(
            f"{AUTH_PATH}/me",
            token=token,
            error_message="Failed to fetch user data",
        )
        response = CurrentUserResponse.model_validate(data)
        if not response.success or response.user is None:
            raise OAuthCallbackError("Invalid response format")
        return response.user

    def google_login_url(self) -> str:
        """Entry point of the redirect-based Google OAuth flow."""
        return self._api.url_for(f"{AUTH_PATH}/google")

    async def complete_oauth_callback(self, token: Optional[str]) -> User:
        """
        Turn the token from the OAuth redirect into a stored session.

        Any failure clears local session state before propagating.
        """
        if not token:
            raise OAuthCallbackError("No authentication token received")

        try:
            user = await self.get_current_user(token)
        except Exception:
            self._store.clear_auth_data()
            raise

        stored = self._store.store_auth_data(
            RawUserPayload(user=user.model_copy(update={"token": token}))
        )
        self._notifier.publish(SessionEvent.LOGGED_IN, stored)
        logger.info(f"OAuth sign-in completed for {stored.email}")
        return stored

    async def forgot_password(self, email: str) -> ApiResponse:
        """Request a password reset email. No authentication needed."""
        if not email or not email.strip():
            raise MissingEmailError()

        data = await self._api.post(
            f"{AUTH_PATH}/forgot-password",
            json={"email": email.strip()},
            error_message="Failed to send reset email",
        )
        return ApiResponse.model_validate(data)

    async def reset_password(
        self,
        token: str,
        new_password: str,
        confirm_password: Optional[str] = None,
    ) -> ApiResponse:
        """Set a new password using the token from the reset email."""
        validate_password(new_password, confirm_password)

        data = await self._api.put(
            f"{AUTH_PATH}/reset-password/{token}",
            json={"password": new_password},
            error_message="Failed to reset password",
        )
        return ApiResponse.model_validate(data)

    async def resend_verification_email(self) -> ResendVerificationResponse:
        """Ask the backend to send another verification email."""
        token = self._store.get_stored_token()
        if not token:
            raise AuthRequiredError("No authentication token found. Please log in again.")

        try:
            data = await self._api.post(
                f"{AUTH_PATH}/resend-verification",
                token=token,
                error_message="Failed to resend verification email",
            )
        except RemoteRejectionError as e:
            if e.status_code == 429:
                raise RateLimitedError(
                    e.payload.get("message") or RateLimitedError().message,
                    payload=e.payload,
                ) from e
            raise
        return ResendVerificationResponse.model_validate(data)

    async def verify_email(self, token: str) -> ApiResponse:
        """
        Confirm an email address with the token from the verification link.

        On success the stored user, if any, is marked verified.

        Raises:
            VerificationExpiredError: If the link has expired
        """
        try:
            data = await self._api.get(
                f"{AUTH_PATH}/verify-email/{token}",
                error_message="Verification failed. Token may be expired.",
            )
        except RemoteRejectionError as e:
            if e.payload.get("expired"):
                raise VerificationExpiredError(e.message, e.status_code, payload=e.payload) from e
            raise

        response = ApiResponse.model_validate(data)
        if response.success:
            self._store.mark_verified()
        return response

    async def update_profile(self, full_name: str, email: str) -> User:
        """Update name and email, keeping the stored token."""
        token = self._require_token()
        data = await self._api.put(
            f"{USERS_PATH}/profile",
            token=token,
            json={"fullName": full_name, "email": email},
            error_message="Failed to update profile",
        )
        response = CurrentUserResponse.model_validate(data)
        changes = (
            response.user.model_dump(
                by_alias=True, exclude_unset=True, exclude_none=True, exclude={"token"}
            )
            if response.user is not None
            else {"fullName": full_name, "email": email}
        )
        updated = self._store.update_stored_user(changes)
        return updated or response.user

    async def change_password(
        self,
        current_password: str,
        new_password: str,
        confirm_password: str,
    ) -> ApiResponse:
        """Change the password of the signed-in user."""
        validate_password(new_password, confirm_password, label="New password")
        token = self._require_token()

        data = await self._api.put(
            f"{USERS_PATH}/change-password",
            token=token,
            json={"currentPassword": current_password, "newPassword": new_password},
            error_message="Failed to change password",
        )
        return ApiResponse.model_validate(data)

    def _require_token(self) -> str:
        token = self._store.get_stored_token()
        if not token:
            raise AuthRequiredError("Please login to continue")
        return token

    def _accept_credentials(self, response: AuthResponse) -> AuthResponse:
        payload = response.to_payload()
        if payload is not None:
            user = self._store.store_auth_data(payload)
            self._notifier.publish(SessionEvent.LOGGED_IN, user)
            logger.info(f"Signed in as {user.email}")
        return response


# Module-level instance getter
_service_instance: Optional[SessionService] = None


def get_session_service() -> SessionService:
    """Get the session service singleton."""
    global _service_instance
    if _service_instance is None:
        _service_instance = SessionService()
    return _service_instance


def reset_session_service() -> None:
    """Reset the session service singleton (for testing)."""
    global _service_instance
    _service_instance = None
