"""
Session module interface.

Other modules depend on ISessionService and ITokenProvider, not the
concrete implementations. This keeps them testable with simple fakes.
"""

from typing import Optional, Protocol, runtime_checkable

from shared.models import ApiResponse, OperationResult

from .models import AuthResponse, ResendVerificationResponse, User


@runtime_checkable
class ITokenProvider(Protocol):
    """Read access to the current session, as needed by other modules."""

    def get_stored_user(self) -> Optional[User]:
        ...

    def get_stored_token(self) -> Optional[str]:
        ...

    def is_authenticated(self) -> bool:
        ...


@runtime_checkable
class ISessionService(Protocol):
    """
    Interface for session operations against the auth backend.

    Every method either returns a success payload or raises a
    UnibroError with a display-ready message.
    """

    async def register(
        self,
        full_name: str,
        email: str,
        password: str,
        confirm_password: Optional[str] = None,
    ) -> AuthResponse:
        """
        Create an account and store the returned credentials.

        Raises:
            ValidationError: If the password fails the local policy
            RemoteRejectionError: If the backend refuses the registration
        """
        ...

    async def login(self, email: str, password: str, remember_me: bool = False) -> AuthResponse:
        """
        Sign in and store the returned credentials.

        Raises:
            RemoteRejectionError: If the credentials are refused
        """
        ...

    async def logout(self) -> OperationResult:
        """
        Sign out. The remote call is best effort; local state is always cleared.
        """
        ...

    async def forgot_password(self, email: str) -> ApiResponse:
        """Request a password reset email."""
        ...

    async def reset_password(
        self,
        token: str,
        new_password: str,
        confirm_password: Optional[str] = None,
    ) -> ApiResponse:
        """Set a new password using the token from the reset email."""
        ...

    async def resend_verification_email(self) -> ResendVerificationResponse:
        """
        Ask the backend to send another verification email.

        Raises:
            AuthRequiredError: If no token is stored
            RateLimitedError: If the backend throttles the request
        """
        ...

    async def complete_oauth_callback(self, token: Optional[str]) -> User:
        """
        Turn the token from the OAuth redirect into a stored session.

        Raises:
            OAuthCallbackError: If no token was received
        """
        ...

    async def update_profile(self, full_name: str, email: str) -> User:
        """Update profile fields and merge the result into the stored user."""
        ...
