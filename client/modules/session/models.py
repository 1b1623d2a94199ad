"""
Session module data models.

These models define the user profile held in local storage and the
payload shapes the backend returns from its auth endpoints.
"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union
from pydantic import AliasChoices, BaseModel, Field

from shared.models import ApiResponse, WireModel


class UserRole(str, Enum):
    """Roles known to the platform."""

    STUDENT = "student"
    ADMIN = "admin"


class User(WireModel):
    """
    The signed-in user as persisted under the ``user`` storage key.

    The token is embedded as well so it can be recovered when the
    dedicated ``token`` key is missing.
    """

    id: Optional[Union[str, int]] = Field(
        None,
        validation_alias=AliasChoices("id", "_id"),
        serialization_alias="id",
        description="User ID",
    )
    full_name: Optional[str] = Field(None, description="Display name")
    email: Optional[str] = Field(None, description="Email address")
    role: UserRole = Field(default=UserRole.STUDENT, description="Platform role")
    is_verified: bool = Field(default=False, description="Whether email is verified")
    token: Optional[str] = Field(None, description="Bearer token")

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def username(self) -> str:
        return get_username_from_email(self.email)

    @classmethod
    def wire_keys(cls, partial: dict) -> dict:
        """Translate snake_case field names in a partial update to wire names."""
        translated = {}
        for key, value in partial.items():
            field = cls.model_fields.get(key)
            if field is not None:
                key = field.serialization_alias or field.alias or key
            translated[key] = value
        return translated


class LoginResponsePayload(BaseModel):
    """Credentials as returned by register/login: token and user side by side."""

    kind: Literal["loginResponse"] = "loginResponse"
    token: str
    user: User


class RawUserPayload(BaseModel):
    """A user object that may carry its own token (OAuth callback path)."""

    kind: Literal["rawUser"] = "rawUser"
    user: User


AuthPayload = Annotated[
    Union[LoginResponsePayload, RawUserPayload],
    Field(discriminator="kind"),
]


def normalize_auth_payload(payload: Union[LoginResponsePayload, RawUserPayload]) -> User:
    """
    Resolve either payload shape to a single user-with-token.

    A login response's top-level token wins over one embedded in the user.
    """
    if isinstance(payload, LoginResponsePayload):
        token = payload.token or payload.user.token
        return payload.user.model_copy(update={"token": token})
    return payload.user


class AuthResponse(ApiResponse):
    """Response from register/login."""

    token: Optional[str] = None
    user: Optional[User] = None

    def to_payload(self) -> Optional[LoginResponsePayload]:
        """Credentials to persist, or None if the response carries none."""
        if self.success and self.token and self.user is not None:
            return LoginResponsePayload(token=self.token, user=self.user)
        return None


class CurrentUserResponse(ApiResponse):
    """Response from GET /api/auth/me and profile updates."""

    user: Optional[User] = None


class ResendVerificationResponse(ApiResponse):
    """Response from POST /api/auth/resend-verification."""

    remaining_attempts: Optional[int] = None


def get_username_from_email(email: Optional[str]) -> str:
    """Local part of an email address, used as a fallback display name."""
    if not email:
        return "User"
    return email.split("@")[0]
