"""
Chat module exceptions.

Both are raised before a message is sent to the backend.
"""

from shared.exceptions import AuthorizationError, ValidationError


class EmptyMessageError(ValidationError):
    """Raised when a message is blank after trimming."""

    def __init__(self):
        super().__init__("Message cannot be empty", code="EMPTY_MESSAGE")


class ChatVerificationRequiredError(AuthorizationError):
    """Raised when an unverified account tries to post."""

    def __init__(self):
        super().__init__("Verify email to chat", code="EMAIL_NOT_VERIFIED")
