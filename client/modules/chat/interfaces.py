"""
Chat module interface.
"""

from typing import Optional, Protocol, Union, runtime_checkable

from shared.models import ApiResponse

from .models import (
    ActiveUsersResponse,
    MessagesResponse,
    SendMessageResponse,
    UnreadCountResponse,
)


@runtime_checkable
class IChatService(Protocol):
    """
    Interface for the chat REST calls.

    Unread counts and active users are advisory: they read as zero when
    the backend cannot be reached. Every other call raises.
    """

    async def get_room_messages(
        self,
        department: str,
        semester: Union[str, int],
        limit: int = 50,
        before: Optional[str] = None,
    ) -> MessagesResponse:
        """The latest ``limit`` messages of a room, oldest first."""
        ...

    async def send_message(
        self,
        department: str,
        semester: Union[str, int],
        message: str,
        reply_to: Optional[str] = None,
    ) -> SendMessageResponse:
        """
        Post a message, optionally as a reply to another message id.

        Raises:
            EmptyMessageError: Blank message
            AuthRequiredError: Not signed in
            ChatVerificationRequiredError: Email not verified
        """
        ...

    async def delete_message(self, message_id: str) -> ApiResponse:
        ...

    async def get_unread_count(self, department: str, semester: Union[str, int]) -> UnreadCountResponse:
        ...

    async def mark_as_read(self, department: str, semester: Union[str, int]) -> ApiResponse:
        ...

    async def get_active_users(self, department: str, semester: Union[str, int]) -> ActiveUsersResponse:
        ...
