"""
Chat module data models.

Rooms are keyed by department and semester. Messages arrive with the
sender either as a bare id or as a populated user object.
"""

from datetime import datetime
from typing import Any, Optional, Union
from urllib.parse import quote

from pydantic import AliasChoices, BaseModel, Field

from shared.models import ApiResponse, WireModel

from modules.session.models import User


class ChatRoom(BaseModel):
    """A department and semester chat room."""

    department: str
    semester: Union[str, int]

    @property
    def room_id(self) -> str:
        """Identifier the live transport uses, e.g. ``Computer Science_3``."""
        return f"{self.department}_{self.semester}"

    @property
    def path(self) -> str:
        """URL path segment, with the department percent-encoded."""
        return f"{quote(self.department, safe='')}/{self.semester}"


class ChatMessage(WireModel):
    """A message posted to a room."""

    id: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("_id", "id"),
        serialization_alias="_id",
    )
    department: Optional[str] = None
    semester: Optional[Union[str, int]] = None
    message: str = ""
    user_name: Optional[str] = None
    user_id: Optional[Union[str, dict[str, Any]]] = None
    reply_to: Optional[Union["ChatMessage", str]] = None
    is_deleted: bool = False
    created_at: Optional[datetime] = None

    @property
    def sender_id(self) -> Optional[str]:
        if isinstance(self.user_id, dict):
            sender = self.user_id.get("_id") or self.user_id.get("id")
            return str(sender) if sender is not None else None
        return self.user_id

    def is_own(self, user: Optional[User]) -> bool:
        """True when ``user`` posted this message."""
        if user is None or user.id is None or not self.sender_id:
            return False
        return self.sender_id == str(user.id)


ChatMessage.model_rebuild()


class MessagesResponse(ApiResponse):
    messages: list[ChatMessage] = Field(default_factory=list)


class SendMessageResponse(ApiResponse):
    """
    Reply to a posted message.

    The backend puts the stored message under ``message`` or ``data``,
    so ``message`` may hold either text or the message itself.
    """

    message: Optional[Union[ChatMessage, str]] = None
    data: Optional[ChatMessage] = None

    @property
    def chat_message(self) -> Optional[ChatMessage]:
        if isinstance(self.message, ChatMessage):
            return self.message
        return self.data


class UnreadCountResponse(ApiResponse):
    unread_count: int = 0


class ActiveUsersResponse(ApiResponse):
    count: int = 0
    users: list[Any] = Field(default_factory=list)
