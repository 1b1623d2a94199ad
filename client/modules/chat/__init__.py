"""
Chat module.

Public API:
- IChatService / ChatService: Client for /api/chat
- ChatRoom, ChatMessage: Room key and message models
"""

from .interfaces import IChatService
from .models import (
    ActiveUsersResponse,
    ChatMessage,
    ChatRoom,
    MessagesResponse,
    SendMessageResponse,
    UnreadCountResponse,
)
from .service import ChatService
from .exceptions import ChatVerificationRequiredError, EmptyMessageError

__all__ = [
    "IChatService",
    "ChatService",
    "ChatRoom",
    "ChatMessage",
    "MessagesResponse",
    "SendMessageResponse",
    "UnreadCountResponse",
    "ActiveUsersResponse",
    "EmptyMessageError",
    "ChatVerificationRequiredError",
]
