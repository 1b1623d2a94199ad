"""
Chat REST client.

Room history, posting and read markers for the department and semester
rooms. Live delivery happens over a separate socket transport; these
calls are the request/response side of the same backend.
"""

import logging
from typing import Optional, Union

from shared.exceptions import AuthRequiredError, NetworkFailureError, RemoteRejectionError
from shared.http import ApiClient, get_api_client
from shared.models import ApiResponse

from modules.session.interfaces import ITokenProvider

from .exceptions import ChatVerificationRequiredError, EmptyMessageError
from .interfaces import IChatService
from .models import (
    ActiveUsersResponse,
    ChatRoom,
    MessagesResponse,
    SendMessageResponse,
    UnreadCountResponse,
)

logger = logging.getLogger(__name__)

CHAT_PATH = "/api/chat"
CHAT_AUTH_MESSAGE = "Please login to use chat"


class ChatService(IChatService):
    """Implementation of the chat REST client."""

    def __init__(self, tokens: ITokenProvider, api: Optional[ApiClient] = None):
        self._tokens = tokens
        self._api = api or get_api_client()

    def _require_token(self, message: str = CHAT_AUTH_MESSAGE) -> str:
        token = self._tokens.get_stored_token()
        if not token:
            raise AuthRequiredError(message)
        return token

    async def get_room_messages(
        self,
        department: str,
        semester: Union[str, int],
        limit: int = 50,
        before: Optional[str] = None,
    ) -> MessagesResponse:
        room = ChatRoom(department=department, semester=semester)
        params = {"limit": limit}
        if before:
            params["before"] = before
        data = await self._api.get(
            f"{CHAT_PATH}/messages/{room.path}",
            token=self._require_token(),
            params=params,
            error_message="Failed to fetch messages",
        )
        return MessagesResponse.model_validate(data)

    async def send_message(
        self,
        department: str,
        semester: Union[str, int],
        message: str,
        reply_to: Optional[str] = None,
    ) -> SendMessageResponse:
        text = (message or "").strip()
        if not text:
            raise EmptyMessageError()
        token = self._require_token()
        user = self._tokens.get_stored_user()
        if user is None or not user.is_verified:
            raise ChatVerificationRequiredError()

        data = await self._api.post(
            f"{CHAT_PATH}/messages",
            token=token,
            json={
                "department": department,
                "semester": semester,
                "message": text,
                "replyTo": reply_to,
            },
            error_message="Failed to send message",
        )
        logger.debug(f"Posted message to {department}_{semester}")
        return SendMessageResponse.model_validate(data)

    async def delete_message(self, message_id: str) -> ApiResponse:
        data = await self._api.delete(
            f"{CHAT_PATH}/messages/{message_id}",
            token=self._require_token(),
            error_message="Failed to delete message",
        )
        logger.info(f"Deleted chat message {message_id}")
        return ApiResponse.model_validate(data)

    async def get_unread_count(self, department: str, semester: Union[str, int]) -> UnreadCountResponse:
        room = ChatRoom(department=department, semester=semester)
        try:
            data = await self._api.get(
                f"{CHAT_PATH}/unread/{room.path}",
                token=self._tokens.get_stored_token(),
                error_message="Failed to fetch unread count",
            )
        except (RemoteRejectionError, NetworkFailureError) as e:
            logger.warning(f"Unread count for {room.room_id} unavailable: {e.message}")
            return UnreadCountResponse(unread_count=0)
        return UnreadCountResponse.model_validate(data)

    async def mark_as_read(self, department: str, semester: Union[str, int]) -> ApiResponse:
        room = ChatRoom(department=department, semester=semester)
        data = await self._api.put(
            f"{CHAT_PATH}/read/{room.path}",
            token=self._require_token(),
            error_message="Failed to mark as read",
        )
        return ApiResponse.model_validate(data)

    async def get_active_users(self, department: str, semester: Union[str, int]) -> ActiveUsersResponse:
        room = ChatRoom(department=department, semester=semester)
        try:
            data = await self._api.get(
                f"{CHAT_PATH}/active/{room.path}",
                token=self._tokens.get_stored_token(),
                error_message="Failed to fetch active users",
            )
        except (RemoteRejectionError, NetworkFailureError) as e:
            logger.warning(f"Active users for {room.room_id} unavailable: {e.message}")
            return ActiveUsersResponse(count=0, users=[])
        return ActiveUsersResponse.model_validate(data)
