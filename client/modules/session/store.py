"""
Token/User store.

Owns the persisted session (``token`` and ``user`` keys) and keeps a
short-lived in-memory projection of the parsed user so that frequent
readers do not re-parse storage on every call.
"""

import json
import logging
import time
from typing import Any, Callable, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from shared.storage import KeyValueStorage, InMemoryStorage

from .models import (
    LoginResponsePayload,
    RawUserPayload,
    User,
    normalize_auth_payload,
)
from .notifier import SessionEvent, SessionNotifier

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"

DEFAULT_CACHE_TTL = 1.0  # seconds


class SessionStore:
    """
    Persisted session state with a read-through user cache.

    Storage parse failures are treated as "logged out": they clear the
    cache and return None rather than raising.
    """

    def __init__(
        self,
        storage: Optional[KeyValueStorage] = None,
        notifier: Optional[SessionNotifier] = None,
        clock: Callable[[], float] = time.monotonic,
        cache_ttl: float = DEFAULT_CACHE_TTL,
    ):
        """
        Initialize the store.

        Args:
            storage: Persistent key-value storage. Defaults to in-memory.
            notifier: Receives userUpdated/userVerified signals on updates.
            clock: Monotonic time source in seconds (tests inject a fake).
            cache_ttl: Freshness window of the in-memory user cache.
        """
        self._storage = storage if storage is not None else InMemoryStorage()
        self._notifier = notifier
        self._clock = clock
        self._cache_ttl = cache_ttl
        self._cached_user: Optional[User] = None
        self._last_check: Optional[float] = None

    @property
    def storage(self) -> KeyValueStorage:
        return self._storage

    @property
    def notifier(self) -> Optional[SessionNotifier]:
        return self._notifier

    def get_stored_user(self) -> Optional[User]:
        """Return the stored user, re-reading storage once the cache is stale."""
        now = self._clock()
        if self._cached_user is not None and self._is_fresh(now):
            return self._cached_user

        user = self._read_user()
        self._cached_user = user
        self._last_check = now
        return user

    def get_stored_token(self) -> Optional[str]:
        """
        Return the bearer token.

        The dedicated ``token`` key wins; otherwise the token embedded in
        the stored user is used.
        """
        token = self._storage.get_item(TOKEN_KEY)
        if token:
            return token

        raw = self._storage.get_item(USER_KEY)
        if not raw:
            return None
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Stored user is not valid JSON; no token available")
            return None
        if isinstance(data, dict) and data.get("token"):
            return data["token"]
        return None

    def is_authenticated(self) -> bool:
        """True only when both a stored user and a stored token exist."""
        return self.get_stored_user() is not None and bool(self.get_stored_token())

    def store_auth_data(self, payload: Union[LoginResponsePayload, RawUserPayload]) -> User:
        """
        Persist credentials from a login response or a raw user.

        The cache is refreshed immediately, so the next read observes the
        new user without waiting out the freshness window.

        Returns:
            The normalized user that was stored
        """
        user = normalize_auth_payload(payload)
        if user.token:
            self._storage.set_item(TOKEN_KEY, user.token)
        self._write_user(user)
        logger.debug(f"Stored session for {user.email or user.id}")
        return user

    def update_stored_user(self, partial: dict[str, Any]) -> Optional[User]:
        """
        Shallow-merge fields into the stored user.

        Accepts wire (camelCase) or snake_case keys.

        Returns:
            The merged user, or None when no user is stored
        """
        current = self.get_stored_user()
        if current is None:
            return None

        merged = {**current.model_dump(by_alias=True), **User.wire_keys(partial)}
        updated = User.model_validate(merged)
        self._write_user(updated)

        if self._notifier is not None:
            self._notifier.publish(SessionEvent.USER_UPDATED, updated)
        return updated

    def mark_verified(self) -> Optional[User]:
        """Flag the stored user's email as verified and announce it."""
        updated = self.update_stored_user({"isVerified": True})
        if updated is not None and self._notifier is not None:
            self._notifier.publish(SessionEvent.USER_VERIFIED, updated)
        return updated

    def clear_auth_data(self) -> None:
        """Remove both keys and invalidate the cache."""
        self._storage.remove_item(TOKEN_KEY)
        self._storage.remove_item(USER_KEY)
        self._cached_user = None
        self._last_check = None

    def invalidate_cache(self) -> None:
        """Force the next read to go to storage."""
        self._last_check = None

    def _is_fresh(self, now: float) -> bool:
        return self._last_check is not None and now - self._last_check < self._cache_ttl

    def _read_user(self) -> Optional[User]:
        raw = self._storage.get_item(USER_KEY)
        if not raw:
            return None
        try:
            return User.model_validate_json(raw)
        except PydanticValidationError as e:
            logger.warning(f"Discarding unreadable stored user: {e.error_count()} error(s)")
            return None

    def _write_user(self, user: User) -> None:
        self._storage.set_item(USER_KEY, json.dumps(user.to_wire()))
        self._cached_user = user
        self._last_check = self._clock()
