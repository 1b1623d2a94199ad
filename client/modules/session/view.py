"""
Session view: a consumer's local projection of the session.

A view subscribes to the notifier and re-reads the store on every signal.
It only replaces its state when the stored value actually changed, so
repeated notifications for the same change are harmless.
"""

import asyncio
import logging
from typing import Callable, Optional

from .models import User
from .notifier import SessionNotifier, SessionSignal, Subscription
from .store import SessionStore

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[Optional[User]], None]


class SessionView:
    """
    Tracks the current user for one consumer.

    Call close() when the consumer goes away; it releases the
    subscription and stops any polling task.
    """

    def __init__(
        self,
        store: SessionStore,
        notifier: SessionNotifier,
        on_change: Optional[ChangeCallback] = None,
    ):
        self._store = store
        self._on_change = on_change
        self._user: Optional[User] = None
        self._logged_in = False
        self._poll_task: Optional[asyncio.Task] = None
        self._subscription: Optional[Subscription] = notifier.subscribe(self._handle_signal)
        self.refresh()

    @property
    def user(self) -> Optional[User]:
        return self._user

    @property
    def is_logged_in(self) -> bool:
        return self._logged_in

    @property
    def is_closed(self) -> bool:
        return self._subscription is None

    def refresh(self) -> bool:
        """
        Re-read the store.

        Returns:
            True if the visible state changed
        """
        user = self._store.get_stored_user()
        logged_in = user is not None and bool(self._store.get_stored_token())
        if not logged_in:
            user = None

        if user == self._user and logged_in == self._logged_in:
            return False

        self._user = user
        self._logged_in = logged_in
        if self._on_change is not None:
            self._on_change(user)
        return True

    def start_polling(self, interval: float) -> asyncio.Task:
        """
        Re-read the store every ``interval`` seconds.

        Only needed when another process writes the same storage, since
        such writes raise no signal. Must be called from a running loop.
        """
        if self._poll_task is None or self._poll_task.done():
            self._poll_task = asyncio.get_running_loop().create_task(self._poll(interval))
        return self._poll_task

    async def stop_polling(self) -> None:
        task, self._poll_task = self._poll_task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    def close(self) -> None:
        """
        Release the subscription and cancel polling.

        The cancelled poll task is not awaited. From async code use
        aclose() so the task has finished before the loop shuts down.
        """
        if self._subscription is not None:
            self._subscription.close()
            self._subscription = None
        if self._poll_task is not None:
            self._poll_task.cancel()
            self._poll_task = None

    async def aclose(self) -> None:
        """Release the subscription and wait for polling to stop."""
        await self.stop_polling()
        self.close()

    def _handle_signal(self, signal: SessionSignal) -> None:
        # Remote signals mean another context wrote storage behind our cache.
        if signal.remote:
            self._store.invalidate_cache()
        self.refresh()

    async def _poll(self, interval: float) -> None:
        while True:
            await asyncio.sleep(interval)
            self._store.invalidate_cache()
            self.refresh()
