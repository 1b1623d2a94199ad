"""
Session change notifications.

Independent consumers converge on the same session state without a shared
in-memory store: every change is published as a same-tab signal carrying
the user payload, followed by a payload-less ``storage`` signal. The storage
signal is also posted to every peer notifier on a shared BroadcastChannel,
which plays the role of the browser's cross-tab storage event.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, Optional
import uuid

from .models import User

logger = logging.getLogger(__name__)


class SessionEvent(str, Enum):
    """Signals published on session changes."""

    LOGGED_IN = "userLoggedIn"
    LOGGED_OUT = "userLoggedOut"
    USER_UPDATED = "userUpdated"
    USER_VERIFIED = "userVerified"
    STORAGE_CHANGED = "storage"


@dataclass(frozen=True)
class SessionSignal:
    """A single notification delivered to subscribers."""

    event: SessionEvent
    user: Optional[User] = None
    origin: Optional[str] = None
    remote: bool = False


Listener = Callable[[SessionSignal], None]


@dataclass(eq=False)
class Subscription:
    """
    Handle returned by SessionNotifier.subscribe.

    Closing it deregisters the listener. Every consumer must close its
    subscription when it goes away.
    """

    notifier: "SessionNotifier"
    listener: Listener
    events: Optional[frozenset[SessionEvent]] = None
    closed: bool = field(default=False)

    def wants(self, event: SessionEvent) -> bool:
        return self.events is None or event in self.events

    def close(self) -> None:
        if not self.closed:
            self.closed = True
            self.notifier._remove(self)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class BroadcastChannel:
    """Connects notifiers that share one persistent storage (tabs)."""

    def __init__(self):
        self._members: list["SessionNotifier"] = []

    @property
    def members(self) -> list["SessionNotifier"]:
        return list(self._members)

    def join(self, notifier: "SessionNotifier") -> None:
        if notifier not in self._members:
            self._members.append(notifier)

    def leave(self, notifier: "SessionNotifier") -> None:
        if notifier in self._members:
            self._members.remove(notifier)

    def post(self, signal: SessionSignal, sender: "SessionNotifier") -> None:
        """Deliver a signal to every member except the sender."""
        for member in list(self._members):
            if member is not sender:
                member._deliver(signal)


class SessionNotifier:
    """Publish/subscribe hub for session changes within one context."""

    def __init__(self, channel: Optional[BroadcastChannel] = None):
        self.id = str(uuid.uuid4())
        self._subscriptions: list[Subscription] = []
        self._channel = channel
        if channel is not None:
            channel.join(self)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def subscribe(
        self,
        listener: Listener,
        events: Optional[Iterable[SessionEvent]] = None,
    ) -> Subscription:
        """
        Register a listener.

        Args:
            listener: Called with each SessionSignal
            events: Restrict delivery to these events. None means all.

        Returns:
            Subscription to close when the listener is no longer needed
        """
        subscription = Subscription(
            notifier=self,
            listener=listener,
            events=frozenset(events) if events is not None else None,
        )
        self._subscriptions.append(subscription)
        return subscription

    def publish(self, event: SessionEvent, user: Optional[User] = None) -> None:
        """
        Announce a session change.

        Delivers the event with its payload locally, then a storage-change
        signal locally and to every peer on the channel.
        """
        logger.debug(f"Publishing {event.value}")
        self._deliver(SessionSignal(event=event, user=user, origin=self.id))
        self.notify_storage_changed()

    def notify_storage_changed(self) -> None:
        """Signal that auth storage changed, without saying how."""
        self._deliver(SessionSignal(event=SessionEvent.STORAGE_CHANGED, origin=self.id))
        if self._channel is not None:
            self._channel.post(
                SessionSignal(event=SessionEvent.STORAGE_CHANGED, origin=self.id, remote=True),
                sender=self,
            )

    def close(self) -> None:
        """Drop all subscriptions and leave the channel."""
        for subscription in list(self._subscriptions):
            subscription.close()
        if self._channel is not None:
            self._channel.leave(self)
            self._channel = None

    def _deliver(self, signal: SessionSignal) -> None:
        for subscription in list(self._subscriptions):
            if subscription.closed or not subscription.wants(signal.event):
                continue
            try:
                subscription.listener(signal)
            except Exception:
                logger.exception(f"Session listener failed on {signal.event.value}")

    def _remove(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)
