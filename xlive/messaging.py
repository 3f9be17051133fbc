"""An in-process publish/subscribe message bus with subject-based routing."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Iterable, Mapping, Optional

logger = logging.getLogger(__name__)

MessageHandler = Callable[["Message"], None]


@dataclass(frozen=True)
class Message:
    """A published message: its subject, payload and headers."""

    subject: str
    data: bytes
    headers: dict[str, str] = field(default_factory=dict)


def _validate_subject(subject: str, *, allow_wildcards: bool) -> list[str]:
    if not subject:
        raise ValueError("subject must not be empty")
    tokens = subject.split(".")
    for position, token in enumerate(tokens):
        if not token:
            raise ValueError(f"invalid subject: {subject!r}")
        if token in ("*", ">"):
            if not allow_wildcards:
                raise ValueError(f"wildcards are not allowed when publishing: {subject!r}")
            if token == ">" and position != len(tokens) - 1:
                raise ValueError(f"'>' must be the last token: {subject!r}")
    return tokens


def _matches(pattern: list[str], subject: list[str]) -> bool:
    for position, token in enumerate(pattern):
        if token == ">":
            return len(subject) > position
        if position >= len(subject):
            return False
        if token != "*" and token != subject[position]:
            return False
    return len(pattern) == len(subject)


class Subscription:
    """Interest in a subject; messages matching it are passed to a callback."""

    def __init__(self, bus: "MessageBus", subject: str, callback: MessageHandler) -> None:
        self.subject = subject
        self._bus = bus
        self._callback = callback
        self._tokens = _validate_subject(subject, allow_wildcards=True)
        self.active = True

    def _accepts(self, subject_tokens: list[str]) -> bool:
        return self.active and _matches(self._tokens, subject_tokens)

    def _deliver(self, message: Message) -> None:
        try:
            self._callback(message)
        except Exception:
            logger.exception("message handler for %r failed", self.subject)

    def unsubscribe(self) -> None:
        """Stop receiving messages; raises ValueError if already unsubscribed."""
        if not self.active:
            raise ValueError(f"invalid subscription: {self.subject!r}")
        self._bus._remove(self)
        self.active = False


class MessageBus:
    """Routes published messages to matching subscriptions and keeps a log of them."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._subscriptions: list[Subscription] = []
        self._published: list[Message] = []
        self._connected = True

    def __enter__(self) -> "MessageBus":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def publish(
        self, subject: str, data: bytes, headers: Optional[Mapping[str, str]] = None
    ) -> Message:
        """Publish data on subject; raises ConnectionError once the bus is closed."""
        tokens = _validate_subject(subject, allow_wildcards=False)
        message = Message(subject=subject, data=bytes(data), headers=dict(headers or {}))
        with self._lock:
            if not self._connected:
                raise ConnectionError("connection closed")
            self._published.append(message)
            receivers = [sub for sub in self._subscriptions if sub._accepts(tokens)]
        for subscription in receivers:
            subscription._deliver(message)
        return message

    def subscribe(self, subject: str, callback: MessageHandler) -> Subscription:
        """Register callback for subject, which may use '*' and '>' wildcards."""
        subscription = Subscription(self, subject, callback)
        with self._lock:
            if not self._connected:
                raise ConnectionError("connection closed")
            self._subscriptions.append(subscription)
        return subscription

    def _remove(self, subscription: Subscription) -> None:
        with self._lock:
            if not self._connected:
                raise ConnectionError("connection closed")
            self._subscriptions.remove(subscription)

    def is_connected(self) -> bool:
        with self._lock:
            return self._connected

    def close(self) -> None:
        """Disconnect; every subscription ends and further publishing fails."""
        with self._lock:
            self._connected = False
            subscriptions, self._subscriptions = self._subscriptions, []
        for subscription in subscriptions:
            subscription.active = False

    def messages(self, subject: Optional[str] = None) -> list[Message]:
        """Messages published so far, optionally only those matching subject."""
        with self._lock:
            published: Iterable[Message] = list(self._published)
        if subject is None:
            return list(published)
        pattern = _validate_subject(subject, allow_wildcards=True)
        return [m for m in published if _matches(pattern, m.subject.split("."))]