"""Typed change notifications for renderers and settings listeners.

Each :class:`Signal` carries exactly one payload type, so a renderer
subscribed to ``CropSession.changed`` receives the new crop state instead of
re-querying the session.  Notifications are delivered synchronously on the
thread that emits them, which is always the session's event loop thread.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Generic, TypeVar

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class Signal(Generic[T]):
    """A named notification channel delivering one payload per emission.

    ``connect`` returns a callable that removes the subscription again.  A
    subscriber that raises is logged with its traceback; delivery continues
    with the next subscriber.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._subscribers: list[Callable[[T], object]] = []

    def __repr__(self) -> str:
        return f"Signal({self.name!r}, subscribers={len(self._subscribers)})"

    def __len__(self) -> int:
        return len(self._subscribers)

    def connect(self, subscriber: Callable[[T], object]) -> Callable[[], bool]:
        """Subscribe *subscriber*; connecting it twice has no effect."""
        if subscriber not in self._subscribers:
            self._subscribers.append(subscriber)
        return lambda: self.disconnect(subscriber)

    def disconnect(self, subscriber: Callable[[T], object]) -> bool:
        """Remove *subscriber*; return False when it was not connected."""
        try:
            self._subscribers.remove(subscriber)
        except ValueError:
            return False
        return True

    def emit(self, payload: T) -> int:
        """Deliver *payload* and return how many subscribers accepted it."""
        delivered = 0
        for subscriber in tuple(self._subscribers):
            try:
                subscriber(payload)
            except Exception:
                _LOGGER.exception("Subscriber %r of %s failed", subscriber, self.name)
                continue
            delivered += 1
        return delivered


__all__ = ["Signal"]
