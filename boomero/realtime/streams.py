"""
Boomero - Observable Streams

Synchronous publish/subscribe channels between the game store and the
presentation layer. Callbacks run on the publishing thread; a failing
callback is logged and never breaks the publisher or other subscribers.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Unsubscribe = Callable[[], None]


class _Broadcaster(Generic[T]):
    def __init__(self, name: str) -> None:
        self.name = name
        self._subscribers: list[Callable[[T], None]] = []
        self._lock = threading.Lock()

    def _add(self, callback: Callable[[T], None]) -> Unsubscribe:
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def _deliver(self, value: T) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(value)
            except Exception:
                logger.exception("Subscriber error on stream %s", self.name)


class StateStream(_Broadcaster[T]):
    """Holds a current value; new subscribers receive it immediately.

    Publishing a value equal to the current one is a no-op.
    """

    def __init__(self, initial: T, name: str = "state") -> None:
        super().__init__(name)
        self._value = initial

    @property
    def value(self) -> T:
        return self._value

    def subscribe(self, callback: Callable[[T], None]) -> Unsubscribe:
        unsubscribe = self._add(callback)
        try:
            callback(self._value)
        except Exception:
            logger.exception("Subscriber error on stream %s", self.name)
        return unsubscribe

    def publish(self, value: T) -> None:
        if value == self._value:
            return
        self._value = value
        self._deliver(value)


class MessageStream(_Broadcaster[T]):
    """Fire-and-forget broadcast; nothing is replayed to late subscribers."""

    def __init__(self, name: str = "messages") -> None:
        super().__init__(name)

    def subscribe(self, callback: Callable[[T], None]) -> Unsubscribe:
        return self._add(callback)

    def emit(self, value: T) -> None:
        self._deliver(value)
