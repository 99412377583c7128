"""Synchronous event bus for style manager notifications."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable

logger = logging.getLogger(__name__)

Listener = Callable[[Any], None]


class EventBus:
    """Publish-subscribe bus dispatching on the exact event class.

    Catch-all listeners run before typed ones, each group in registration
    order. A listener that raises stops dispatch and the error reaches the
    emitter.
    """

    def __init__(self) -> None:
        self._typed: dict[type, list[Listener]] = defaultdict(list)
        self._catch_all: list[Listener] = []

    def subscribe(self, event_type: type, callback: Listener) -> Callable[[], None]:
        """Register *callback* for *event_type*; returns a function that unregisters it."""
        self._typed[event_type].append(callback)

        def unsubscribe() -> None:
            if callback in self._typed[event_type]:
                self._typed[event_type].remove(callback)

        return unsubscribe

    def on_all(self, callback: Listener) -> Callable[[], None]:
        """Register *callback* for every event; returns a function that unregisters it."""
        self._catch_all.append(callback)

        def unsubscribe() -> None:
            if callback in self._catch_all:
                self._catch_all.remove(callback)

        return unsubscribe

    def listener_count(self, event_type: type | None = None) -> int:
        if event_type is None:
            return len(self._catch_all) + sum(len(cbs) for cbs in self._typed.values())
        return len(self._typed.get(event_type, []))

    def emit(self, event: Any) -> None:
        logger.debug("Emitting %s", type(event).__name__)
        for callback in list(self._catch_all):
            callback(event)
        for callback in list(self._typed.get(type(event), [])):
            callback(event)
