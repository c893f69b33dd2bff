"""Synchronous publish/subscribe for event records.

Per-type handlers run first, then catch-all handlers. Removing a catch-all
subscription blanks its slot instead of shrinking the list, so a removal made
while an event is being published never skips or repeats another handler.
"""
from __future__ import annotations

from collections import defaultdict
from typing import Callable

from .events import EVENT_TYPES, Event


Handler = Callable[[Event], None]


class Subscription:
    """Handle returned by :meth:`Dispatcher.on_all`; call ``remove()`` to revoke."""

    def __init__(self, slots: list[Handler | None], index: int) -> None:
        self._slots = slots
        self._index = index

    @property
    def active(self) -> bool:
        return self._slots[self._index] is not None

    def remove(self) -> None:
        self._slots[self._index] = None


class Dispatcher:
    """Route event records to subscribed handlers.

    Usage::

        dispatcher = Dispatcher()
        dispatcher.on("message", lambda e: print(e.nick, e.message))
        sub = dispatcher.on_all(events.append)
        ...
        sub.remove()
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = defaultdict(list)
        self._all: list[Handler | None] = []

    def on(self, type: str, handler: Handler) -> Handler:
        """Subscribe *handler* to one event type. Returns the handler."""
        if type not in EVENT_TYPES:
            raise ValueError(f"Unknown event type {type!r}; expected one of {', '.join(EVENT_TYPES)}")
        self._handlers[type].append(handler)
        return handler

    def off(self, type: str, handler: Handler) -> None:
        """Unsubscribe *handler* from *type*; unknown handlers are ignored."""
        handlers = self._handlers.get(type)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def on_all(self, handler: Handler) -> Subscription:
        """Subscribe *handler* to every event type."""
        self._all.append(handler)
        return Subscription(self._all, len(self._all) - 1)

    def publish(self, event: Event) -> None:
        for handler in list(self._handlers.get(event.type, ())):
            handler(event)
        # Handlers added while publishing start with the next event
        for i in range(len(self._all)):
            handler = self._all[i]
            if handler is not None:
                handler(event)
