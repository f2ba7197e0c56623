"""
Synchronous event dispatch for module notifications.

Module services publish an event after each successful mutation.  Events
are tagged values: anything with a ``kind`` attribute (an Enum member) can
be published, and handlers subscribe per kind or to every kind.

Delivery is fire-and-forget.  A failing handler is logged with its
traceback and the remaining handlers still run; the publisher never sees
handler errors and never consumes a return value.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from enum import Enum
from typing import Any, Protocol

from pm_kernel.logging_config import get_logger

logger = get_logger("events")

EventHandler = Callable[[Any], None]


class EventDispatcher(Protocol):
    """What module services need from event dispatch."""

    def publish(self, event: Any) -> None:
        ...


class InMemoryEventDispatcher:
    """
    In-process dispatcher keyed by event kind.

    Handlers run in subscription order on the publisher's thread.  Not
    thread-safe; intended for the single-threaded request model of the host.
    """

    def __init__(self) -> None:
        self._handlers: dict[Enum, list[EventHandler]] = defaultdict(list)
        self._catch_all: list[EventHandler] = []

    def subscribe(self, kind: Enum, handler: EventHandler) -> None:
        """Register ``handler`` for events whose ``kind`` equals ``kind``."""
        self._handlers[kind].append(handler)

    def subscribe_all(self, handler: EventHandler) -> None:
        """Register ``handler`` for every published event."""
        self._catch_all.append(handler)

    def handler_count(self, kind: Enum) -> int:
        return len(self._handlers.get(kind, ())) + len(self._catch_all)

    def publish(self, event: Any) -> None:
        """Deliver ``event`` to its kind's handlers, then catch-all handlers."""
        kind = event.kind
        handlers = [*self._handlers.get(kind, ()), *self._catch_all]
        logger.debug(
            "event_published",
            extra={"event_kind": kind.value, "handler_count": len(handlers)},
        )
        for handler in handlers:
            try:
                handler(event)
            except Exception:
                logger.warning(
                    "event_handler_failed",
                    extra={
                        "event_kind": kind.value,
                        "handler": getattr(handler, "__qualname__", repr(handler)),
                    },
                    exc_info=True,
                )
