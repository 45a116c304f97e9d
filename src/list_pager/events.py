"""
Event system for the list pager.

Provides a synchronous EventBus that :class:`~list_pager.pager.ListPager` uses
to publish state changes and key presses to embedding applications.

Example:
    from list_pager.events import EventBus

    bus = EventBus()

    @bus.on("select")
    def on_select(event):
        print(f"now on {event.id}")

    bus.emit("select", SelectEvent(id="g"))
"""

from __future__ import annotations

from collections.abc import Callable, Hashable
from dataclasses import dataclass
from typing import Any

from list_pager.keys import Key
from list_pager.logging import get_logger

logger = get_logger("events")


# ---------------------------------------------------------------------------
# Event types
# ---------------------------------------------------------------------------

# Event name constants
SELECT = "select"
REMOVE = "remove"
EMPTY = "empty"
RESET = "reset"
KEYPRESS = "keypress"

EVENT_NAMES = (SELECT, REMOVE, EMPTY, RESET, KEYPRESS)


@dataclass(frozen=True)
class SelectEvent:
    """Emitted after the selection moved to *id*."""

    id: Hashable


@dataclass(frozen=True)
class RemoveEvent:
    """Emitted after the item *id* left the list."""

    id: Hashable


@dataclass(frozen=True)
class EmptyEvent:
    """Emitted when a removal leaves the list without items."""


@dataclass(frozen=True)
class ResetEvent:
    """Emitted after the list was cleared by ``reset()``."""


@dataclass(frozen=True)
class KeypressEvent:
    """
    Emitted for every key while the pager runs, before built-in handling.

    ``previous`` is the selection as it was when the key arrived.
    """

    key: Key
    previous: Hashable | None


# ---------------------------------------------------------------------------
# Handler types
# ---------------------------------------------------------------------------

EventHandler = Callable[[Any], Any]


@dataclass
class _HandlerEntry:
    """Internal: a registered handler with metadata."""

    event: str
    handler: EventHandler
    priority: int = 0  # lower runs first


# ---------------------------------------------------------------------------
# EventBus
# ---------------------------------------------------------------------------


class EventBus:
    """
    A synchronous publish/subscribe channel.

    Handlers run in priority order (lower first), then registration order.
    A handler that raises is logged and skipped; the remaining handlers still
    run and the emitting operation is not interrupted.

    Usage:
        bus = EventBus()

        # Decorator style
        @bus.on("empty")
        def on_empty(event: EmptyEvent):
            print("nothing left")

        # Method style
        unsub = bus.on("remove", lambda e: print(e.id))
        unsub()  # remove handler
    """

    def __init__(self) -> None:
        self._handlers: list[_HandlerEntry] = []

    def on(
        self,
        event: str,
        handler: EventHandler | None = None,
        priority: int = 0,
    ) -> Callable[[], None] | Callable[[EventHandler], EventHandler]:
        """
        Register an event handler.

        Can be used as a method call or as a decorator:

            # Method call - returns unsubscribe function
            unsub = bus.on("select", my_handler)
            unsub()

            # Decorator - returns the original function
            @bus.on("select")
            def my_handler(event):
                ...
        """
        if handler is not None:
            entry = _HandlerEntry(event=event, handler=handler, priority=priority)
            self._handlers.append(entry)

            def unsubscribe() -> None:
                try:
                    self._handlers.remove(entry)
                except ValueError:
                    pass

            return unsubscribe

        def decorator(fn: EventHandler) -> EventHandler:
            self.on(event, fn, priority=priority)
            return fn

        return decorator

    def off(self, event: str, handler: EventHandler) -> None:
        """
        Remove a specific handler for an event.

        Matching is by equality, so a bound method registered as
        ``obj.method`` can be removed with another ``obj.method`` reference.
        """
        self._handlers = [
            h for h in self._handlers if not (h.event == event and h.handler == handler)
        ]

    def clear(self, event: str | None = None) -> None:
        """Remove all handlers, or all handlers for a specific event."""
        if event is None:
            self._handlers.clear()
        else:
            self._handlers = [h for h in self._handlers if h.event != event]

    def handler_count(self, event: str) -> int:
        """Number of handlers registered for *event*."""
        return sum(1 for h in self._handlers if h.event == event)

    def emit(self, event: str, data: Any = None) -> list[Any]:
        """
        Emit an event and collect handler results.

        Delivery is synchronous: every handler has returned before ``emit``
        does.  The handler list is snapshotted first, so handlers may
        subscribe or unsubscribe while being called.

        Args:
            event: Event name
            data: Event data object (e.g., SelectEvent)

        Returns:
            List of non-None results from handlers
        """
        relevant = sorted(
            (h for h in self._handlers if h.event == event),
            key=lambda h: h.priority,
        )

        results: list[Any] = []
        for entry in relevant:
            try:
                result = entry.handler(data)
                if result is not None:
                    results.append(result)
            except Exception as e:
                logger.warning(
                    "Event handler error (event=%s, handler=%r): %s", event, entry.handler, e
                )
        return results
