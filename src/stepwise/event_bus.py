"""In-process publish/subscribe bus carrying workflow feedback events."""

from __future__ import annotations

import logging
from collections import defaultdict
from threading import RLock
from typing import Callable, DefaultDict, List, Mapping, Type, TypeVar

LOGGER = logging.getLogger(__name__)
EventT = TypeVar("EventT")
EventHandler = Callable[[EventT], None]


class EventBus:
    """Dispatch events to handlers registered for the event's class or bases."""

    def __init__(self) -> None:
        self._handlers: DefaultDict[type, List[EventHandler]] = defaultdict(list)
        self._lock = RLock()

    def subscribe(self, event_type: Type[EventT], handler: EventHandler) -> None:
        """Register a handler; registering the same handler twice is a no-op."""
        if handler is None or event_type is None:
            raise ValueError("Both event_type and handler must be provided.")
        with self._lock:
            if handler not in self._handlers[event_type]:
                self._handlers[event_type].append(handler)

    def subscribe_many(self, handlers: Mapping[type, EventHandler]) -> None:
        """Register several event handlers at once."""
        for event_type, handler in handlers.items():
            self.subscribe(event_type, handler)

    def unsubscribe(self, event_type: Type[EventT], handler: EventHandler) -> None:
        """Remove a handler if it is registered."""
        with self._lock:
            listeners = self._handlers.get(event_type)
            if not listeners or handler not in listeners:
                return
            listeners.remove(handler)
            if not listeners:
                del self._handlers[event_type]

    def emit(self, event: object) -> None:
        """Deliver ``event`` to its handlers; a failing handler never stops the run."""
        if event is None:
            return
        for handler in self._handlers_for(type(event)):
            try:
                handler(event)
            except Exception:  # noqa: BLE001
                LOGGER.exception("Event handler failed for %s", type(event).__name__)

    def _handlers_for(self, event_type: type) -> List[EventHandler]:
        with self._lock:
            ordered: List[EventHandler] = []
            for cls in event_type.mro():
                for handler in self._handlers.get(cls, ()):
                    if handler not in ordered:
                        ordered.append(handler)
            return ordered


_EVENT_BUS: EventBus | None = None


def get_event_bus() -> EventBus:
    """Return the process-wide event bus, creating it on first use."""
    global _EVENT_BUS
    if _EVENT_BUS is None:
        _EVENT_BUS = EventBus()
    return _EVENT_BUS


def reset_event_bus() -> None:
    """Forget the process-wide bus so the next caller gets a fresh one."""
    global _EVENT_BUS
    _EVENT_BUS = None


__all__ = ["EventBus", "get_event_bus", "reset_event_bus"]
