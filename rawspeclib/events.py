from __future__ import annotations

import threading
from typing import Any, Callable

# Event types emitted by the core.
VIEWPORT_CHANGED = "viewport.changed"
SELECTION_STARTED = "selection.started"
SELECTION_CANCELLED = "selection.cancelled"
BUILD_COMPLETE = "spectrogram.build_complete"


class EventBus:
    """Lightweight publish/subscribe bus for viewport and build events.

    Handlers run synchronously on the emitting thread.  In the viewer every
    emit happens on the Qt event thread; worker results reach the bus
    through queued signals first.  The handler table is lock-protected.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[Callable[..., Any]]] = {}
        self._lock = threading.Lock()

    def subscribe(self, event_type: str, handler: Callable[..., Any]) -> None:
        """Register a handler for an event type."""
        with self._lock:
            self._handlers.setdefault(event_type, []).append(handler)

    def unsubscribe(self, event_type: str, handler: Callable[..., Any]) -> None:
        """Remove a handler."""
        with self._lock:
            handlers = self._handlers.get(event_type, [])
            if handler in handlers:
                handlers.remove(handler)

    def emit(self, event_type: str, **data: Any) -> None:
        """Fire all handlers for an event type."""
        with self._lock:
            handlers = list(self._handlers.get(event_type, []))
        for handler in handlers:
            handler(**data)
