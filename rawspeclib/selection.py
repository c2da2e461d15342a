"""Rubber-band selection state machine.

Turns press / drag / release / cancel pointer events into viewport
updates.  One :class:`SelectionController` owns the current viewport and
the in-progress selection rectangle; the renderer passes it around
instead of keeping either as module state.
"""

from __future__ import annotations

import logging

from .events import (
    EventBus, SELECTION_CANCELLED, SELECTION_STARTED, VIEWPORT_CHANGED,
)
from .models import PointerEvent, PointerKind, SelectionPhase, SelectionRect
from .viewport import IDENTITY, Viewport, compose

log = logging.getLogger(__name__)


class SelectionController:
    """Idle ⇄ Selecting state machine producing composed viewports."""

    def __init__(self, event_bus: EventBus | None = None):
        self.event_bus = event_bus
        self._phase: SelectionPhase = SelectionPhase.IDLE
        self._rect: SelectionRect | None = None
        self._viewport: Viewport | None = None

    # ── State ──────────────────────────────────────────────────────────────

    @property
    def phase(self) -> SelectionPhase:
        return self._phase

    @property
    def selecting(self) -> bool:
        return self._phase is SelectionPhase.SELECTING

    @property
    def rect(self) -> SelectionRect | None:
        """The rectangle being dragged, or None when idle."""
        return self._rect

    @property
    def viewport(self) -> Viewport | None:
        """Cumulative viewport, or None before the first completed selection."""
        return self._viewport

    @property
    def effective_viewport(self) -> Viewport:
        return self._viewport if self._viewport is not None else IDENTITY

    # ── Transitions ────────────────────────────────────────────────────────

    def press(self, x: int, y: int) -> None:
        """Start a selection at ``(x, y)``.  Restarts one already in progress."""
        self._phase = SelectionPhase.SELECTING
        self._rect = SelectionRect(int(x), int(y), int(x), int(y))
        self._emit(SELECTION_STARTED, rect=self._rect)

    def drag(self, x: int, y: int) -> None:
        """Move the free corner of the rectangle.  Ignored when idle."""
        if not self.selecting or self._rect is None:
            return
        self._rect.x1 = int(x)
        self._rect.y1 = int(y)

    def release(self, x: int, y: int, width: float, height: float) -> Viewport | None:
        """Finish the selection and compose it into the current viewport.

        ``width``/``height`` are the bounds of the area the rectangle was
        drawn in; both must be positive.  The rectangle is normalized
        first, so a drag up or to the left selects the same region as the
        opposite drag.  Returns the new viewport, or None if no selection
        was active.  Zero-area rectangles are accepted.
        """
        if not self.selecting or self._rect is None:
            return None
        if width <= 0 or height <= 0:
            raise ValueError(
                f"selection bounds must be positive, got {width}x{height}")
        self._rect.x1 = int(x)
        self._rect.y1 = int(y)
        selected = Viewport.from_rect(self._rect.normalized(), width, height)
        self._viewport = compose(self._viewport, selected)
        self._rect = None
        self._phase = SelectionPhase.IDLE
        if self._viewport.is_degenerate:
            log.warning("Degenerate viewport after selection: %s",
                        self._viewport.as_tuple())
        self._emit(VIEWPORT_CHANGED, viewport=self._viewport)
        return self._viewport

    def cancel(self) -> None:
        """Drop the in-progress rectangle without touching the viewport."""
        was_selecting = self.selecting
        self._rect = None
        self._phase = SelectionPhase.IDLE
        if was_selecting:
            self._emit(SELECTION_CANCELLED)

    def handle(self, event: PointerEvent) -> Viewport | None:
        """Dispatch a :class:`PointerEvent`.  Returns the viewport on release."""
        if event.kind is PointerKind.PRESS:
            self.press(event.x, event.y)
        elif event.kind is PointerKind.DRAG:
            self.drag(event.x, event.y)
        elif event.kind is PointerKind.RELEASE:
            return self.release(event.x, event.y, event.width, event.height)
        elif event.kind is PointerKind.CANCEL:
            self.cancel()
        return None

    def _emit(self, event_type: str, **data) -> None:
        if self.event_bus is not None:
            self.event_bus.emit(event_type, **data)
