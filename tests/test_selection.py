from __future__ import annotations

import pytest

from rawspeclib.events import (
    EventBus, SELECTION_CANCELLED, SELECTION_STARTED, VIEWPORT_CHANGED,
)
from rawspeclib.models import PointerEvent, PointerKind, SelectionPhase
from rawspeclib.selection import SelectionController
from rawspeclib.spectrogram import sample_range
from rawspeclib.viewport import IDENTITY


def test_press_release_without_prior_viewport():
    ctl = SelectionController()
    assert ctl.viewport is None
    ctl.press(10, 10)
    assert ctl.phase is SelectionPhase.SELECTING
    vp = ctl.release(110, 60, 200, 200)
    assert vp.as_tuple() == pytest.approx((0.05, 0.05, 0.5, 0.25))
    assert ctl.viewport == vp
    assert ctl.phase is SelectionPhase.IDLE
    assert ctl.rect is None


def test_press_records_point_as_both_corners():
    ctl = SelectionController()
    ctl.press(7, 9)
    r = ctl.rect
    assert (r.x0, r.y0, r.x1, r.y1) == (7, 9, 7, 9)


def test_drag_moves_free_corner():
    ctl = SelectionController()
    ctl.press(5, 5)
    ctl.drag(50, 30)
    assert (ctl.rect.dx, ctl.rect.dy) == (45, 25)


def test_cancel_keeps_viewport_and_clears_rect():
    ctl = SelectionController()
    ctl.press(0, 0)
    first = ctl.release(100, 100, 200, 200)
    ctl.press(10, 10)
    ctl.drag(20, 20)
    ctl.cancel()
    assert ctl.viewport == first
    assert ctl.rect is None
    assert ctl.phase is SelectionPhase.IDLE


def test_nested_selections_compose():
    ctl = SelectionController()
    ctl.press(100, 0)
    ctl.release(200, 100, 200, 100)       # right half
    ctl.press(100, 0)
    vp = ctl.release(200, 100, 200, 100)  # right half of that
    assert vp.as_tuple() == pytest.approx((0.75, 0.0, 0.25, 1.0))


def test_events_ignored_when_idle():
    ctl = SelectionController()
    ctl.drag(10, 10)
    assert ctl.rect is None
    assert ctl.release(10, 10, 100, 100) is None
    assert ctl.viewport is None
    assert ctl.effective_viewport == IDENTITY


def test_zero_area_selection_is_accepted():
    ctl = SelectionController()
    ctl.press(30, 30)
    vp = ctl.release(30, 30, 100, 100)
    assert vp.size.x == 0.0 and vp.size.y == 0.0
    assert vp.is_degenerate


def test_handle_dispatches_pointer_events():
    ctl = SelectionController()
    assert ctl.handle(PointerEvent(PointerKind.PRESS, 10, 10)) is None
    ctl.handle(PointerEvent(PointerKind.DRAG, 60, 35))
    vp = ctl.handle(PointerEvent(PointerKind.RELEASE, 110, 60, 200, 200))
    assert vp.as_tuple() == pytest.approx((0.05, 0.05, 0.5, 0.25))

    ctl.handle(PointerEvent(PointerKind.PRESS, 1, 1))
    ctl.handle(PointerEvent(PointerKind.CANCEL))
    assert ctl.viewport == vp
    assert ctl.rect is None


def test_event_bus_notifications():
    bus = EventBus()
    seen = []
    bus.subscribe(SELECTION_STARTED, lambda rect: seen.append(("start", rect.x0)))
    bus.subscribe(VIEWPORT_CHANGED, lambda viewport: seen.append(("vp", viewport)))
    bus.subscribe(SELECTION_CANCELLED, lambda: seen.append(("cancel", None)))

    ctl = SelectionController(bus)
    ctl.press(10, 10)
    vp = ctl.release(110, 60, 200, 200)
    ctl.press(5, 5)
    ctl.cancel()
    ctl.cancel()   # already idle: no second notification

    assert seen == [("start", 10), ("vp", vp), ("start", 5), ("cancel", None)]


def test_unsubscribe_stops_delivery():
    bus = EventBus()
    calls = []
    handler = lambda viewport: calls.append(viewport)  # noqa: E731
    bus.subscribe(VIEWPORT_CHANGED, handler)
    bus.unsubscribe(VIEWPORT_CHANGED, handler)
    ctl = SelectionController(bus)
    ctl.press(0, 0)
    ctl.release(10, 10, 20, 20)
    assert calls == []


def test_right_to_left_drag_selects_same_region():
    ctl = SelectionController()
    ctl.press(150, 0)
    vp = ctl.release(50, 100, 200, 100)
    assert vp.as_tuple() == pytest.approx((0.25, 0.0, 0.5, 1.0))
    assert not vp.is_degenerate


def test_nested_selection_after_inverted_drag():
    total = 512000
    ctl = SelectionController()
    ctl.press(150, 0)
    ctl.release(50, 100, 200, 100)
    assert sample_range(ctl.viewport, total) == (128000, 384000)

    # Left quarter of what is on screen.
    ctl.press(0, 0)
    ctl.release(50, 100, 200, 100)
    assert sample_range(ctl.viewport, total) == (128000, 192000)


def test_release_without_bounds_is_rejected():
    ctl = SelectionController()
    ctl.handle(PointerEvent(PointerKind.PRESS, 10, 10))
    with pytest.raises(ValueError, match="bounds"):
        ctl.handle(PointerEvent(PointerKind.RELEASE, 20, 20))
    assert ctl.viewport is None
