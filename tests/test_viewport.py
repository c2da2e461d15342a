from __future__ import annotations

import numpy as np
import pytest

from rawspeclib.models import Point, SelectionRect
from rawspeclib.viewport import IDENTITY, Viewport, compose


def _random_viewports(count, seed=0):
    rng = np.random.default_rng(seed)
    for _ in range(count):
        ox, oy = rng.uniform(0.0, 0.6, size=2)
        sx, sy = rng.uniform(0.05, 0.4, size=2)
        yield Viewport(Point(float(ox), float(oy)), Point(float(sx), float(sy)))


def _approx(v: Viewport):
    return pytest.approx(v.as_tuple(), abs=1e-12)


def test_identity_is_neutral_on_both_sides():
    for v in _random_viewports(20):
        assert compose(IDENTITY, v) == v
        assert compose(v, IDENTITY) == v


def test_composition_is_associative():
    vps = list(_random_viewports(30, seed=4))
    for a, b, c in zip(vps[0::3], vps[1::3], vps[2::3]):
        left = compose(compose(a, b), c)
        right = compose(a, compose(b, c))
        assert left.as_tuple() == _approx(right)


def test_compose_nests_refinement_inside_base():
    base = Viewport(Point(0.5, 0.0), Point(0.5, 1.0))
    right_half_of_right_half = base.compose(Viewport(Point(0.5, 0.0), Point(0.5, 1.0)))
    assert right_half_of_right_half == Viewport(Point(0.75, 0.0), Point(0.25, 1.0))


def test_missing_base_adopts_refinement():
    v = Viewport(Point(0.1, 0.2), Point(0.3, 0.4))
    assert compose(None, v) is v


def test_from_rect_normalizes_against_bounds():
    v = Viewport.from_rect(SelectionRect(10, 10, 110, 60), 200, 200)
    assert v.as_tuple() == _approx(Viewport(Point(0.05, 0.05), Point(0.5, 0.25)))


def test_inverted_and_empty_rects_propagate():
    inverted = Viewport.from_rect(SelectionRect(100, 50, 20, 10), 200, 100)
    assert inverted.size.x < 0 and inverted.size.y < 0
    assert inverted.is_degenerate

    empty = Viewport.from_rect(SelectionRect(40, 40, 40, 40), 200, 100)
    assert empty.size == Point(0.0, 0.0)
    assert empty.is_degenerate
    assert not IDENTITY.is_degenerate


def test_viewport_is_immutable():
    with pytest.raises(AttributeError):
        IDENTITY.offset = Point(0.5, 0.5)
