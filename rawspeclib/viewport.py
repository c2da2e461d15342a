"""Normalized viewports and their composition.

A viewport is a rectangle inside the unit square of some parent space:
``offset`` is its upper-left corner and ``size`` its extent, both in
parent-relative units.  Zooming into a viewport with another viewport
(:meth:`Viewport.compose`) yields a viewport of the original space, so any
chain of nested selections collapses into one value.

Composition is not bounds-checked.  An inverted rectangle passed to
:meth:`Viewport.from_rect` gives negative sizes (the selection controller
normalizes its rectangles first) and repeated zooms may leave ``[0, 1]``.
Consumers that need sample indices clamp at conversion time (see
``spectrogram.sample_range``).
"""

from __future__ import annotations

from dataclasses import dataclass

from .models import Point, SelectionRect


@dataclass(frozen=True)
class Viewport:
    offset: Point = Point(0.0, 0.0)
    size: Point = Point(1.0, 1.0)

    @classmethod
    def from_rect(cls, rect: SelectionRect, width: float, height: float) -> "Viewport":
        """Normalize a screen rectangle against ``width`` x ``height`` bounds."""
        return cls(
            offset=Point(rect.x0 / width, rect.y0 / height),
            size=Point(rect.dx / width, rect.dy / height),
        )

    def compose(self, refinement: "Viewport") -> "Viewport":
        """Return *refinement* zoomed within this viewport."""
        return Viewport(
            offset=Point(
                self.offset.x + refinement.offset.x * self.size.x,
                self.offset.y + refinement.offset.y * self.size.y,
            ),
            size=Point(
                self.size.x * refinement.size.x,
                self.size.y * refinement.size.y,
            ),
        )

    @property
    def is_degenerate(self) -> bool:
        """True when either extent is zero or negative."""
        return self.size.x <= 0 or self.size.y <= 0

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.offset.x, self.offset.y, self.size.x, self.size.y)


IDENTITY = Viewport()


def compose(base: Viewport | None, refinement: Viewport) -> Viewport:
    """Compose *refinement* into *base*; a missing base adopts *refinement*."""
    if base is None:
        return refinement
    return base.compose(refinement)
