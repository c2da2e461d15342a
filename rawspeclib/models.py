from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np

# Analysis frame length (samples). The spectrogram has SIZE // 2 rows.
SIZE = 512

# Midpoint of the 12-bit ADC range the recordings are stored in.
DEFAULT_CENTER = 2048.0


class SelectionPhase(Enum):
    IDLE = "idle"
    SELECTING = "selecting"


class PointerKind(Enum):
    PRESS = "press"
    DRAG = "drag"
    RELEASE = "release"
    CANCEL = "cancel"


@dataclass
class SampleBuffer:
    """Raw unsigned 16-bit samples of one recording.

    Attributes:
        samples: 1-D ``uint16`` array, never empty.
        center:  Value that corresponds to zero signal (DC).
        path:    Source file, or None for synthetic buffers.
    """
    samples: np.ndarray
    center: float = DEFAULT_CENTER
    path: str | None = None

    def __len__(self) -> int:
        return int(self.samples.shape[0])


@dataclass
class SpectrogramResult:
    """RGBA pixel grid produced by the spectrogram builder.

    ``pixels`` has shape ``(height, width, 4)``; row 0 holds the highest
    frequency bin, column 0 the earliest frame.  ``z_min`` / ``z_max`` are
    the extreme ``log10`` of the non-zero magnitudes before they are
    floored at ``10 ** z_low``; a silent range reports the floor for both.
    """
    pixels: np.ndarray
    z_min: float
    z_max: float
    sample_start: int = 0
    sample_stop: int = 0

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])


@dataclass(frozen=True)
class Point:
    x: float = 0.0
    y: float = 0.0


@dataclass
class SelectionRect:
    """Screen-space rectangle (pixels) spanned by a drag gesture.

    ``(x0, y0)`` is the press point, ``(x1, y1)`` the current pointer
    position.  ``dx``/``dy`` are negative when dragging up or left.
    """
    x0: int
    y0: int
    x1: int
    y1: int

    @property
    def dx(self) -> int:
        return self.x1 - self.x0

    @property
    def dy(self) -> int:
        return self.y1 - self.y0

    def normalized(self) -> "SelectionRect":
        """Return a copy with ``x0 <= x1`` and ``y0 <= y1``."""
        return SelectionRect(
            min(self.x0, self.x1), min(self.y0, self.y1),
            max(self.x0, self.x1), max(self.y0, self.y1),
        )


@dataclass
class PointerEvent:
    """A pointer event in the renderer's local coordinate space.

    ``width``/``height`` are the layout bounds used to normalize a
    selection on release and must be positive for RELEASE events; other
    kinds may leave them at 0.
    """
    kind: PointerKind
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0
