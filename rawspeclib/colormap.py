"""HSL → RGBA color mapping for spectrogram intensities."""

from __future__ import annotations

import numpy as np

_ONE_THIRD = 1.0 / 3.0
_ONE_SIXTH = 1.0 / 6.0
_TWO_THIRDS = 2.0 / 3.0


# ---------------------------------------------------------------------------
# Scalar form
# ---------------------------------------------------------------------------

def hue2rgb(p: float, q: float, t: float) -> float:
    t = t % 1.0
    if t < _ONE_SIXTH:
        return p + (q - p) * 6.0 * t
    if t < 0.5:
        return q
    if t < _TWO_THIRDS:
        return p + (q - p) * (_TWO_THIRDS - t) * 6.0
    return p


def _to_byte(v: float) -> int:
    return int(min(255, max(0, round(v * 255.0))))


def hsl_to_rgba(h: float, s: float, l: float) -> tuple[int, int, int, int]:
    """Convert one HSL triple to an opaque ``(r, g, b, a)`` in 0-255.

    Hue wraps; saturation and lightness outside ``[0, 1]`` produce
    channel values that are clipped to the byte range.
    """
    if s == 0:
        v = _to_byte(l)
        return v, v, v, 255
    q = l * (1 + s) if l < 0.5 else l + s - l * s
    p = 2 * l - q
    return (
        _to_byte(hue2rgb(p, q, h + _ONE_THIRD)),
        _to_byte(hue2rgb(p, q, h)),
        _to_byte(hue2rgb(p, q, h - _ONE_THIRD)),
        255,
    )


# ---------------------------------------------------------------------------
# Vectorized form (used by the spectrogram builder)
# ---------------------------------------------------------------------------

def _hue2rgb_array(p: np.ndarray, q: np.ndarray, t: np.ndarray) -> np.ndarray:
    t = np.mod(t, 1.0)
    return np.select(
        [t < _ONE_SIXTH, t < 0.5, t < _TWO_THIRDS],
        [p + (q - p) * 6.0 * t, q, p + (q - p) * (_TWO_THIRDS - t) * 6.0],
        default=p,
    )


def hsl_to_rgba_array(h, s, l) -> np.ndarray:
    """Vectorized :func:`hsl_to_rgba`.

    Inputs broadcast against each other; the result has their common shape
    plus a trailing axis of 4 ``uint8`` channels.
    """
    h, s, l = np.broadcast_arrays(
        np.asarray(h, dtype=np.float64),
        np.asarray(s, dtype=np.float64),
        np.asarray(l, dtype=np.float64),
    )
    q = np.where(l < 0.5, l * (1 + s), l + s - l * s)
    p = 2 * l - q
    r = _hue2rgb_array(p, q, h + _ONE_THIRD)
    g = _hue2rgb_array(p, q, h)
    b = _hue2rgb_array(p, q, h - _ONE_THIRD)
    achromatic = s == 0
    r = np.where(achromatic, l, r)
    g = np.where(achromatic, l, g)
    b = np.where(achromatic, l, b)

    out = np.empty(h.shape + (4,), dtype=np.uint8)
    for ch, values in enumerate((r, g, b)):
        out[..., ch] = np.clip(np.rint(values * 255.0), 0, 255).astype(np.uint8)
    out[..., 3] = 255
    return out
