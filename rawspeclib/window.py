"""Analysis window: a raised-cosine taper with a fixed shape parameter."""

from __future__ import annotations

import numpy as np
from scipy.signal import windows

from .models import SIZE

# Hamming-family coefficient (exact rational form of the classic 0.54).
WINDOW_A0 = 25.0 / 46.0


def window_coefficients(n: int = SIZE) -> np.ndarray:
    """Return the ``n`` symmetric taper weights.

    ``w[i] = a0 - (1 - a0) * cos(2*pi*i / (n - 1))``.  The array is
    read-only; compute it once and share it across frames.
    """
    w = windows.general_hamming(n, WINDOW_A0, sym=True).astype(np.float64)
    w.setflags(write=False)
    return w
