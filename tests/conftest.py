from __future__ import annotations

import numpy as np
import pytest

from rawspeclib.models import DEFAULT_CENTER, SIZE, SampleBuffer


@pytest.fixture
def make_buffer():
    def _make(values, center: float = DEFAULT_CENTER) -> SampleBuffer:
        return SampleBuffer(samples=np.asarray(values, dtype=np.uint16),
                            center=center)
    return _make


@pytest.fixture
def nyquist_samples():
    """``2 * SIZE`` samples alternating center - A / center + A."""
    amp = 1000
    n = 2 * SIZE
    values = np.where(np.arange(n) % 2 == 0,
                      DEFAULT_CENTER - amp, DEFAULT_CENTER + amp)
    return values.astype(np.uint16)
