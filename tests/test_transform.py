from __future__ import annotations

import numpy as np
import pytest

from rawspeclib.transform import (
    TransformSizeError,
    is_supported_size,
    positive_bins,
    transform_frame,
    transform_frames,
)


def test_impulse_has_flat_spectrum():
    frame = np.zeros(16)
    frame[0] = 1.0
    spectrum = transform_frame(frame)
    np.testing.assert_allclose(np.abs(spectrum), np.ones(16))


def test_cosine_lands_in_its_bin():
    n = 64
    k = 5
    frame = np.cos(2 * np.pi * k * np.arange(n) / n)
    mags = np.abs(positive_bins(transform_frame(frame)))
    assert len(mags) == n // 2
    assert int(np.argmax(mags)) == k
    assert mags[k] == pytest.approx(n / 2)


def test_stacked_frames_match_single_frames():
    rng = np.random.default_rng(7)
    frames = rng.normal(size=(3, 32))
    stacked = transform_frames(frames)
    for row, frame in zip(stacked, frames):
        np.testing.assert_allclose(row, transform_frame(frame))


@pytest.mark.parametrize("n", [0, 3, 100, 513])
def test_unsupported_length_is_rejected(n):
    assert not is_supported_size(n)
    with pytest.raises(TransformSizeError):
        transform_frame(np.zeros(n))


def test_size_error_is_value_error():
    assert issubclass(TransformSizeError, ValueError)
