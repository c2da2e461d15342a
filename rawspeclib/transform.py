"""Spectral transform of windowed analysis frames."""

from __future__ import annotations

import numpy as np


class TransformSizeError(ValueError):
    """Frame length is not a supported (power-of-two) transform size."""
    pass


def is_supported_size(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def _check_size(n: int) -> None:
    if not is_supported_size(n):
        raise TransformSizeError(f"unsupported transform length {n}")


def transform_frame(frame: np.ndarray) -> np.ndarray:
    """FFT of one real frame.  Returns all ``N`` complex bins."""
    frame = np.asarray(frame, dtype=np.float64)
    _check_size(frame.shape[-1])
    return np.fft.fft(frame)


def transform_frames(frames: np.ndarray) -> np.ndarray:
    """FFT of a ``(columns, N)`` stack of frames along the last axis."""
    frames = np.asarray(frames, dtype=np.float64)
    _check_size(frames.shape[-1])
    return np.fft.fft(frames, axis=-1)


def positive_bins(spectrum: np.ndarray) -> np.ndarray:
    """Lower half of a spectrum (indices ``0 .. N/2 - 1``).

    The upper half of a real signal's spectrum mirrors the lower half.
    """
    n = spectrum.shape[-1]
    return spectrum[..., : n // 2]
