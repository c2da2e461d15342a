from __future__ import annotations

import logging
import os

import numpy as np

from .models import DEFAULT_CENTER, SampleBuffer

log = logging.getLogger(__name__)

# On-disk sample format: little-endian unsigned 16-bit.
SAMPLE_DTYPE = np.dtype("<u2")


class LoadError(Exception):
    """Raised when a recording cannot be opened, read, or validated."""
    pass


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------

def load_samples(filepath: str, center: float = DEFAULT_CENTER) -> SampleBuffer:
    """Read a raw sample file and return a validated SampleBuffer.

    The byte length must be even and non-zero.  Any failure raises
    :class:`LoadError`; callers treat it as fatal.
    """
    try:
        size = os.path.getsize(filepath)
    except OSError as e:
        raise LoadError(f"stat {filepath}: {e}") from e

    if size % 2 != 0:
        raise LoadError(f"invalid file size {size}")
    if size == 0:
        raise LoadError(f"empty file: {filepath}")

    try:
        with open(filepath, "rb") as f:
            raw = f.read()
    except OSError as e:
        raise LoadError(f"read {filepath}: {e}") from e

    if len(raw) != size:
        raise LoadError(f"short read on {filepath}: {len(raw)} of {size} bytes")

    buffer = samples_from_bytes(raw, center=center)
    buffer.path = filepath
    log.info("Loaded %d samples from %s", len(buffer), filepath)
    return buffer


def samples_from_bytes(raw: bytes, center: float = DEFAULT_CENTER) -> SampleBuffer:
    """Decode little-endian uint16 bytes into a SampleBuffer."""
    if len(raw) % 2 != 0:
        raise LoadError(f"invalid file size {len(raw)}")
    if not raw:
        raise LoadError("no samples")
    samples = np.frombuffer(raw, dtype=SAMPLE_DTYPE).astype(np.uint16)
    samples.setflags(write=False)
    return SampleBuffer(samples=samples, center=float(center))


def save_samples(buffer: SampleBuffer | np.ndarray, filepath: str) -> None:
    """Write samples in the raw on-disk format (used for fixtures / export)."""
    data = buffer.samples if isinstance(buffer, SampleBuffer) else buffer
    np.asarray(data, dtype=SAMPLE_DTYPE).tofile(filepath)

