"""Spectrogram builder: windowed FFT columns → HSL-colored RGBA grid."""

from __future__ import annotations

import logging
import math
import time
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from .colormap import hsl_to_rgba_array
from .models import SIZE, SampleBuffer, SpectrogramResult
from .transform import positive_bins, transform_frames
from .viewport import Viewport

log = logging.getLogger(__name__)

# Default log10-magnitude range mapped onto intensity 0..1.
DEFAULT_Z_LOW = -0.4
DEFAULT_Z_HIGH = 6.0

# Samples per spectrogram column when sizing the grid from the file.
DEFAULT_DECIMATION = 128

# Columns processed per FFT batch (bounds peak memory use).
_CHUNK_COLUMNS = 1024


# ---------------------------------------------------------------------------
# Geometry helpers
# ---------------------------------------------------------------------------

def column_count(n_samples: int, decimation: int = DEFAULT_DECIMATION) -> int:
    """Number of columns for a recording of ``n_samples``; at least 1."""
    return max(1, n_samples // max(1, decimation))


def column_starts(start: int, stop: int, width: int, frame_size: int = SIZE) -> np.ndarray:
    """First sample index of each column.

    Spreads ``width`` frames evenly over ``[start, stop - frame_size]``
    using integer arithmetic.  A single column starts at ``start``.
    """
    if width == 1:
        return np.array([start], dtype=np.int64)
    span = (stop - start) - frame_size
    i = np.arange(width, dtype=np.int64)
    return start + (span * i) // (width - 1)


def sample_range(viewport: Viewport | None, total: int,
                 frame_size: int = SIZE) -> tuple[int, int]:
    """Convert the viewport's time axis into a ``[start, stop)`` sample range.

    The range is ordered, clamped to the recording, and widened to hold at
    least one frame when the recording allows it.
    """
    if viewport is None:
        return 0, total
    lo = viewport.offset.x
    hi = viewport.offset.x + viewport.size.x
    if hi < lo:
        lo, hi = hi, lo
    start = max(0, min(total, int(math.floor(lo * total))))
    stop = max(0, min(total, int(math.ceil(hi * total))))
    if stop - start < frame_size:
        stop = min(total, start + frame_size)
        start = max(0, stop - frame_size)
    return start, stop


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------

def _check_inputs(buffer: SampleBuffer, window: np.ndarray, width: int,
                  start: int, stop: int) -> None:
    if len(window) != SIZE:
        raise ValueError(f"window length {len(window)} != frame size {SIZE}")
    if width < 1:
        raise ValueError(f"width must be at least 1, got {width}")
    if start < 0 or stop > len(buffer):
        raise ValueError(
            f"sample range [{start}, {stop}) outside buffer of {len(buffer)}")
    if stop - start < SIZE:
        raise ValueError(
            f"sample range [{start}, {stop}) shorter than one frame ({SIZE})")


def _log_magnitudes_chunk(samples: np.ndarray, center: float,
                          window: np.ndarray, starts: np.ndarray,
                          floor: float) -> tuple[np.ndarray, float, float]:
    """log10 magnitudes ``(columns, SIZE // 2)`` for the given frame starts.

    Also returns the extreme ``log10`` of the non-zero magnitudes before
    flooring, or ``(inf, -inf)`` when every bin is zero.
    """
    offsets = starts[:, None] + np.arange(SIZE, dtype=np.int64)[None, :]
    frames = (samples[offsets].astype(np.float64) - center) * window
    mags = np.abs(positive_bins(transform_frames(frames)))
    nonzero = mags[mags > 0]
    if nonzero.size:
        lo = float(np.log10(nonzero.min()))
        hi = float(np.log10(nonzero.max()))
    else:
        lo, hi = math.inf, -math.inf
    return np.log10(np.maximum(mags, floor)), lo, hi


def _compute_columns(buffer: SampleBuffer, window: np.ndarray, width: int,
                     start: int, stop: int, z_low: float,
                     workers: int) -> tuple[np.ndarray, float, float]:
    _check_inputs(buffer, window, width, start, stop)

    starts = column_starts(start, stop, width)
    floor = 10.0 ** z_low
    chunks = [starts[i:i + _CHUNK_COLUMNS]
              for i in range(0, width, _CHUNK_COLUMNS)]

    def run(chunk: np.ndarray):
        return _log_magnitudes_chunk(buffer.samples, buffer.center,
                                     window, chunk, floor)

    if workers > 1 and len(chunks) > 1:
        with ThreadPoolExecutor(max_workers=min(workers, len(chunks))) as pool:
            parts = list(pool.map(run, chunks))
    else:
        parts = [run(chunk) for chunk in chunks]

    z = np.concatenate([p[0] for p in parts], axis=0)
    z_min = min(p[1] for p in parts)
    z_max = max(p[2] for p in parts)
    if z_min > z_max:
        # Silence: only the floor was seen.
        z_min = z_max = float(z.max())
    return z, z_min, z_max


def log_magnitudes(buffer: SampleBuffer, window: np.ndarray, width: int, *,
                   start: int = 0, stop: int | None = None,
                   z_low: float = DEFAULT_Z_LOW, workers: int = 1) -> np.ndarray:
    """Floored ``log10`` magnitude per column and bin.

    Returns an array shaped ``(width, SIZE // 2)``; entry ``[i, j]`` is bin
    ``j`` of column ``i``.  Magnitudes below ``10 ** z_low`` (including the
    exact zeros of silent frames) are raised to that floor.
    """
    if stop is None:
        stop = len(buffer)
    return _compute_columns(buffer, window, width, start, stop, z_low, workers)[0]


def colorize(z: np.ndarray, z_low: float = DEFAULT_Z_LOW,
             z_high: float = DEFAULT_Z_HIGH) -> np.ndarray:
    """Map ``(width, bins)`` log magnitudes to an ``(bins, width, 4)`` image.

    Intensity ``ang = (z - z_low) / (z_high - z_low)`` drives both hue and
    lightness at full saturation.  Rows are flipped so the lowest bin ends
    up at the bottom.
    """
    ang = (z - z_low) / (z_high - z_low)
    rgba = hsl_to_rgba_array(ang, 1.0, ang)     # (width, bins, 4)
    return np.ascontiguousarray(rgba.transpose(1, 0, 2)[::-1])


def build_spectrogram(buffer: SampleBuffer, window: np.ndarray, width: int, *,
                      start: int = 0, stop: int | None = None,
                      z_low: float = DEFAULT_Z_LOW,
                      z_high: float = DEFAULT_Z_HIGH,
                      workers: int = 1) -> SpectrogramResult:
    """Build the RGBA spectrogram of ``buffer[start:stop]``.

    Pure function of its arguments.  ``workers > 1`` computes column
    batches on a thread pool; the result is identical to a sequential run.
    """
    if stop is None:
        stop = len(buffer)
    t0 = time.perf_counter()
    z, z_min, z_max = _compute_columns(buffer, window, width, start, stop,
                                       z_low, workers)
    pixels = colorize(z, z_low, z_high)
    pixels.setflags(write=False)
    result = SpectrogramResult(
        pixels=pixels,
        z_min=z_min,
        z_max=z_max,
        sample_start=int(start),
        sample_stop=int(stop),
    )
    log.info("Spectrogram %dx%d over [%d, %d) in %.1f ms; z range %g %g",
             result.width, result.height, start, stop,
             (time.perf_counter() - t0) * 1000, result.z_min, result.z_max)
    return result
