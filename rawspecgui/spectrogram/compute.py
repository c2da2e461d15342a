"""Background spectrogram computation for the viewer."""

from __future__ import annotations

import threading

import numpy as np

from PySide6.QtCore import QThread, Signal

from rawspeclib.models import SampleBuffer
from rawspeclib.spectrogram import build_spectrogram

from ..log import timed


class SpectrogramWorker(QThread):
    """Builds one spectrogram grid off the main thread.

    Emits ``finished`` with a :class:`SpectrogramResult`, or ``error`` with
    a message if the builder rejects its inputs.  Nothing is emitted after
    :meth:`cancel`.
    """

    finished = Signal(object)   # SpectrogramResult
    error = Signal(str)

    def __init__(self, buffer: SampleBuffer, window: np.ndarray, width: int, *,
                 start: int, stop: int, z_low: float, z_high: float,
                 workers: int = 1, parent=None):
        super().__init__(parent)
        self._buffer = buffer
        self._window = window
        self._width = width
        self._start = start
        self._stop = stop
        self._z_low = z_low
        self._z_high = z_high
        self._workers = workers
        self._cancelled = threading.Event()

    def cancel(self):
        """Request that the result be dropped."""
        self._cancelled.set()

    def run(self):
        label = f"build [{self._start}, {self._stop}) x{self._width}"
        try:
            with timed(label):
                result = build_spectrogram(
                    self._buffer, self._window, self._width,
                    start=self._start, stop=self._stop,
                    z_low=self._z_low, z_high=self._z_high,
                    workers=self._workers,
                )
        except ValueError as e:
            if not self._cancelled.is_set():
                self.error.emit(str(e))
            return
        if self._cancelled.is_set():
            return
        self.finished.emit(result)
