"""Spectrogram display widget with rubber-band zoom."""

from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QColor, QPainter
from PySide6.QtWidgets import QWidget

from rawspeclib.events import BUILD_COMPLETE, EventBus, VIEWPORT_CHANGED
from rawspeclib.models import SampleBuffer
from rawspeclib.selection import SelectionController
from rawspeclib.spectrogram import (
    DEFAULT_Z_HIGH, DEFAULT_Z_LOW, column_count, sample_range,
)
from rawspeclib.viewport import Viewport
from rawspeclib.window import window_coefficients

from ..log import dbg
from ..theme import COLORS
from .compute import SpectrogramWorker
from .renderer import SpectrogramRenderer


class SpectrogramWidget(QWidget):
    """Paints the spectrogram and turns mouse drags into zoom selections.

    Left-drag draws a selection rectangle; releasing zooms into it.
    Escape or a right click while dragging cancels.  Every completed
    selection rebuilds the grid for the new sample range in a worker
    thread and announces the result as ``spectrogram.build_complete``.
    """

    build_failed = Signal(str)

    def __init__(self, event_bus: EventBus | None = None, parent=None):
        super().__init__(parent)
        self._event_bus = event_bus or EventBus()
        self._selection = SelectionController(self._event_bus)
        self._renderer = SpectrogramRenderer()
        self._window = window_coefficients()
        self._buffer: SampleBuffer | None = None
        self._worker: SpectrogramWorker | None = None
        self._width_columns: int = 1
        self._z_low: float = DEFAULT_Z_LOW
        self._z_high: float = DEFAULT_Z_HIGH
        self._workers: int = 1
        self._loading: bool = False
        self._event_bus.subscribe(VIEWPORT_CHANGED, self._on_viewport_changed)
        self.setMinimumSize(200, 128)
        self.setCursor(Qt.CrossCursor)
        self.setFocusPolicy(Qt.StrongFocus)

    # ── Data management ────────────────────────────────────────────────────

    @property
    def selection(self) -> SelectionController:
        return self._selection

    @property
    def result(self):
        return self._renderer.result

    def set_buffer(self, buffer: SampleBuffer, *, decimation: int,
                   z_low: float = DEFAULT_Z_LOW, z_high: float = DEFAULT_Z_HIGH,
                   workers: int = 1):
        """Load a recording and build its full-range spectrogram."""
        self._buffer = buffer
        self._width_columns = column_count(len(buffer), decimation)
        self._z_low = z_low
        self._z_high = z_high
        self._workers = workers
        self._selection = SelectionController(self._event_bus)
        self._renderer.set_result(None)
        self._rebuild(None)

    # ── Rebuild ────────────────────────────────────────────────────────────

    def _on_viewport_changed(self, viewport: Viewport):
        dbg(f"viewport -> {viewport.as_tuple()}")
        self._rebuild(viewport)

    def _rebuild(self, viewport: Viewport | None):
        if self._buffer is None:
            return
        if self._worker is not None:
            self._worker.cancel()
            self._worker.finished.disconnect()
            self._worker.error.disconnect()
            self._worker = None
        start, stop = sample_range(viewport, len(self._buffer))
        worker = SpectrogramWorker(
            self._buffer, self._window, self._width_columns,
            start=start, stop=stop, z_low=self._z_low, z_high=self._z_high,
            workers=self._workers, parent=self,
        )
        worker.finished.connect(self._on_built)
        worker.error.connect(self._on_build_error)
        self._worker = worker
        self._loading = True
        worker.start()
        self.update()

    def _on_built(self, result):
        self._worker = None
        self._loading = False
        self._renderer.set_result(result)
        self._event_bus.emit(BUILD_COMPLETE, result=result)
        self.update()

    def _on_build_error(self, message: str):
        self._worker = None
        self._loading = False
        self.build_failed.emit(message)
        self.update()

    # ── paintEvent ─────────────────────────────────────────────────────────

    def paintEvent(self, event):
        w = self.width()
        h = self.height()
        painter = QPainter(self)
        painter.fillRect(0, 0, w, h, QColor(COLORS["bg"]))
        placeholder = "Computing spectrogram…" if self._loading else "No spectrogram"
        self._renderer.paint(painter, w, h, placeholder)
        rect = self._selection.rect
        if self._selection.selecting and rect is not None:
            self._renderer.paint_selection(painter, rect)
        painter.end()

    # ── Qt event handlers ──────────────────────────────────────────────────

    def resizeEvent(self, event):
        self._renderer.invalidate()
        super().resizeEvent(event)

    def mousePressEvent(self, event):
        self.setFocus()
        pos = event.position()
        if event.button() == Qt.LeftButton:
            self._selection.press(int(pos.x()), int(pos.y()))
            self.update()
        elif event.button() == Qt.RightButton and self._selection.selecting:
            self._selection.cancel()
            self.update()

    def mouseMoveEvent(self, event):
        if self._selection.selecting:
            pos = event.position()
            self._selection.drag(int(pos.x()), int(pos.y()))
            self.update()

    def mouseReleaseEvent(self, event):
        if event.button() != Qt.LeftButton or not self._selection.selecting:
            return
        pos = event.position()
        self._selection.release(int(pos.x()), int(pos.y()),
                                self.width(), self.height())
        self.update()

    def keyPressEvent(self, event):
        if event.key() == Qt.Key_Escape and self._selection.selecting:
            self._selection.cancel()
            self.update()
        else:
            super().keyPressEvent(event)
