"""Spectrogram image cache and painting."""

from __future__ import annotations

from PySide6.QtCore import QRect, Qt
from PySide6.QtGui import QColor, QImage, QPainter, QPen

from rawspeclib.models import SelectionRect, SpectrogramResult

from ..theme import COLORS, SELECTION_FILL


class SpectrogramRenderer:
    """Turns a :class:`SpectrogramResult` into a cached, scaled QImage."""

    def __init__(self):
        self._result: SpectrogramResult | None = None
        self._image: QImage | None = None
        self._image_data: bytes | None = None   # backing store of the QImage
        self._cache_key: tuple = ()

    @property
    def result(self) -> SpectrogramResult | None:
        return self._result

    def set_result(self, result: SpectrogramResult | None):
        """Set a new grid and drop the cached image."""
        self._result = result
        self.invalidate()

    def invalidate(self):
        """Force image rebuild on next paint (e.g. resize)."""
        self._image = None
        self._image_data = None
        self._cache_key = ()

    def paint(self, painter: QPainter, width: int, height: int,
              placeholder: str = "No spectrogram"):
        if self._result is None or width <= 0 or height <= 0:
            painter.setPen(QPen(QColor(COLORS["dim"])))
            painter.drawText(QRect(0, 0, width, height), Qt.AlignCenter, placeholder)
            return
        cache_key = (id(self._result), width, height)
        if self._cache_key != cache_key or self._image is None:
            self._build_image(width, height)
            self._cache_key = cache_key
        if self._image is not None:
            painter.drawImage(0, 0, self._image)

    @staticmethod
    def paint_selection(painter: QPainter, rect: SelectionRect):
        r = rect.normalized()
        painter.fillRect(QRect(r.x0, r.y0, r.dx, r.dy), SELECTION_FILL)

    def _build_image(self, width: int, height: int):
        pixels = self._result.pixels
        nat_h, nat_w = pixels.shape[:2]
        self._image_data = pixels.tobytes()
        native = QImage(self._image_data, nat_w, nat_h, nat_w * 4,
                        QImage.Format.Format_RGBA8888)
        self._image = native.scaled(width, height, Qt.IgnoreAspectRatio,
                                    Qt.SmoothTransformation)
