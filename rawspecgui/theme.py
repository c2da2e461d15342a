"""Color palette and dark-theme application."""

from __future__ import annotations

from PySide6.QtGui import QColor, QPalette
from PySide6.QtWidgets import QApplication


COLORS = {
    "dim": "#888888",
    "text": "#dddddd",
    "bg": "#1e1e1e",
    "bg_alt": "#252525",
    "accent": "#3a3a3a",
    "information": "#4499ff",
}

# Rubber band fill while a selection is being dragged.
SELECTION_FILL = QColor(255, 0, 0, 100)


STYLESHEET = """
    QMainWindow { background-color: #1e1e1e; }
    QMenuBar { background-color: #252525; color: #dddddd; }
    QMenuBar::item:selected { background-color: #3a3a3a; }
    QMenu { background-color: #2d2d2d; color: #dddddd; border: 1px solid #555; }
    QMenu::item:selected { background-color: #2a6db5; }
    QStatusBar { background-color: #2d2d2d; color: #888888; }
"""


def apply_dark_theme(window) -> None:
    """Apply the dark palette and stylesheet to the application and window."""
    app = QApplication.instance()

    palette = QPalette()
    bg = QColor(COLORS["bg"])
    bg_alt = QColor(COLORS["bg_alt"])
    accent = QColor(COLORS["accent"])
    text = QColor(COLORS["text"])
    highlight = QColor("#2a6db5")

    palette.setColor(QPalette.Window, bg)
    palette.setColor(QPalette.WindowText, text)
    palette.setColor(QPalette.Base, bg_alt)
    palette.setColor(QPalette.AlternateBase, accent)
    palette.setColor(QPalette.Text, text)
    palette.setColor(QPalette.Button, accent)
    palette.setColor(QPalette.ButtonText, text)
    palette.setColor(QPalette.Link, QColor(COLORS["information"]))
    palette.setColor(QPalette.Highlight, highlight)
    palette.setColor(QPalette.HighlightedText, QColor("#ffffff"))

    app.setPalette(palette)
    window.setStyleSheet(STYLESHEET)
