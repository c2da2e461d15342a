"""Main application window for the rawspec viewer."""

from __future__ import annotations

import argparse
import sys
import time

from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import QApplication, QMainWindow, QStatusBar

from rawspeclib import __version__
from rawspeclib.audio import LoadError, load_samples
from rawspeclib.config import merge_configs, param_spec, validate_config_fields
from rawspeclib.events import BUILD_COMPLETE, EventBus, VIEWPORT_CHANGED
from rawspeclib.models import SampleBuffer
from rawspeclib.viewport import Viewport

from .log import dbg, timed
from .settings import load_config, save_config
from .spectrogram import SpectrogramWidget
from .theme import apply_dark_theme


class RawSpecWindow(QMainWindow):
    def __init__(self, buffer: SampleBuffer, config: dict):
        super().__init__()
        self._config = config
        analysis = config["analysis"]
        gui = config["gui"]
        name = buffer.path or "untitled"
        self.setWindowTitle(f"rawspec — {name}")
        self.resize(gui["window_width"], gui["window_height"])

        self._event_bus = EventBus()
        self._event_bus.subscribe(VIEWPORT_CHANGED, self._on_viewport_changed)
        self._event_bus.subscribe(BUILD_COMPLETE, self._on_result_ready)

        self._spectrogram = SpectrogramWidget(self._event_bus)
        self._spectrogram.build_failed.connect(self._on_build_failed)
        self.setCentralWidget(self._spectrogram)

        self._status_bar = QStatusBar()
        self.setStatusBar(self._status_bar)
        self._viewport_text = "full view"
        self._range_text = ""

        self._init_menus()

        with timed("set_buffer"):
            self._spectrogram.set_buffer(
                buffer,
                decimation=analysis["decimation"],
                z_low=analysis["z_low"],
                z_high=analysis["z_high"],
                workers=analysis["workers"],
            )

    def _init_menus(self):
        file_menu = self.menuBar().addMenu("&File")
        quit_action = QAction("&Quit", self)
        quit_action.setShortcut(QKeySequence.Quit)
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

    # ── Slots ──────────────────────────────────────────────────────────────

    def _on_viewport_changed(self, viewport: Viewport):
        ox, oy, sx, sy = viewport.as_tuple()
        self._viewport_text = (f"offset ({ox:.4f}, {oy:.4f})  "
                               f"size ({sx:.4f}, {sy:.4f})")
        self._refresh_status()

    def _on_result_ready(self, result):
        self._range_text = (f"samples {result.sample_start:,}–{result.sample_stop:,}  "
                            f"log10|X| {result.z_min:.2f} … {result.z_max:.2f}")
        self._refresh_status()

    def _on_build_failed(self, message: str):
        self._status_bar.showMessage(f"Spectrogram failed: {message}")

    def _refresh_status(self):
        parts = [self._viewport_text]
        if self._range_text:
            parts.append(self._range_text)
        self._status_bar.showMessage("   |   ".join(parts))

    def closeEvent(self, event):
        gui = self._config["gui"]
        gui["window_width"] = self.width()
        gui["window_height"] = self.height()
        save_config(self._config)
        super().closeEvent(event)


def _parse_arguments(argv):
    parser = argparse.ArgumentParser(
        description="rawspec viewer: zoomable spectrogram of a raw uint16 recording")
    parser.add_argument("--version", action="version",
                        version=f"rawspec {__version__}")
    parser.add_argument("file", type=str,
                        help="Raw recording (little-endian unsigned 16-bit samples)")
    parser.add_argument("--center", type=float, default=None,
                        help=param_spec("center").description)
    return parser.parse_args(argv)


def main(argv=None):
    t_main = time.perf_counter()
    args = _parse_arguments(sys.argv[1:] if argv is None else argv)

    config = load_config()
    if args.center is not None:
        config["analysis"] = merge_configs(config["analysis"], {"center": args.center})
        errors = validate_config_fields(config["analysis"])
        if errors:
            print(f"rawspec: {errors[0].message}", file=sys.stderr)
            sys.exit(1)

    # Load before any window exists: load errors are fatal.
    try:
        buffer = load_samples(args.file, center=config["analysis"]["center"])
    except LoadError as e:
        print(f"rawspec: {e}", file=sys.stderr)
        sys.exit(1)

    with timed("QApplication created"):
        app = QApplication(sys.argv[:1])
        app.setStyle("Fusion")

    window = RawSpecWindow(buffer, config)
    apply_dark_theme(window)
    window.show()

    dbg(f"main() total: {(time.perf_counter() - t_main) * 1000:.1f} ms")
    sys.exit(app.exec())
