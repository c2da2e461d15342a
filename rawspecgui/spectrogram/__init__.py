"""Spectrogram display subpackage."""

from .widget import SpectrogramWidget
from .compute import SpectrogramWorker

__all__ = ["SpectrogramWidget", "SpectrogramWorker"]
