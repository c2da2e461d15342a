"""rawspec viewer — PySide6 front-end for the spectrogram core."""


def main():
    from .mainwindow import main as _main
    _main()


__all__ = ["main"]
