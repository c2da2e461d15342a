"""
rawspec viewer — PySide6 front-end.

Usage:
    python rawspec-gui.py recording.bin

Requires: PySide6 (install via `pip install PySide6`)
"""

from rawspecgui import main

if __name__ == "__main__":
    main()
