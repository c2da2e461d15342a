"""Debug tracing for the rawspec viewer.

Usage::

    from rawspecgui.log import dbg, timed

    dbg(f"viewport -> {viewport.as_tuple()}")

    with timed("build [0, 4096) x32"):
        result = build_spectrogram(...)

Nothing is printed unless ``RAWSPEC_DEBUG`` is ``1`` or ``true``
(case-insensitive).  Lines go to stderr as
``[HH:MM:SS.mmm Origin] message`` where *Origin* is the class of the
calling method, or its module when called from a plain function.
"""

from __future__ import annotations

import inspect
import os
import sys
import time
from contextlib import contextmanager
from typing import Iterator

_ENABLED: bool | None = None


def _is_enabled() -> bool:
    global _ENABLED
    if _ENABLED is None:
        val = os.environ.get("RAWSPEC_DEBUG", "").strip().lower()
        _ENABLED = val in ("1", "true")
    return _ENABLED


def _origin(depth: int) -> str:
    """Name the class or module of the frame *depth* levels up the stack."""
    frame = inspect.currentframe()
    try:
        caller = frame
        for _ in range(depth):
            caller = caller.f_back if caller is not None else None
        if caller is None:
            return "?"
        self_obj = caller.f_locals.get("self")
        if self_obj is not None:
            return type(self_obj).__name__
        cls_obj = caller.f_locals.get("cls")
        if cls_obj is not None:
            return getattr(cls_obj, "__name__", str(cls_obj))
        mod = caller.f_globals.get("__name__", "")
        return mod.rsplit(".", 1)[-1] if mod else "?"
    finally:
        del frame


def _emit(origin: str, msg: str) -> None:
    t = time.strftime("%H:%M:%S")
    ms = int((time.time() % 1) * 1000)
    print(f"[{t}.{ms:03d} {origin}] {msg}", file=sys.stderr, flush=True)


def dbg(msg: str) -> None:
    """Print *msg* to stderr when ``RAWSPEC_DEBUG`` is active."""
    if not _is_enabled():
        return
    # _origin -> dbg -> caller
    _emit(_origin(2), msg)


@contextmanager
def timed(label: str) -> Iterator[None]:
    """Trace how long the ``with`` body took, as ``label: N.N ms``."""
    if not _is_enabled():
        yield
        return
    # _origin -> timed (generator) -> contextlib __enter__ -> caller
    origin = _origin(3)
    t0 = time.perf_counter()
    try:
        yield
    finally:
        _emit(origin, f"{label}: {(time.perf_counter() - t0) * 1000:.1f} ms")
