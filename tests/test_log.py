from __future__ import annotations

import re

import pytest

from rawspecgui import log


@pytest.fixture
def enabled(monkeypatch):
    monkeypatch.setattr(log, "_ENABLED", True)


class _Traced:
    def method(self):
        log.dbg("from method")

    @classmethod
    def factory(cls):
        log.dbg("from classmethod")

    def timed_block(self):
        with log.timed("block"):
            pass


def test_disabled_is_silent(monkeypatch, capsys):
    monkeypatch.setattr(log, "_ENABLED", False)
    log.dbg("hidden")
    with log.timed("hidden"):
        pass
    assert capsys.readouterr().err == ""


def test_env_var_enables(monkeypatch):
    monkeypatch.setattr(log, "_ENABLED", None)
    monkeypatch.setenv("RAWSPEC_DEBUG", "True")
    assert log._is_enabled()


def test_origin_names_class_or_module(enabled, capsys):
    _Traced().method()
    _Traced.factory()
    log.dbg("from function")
    lines = capsys.readouterr().err.splitlines()
    assert re.match(r"^\[\d\d:\d\d:\d\d\.\d{3} _Traced\] from method$", lines[0])
    assert lines[1].endswith(" _Traced] from classmethod")
    assert lines[2].endswith(" test_log] from function")


def test_timed_reports_elapsed(enabled, capsys):
    _Traced().timed_block()
    err = capsys.readouterr().err.strip()
    assert re.match(r"^\[\S+ _Traced\] block: \d+\.\d ms$", err)
