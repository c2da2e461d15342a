from __future__ import annotations

import numpy as np
import pytest

from rawspeclib.audio import LoadError, load_samples, samples_from_bytes, save_samples
from rawspeclib.models import DEFAULT_CENTER


def test_load_little_endian(tmp_path):
    path = tmp_path / "rec.raw"
    path.write_bytes(bytes([0x00, 0x08, 0xFF, 0x0F, 0x01, 0x00]))
    buf = load_samples(str(path))
    assert buf.samples.dtype == np.uint16
    assert buf.samples.tolist() == [0x0800, 0x0FFF, 0x0001]
    assert len(buf) == 3
    assert buf.center == DEFAULT_CENTER
    assert buf.path == str(path)


def test_loaded_samples_are_read_only(tmp_path):
    path = tmp_path / "rec.raw"
    path.write_bytes(b"\x00\x08" * 4)
    buf = load_samples(str(path))
    with pytest.raises(ValueError):
        buf.samples[0] = 1


def test_odd_size_is_rejected(tmp_path):
    path = tmp_path / "odd.raw"
    path.write_bytes(b"\x00\x08\x00")
    with pytest.raises(LoadError, match="invalid file size 3"):
        load_samples(str(path))


def test_empty_file_is_rejected(tmp_path):
    path = tmp_path / "empty.raw"
    path.write_bytes(b"")
    with pytest.raises(LoadError):
        load_samples(str(path))


def test_missing_file(tmp_path):
    with pytest.raises(LoadError):
        load_samples(str(tmp_path / "nope.raw"))


def test_custom_center(tmp_path):
    path = tmp_path / "rec.raw"
    path.write_bytes(b"\x00\x80")
    assert load_samples(str(path), center=32768).center == 32768.0


def test_save_then_load(tmp_path, make_buffer):
    original = make_buffer([0, 1, 2048, 4095, 65535])
    path = tmp_path / "out.raw"
    save_samples(original, str(path))
    assert path.stat().st_size == 10
    assert load_samples(str(path)).samples.tolist() == [0, 1, 2048, 4095, 65535]


def test_samples_from_bytes_validates():
    with pytest.raises(LoadError):
        samples_from_bytes(b"")
    with pytest.raises(LoadError):
        samples_from_bytes(b"\x01")
    assert samples_from_bytes(b"\x34\x12").samples[0] == 0x1234
