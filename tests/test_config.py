from __future__ import annotations

import json

import pytest

from rawspeclib.config import (
    ANALYSIS_PARAMS,
    ConfigError,
    default_config,
    load_preset,
    merge_configs,
    param_spec,
    save_preset,
    validate_config,
    validate_config_fields,
)


def _keys(errors):
    return [e.key for e in errors]


def test_defaults_are_valid():
    cfg = default_config()
    assert set(cfg) == {p.key for p in ANALYSIS_PARAMS}
    assert validate_config_fields(cfg) == []
    validate_config(cfg)


def test_merge_later_wins():
    merged = merge_configs(default_config(), {"workers": 4}, {"workers": 8})
    assert merged["workers"] == 8
    assert merged["decimation"] == default_config()["decimation"]


@pytest.mark.parametrize("key,value", [
    ("workers", 0),
    ("workers", 65),
    ("decimation", 0),
    ("decimation", 2.5),
    ("center", -1),
    ("center", "2048"),
    ("z_low", None),
])
def test_invalid_values_are_reported(key, value):
    errors = validate_config_fields({**default_config(), key: value})
    assert _keys(errors) == [key]


def test_bool_is_not_an_int():
    errors = validate_config_fields({"workers": True})
    assert _keys(errors) == ["workers"]
    assert "boolean" in errors[0].message


def test_empty_intensity_range():
    errors = validate_config_fields({"z_low": 3.0, "z_high": 3.0})
    assert _keys(errors) == ["z_high"]


def test_validate_config_raises_with_all_messages():
    with pytest.raises(ConfigError) as exc:
        validate_config({"workers": 0, "decimation": 0})
    text = str(exc.value)
    assert "Worker threads" in text
    assert "Samples per column" in text


def test_preset_saves_only_overrides(tmp_path):
    path = tmp_path / "presets" / "fast.json"
    cfg = merge_configs(default_config(), {
        "workers": 4, "save_grid": "grid.npy", "_source_file": "x.raw",
    })
    save_preset(cfg, str(path), description="four threads")

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data == {
        "schema_version": "1.0",
        "_description": "four threads",
        "workers": 4,
    }
    assert load_preset(str(path)) == {"workers": 4}


def test_missing_preset(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_preset(str(tmp_path / "missing.json"))


def test_malformed_preset(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError, match="Invalid JSON"):
        load_preset(str(path))

    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ConfigError, match="JSON object"):
        load_preset(str(path))


def test_param_spec_lookup():
    spec = param_spec("workers")
    assert spec.default == 1
    assert spec.description
    with pytest.raises(KeyError):
        param_spec("nope")
