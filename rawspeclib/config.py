from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Any

from .models import DEFAULT_CENTER
from .spectrogram import DEFAULT_DECIMATION, DEFAULT_Z_HIGH, DEFAULT_Z_LOW

PRESET_SCHEMA_VERSION = "1.0"

# Keys that are internal/CLI-only and should not be saved in presets
_INTERNAL_KEYS = {"save_grid", "json", "_source_file"}


class ConfigError(Exception):
    """Raised when configuration validation fails."""
    pass


@dataclass
class ConfigFieldError:
    """A single validation error for one configuration field.

    Attributes:
        key:     The config key that failed validation.
        value:   The offending value.
        message: Human-readable explanation of what is wrong.
    """
    key: str
    value: Any
    message: str


@dataclass(frozen=True)
class ParamSpec:
    """Declarative specification for a single configuration parameter.

    Describes type, default, valid range and a human-readable label so the
    CLI, the GUI settings file and presets validate values the same way.
    """
    key: str
    type: type | tuple              # expected Python type(s)
    default: Any
    label: str                       # short UI label
    description: str = ""            # longer tooltip / help text
    min: float | int | None = None   # inclusive lower bound
    max: float | int | None = None   # inclusive upper bound


# ---------------------------------------------------------------------------
# Analysis parameters
# ---------------------------------------------------------------------------

ANALYSIS_PARAMS: list[ParamSpec] = [
    ParamSpec(
        key="center", type=(int, float), default=DEFAULT_CENTER,
        min=0, max=65535,
        label="Sample center",
        description=(
            "Raw sample value that corresponds to zero signal. It is "
            "subtracted from every sample before windowing."
        ),
    ),
    ParamSpec(
        key="decimation", type=int, default=DEFAULT_DECIMATION, min=1,
        label="Samples per column",
        description=(
            "The spectrogram gets one column per this many samples of the "
            "full recording."
        ),
    ),
    ParamSpec(
        key="z_low", type=(int, float), default=DEFAULT_Z_LOW,
        label="Intensity floor (log10)",
        description=(
            "log10 magnitude drawn as black. Weaker bins, including the "
            "zero bins of silent frames, are raised to this floor."
        ),
    ),
    ParamSpec(
        key="z_high", type=(int, float), default=DEFAULT_Z_HIGH,
        label="Intensity ceiling (log10)",
        description="log10 magnitude drawn at full intensity.",
    ),
    ParamSpec(
        key="workers", type=int, default=1, min=1, max=64,
        label="Worker threads",
        description="Threads used to compute spectrogram columns.",
    ),
]


def param_spec(key: str) -> ParamSpec:
    """Return the :class:`ParamSpec` of an analysis parameter."""
    for spec in ANALYSIS_PARAMS:
        if spec.key == key:
            return spec
    raise KeyError(key)


def default_config() -> dict[str, Any]:
    """Returns the built-in default configuration."""
    return {p.key: p.default for p in ANALYSIS_PARAMS}


def merge_configs(*configs: dict[str, Any]) -> dict[str, Any]:
    """Merge multiple config dicts left-to-right.  Later values win."""
    result: dict[str, Any] = {}
    for cfg in configs:
        result.update(cfg)
    return result


def load_preset(path: str) -> dict[str, Any]:
    """
    Load a JSON preset file. Returns a partial config dict.
    Raises ConfigError if the file cannot be read or parsed.
    """
    if not os.path.isfile(path):
        raise ConfigError(f"Preset file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in preset file {path}: {e}")
    except OSError as e:
        raise ConfigError(f"Cannot read preset file {path}: {e}")

    if not isinstance(data, dict):
        raise ConfigError(f"Preset file must contain a JSON object, got {type(data).__name__}")

    # Strip metadata keys — they are informational, not config
    return {k: v for k, v in data.items() if k not in ("schema_version", "_description")}


def save_preset(config: dict[str, Any], path: str, *, description: str | None = None) -> None:
    """
    Save a config dict as a JSON preset file.
    Internal/CLI-only keys and values equal to the defaults are skipped.
    """
    preset: dict[str, Any] = {"schema_version": PRESET_SCHEMA_VERSION}
    if description:
        preset["_description"] = description

    defaults = default_config()
    for k, v in config.items():
        if k in _INTERNAL_KEYS or k.startswith("_"):
            continue
        if k in defaults and defaults[k] == v:
            continue
        preset[k] = v

    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(preset, f, indent=4, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Validation  (ParamSpec-driven)
# ---------------------------------------------------------------------------

def validate_param_values(
    params: list[ParamSpec],
    values: dict[str, Any],
) -> list[ConfigFieldError]:
    """Validate *values* against a list of :class:`ParamSpec` definitions.

    Returns a (possibly empty) list of :class:`ConfigFieldError` objects.
    Only keys present in *values* are checked; missing keys are not errors
    (they will receive their default).
    """
    errors: list[ConfigFieldError] = []

    for spec in params:
        if spec.key not in values:
            continue

        value = values[spec.key]

        if value is None:
            errors.append(ConfigFieldError(
                spec.key, value,
                f"{spec.label} must not be empty.",
            ))
            continue

        # -- type (bool ⊄ int guard) --
        expected = spec.type
        if expected is not bool and isinstance(value, bool):
            errors.append(ConfigFieldError(
                spec.key, value,
                f"{spec.label} must be {_type_label(expected)}, got boolean.",
            ))
            continue
        if not isinstance(value, expected):
            errors.append(ConfigFieldError(
                spec.key, value,
                f"{spec.label} must be {_type_label(expected)}, "
                f"got {type(value).__name__}.",
            ))
            continue

        # -- numeric range --
        if spec.min is not None and value < spec.min:
            errors.append(ConfigFieldError(
                spec.key, value,
                f"{spec.label} must be at least {spec.min}.",
            ))
            continue
        if spec.max is not None and value > spec.max:
            errors.append(ConfigFieldError(
                spec.key, value,
                f"{spec.label} must be at most {spec.max}.",
            ))

    return errors


def validate_config_fields(config: dict[str, Any]) -> list[ConfigFieldError]:
    """Validate a config dict against :data:`ANALYSIS_PARAMS`.

    Also checks that the intensity range is not empty.  Never raises.
    """
    errors = validate_param_values(ANALYSIS_PARAMS, config)
    if not errors:
        z_low = config.get("z_low", DEFAULT_Z_LOW)
        z_high = config.get("z_high", DEFAULT_Z_HIGH)
        if z_high <= z_low:
            errors.append(ConfigFieldError(
                "z_high", z_high,
                f"Intensity ceiling (log10) must be greater than the floor ({z_low}).",
            ))
    return errors


def validate_config(config: dict[str, Any]) -> None:
    """Validate a config dict.

    Raises :class:`ConfigError` listing every invalid field.
    """
    errors = validate_config_fields(config)
    if errors:
        lines = [e.message for e in errors]
        raise ConfigError(
            "Configuration has invalid values:\n  • " + "\n  • ".join(lines)
        )


def _type_label(t) -> str:
    """Human-readable label for an expected type or tuple of types."""
    if isinstance(t, tuple):
        return " or ".join(x.__name__ for x in t)
    return t.__name__
