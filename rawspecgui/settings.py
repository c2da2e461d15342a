"""Persistent GUI configuration (rawspec.config.json).

On first launch the file is created in the OS-specific user preferences
directory with all built-in defaults.  On later launches it is loaded,
validated and merged with the current defaults so that newly added keys
always receive a value.

Structure::

    {
        "analysis": { "center": ..., "decimation": ..., ... },
        "gui":      { "window_width": ..., ... },
    }

Locations:
    Windows : %APPDATA%\\rawspec\\rawspec.config.json
    macOS   : ~/Library/Application Support/rawspec/rawspec.config.json
    Linux   : $XDG_CONFIG_HOME/rawspec/rawspec.config.json
              (defaults to ~/.config/rawspec/rawspec.config.json)
"""

from __future__ import annotations

import copy
import json
import logging
import os
import platform
from typing import Any

from rawspeclib.config import default_config, validate_config_fields

log = logging.getLogger(__name__)

CONFIG_FILENAME = "rawspec.config.json"

_GUI_DEFAULTS: dict[str, Any] = {
    "window_width": 1200,
    "window_height": 600,
}


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

def _config_dir() -> str:
    """Return the OS-specific configuration directory for rawspec."""
    system = platform.system()
    if system == "Windows":
        base = os.environ.get("APPDATA")
        if not base:
            base = os.path.expanduser("~")
        return os.path.join(base, "rawspec")
    elif system == "Darwin":
        return os.path.join(
            os.path.expanduser("~"),
            "Library",
            "Application Support",
            "rawspec",
        )
    else:  # Linux / BSD / …
        base = os.environ.get("XDG_CONFIG_HOME")
        if not base:
            base = os.path.join(os.path.expanduser("~"), ".config")
        return os.path.join(base, "rawspec")


def config_path() -> str:
    """Return the full path to the GUI config file."""
    return os.path.join(_config_dir(), CONFIG_FILENAME)


def build_defaults() -> dict[str, Any]:
    return {
        "analysis": default_config(),
        "gui": copy.deepcopy(_GUI_DEFAULTS),
    }


# ---------------------------------------------------------------------------
# Load / Save
# ---------------------------------------------------------------------------

def load_config() -> dict[str, Any]:
    """Load the GUI config, creating it with defaults if needed.

    If the file is corrupt or fails validation it is backed up as
    ``*.bak`` and recreated from defaults.
    """
    path = config_path()
    defaults = build_defaults()

    if not os.path.isfile(path):
        log.info("Config file not found — creating %s", path)
        save_config(defaults)
        return copy.deepcopy(defaults)

    # -- Read --
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as exc:
        log.warning("Cannot read config (%s) — recreating from defaults", exc)
        _backup_corrupt(path)
        save_config(defaults)
        return copy.deepcopy(defaults)

    if not isinstance(data, dict):
        log.warning("Config root is %s, expected object — recreating",
                    type(data).__name__)
        _backup_corrupt(path)
        save_config(defaults)
        return copy.deepcopy(defaults)

    # -- Merge: defaults ← file overrides (section by section) --
    merged = _merge_sections(defaults, data)

    # -- Validate --
    errors = validate_config_fields(merged["analysis"])
    if errors:
        msgs = "; ".join(e.message for e in errors)
        log.warning("Config validation failed (%s) — resetting analysis section",
                    msgs)
        _backup_corrupt(path)
        defaults["gui"] = copy.deepcopy(merged["gui"])
        save_config(defaults)
        return copy.deepcopy(defaults)

    # Persist if merge introduced new keys (e.g. new defaults)
    if merged != data:
        save_config(merged)

    return merged


def save_config(config: dict[str, Any]) -> str:
    """Save the config to the user preferences file.  Returns the path."""
    path = config_path()
    os.makedirs(os.path.dirname(path), exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=4, ensure_ascii=False)
        f.write("\n")

    log.info("Config saved to %s", path)
    return path


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _merge_sections(
    defaults: dict[str, Any],
    overrides: dict[str, Any],
) -> dict[str, Any]:
    """Merge known keys of *overrides* into a copy of *defaults*."""
    merged = copy.deepcopy(defaults)
    for section in ("analysis", "gui"):
        values = overrides.get(section)
        if not isinstance(values, dict):
            continue
        target = merged[section]
        for k, v in values.items():
            if k in target:
                target[k] = v
    return merged


def _backup_corrupt(path: str) -> None:
    """Rename a corrupt config file to ``*.bak`` (best-effort)."""
    backup = path + ".bak"
    try:
        if os.path.isfile(backup):
            os.remove(backup)
        os.rename(path, backup)
        log.info("Backed up corrupt config to %s", backup)
    except OSError as exc:
        log.warning("Could not back up %s: %s", path, exc)
