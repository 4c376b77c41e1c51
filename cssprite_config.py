"""Centralised loader for cssprite runtime configuration.

This module owns the ``config.json`` file inside the cssprite home directory
(``$CSSPRITE_HOME``, or ``.cssprite`` under the current directory). It stores
the default output file names, the selector prefix, the accepted source
extensions and the log level. When the file is missing a default is written
to disk so users have something to edit.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict

from cssprite.core.errors import ConfigurationError

HOME_ENV = "CSSPRITE_HOME"

_DEFAULT_CONFIG: Dict[str, Any] = {
    "sprite": {
        "sheet_name": "SpriteImage.png",
        "stylesheet_name": "style.css",
        "selector_prefix": "",
        "extensions": [".png", ".gif", ".jpg", ".jpeg", ".bmp"],
    },
    "logging": {
        "level": "INFO",
    },
}


def cssprite_home() -> Path:
    return Path(os.environ.get(HOME_ENV) or Path.cwd() / ".cssprite")


def config_path() -> Path:
    return cssprite_home() / "config.json"


def _defaults() -> Dict[str, Any]:
    return json.loads(json.dumps(_DEFAULT_CONFIG))


def _write_default() -> None:
    save_config(_DEFAULT_CONFIG)


def load_config() -> Dict[str, Any]:
    """Return the runtime configuration, creating defaults if necessary."""

    path = config_path()
    if not path.exists():
        _write_default()
        return _defaults()

    with path.open("r", encoding="utf-8") as handle:
        try:
            data = json.load(handle)
        except json.JSONDecodeError:
            # A corrupted file is replaced so the next run starts clean.
            data = None

    if not isinstance(data, dict):
        _write_default()
        return _defaults()

    # Merge missing keys from the defaults without overwriting user values.
    merged = _defaults()
    for key, value in data.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key].update(value)
        else:
            merged[key] = value
    validate_config(merged, path)
    return merged


def validate_config(config: Dict[str, Any], path=None) -> None:
    """Raise ``ConfigurationError`` when a known section or field has the wrong shape."""

    where = f" in {path}" if path else ""

    def fail(message: str) -> None:
        raise ConfigurationError(f"Invalid configuration{where}: {message}")

    for section in _DEFAULT_CONFIG:
        if not isinstance(config.get(section), dict):
            fail(f"'{section}' must be an object")

    sprite = config["sprite"]
    for field in ("sheet_name", "stylesheet_name"):
        value = sprite.get(field)
        if not isinstance(value, str) or not value.strip():
            fail(f"'sprite.{field}' must be a non-empty string")
    if not isinstance(sprite.get("selector_prefix"), str):
        fail("'sprite.selector_prefix' must be a string")
    extensions = sprite.get("extensions")
    if not isinstance(extensions, list) or not all(isinstance(ext, str) for ext in extensions):
        fail("'sprite.extensions' must be a list of strings")

    level = config["logging"].get("level")
    if level is not None and not isinstance(level, str):
        fail("'logging.level' must be a string")


def save_config(config: Dict[str, Any]) -> None:
    """Persist ``config`` back to ``config.json``."""

    path = config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(config, handle, indent=2, sort_keys=True)
        handle.write("\n")


__all__ = ["HOME_ENV", "config_path", "cssprite_home", "load_config", "save_config", "validate_config"]
