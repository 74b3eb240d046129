"""Configuration loading for selffork.

Settings come from three places, later ones winning: built-in defaults, an
optional TOML file, and ``SELFFORK_*`` environment variables. A forked child
inherits the parent's environment, so both sides resolve the same settings.
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from selffork.models import ForkConfig

log = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "selffork"
CONFIG_FILE = CONFIG_DIR / "config.toml"

ENV_CONFIG_FILE = "SELFFORK_CONFIG"
ENV_SETTINGS = {
    "SELFFORK_TEMP_DIR": "temp_dir",
    "SELFFORK_TEMP_PREFIX": "temp_prefix",
    "SELFFORK_PICKLE_PROTOCOL": "pickle_protocol",
    "SELFFORK_STRICT": "strict",
}


def config_path() -> Path:
    """Return the configuration file path, honoring ``SELFFORK_CONFIG``."""
    override = os.environ.get(ENV_CONFIG_FILE, "").strip()
    return Path(override).expanduser() if override else CONFIG_FILE


def _read_file(path: Path) -> dict[str, Any]:
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return {}
    log.debug("loaded config from %s", path)
    return data.get("selffork", data)


def _read_env() -> dict[str, str]:
    values: dict[str, str] = {}
    for var, setting in ENV_SETTINGS.items():
        value = os.environ.get(var, "").strip()
        if value:
            values[setting] = value
    return values


def load_config(path: Path | None = None) -> ForkConfig:
    """Load configuration from file and environment."""
    data = _read_file(path if path is not None else config_path())
    data.update(_read_env())
    return ForkConfig.model_validate(data)
