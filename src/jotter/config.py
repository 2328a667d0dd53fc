"""
Configuration management for Jotter.

Uses XDG base directories:
- Config: ~/.config/jotter/config.toml
- Data: ~/jotter/ (the notes file lives here)
"""

import logging
import os
from pathlib import Path
from typing import Any

# XDG defaults
DEFAULT_CONFIG_HOME = Path.home() / ".config"
DEFAULT_DATA_HOME = Path.home() / "jotter"

DEFAULT_DATA_FILE = "notes_data.txt"
DEFAULT_MAX_NOTES = 100

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_config_dir() -> Path:
    """Get the config directory (XDG_CONFIG_HOME/jotter)."""
    base = Path(os.environ.get("XDG_CONFIG_HOME", DEFAULT_CONFIG_HOME))
    return base / "jotter"


def get_jotter_home() -> Path:
    """Get the jotter data directory (~/jotter or JOTTER_HOME)."""
    if env_home := os.environ.get("JOTTER_HOME"):
        return Path(env_home)
    return DEFAULT_DATA_HOME


def get_config_path() -> Path:
    """Get the path to config.toml."""
    return get_config_dir() / "config.toml"


def get_data_file_path(config: dict[str, Any] | None = None) -> Path:
    """
    Get the path to the notes data file.

    JOTTER_DATA_FILE wins over the config; a relative data_file in the
    config is resolved against the jotter home.
    """
    if env_file := os.environ.get("JOTTER_DATA_FILE"):
        return Path(env_file)

    config = config or load_config()
    data_file = Path(config.get("jotter", {}).get("data_file", DEFAULT_DATA_FILE))
    if data_file.is_absolute():
        return data_file
    return get_jotter_home() / data_file


def load_config() -> dict[str, Any]:
    """
    Load configuration from config.toml.

    Returns default config if file doesn't exist. Sections found in the
    file are merged over the defaults key by key.
    """
    config = get_default_config()
    config_path = get_config_path()

    if not config_path.exists():
        return config

    # Lazy import tomli only when needed
    import tomli

    with open(config_path, "rb") as f:
        user_config = tomli.load(f)

    for section, values in user_config.items():
        if isinstance(values, dict) and isinstance(config.get(section), dict):
            config[section].update(values)
        else:
            config[section] = values

    return config


def get_default_config() -> dict[str, Any]:
    """Return default configuration."""
    return {
        "jotter": {
            "data_file": DEFAULT_DATA_FILE,
        },
        "notes": {
            "max_notes": DEFAULT_MAX_NOTES,
        },
        "search": {
            "literal_fallback": False,  # True: bad regexes match literally
        },
        "logging": {
            "level": "WARNING",
        },
        "display": {
            "clear_screen": True,
        },
    }


def setup_logging(config: dict[str, Any] | None = None) -> None:
    """Configure root logging from config (JOTTER_LOG_LEVEL overrides)."""
    config = config or load_config()
    level_name = os.environ.get("JOTTER_LOG_LEVEL") or config.get("logging", {}).get(
        "level", "WARNING"
    )
    level = getattr(logging, str(level_name).upper(), logging.WARNING)

    logging.basicConfig(format=LOG_FORMAT, level=level)
