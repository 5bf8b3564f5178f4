"""
User configuration persistence.

Settings live in `.initiative_config.json` in the working directory. Command
line flags override them for one session; `--save-config` writes the flags
back so they become the new defaults.
"""

import json
import logging
from pathlib import Path
from typing import TypedDict

logger = logging.getLogger(__name__)


class Config(TypedDict, total=False):
    """User configuration."""
    data_dir: str  # Where the journal lives
    store: str  # json, memory or null
    show_banner: bool  # Show the welcome text on startup
    log_level: str  # DEBUG, INFO, WARNING, ...


DEFAULT_CONFIG: Config = {
    "data_dir": "initiative_data",
    "store": "json",
    "show_banner": True,
    "log_level": "WARNING",
}

STORE_CHOICES = ("json", "memory", "null")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_config_path(config_dir: Path | str = ".") -> Path:
    return Path(config_dir) / ".initiative_config.json"


def load_config(config_dir: Path | str = ".") -> Config:
    """
    Load config merged over the defaults.

    A missing or unreadable file gives the defaults. Keys the file holds
    that aren't settings are ignored.
    """
    config = DEFAULT_CONFIG.copy()
    path = get_config_path(config_dir)
    if not path.exists():
        return config

    try:
        saved = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Ignoring unreadable config {path}: {e}")
        return config

    if not isinstance(saved, dict):
        logger.warning(f"Ignoring config {path}: expected an object")
        return config

    config.update({key: value for key, value in saved.items() if key in DEFAULT_CONFIG})
    return config


def save_config(config: Config, config_dir: Path | str = ".") -> bool:
    """Save config to file. Returns True on success."""
    path = get_config_path(config_dir)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(config, indent=2), encoding="utf-8")
    except OSError as e:
        logger.error(f"Failed to write config {path}: {e}")
        return False
    return True


def update_config(config_dir: Path | str = ".", **changes) -> Config:
    """
    Validate changes, merge them into the saved config and write it back.

    Raises ValueError for an unknown setting, store or log level, or when
    the file can't be written.
    """
    for key in changes:
        if key not in DEFAULT_CONFIG:
            raise ValueError(f"Unknown setting {key!r}")

    if "store" in changes and changes["store"] not in STORE_CHOICES:
        raise ValueError(f"Unknown store {changes['store']!r}, expected one of {', '.join(STORE_CHOICES)}")

    if "log_level" in changes:
        changes["log_level"] = changes["log_level"].upper()
        if changes["log_level"] not in LOG_LEVELS:
            raise ValueError(f"Unknown log level {changes['log_level']!r}")

    config = load_config(config_dir)
    config.update(changes)
    if not save_config(config, config_dir):
        raise ValueError(f"Could not write {get_config_path(config_dir)}")
    return config
