"""
Helper utilities for bangserve.

Provides functions shared by the server and the command line:
- Settings loading with defaults
- Logging setup
- Static file directory lookup
"""

import copy
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Union

import toml
from loguru import logger

SETTINGS_ENV_VAR = "BANGSERVE_SETTINGS"

BUNDLED_STATIC_DIR = Path(__file__).parent.parent / "static"

# Levels understood by both loguru and uvicorn
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULT_SETTINGS: Dict[str, Any] = {
    "server": {
        "host": "127.0.0.1",
        "port": 8000,
        "static_dir": "",
    },
    "network": {
        "trusted_marker": "BVSD",
        "trusted_engine": "g",
        "default_engine": "ddg",
        "ssid_command": ["iwgetid", "-r"],
        "ssid_timeout": 1.0,
        "ssid": "",
    },
    "suggest": {
        "bang_suggester": "ddg",
    },
    "logging": {
        "level": "INFO",
    },
    "registry": {
        "builtin": True,
    },
    "engines": {},
}


def default_settings_path() -> Path:
    """Settings path from $BANGSERVE_SETTINGS, else ~/.config/bangserve/settings.toml."""
    env_path = os.environ.get(SETTINGS_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / ".config" / "bangserve" / "settings.toml"


def load_settings(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load settings from a TOML file.

    Args:
        path: Settings file; defaults to default_settings_path()

    Returns:
        Dictionary containing settings with defaults applied

    Example settings.toml:
        [network]
        trusted_marker = "CorpWifi"

        [suggest]
        bang_suggester = ""

        [engines.gh]
        name = "GitHub"
        search_url = "https://github.com/search?q={searchTerms}"
    """
    defaults = copy.deepcopy(DEFAULT_SETTINGS)
    settings_path = Path(path) if path else default_settings_path()

    if not settings_path.exists():
        logger.info(f"Settings file not found at {settings_path}, using defaults")
        return defaults

    try:
        loaded = toml.load(settings_path)
    except Exception as e:
        logger.warning(f"Could not load settings from {settings_path}: {e}")
        logger.warning("Using default settings")
        return defaults

    logger.info(f"Loaded settings from {settings_path}")
    return _deep_merge(defaults, loaded)


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary with defaults
        override: Dictionary with overrides

    Returns:
        Merged dictionary (override takes precedence)
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def configure_logging(level: str = "INFO") -> None:
    """Replace loguru's default sink with a stderr sink at the given level."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def resolve_static_dir(settings: Dict[str, Any]) -> Path:
    """Directory holding index.html and opensearch.xml."""
    configured = settings.get("server", {}).get("static_dir")
    if configured:
        return Path(configured).expanduser()
    return BUNDLED_STATIC_DIR
