"""
Configuration for the RSS panel.

Settings come from config.json next to this module, with environment
variables taking precedence.
"""

import json
import logging
import os
from typing import Any, Dict, NamedTuple, Optional

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
DEFAULT_USER_AGENT = "RssPanel/1.0"
DEFAULT_LANGUAGE = "en"
DEFAULT_STORAGE_PATH = os.path.join("~", ".rsspanel", "storage.json")


class Settings(NamedTuple):
    """Resolved runtime settings."""

    timeout: float
    user_agent: str
    language: str
    storage_path: str
    max_workers: Optional[int]


def load_config(config_filename: str = "config.json") -> Dict[str, Any]:
    """Loads configuration from a JSON file."""
    base_dir = os.path.dirname(os.path.abspath(__file__))
    config_path = os.path.join(base_dir, config_filename)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        logger.warning("Config file not found at %s. Using defaults.", config_path)
        return {}
    except json.JSONDecodeError as e:
        logger.error("Invalid config file %s: %s. Using defaults.", config_path, e)
        return {}


def load_settings(config: Optional[Dict[str, Any]] = None) -> Settings:
    """Merges the config file with environment overrides."""
    if config is None:
        config = load_config()

    timeout = os.environ.get("RSSPANEL_TIMEOUT", config.get("timeout", DEFAULT_TIMEOUT))
    try:
        timeout = float(timeout)
    except (TypeError, ValueError):
        logger.warning("Invalid timeout %r. Using %s.", timeout, DEFAULT_TIMEOUT)
        timeout = DEFAULT_TIMEOUT

    max_workers = config.get("max_workers")
    storage_path = os.environ.get(
        "RSSPANEL_STORAGE", config.get("storage_path", DEFAULT_STORAGE_PATH)
    )

    return Settings(
        timeout=timeout,
        user_agent=os.environ.get(
            "RSSPANEL_USER_AGENT", config.get("user_agent", DEFAULT_USER_AGENT)
        ),
        language=os.environ.get(
            "RSSPANEL_LANGUAGE", config.get("language", DEFAULT_LANGUAGE)
        ),
        storage_path=os.path.expanduser(storage_path),
        max_workers=int(max_workers) if max_workers else None,
    )
