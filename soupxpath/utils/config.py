"""
Configuration for soup-xpath.
Settings are read from a JSON file laid over DEFAULT_CONFIG and looked up by dotted keys.
"""

import copy
import json
import logging
import os
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "parser": {
        "features": "html5lib",
        "fallback_features": "html.parser"
    },
    "text": {
        "collapse_whitespace": True,
        "excluded_elements": ["script", "style"]
    },
    "network": {
        "timeout": 30,
        "retries": 3,
        "backoff_factor": 0.5,
        "user_agent": "soup-xpath/0.1"
    },
    "logging": {
        "console_level": "INFO",
        "file_level": "DEBUG"
    }
}

DEFAULT_CONFIG_PATH = os.path.join("~", ".soupxpath", "config.json")


def _merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Merge overrides into base, section by section."""
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Config:
    """
    Read-only settings of the navigator, parser and loader.

    Values stored in the file replace the defaults key by key; an unreadable
    file or one that does not hold a JSON object leaves the defaults in place.
    """

    def __init__(self, config_path: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None):
        """
        Load the configuration.

        Args:
            config_path: Path to the JSON config file, ~/.soupxpath/config.json if None
            overrides: Settings applied on top of the file, as nested sections
        """
        self.config_path = os.path.expanduser(config_path or DEFAULT_CONFIG_PATH)
        self.config = _merge(DEFAULT_CONFIG, self._read())
        if overrides:
            self.config = _merge(self.config, overrides)

    def _read(self) -> Dict[str, Any]:
        if not os.path.exists(self.config_path):
            logger.debug(f"Configuration file not found at {self.config_path}, using defaults")
            return {}

        try:
            with open(self.config_path, 'r') as f:
                stored = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Error loading configuration: {e}")
            return {}

        if not isinstance(stored, dict):
            logger.error(f"Ignoring configuration in {self.config_path}: not a JSON object")
            return {}

        logger.debug(f"Configuration loaded from {self.config_path}")
        return stored

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: Configuration key, nested with dots, e.g. 'network.timeout'
            default: Value returned when the key is missing

        Returns:
            Any: Configuration value or default
        """
        value: Any = self.config
        for part in key.split('.'):
            if not isinstance(value, dict) or part not in value:
                return default
            value = value[part]
        return value
