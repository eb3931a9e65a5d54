# src/datatypes/managers/config_manager.py
import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from datatypes.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

# Used when settings.json is missing or unreadable.
BUILTIN_DEFAULTS: Dict[str, Any] = {
    "debug": {"level": "WARNING"},
    "html": {"truncation_indicator": "...", "encoding_fallback": "latin-1"},
    "cli": {"show_progress": True},
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merges override into base recursively, returning base."""
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def _read_settings_file(path: Path) -> Optional[Dict[str, Any]]:
    """Reads one settings file. Returns None when it is missing or broken."""
    if not path.exists():
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Failed to load %s: %s", path, e)
        return None
    if not isinstance(data, dict):
        logger.warning("Ignoring %s: top-level value is not an object.", path)
        return None
    return data


class ConfigManager:
    """
    A singleton class to manage the library's configuration.
    It loads the packaged settings.json, overlays the user's settings file
    and allows for in-memory modifications.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        """Loads the configuration from the settings files."""
        self._config: Dict[str, Any] = {}
        self.reset()
        logger.debug("ConfigManager initialized.")

    def get_all(self) -> Dict[str, Any]:
        """Returns the entire current configuration dictionary."""
        return self._config

    def get_nested(self, key_path: str, default: Optional[Any] = None) -> Any:
        """
        Safely retrieves a nested value from the configuration.
        e.g., 'html.truncation_indicator'.
        """
        keys = key_path.split('.')
        value = self._config
        for key in keys:
            if isinstance(value, dict):
                value = value.get(key)
            else:
                return default
        return value if value is not None else default

    def set_nested(self, key_path: str, value: Any) -> bool:
        """
        Sets a nested value in the in-memory configuration.
        e.g., 'debug.level', 'INFO'
        """
        keys = key_path.split('.')
        d = self._config
        # Navigate to the second-to-last dictionary
        for key in keys[:-1]:
            d = d.setdefault(key, {})
            if not isinstance(d, dict):
                logger.error("Cannot set value: '%s' is not a dictionary.", key)
                return False

        original_value = d.get(keys[-1])
        if original_value is not None:
            try:
                if isinstance(original_value, bool) and isinstance(value, str):
                    # bool("false") is True, so booleans get parsed explicitly.
                    value = value.strip().lower() in {"1", "true", "yes", "on"}
                else:
                    value = type(original_value)(value)
            except (ValueError, TypeError):
                logger.warning(
                    "Could not cast new value for '%s' to type %s. Storing as string.",
                    key_path, type(original_value).__name__
                )

        d[keys[-1]] = value
        logger.info("Configuration updated: %s = %s", key_path, value)
        return True

    def reset(self):
        """Resets the in-memory configuration from the settings files."""
        config = copy.deepcopy(BUILTIN_DEFAULTS)

        packaged = _read_settings_file(PathUtils.get_default_settings_file())
        if packaged is None:
            logger.warning(
                "settings.json not found or unreadable at %s. Using built-in defaults.",
                PathUtils.get_default_settings_file()
            )
        else:
            _deep_merge(config, packaged)

        user = _read_settings_file(PathUtils.get_user_settings_file())
        if user is not None:
            _deep_merge(config, user)
            logger.debug("Merged user settings from %s.", PathUtils.get_user_settings_file())

        self._config = config
        logger.debug("Configuration has been (re)loaded.")


# The global singleton instance that the entire library uses.
config_manager = ConfigManager()
