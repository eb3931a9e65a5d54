import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class PathUtils:
    """
    A central utility for reliably retrieving important package and user paths.
    """

    # --- Package specific paths

    @staticmethod
    def get_package_root() -> Path:
        """Returns the absolute path of the installed 'datatypes' package."""
        return Path(__file__).resolve().parent.parent

    @staticmethod
    def get_default_settings_file() -> Path:
        return PathUtils.get_package_root() / "settings.json"

    # --- User specific paths ---

    @staticmethod
    def get_user_config_dir() -> Path:
        """
        Returns the path to the user's .datatypes config directory.
        (e.g., ~/.datatypes/)
        """
        return Path.home() / ".datatypes"

    @staticmethod
    def get_user_settings_file() -> Path:
        """Returns the path to the optional user override of settings.json."""
        return PathUtils.get_user_config_dir() / "settings.json"
