# tests/conftest.py
import pytest

from datatypes.managers.config_manager import config_manager
from datatypes.utils.path_utils import PathUtils


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """
    Keeps every test away from the real ~/.datatypes/settings.json and undoes
    any in-memory configuration changes a test makes.
    """
    user_settings = tmp_path / "user_settings.json"
    monkeypatch.setattr(PathUtils, "get_user_settings_file", lambda: user_settings)
    config_manager.reset()
    yield user_settings
    config_manager.reset()
