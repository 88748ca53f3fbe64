import os

import pytest

from model_matchers.db.adapters import clear_custom_adapters
from model_matchers.utils.settings import refresh_settings_cache


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch):
    """Start each test from default settings."""
    for env_name in list(os.environ):
        if env_name.startswith("MODEL_MATCHERS_"):
            monkeypatch.delenv(env_name, raising=False)
    refresh_settings_cache()
    yield
    refresh_settings_cache()


@pytest.fixture(autouse=True)
def reset_adapters():
    yield
    clear_custom_adapters()
