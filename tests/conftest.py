import os

# The module-level app in chat_gateway.main reads settings on import.
os.environ.setdefault("MODEL_ID", "anthropic.claude-3-haiku-20240307-v1:0")
os.environ.setdefault("GATEWAY_PROVIDER", "bedrock")

import pytest

from chat_gateway.core.settings import Settings, get_settings


@pytest.fixture
def settings() -> Settings:
    return Settings(model_id="test-model", _env_file=None)


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
