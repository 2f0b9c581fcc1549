import pytest
from fastapi.testclient import TestClient

from wowza_token.config import get_settings

SECRET = "MyStreamKey123"
API_KEY = "test-api-key"


@pytest.fixture
def settings_env(monkeypatch):
    monkeypatch.setenv("WOWZA_TOKEN_SHARED_SECRET", SECRET)
    monkeypatch.setenv("WOWZA_TOKEN_PREFIX", "wowza_")
    monkeypatch.setenv("WOWZA_TOKEN_API_KEY", API_KEY)
    monkeypatch.delenv("WOWZA_TOKEN_TRUST_PROXY_HEADERS", raising=False)
    monkeypatch.delenv("WOWZA_TOKEN_HASH_ALGORITHM", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def client(settings_env):
    from wowza_token.main import app
    return TestClient(app)
