from wowza_token.config import Settings
from wowza_token.signing.algorithms import HashAlgorithm, get_algorithm


def test_settings_defaults(monkeypatch):
    for name in ("PREFIX", "SHARED_SECRET", "HASH_ALGORITHM"):
        monkeypatch.delenv(f"WOWZA_TOKEN_{name}", raising=False)
    settings = Settings(_env_file=None)
    assert settings.prefix == "wowzatoken"
    assert settings.shared_secret is None
    assert get_algorithm(settings.hash_algorithm) is HashAlgorithm.SHA256


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("WOWZA_TOKEN_PREFIX", "secure_")
    monkeypatch.setenv("WOWZA_TOKEN_SHARED_SECRET", "abc123")
    monkeypatch.setenv("WOWZA_TOKEN_HASH_ALGORITHM", "sha384")
    settings = Settings(_env_file=None)
    assert settings.prefix == "secure_"
    assert settings.shared_secret == "abc123"
    assert get_algorithm(settings.hash_algorithm) is HashAlgorithm.SHA384
