"""Wowza token service configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="WOWZA_TOKEN_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Core
    port: int = 8080
    debug: bool = False

    # SecureToken (must match the Wowza application's playback security settings)
    prefix: str = "wowzatoken"
    shared_secret: str | None = None
    hash_algorithm: str = "SHA256"  # SHA256, SHA384 or SHA512

    # Bearer key required on /api/tokens/sign
    api_key: str | None = None

    # Honour X-Forwarded-For; enable only behind a trusted reverse proxy
    trust_proxy_headers: bool = False

    # Rate limiting
    rate_limit_storage: str = "memory://"
    rate_limit_sign: str = "60/minute"
    rate_limit_verify: str = "120/minute"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
