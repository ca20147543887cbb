"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. SECRET_KEY is validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except secret_key, which is
    validated in validate_required.
    """

    # App
    app_name: str = "spendiq"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str | None = None
    api_prefix: str = "/api/v1"

    # Security
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7  # 7 days
    auth_cookie_name: str = "auth_token"

    # CORS
    allowed_origins: str = "http://localhost:3000"

    # Rate limiting (slowapi); off by default outside production deployments.
    rate_limit_enabled: bool = False

    # Redis response cache. URL carries host, port, db and optional password.
    redis_enabled: bool = True
    redis_url: str = "redis://localhost:6379/0"
    cache_max_retries: int = 3
    cache_reconnect_base_delay: float = 1.0
    cache_reconnect_max_delay: float = 30.0
    cache_socket_timeout: float = 5.0
    cache_default_ttl: int = 600

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Validate required env and cache tuning values."""
        if not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required. Generate with: openssl rand -hex 32."
            )
        if self.cache_max_retries < 0:
            raise ValueError("CACHE_MAX_RETRIES must be >= 0")
        if self.cache_reconnect_base_delay <= 0:
            raise ValueError("CACHE_RECONNECT_BASE_DELAY must be > 0")
        if self.cache_reconnect_max_delay < self.cache_reconnect_base_delay:
            raise ValueError(
                "CACHE_RECONNECT_MAX_DELAY must be >= CACHE_RECONNECT_BASE_DELAY"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
