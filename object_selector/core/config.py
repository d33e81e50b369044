"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (SECRET_KEY) are validated at load time.
"""

from functools import lru_cache

from pydantic import BaseModel, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PostTypeConfig(BaseModel):
    """Custom post type registered from configuration (CUSTOM_POST_TYPES as JSON list)."""

    name: str
    label: str
    singular_label: str | None = None
    hierarchical: bool = False
    # Plural capability suffix, e.g. "books" -> read_private_books. Defaults to "posts".
    capability_type: str = "posts"


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except SECRET_KEY, which signs
    both access tokens and selector nonces.
    """

    # App
    app_name: str = "object-selector"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database: sqlite+aiosqlite for local use, postgresql+asyncpg in production
    database_url: str = "sqlite+aiosqlite:///./object_selector.db"
    database_echo: bool = False
    db_pool_size: int | None = None
    db_max_overflow: int | None = None

    # Security
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 480  # 8 hours
    nonce_lifetime_seconds: int = 86_400  # one day, valid across two ticks

    # Queries
    default_posts_per_page: int = 10
    query_rate_limit: str = "300/minute"
    custom_post_types: list[PostTypeConfig] = []

    # Media
    uploads_base_url: str = "http://localhost:8000/uploads"

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Request / middleware
    request_id_header: str = "X-Request-ID"

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Validate required secrets and numeric ranges."""
        if not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required. Generate with: openssl rand -hex 32."
            )
        if self.default_posts_per_page < 1:
            raise ValueError(
                f"default_posts_per_page must be positive, got: {self.default_posts_per_page}"
            )
        if self.nonce_lifetime_seconds < 2:
            raise ValueError(
                f"nonce_lifetime_seconds must be at least 2, got: {self.nonce_lifetime_seconds}"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.
    """
    return Settings()
