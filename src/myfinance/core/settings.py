"""
Application settings.

Values are read from environment variables (``DATABASE_URL``, ``JWT_SECRET``,
``PORT`` ...) and an optional ``.env`` file.  ``DATABASE_URL`` has no
default: the process refuses to start without it.

Order of precedence (highest → lowest):
    1. Keyword arguments (tests, ``create_app(settings=...)``)
    2. Environment variables
    3. ``.env`` file
    4. Defaults below
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from myfinance.core.errors import ConfigError
from myfinance.core.logging import get_logger

# Only ever used when ENVIRONMENT is development/test.
INSECURE_DEV_SECRET = "your-secret-key"

_DEV_ENVIRONMENTS = frozenset({"development", "dev", "test", "local"})


class Settings(BaseSettings):
    """myfinance configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Server ───────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=3333, description="Bind port")
    environment: str = Field(default="production", description="development | test | production")
    debug: bool = Field(default=False, description="Expose exception detail in 500 responses")

    # ── Observability ────────────────────────────────────────────────────
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="console", description="console | json")

    # ── API ──────────────────────────────────────────────────────────────
    api_title: str = Field(default="myfinance API", description="OpenAPI title")
    api_version: str = Field(default="1.0.0", description="OpenAPI version string")
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")
    request_timeout_seconds: float = Field(default=30.0, gt=0, description="Per-request deadline")
    registration_requires_auth: bool = Field(
        default=False,
        description="Put POST /auth/register behind the bearer-token guard",
    )

    # ── Database ─────────────────────────────────────────────────────────
    database_url: str = Field(description="SQLAlchemy-style connection URL")
    db_pool_size: int = Field(default=5, ge=1)
    db_pool_timeout: float = Field(default=10.0, gt=0, description="Seconds to wait for a pooled connection")
    auto_create_schema: bool = Field(default=True, description="Create missing tables on startup")

    # ── Auth ─────────────────────────────────────────────────────────────
    jwt_secret: str | None = Field(default=None, description="HMAC key for signing access tokens")
    jwt_algorithm: str = Field(default="HS256")
    jwt_expires_days: int = Field(default=7, ge=1)
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)

    @property
    def is_development(self) -> bool:
        return self.environment.strip().lower() in _DEV_ENVIRONMENTS

    def resolve_jwt_secret(self) -> str:
        """Return the signing key, or fail outside development.

        Raises:
            ConfigError: ``JWT_SECRET`` is unset and the environment is not a
                development one.
        """
        if self.jwt_secret:
            return self.jwt_secret
        if self.is_development:
            get_logger(__name__).warning(
                "jwt_secret_not_set",
                detail="using insecure development secret; set JWT_SECRET before deploying",
                environment=self.environment,
            )
            return INSECURE_DEV_SECRET
        raise ConfigError(
            f"JWT_SECRET must be set when ENVIRONMENT={self.environment!r}"
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached settings, loaded once per process."""
    return Settings()
