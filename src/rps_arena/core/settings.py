"""Application settings and configuration.

This module defines all configuration options for the RPS Arena service.
Settings are loaded from environment variables (or a `.env` file) with
sensible defaults. The signing secret and the database URL have no default:
the process refuses to start without them.
"""

import logging

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application metadata
    app_name: str = Field(default="RPS Arena", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Security and authentication
    secret_key: str = Field(alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(default=60, alias="ACCESS_TOKEN_EXPIRE_MINUTES")

    # One-time password issuance
    otp_ttl_seconds: int = Field(default=120, alias="OTP_TTL_SECONDS")
    otp_bcrypt_rounds: int = Field(default=10, ge=4, le=31, alias="OTP_BCRYPT_ROUNDS")

    # Database configuration
    database_url: str = Field(alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")
    auto_create_tables: bool = Field(default=True, alias="AUTO_CREATE_TABLES")

    # Game history
    history_limit: int = Field(default=10, gt=0, alias="HISTORY_LIMIT")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for tooling such as Alembic."""
        url = self.database_url
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        return url


def load_settings(**overrides: object) -> Settings:
    """Build the settings object, exiting the process when it is unusable.

    Args:
        **overrides: Keyword arguments forwarded to `Settings`, e.g. `_env_file=None`.

    Raises:
        SystemExit: If a required variable is missing or a value is invalid.
    """
    try:
        return Settings(**overrides)  # type: ignore[arg-type]
    except ValidationError as err:
        for error in err.errors():
            name = ".".join(str(part) for part in error["loc"])
            logger.critical("Configuration error for %s: %s", name, error["msg"])
        raise SystemExit(1) from err


settings = load_settings()
