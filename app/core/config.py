"""Application configuration loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

# Allowed URL schemes for DATABASE_URL (module-level so validators can use it).
VALID_DATABASE_URL_PREFIXES = (
    "postgresql://",
    "postgresql+psycopg2://",
    "postgres://",
    "postgres+psycopg2://",
)

# Fallback signing secret. Known weak; rejected in prod, warned about in dev.
DEFAULT_JWT_SECRET = "change-me-in-production"

ROLE_ADMIN = "admin"
ROLE_VENDOR = "vendedor"
ROLE_USER = "usuario"
ROLES = (ROLE_ADMIN, ROLE_VENDOR, ROLE_USER)


class Settings(BaseSettings):
    """Validated application settings from env and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    APP_ENV: Literal["dev", "prod"] = "dev"
    DEBUG: bool = False
    API_PREFIX: str = "/api"
    VERSION: str = "1.0.0"

    # Server identity, reported by the root route and the admin dashboard
    PORT: int = 3000
    SERVER_IP: str = "localhost"

    # Postgres: DATABASE_URL wins; otherwise assembled from the DB_* parts
    DATABASE_URL: str | None = None
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: SecretStr = SecretStr("")
    DB_NAME: str = "feria_puno_db"
    DB_POOL_SIZE: int = 10

    # JWT authentication
    JWT_SECRET: SecretStr = SecretStr(DEFAULT_JWT_SECRET)
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 60

    # Admin-delegated scoped tokens, in whole hours
    DELEGATED_TOKEN_DEFAULT_HOURS: int = 8
    DELEGATED_TOKEN_MAX_HOURS: int = 168
    RESTRICTED_TOKEN_DEFAULT_HOURS: int = 2

    # Pass exception messages through on 500 responses. None means "only in dev".
    EXPOSE_ERROR_DETAILS: bool | None = None

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        if not any(v.startswith(prefix) for prefix in VALID_DATABASE_URL_PREFIXES):
            raise ValueError(
                "DATABASE_URL must be a PostgreSQL URL (e.g. postgresql:// or postgresql+psycopg2://)"
            )
        v = v.strip()
        # Some hosts hand out postgres:// which SQLAlchemy no longer accepts
        if v.startswith(("postgres://", "postgres+")):
            v = "postgresql" + v[len("postgres"):]
        return v

    @field_validator("DB_POOL_SIZE")
    @classmethod
    def validate_db_pool_size(cls, v: int) -> int:
        if v < 1 or v > 100:
            raise ValueError("DB_POOL_SIZE must be between 1 and 100")
        return v

    @field_validator("JWT_SECRET")
    @classmethod
    def validate_jwt_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value() or not v.get_secret_value().strip():
            raise ValueError("JWT_SECRET must be set and non-empty")
        return v

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("JWT_ALGORITHM must be set and non-empty")
        return v.strip()

    @field_validator("JWT_EXPIRE_MINUTES")
    @classmethod
    def validate_jwt_expire_minutes(cls, v: int) -> int:
        if v < 1 or v > 10080:
            raise ValueError(
                "JWT_EXPIRE_MINUTES must be between 1 and 10080 (1 min to 7 days)"
            )
        return v

    @field_validator(
        "DELEGATED_TOKEN_DEFAULT_HOURS",
        "DELEGATED_TOKEN_MAX_HOURS",
        "RESTRICTED_TOKEN_DEFAULT_HOURS",
    )
    @classmethod
    def validate_token_hours(cls, v: int) -> int:
        if v < 1 or v > 8760:
            raise ValueError("Token durations must be between 1 and 8760 hours")
        return v

    @model_validator(mode="after")
    def check_production_safety(self) -> "Settings":
        if self.DELEGATED_TOKEN_DEFAULT_HOURS > self.DELEGATED_TOKEN_MAX_HOURS:
            raise ValueError(
                "DELEGATED_TOKEN_DEFAULT_HOURS must not exceed DELEGATED_TOKEN_MAX_HOURS"
            )
        if self.APP_ENV == "prod" and self.uses_default_jwt_secret:
            raise ValueError("JWT_SECRET must be changed from its default in prod")
        if self.EXPOSE_ERROR_DETAILS is None:
            self.EXPOSE_ERROR_DETAILS = self.APP_ENV == "dev"
        return self

    @property
    def uses_default_jwt_secret(self) -> bool:
        return self.JWT_SECRET.get_secret_value() == DEFAULT_JWT_SECRET

    @property
    def database_url(self) -> str:
        """DATABASE_URL if given, otherwise a psycopg2 URL built from the DB_* settings."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return URL.create(
            "postgresql+psycopg2",
            username=self.DB_USER,
            password=self.DB_PASSWORD.get_secret_value() or None,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_NAME,
        ).render_as_string(hide_password=False)


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()


settings = get_settings()
