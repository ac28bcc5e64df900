"""
Application settings.

Centralized configuration using Pydantic Settings with environment variable loading.
Every value has a development default; production deployments override them through
the environment or a local .env file.
"""

from functools import lru_cache
from typing import List, Literal, Optional
from urllib.parse import quote_plus

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Application
    # -------------------------------------------------------------------------
    app_name: str = Field(default="Store Locator API", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment environment",
    )
    debug: bool = Field(default=False, description="Expose error details in responses")

    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8080, description="Bind port")
    reload: bool = Field(default=False, description="Auto-reload on code changes")

    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    # -------------------------------------------------------------------------
    # Database (MySQL)
    # -------------------------------------------------------------------------
    DATABASE_URL: Optional[str] = Field(
        default=None,
        description="Full SQLAlchemy URL; overrides the DB_* parts when set",
    )
    DB_USER: str = Field(default="root")
    DB_PASSWORD: str = Field(default="")
    DB_HOST: str = Field(default="localhost")
    DB_PORT: int = Field(default=3306)
    DB_DATABASE: str = Field(default="storelocator")

    DB_POOL_SIZE: int = Field(default=10, ge=1, description="Pooled connections kept open")
    DB_MAX_OVERFLOW: int = Field(default=0, ge=0, description="Extra connections beyond the pool")
    DB_POOL_TIMEOUT: float = Field(
        default=10.0,
        gt=0,
        description="Seconds a request waits for a free connection before 503",
    )
    DB_POOL_RECYCLE: int = Field(default=1800, description="Recycle connections after N seconds")
    DB_CREATE_TABLES: bool = Field(default=False, description="Create missing tables at startup")

    # -------------------------------------------------------------------------
    # CORS
    # -------------------------------------------------------------------------
    CORS_ORIGINS: str = Field(default="*", description="Comma-separated allowed origins")
    cors_allow_credentials: bool = Field(default=False)

    # -------------------------------------------------------------------------
    # OTP / Ratings
    # -------------------------------------------------------------------------
    OTP_EXPIRY_MINUTES: int = Field(default=5, ge=1, description="OTP validity window")
    RATING_GUARD_SCOPE: Literal["global", "store"] = Field(
        default="global",
        description="Refuse new OTPs to emails that already rated any store (global) "
                    "or the requested store only (store)",
    )

    # -------------------------------------------------------------------------
    # Mail (SMTP)
    # -------------------------------------------------------------------------
    SMTP_HOST: str = Field(default="localhost")
    SMTP_PORT: int = Field(default=587)
    SMTP_USER: Optional[str] = Field(default=None)
    SMTP_PASSWORD: Optional[str] = Field(default=None)
    SMTP_USE_TLS: bool = Field(default=True)
    SMTP_TIMEOUT: float = Field(default=10.0)
    MAIL_FROM: str = Field(default="no-reply@storelocator.local")
    MAIL_SUBJECT: str = Field(default="Your OTP Code")

    @model_validator(mode="after")
    def validate_production(self) -> "Settings":
        """Refuse debug mode in production."""
        if self.ENVIRONMENT == "production" and self.debug:
            raise ValueError("debug must be False when ENVIRONMENT is production")
        return self

    @property
    def database_url(self) -> str:
        """SQLAlchemy URL assembled from the DB_* parts unless DATABASE_URL is set."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"mysql+pymysql://{quote_plus(self.DB_USER)}:{quote_plus(self.DB_PASSWORD)}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_DATABASE}"
        )

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def log_format(self) -> str:
        return "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()


settings = get_settings()
