# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.SUPABASE_URL)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Signing secret shipped for local development only
DEV_JWT_SECRET_KEY = "dev-secret-key-change-in-production"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings are accessed via the global `settings` instance.
    """

    # -------------------------------------------------------------------------
    # Supabase Configuration
    # -------------------------------------------------------------------------
    # These are required - app won't start without them

    SUPABASE_URL: str = Field(
        ...,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        description="Supabase service_role key (bypasses RLS)"
    )

    # -------------------------------------------------------------------------
    # Token Signing
    # -------------------------------------------------------------------------

    JWT_SECRET_KEY: str = Field(
        default=DEV_JWT_SECRET_KEY,
        min_length=16,
        description="Shared secret for signing access tokens"
    )

    JWT_ALGORITHM: str = Field(
        default="HS256",
        description="JWT signing algorithm"
    )

    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(
        default=60,
        ge=1,
        le=60 * 24 * 30,
        description="Lifetime of issued access tokens in minutes"
    )

    # -------------------------------------------------------------------------
    # Account Verification
    # -------------------------------------------------------------------------
    # "static" checks against the single configured account below,
    # "supabase" delegates to Supabase Auth (email/password sign-in).

    AUTH_BACKEND: Literal["static", "supabase"] = Field(
        default="static",
        description="Which account verifier checks credentials at /authenticate"
    )

    AUTH_EMAIL: str = Field(
        default="test@example.com",
        description="Email of the static account"
    )

    AUTH_PASSWORD: str = Field(
        default="password",
        description="Password of the static account"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, auto-reload)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=3000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    API_PREFIX: str = Field(
        default="/api",
        description="URL prefix all API routes are mounted under"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    @model_validator(mode="after")
    def check_signing_secret(self) -> "Settings":
        """
        Refuse to start outside development with the built-in signing secret.

        Anyone can read that secret here, so tokens signed with it can be forged.
        """
        if self.ENVIRONMENT != "development" and self.JWT_SECRET_KEY == DEV_JWT_SECRET_KEY:
            raise ValueError(
                f"JWT_SECRET_KEY must be set in {self.ENVIRONMENT}; "
                "the development default is not allowed"
            )
        return self

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://myapp.com" -> ["http://localhost:3000", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def api_prefix(self) -> str:
        """API_PREFIX without a trailing slash ("" when mounted at root)."""
        return self.API_PREFIX.rstrip("/")

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
