# =============================================================================
# app/config.py - Marketplace Settings
# =============================================================================
# One Settings object, read from the process environment and then from a
# .env file next to the working directory (see .env.example).
#
# Groups:
#   Supabase    -> document store
#   Auth        -> bearer token verification
#   Braintree   -> payment gateway credentials
#   Storage     -> where uploaded images go, upload limits, CDN host
#   Server      -> environment, logging, CORS
#
# Usage:
#   from app.config import settings
#   settings.BRAINTREE_ENVIRONMENT  # "sandbox"
# =============================================================================

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Marketplace configuration.

    Only the Supabase credentials and the JWT secret are required; the
    rest have development defaults.
    """

    # -------------------------------------------------------------------------
    # Supabase (document store)
    # -------------------------------------------------------------------------

    SUPABASE_URL: str = Field(
        ...,
        description="Project URL of the Supabase instance holding brands, cars, users and orders"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        description="service_role key; the API writes on behalf of admins, so RLS is bypassed"
    )

    # -------------------------------------------------------------------------
    # Auth
    # -------------------------------------------------------------------------

    JWT_SECRET: str = Field(
        ...,
        min_length=8,
        description="Shared secret used to verify bearer tokens"
    )

    JWT_ALGORITHM: str = Field(
        default="HS256",
        description="Signing algorithm expected on bearer tokens"
    )

    # -------------------------------------------------------------------------
    # Braintree
    # -------------------------------------------------------------------------

    BRAINTREE_ENVIRONMENT: Literal["sandbox", "production"] = Field(
        default="sandbox",
        description="Braintree environment to talk to"
    )

    BRAINTREE_MERCHANT_ID: str = Field(default="", description="Braintree merchant id")
    BRAINTREE_PUBLIC_KEY: str = Field(default="", description="Braintree public key")
    BRAINTREE_PRIVATE_KEY: str = Field(default="", description="Braintree private key")

    # -------------------------------------------------------------------------
    # Blob Storage
    # -------------------------------------------------------------------------

    STORAGE_BACKEND: Literal["local", "drive"] = Field(
        default="local",
        description="Where uploaded images are kept: local disk or Google Drive"
    )

    STORAGE_ROOT: str = Field(
        default="storage",
        description="Root directory for locally stored uploads (served at /storage)"
    )

    DRIVE_FOLDER_ID: str = Field(
        default="",
        description="Google Drive folder that receives uploads when STORAGE_BACKEND=drive"
    )

    GOOGLE_CREDENTIALS_FILE: str = Field(
        default="cred.json",
        description="Service account key file for the Drive backend"
    )

    CDN_HOST: str = Field(
        default="lh3.googleusercontent.com",
        description="Host used when rewriting Drive file ids into public image URLs"
    )

    MAX_UPLOAD_SIZE_MB: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Maximum image upload size in MB"
    )

    ALLOWED_EXTENSIONS: str = Field(
        default=".png,.jpg,.jpeg,.webp",
        description="Allowed image extensions (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Server
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment stage, reported by /api/health"
    )

    DEBUG: bool = Field(
        default=False,
        description="Log at DEBUG instead of INFO"
    )

    API_HOST: str = Field(default="0.0.0.0", description="Interface uvicorn binds to")

    API_PORT: int = Field(
        default=5000,
        ge=1,
        le=65535,
        description="Port uvicorn listens on"
    )

    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Comma-separated origins of the storefront / admin UIs"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def allowed_extensions_list(self) -> list[str]:
        """Lowercased extensions with their leading dot: ".png, .JPG" -> [".png", ".jpg"]."""
        return [ext.strip().lower() for ext in self.ALLOWED_EXTENSIONS.split(",") if ext.strip()]

    @property
    def max_upload_size_bytes(self) -> int:
        return self.MAX_UPLOAD_SIZE_MB * 1024 * 1024

    @property
    def storage_root_path(self) -> Path:
        return Path(self.STORAGE_ROOT)

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """Build Settings once per process."""
    return Settings()


settings = get_settings()
