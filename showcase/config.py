"""
Configuration management for the showcase registry.
Uses pydantic-settings for environment-based configuration.
"""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API Settings
    PROJECT_NAME: str = "Model Showcase Registry"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    # Record store
    DATABASE_URL: str = "sqlite+aiosqlite:///./showcase.db"
    CREATE_TABLES: bool = True

    # Admin credential compared against x-api-key / Authorization
    ADMIN_TOKEN: str = ""

    # Public frontend used to build share links ({base}/view/{shortId})
    FRONTEND_BASE_URL: str = "http://localhost:5173"

    # Storage Backend Selection
    STORAGE_BACKEND: Literal["local", "s3", "azure"] = "local"
    UPLOAD_FOLDER: str = "3d-models"

    # Local Storage Settings
    LOCAL_STORAGE_PATH: str = "./storage"
    LOCAL_STORAGE_URL: str = "/storage"

    # S3/MinIO Settings
    S3_ENDPOINT_URL: str | None = None
    S3_ACCESS_KEY: str | None = None
    S3_SECRET_KEY: str | None = None
    S3_BUCKET_NAME: str = "showcase-models"
    S3_REGION: str = "us-east-1"
    S3_PUBLIC_URL: str | None = None

    # Azure Blob Settings
    AZURE_STORAGE_CONNECTION_STRING: str | None = None
    AZURE_CONTAINER_NAME: str = "showcase-models"

    # File Upload Limits
    MAX_UPLOAD_SIZE: int = 100 * 1024 * 1024  # 100MB

    # Short identifier issuance
    SHORT_ID_LENGTH: int = 10
    SHORT_ID_MAX_ATTEMPTS: int = 5

    # Logging
    LOG_LEVEL: str = "INFO"

    @field_validator("ADMIN_TOKEN", "FRONTEND_BASE_URL")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        return v.strip()

    @field_validator("SHORT_ID_LENGTH", "SHORT_ID_MAX_ATTEMPTS")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be at least 1")
        return v

    @property
    def public_base_url(self) -> str:
        """Frontend base URL without a trailing slash."""
        return self.FRONTEND_BASE_URL.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.
    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
