"""
Centralized configuration for the Unibro client.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings are namespaced (e.g., SUPABASE_*, STAFF_*).
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Unibro Client"
    app_version: str = "0.1.0"
    debug: bool = False

    # Backend REST API
    api_url: str = "http://localhost:5001"
    frontend_url: str = "http://localhost:5173"
    request_timeout: Optional[float] = None  # None disables the timeout

    # Supabase object storage
    supabase_url: str = ""
    supabase_anon_key: str = ""
    storage_bucket: str = "unibro-files"

    # Session state
    storage_path: Optional[str] = None  # None keeps session state in memory
    user_cache_ttl: float = 1.0  # seconds
    session_poll_interval: float = 2.0  # seconds

    # Upload limits
    max_upload_size_mb: int = 50
    max_staff_image_size_mb: int = 5

    # Staff directory
    staff_page_size: int = 2


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
