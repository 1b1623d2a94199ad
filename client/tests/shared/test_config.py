"""Tests for shared/config.py."""

import pytest
from unittest.mock import patch
import os

from shared.config import Settings, get_settings


class TestSettings:
    def test_default_values(self):
        """Settings should have sensible defaults."""
        settings = Settings(_env_file=None)
        assert settings.app_name == "Unibro Client"
        assert settings.debug is False
        assert settings.app_version == "0.1.0"
        assert settings.api_url == "http://localhost:5001"
        assert settings.frontend_url == "http://localhost:5173"
        assert settings.storage_bucket == "unibro-files"

    def test_session_defaults(self):
        """Session cache and polling should default to the documented windows."""
        settings = Settings(_env_file=None)
        assert settings.user_cache_ttl == 1.0
        assert settings.session_poll_interval == 2.0
        assert settings.storage_path is None

    def test_no_request_timeout_by_default(self):
        """Requests should not time out unless configured."""
        settings = Settings(_env_file=None)
        assert settings.request_timeout is None

    def test_upload_limits(self):
        settings = Settings(_env_file=None)
        assert settings.max_upload_size_mb == 50
        assert settings.max_staff_image_size_mb == 5
        assert settings.staff_page_size == 2

    def test_loads_from_env(self):
        """Settings should load from environment variables."""
        with patch.dict(os.environ, {"DEBUG": "true", "API_URL": "https://api.example.com"}):
            settings = Settings(_env_file=None)
            assert settings.debug is True
            assert settings.api_url == "https://api.example.com"

    def test_loads_timeout_from_env(self):
        with patch.dict(os.environ, {"REQUEST_TIMEOUT": "7.5"}):
            settings = Settings(_env_file=None)
            assert settings.request_timeout == 7.5

    def test_loads_supabase_config_from_env(self):
        """Settings should load Supabase configuration from environment variables."""
        with patch.dict(os.environ, {
            "SUPABASE_URL": "https://test.supabase.co",
            "SUPABASE_ANON_KEY": "test-anon-key",
            "STORAGE_BUCKET": "other-bucket",
        }):
            settings = Settings(_env_file=None)
            assert settings.supabase_url == "https://test.supabase.co"
            assert settings.supabase_anon_key == "test-anon-key"
            assert settings.storage_bucket == "other-bucket"


class TestGetSettings:
    def test_get_settings_returns_settings_instance(self):
        """get_settings should return a Settings instance."""
        get_settings.cache_clear()
        settings = get_settings()
        assert isinstance(settings, Settings)

    def test_get_settings_caches(self):
        """get_settings should return cached instance."""
        get_settings.cache_clear()
        settings1 = get_settings()
        settings2 = get_settings()
        assert settings1 is settings2
