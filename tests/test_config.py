"""Tests for configuration and item name validation."""
from unittest.mock import patch

import pytest
from fastapi import HTTPException

from pantry_tracker.core.config import Config, _env_flag
from pantry_tracker.core.validation import validate_item_name


class TestConfigValidate:
    def test_production_requires_supabase_url(self):
        with patch.object(Config, "ENVIRONMENT", "production"), \
                patch.object(Config, "SUPABASE_URL", ""), \
                patch.object(Config, "SUPABASE_SERVICE_KEY", "key"):
            with pytest.raises(ValueError, match="SUPABASE_URL"):
                Config.validate()

    def test_production_requires_service_key(self):
        with patch.object(Config, "ENVIRONMENT", "production"), \
                patch.object(Config, "SUPABASE_URL", "https://example.supabase.co"), \
                patch.object(Config, "SUPABASE_SERVICE_KEY", ""):
            with pytest.raises(ValueError, match="SUPABASE_SERVICE_KEY"):
                Config.validate()

    def test_development_needs_nothing(self):
        with patch.object(Config, "ENVIRONMENT", "development"), \
                patch.object(Config, "SUPABASE_URL", ""):
            Config.validate()

    def test_complete_production_config(self):
        with patch.object(Config, "ENVIRONMENT", "production"), \
                patch.object(Config, "SUPABASE_URL", "https://example.supabase.co"), \
                patch.object(Config, "SUPABASE_SERVICE_KEY", "key"):
            Config.validate()


class TestAllowedOrigins:
    def test_parses_and_deduplicates(self, monkeypatch):
        monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "http://a.test, http://b.test,http://a.test")

        assert Config.allowed_origins(["http://c.test", "http://b.test"]) == [
            "http://a.test", "http://b.test", "http://c.test",
        ]


class TestEnvFlag:
    @pytest.mark.parametrize("raw", ["1", "true", "YES", "on"])
    def test_truthy(self, monkeypatch, raw):
        monkeypatch.setenv("PANTRY_TEST_FLAG", raw)
        assert _env_flag("PANTRY_TEST_FLAG", False) is True

    def test_falsy(self, monkeypatch):
        monkeypatch.setenv("PANTRY_TEST_FLAG", "false")
        assert _env_flag("PANTRY_TEST_FLAG", True) is False

    def test_unset_uses_default(self, monkeypatch):
        monkeypatch.delenv("PANTRY_TEST_FLAG", raising=False)
        assert _env_flag("PANTRY_TEST_FLAG", True) is True


class TestValidateItemName:
    def test_trims(self):
        assert validate_item_name("  eggs \n") == "eggs"

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_rejects_blank(self, name):
        with pytest.raises(HTTPException) as exc_info:
            validate_item_name(name)
        assert exc_info.value.status_code == 400

    def test_rejects_too_long(self):
        with pytest.raises(HTTPException) as exc_info:
            validate_item_name("x" * 11, max_length=10)
        assert "too long" in exc_info.value.detail

    def test_rejects_control_characters(self):
        with pytest.raises(HTTPException):
            validate_item_name("egg\x00s")

    def test_keeps_case(self):
        assert validate_item_name("Olive Oil") == "Olive Oil"
