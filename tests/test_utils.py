# =============================================================================
# tests/test_utils.py - Tests for Shared Utilities and Configuration
# =============================================================================

from uuid import UUID

import pytest
from pydantic import ValidationError

from app.config import Settings
from lib.utils import ApplicationError, banner, mask_database_url, normalize_uuid
from swagger_docs import RouteDeclarationError


class TestMaskDatabaseUrl:
    """Tests for mask_database_url()."""

    @pytest.mark.parametrize("url,expected", [
        ("postgresql://app:secret@db:5432/users", "postgresql://app:***@db:5432/users"),
        ("postgresql://app:secret@db/users?sslmode=require", "postgresql://app:***@db/users?sslmode=require"),
        ("https://test-project.supabase.co", "https://test-project.supabase.co"),
        ("file:./dev.db", "file:./dev.db"),
        ("", "N/A"),
        (None, "N/A"),
        ("not a url", "not a url"),
    ])
    def test_masking(self, url, expected):
        """Passwords are hidden; unparseable values pass through."""
        assert mask_database_url(url) == expected


class TestBanner:
    """Tests for the startup banner."""

    def test_banner_lines(self):
        """The banner lists environment, links and database."""
        text = banner(3000, "development", "https://db", "3.12.1")

        assert "API server is up" in text
        assert "Env         : development" in text
        assert "Health      : http://localhost:3000/api/health" in text
        assert "Swagger UI  : http://localhost:3000/api/docs" in text
        assert "Database    : https://db" in text


class TestNormalizeUuid:
    """Tests for normalize_uuid()."""

    def test_uuid_and_string(self):
        """UUID objects become strings; strings are kept."""
        value = "123e4567-e89b-12d3-a456-426614174000"

        assert normalize_uuid(UUID(value)) == value
        assert normalize_uuid(value) == value


class TestApplicationError:
    """Tests for the error base class."""

    def test_str_includes_suggestion(self):
        """The suggestion is printed under the message."""
        error = ApplicationError("Broken", code="X", suggestion="Fix it")

        assert str(error) == "[X] Broken\n  Suggestion: Fix it"
        assert error.to_dict()["code"] == "X"

    def test_route_declaration_error_lists_problems(self):
        """RouteDeclarationError keeps every problem."""
        error = RouteDeclarationError(["a is bad", "b is bad"])

        assert error.errors == ["a is bad", "b is bad"]
        assert "2 invalid route declaration(s)" in error.message
        assert error.details == {"errors": ["a is bad", "b is bad"]}


class TestSettings:
    """Tests for Settings parsing."""

    def test_defaults(self, monkeypatch):
        """Unset values fall back to their defaults."""
        monkeypatch.delenv("API_PORT", raising=False)
        settings = Settings(_env_file=None)

        assert settings.API_PORT == 3000
        assert settings.API_PREFIX == "/api"
        assert settings.DEFAULT_PAGE_SIZE == 10

    def test_cors_origins_list(self, monkeypatch):
        """CORS_ORIGINS is split on commas."""
        monkeypatch.setenv("CORS_ORIGINS", "http://a.com, https://b.com,")

        assert Settings(_env_file=None).cors_origins_list == ["http://a.com", "https://b.com"]

    def test_environment_flags(self, monkeypatch):
        """is_production / is_development follow ENVIRONMENT."""
        monkeypatch.setenv("ENVIRONMENT", "production")
        settings = Settings(_env_file=None)

        assert settings.is_production is True
        assert settings.is_development is False

    def test_invalid_port_rejected(self, monkeypatch):
        """Ports outside 1-65535 fail validation."""
        monkeypatch.setenv("API_PORT", "70000")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)
