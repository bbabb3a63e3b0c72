"""
Unit tests for API configuration.
"""

import pytest
from pydantic import ValidationError

from library_api.config import DEFAULT_JWT_SECRET, APIConfig


class TestAPIConfig:
    """Test cases for APIConfig."""

    def test_defaults(self, monkeypatch):
        for name in ("PORT", "ENVIRONMENT", "JWT_SECRET", "TOKEN_EXPIRE_HOURS", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        config = APIConfig(_env_file=None)

        assert config.port == 3000
        assert config.environment == "development"
        assert config.jwt_secret == DEFAULT_JWT_SECRET
        assert config.uses_default_secret() is True
        assert config.is_development() is True
        assert config.is_production() is False

    def test_reads_environment_variables(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("ENVIRONMENT", "Production")
        monkeypatch.setenv("JWT_SECRET", "from-env")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        config = APIConfig(_env_file=None)

        assert config.port == 8080
        assert config.environment == "production"
        assert config.is_production() is True
        assert config.jwt_secret == "from-env"
        assert config.uses_default_secret() is False
        assert config.log_level == "DEBUG"

    @pytest.mark.parametrize("field,value", [
        ("environment", "staging"),
        ("log_level", "LOUD"),
        ("log_format", "xml"),
        ("token_expire_hours", 0),
    ])
    def test_invalid_values(self, field, value):
        with pytest.raises(ValidationError):
            APIConfig(_env_file=None, **{field: value})
