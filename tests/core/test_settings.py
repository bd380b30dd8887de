"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from myfinance.core.errors import ConfigError
from myfinance.core.settings import INSECURE_DEV_SECRET, Settings, get_settings


class TestSettingsFromEnvironment:
    def test_database_url_is_required(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_defaults(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite:///x.db")
        monkeypatch.delenv("PORT", raising=False)
        s = Settings(_env_file=None)
        assert s.port == 3333
        assert s.jwt_algorithm == "HS256"
        assert s.jwt_expires_days == 7
        assert s.bcrypt_rounds == 10
        assert s.registration_requires_auth is False

    def test_env_vars_are_read(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db/app")
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("JWT_SECRET", "s3cret")
        monkeypatch.setenv("REGISTRATION_REQUIRES_AUTH", "true")
        s = Settings(_env_file=None)
        assert s.database_url == "postgresql://u:p@db/app"
        assert s.port == 8080
        assert s.jwt_secret == "s3cret"
        assert s.registration_requires_auth is True

    def test_get_settings_is_cached(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite:///x.db")
        assert get_settings() is get_settings()


class TestJwtSecretResolution:
    def test_explicit_secret_wins(self):
        s = Settings(_env_file=None, database_url="sqlite://", environment="production", jwt_secret="k")
        assert s.resolve_jwt_secret() == "k"

    @pytest.mark.parametrize("environment", ["development", "test", "DEV", "local"])
    def test_dev_falls_back_to_placeholder(self, environment):
        s = Settings(_env_file=None, database_url="sqlite://", environment=environment, jwt_secret=None)
        assert s.resolve_jwt_secret() == INSECURE_DEV_SECRET

    @pytest.mark.parametrize("environment", ["production", "staging"])
    def test_missing_secret_outside_dev_fails(self, environment):
        s = Settings(_env_file=None, database_url="sqlite://", environment=environment, jwt_secret=None)
        with pytest.raises(ConfigError):
            s.resolve_jwt_secret()

    def test_unconfigured_environment_is_production(self, monkeypatch):
        monkeypatch.delenv("ENVIRONMENT", raising=False)
        monkeypatch.delenv("JWT_SECRET", raising=False)
        s = Settings(_env_file=None, database_url="sqlite://")
        assert s.environment == "production"
        assert not s.is_development
        with pytest.raises(ConfigError):
            s.resolve_jwt_secret()
