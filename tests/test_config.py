"""Tests for settings loaded from the environment."""

import pytest
from pydantic import ValidationError

from thetvdb.config import Settings

ENV_VARS = (
    "TVDB_API_KEY",
    "TVDB_LANGUAGE",
    "TVDB_BASE_URL",
    "REQUEST_TIMEOUT",
    "TOKEN_REFRESH_MARGIN",
    "LOG_LEVEL",
    "ENVIRONMENT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.tvdb_api_key is None
    assert settings.tvdb_language == "en"
    assert settings.tvdb_base_url == "https://api.thetvdb.com/"
    assert settings.request_timeout == 15.0
    assert settings.token_refresh_margin == 60
    assert settings.log_level == "INFO"
    assert settings.is_production
    assert not settings.has_api_key


def test_from_environment(monkeypatch):
    monkeypatch.setenv("TVDB_API_KEY", "env-key")
    monkeypatch.setenv("TVDB_LANGUAGE", " DE ")
    monkeypatch.setenv("REQUEST_TIMEOUT", "2.5")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("ENVIRONMENT", "Development")

    settings = Settings(_env_file=None)

    assert settings.tvdb_api_key.get_secret_value() == "env-key"
    assert settings.has_api_key
    assert settings.tvdb_language == "de"
    assert settings.request_timeout == 2.5
    assert settings.log_level == "DEBUG"
    assert settings.is_development
    assert not settings.is_production


def test_empty_api_key(monkeypatch):
    monkeypatch.setenv("TVDB_API_KEY", "")
    assert not Settings(_env_file=None).has_api_key


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("LOG_LEVEL", "VERBOSE"),
        ("ENVIRONMENT", "staging"),
        ("TVDB_LANGUAGE", "  "),
        ("REQUEST_TIMEOUT", "0"),
        ("TOKEN_REFRESH_MARGIN", "-1"),
    ],
)
def test_invalid_values(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_safe_dict_masks_api_key(monkeypatch):
    monkeypatch.setenv("TVDB_API_KEY", "env-key")

    safe = Settings(_env_file=None).get_safe_dict()

    assert safe["tvdb_api_key"] == "***"
    assert safe["tvdb_language"] == "en"
    assert "env-key" not in str(safe)
