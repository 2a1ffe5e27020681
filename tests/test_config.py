"""Tests for environment-driven settings."""

import pytest

from app.config import DEFAULT_INTEGRATION_ID, DEFAULT_UPSTREAM_URL, ConfigError, Settings


def test_api_key_is_required():
    with pytest.raises(ConfigError, match="UPSTREAM_API_KEY"):
        Settings.from_env({})
    with pytest.raises(ConfigError):
        Settings.from_env({"UPSTREAM_API_KEY": "   "})


def test_defaults_apply_to_everything_but_the_key():
    settings = Settings.from_env({"UPSTREAM_API_KEY": "secret"})

    assert settings.upstream_api_key == "secret"
    assert settings.upstream_url == DEFAULT_UPSTREAM_URL
    assert settings.integration_id == DEFAULT_INTEGRATION_ID
    assert settings.port == 3000
    assert settings.upstream_timeout_seconds == 30.0
    assert settings.cors_origins == ("*",)


def test_environment_overrides():
    settings = Settings.from_env(
        {
            "UPSTREAM_API_KEY": "secret",
            "UPSTREAM_API_URL": "https://example.test/graphql",
            "UPSTREAM_INTEGRATION_ID": "abc",
            "UPSTREAM_TIMEOUT_SECONDS": "4.5",
            "PORT": "8080",
            "CORS_ORIGINS": "https://a.test, https://b.test",
            "LOG_LEVEL": "debug",
        }
    )

    assert settings.upstream_url == "https://example.test/graphql"
    assert settings.integration_id == "abc"
    assert settings.upstream_timeout_seconds == 4.5
    assert settings.port == 8080
    assert settings.cors_origins == ("https://a.test", "https://b.test")
    assert settings.log_level == "debug"


def test_settings_are_immutable():
    settings = Settings(upstream_api_key="secret")

    with pytest.raises(AttributeError):
        settings.port = 1


def test_legacy_variable_names_are_still_read():
    """An existing ``.env`` with the older MIROS_* names keeps working."""

    settings = Settings.from_env(
        {
            "MIROS_API_KEY": "legacy",
            "MIROS_API_URL": "https://legacy.test/graphql",
            "MIROS_INTEGRATION_ID": "legacy-id",
        }
    )

    assert settings.upstream_api_key == "legacy"
    assert settings.upstream_url == "https://legacy.test/graphql"
    assert settings.integration_id == "legacy-id"


def test_new_variable_names_win_over_legacy_ones():
    settings = Settings.from_env({"UPSTREAM_API_KEY": "new", "MIROS_API_KEY": "legacy"})

    assert settings.upstream_api_key == "new"
