from dataclasses import FrozenInstanceError

import pytest

from speclib_mcp.core.config import ConfigError, Settings, load_settings


def test_defaults():
    s = load_settings({})
    assert s == Settings()
    assert s.api_url == "http://localhost:3000"
    assert s.api_token is None
    assert s.scheme == "identifier"
    assert s.has_token is False


def test_env_overrides_and_trailing_slashes():
    s = load_settings(
        {
            "SPECLIB_API_URL": "https://specs.example.com///",
            "SPECLIB_API_TOKEN": "tok",
            "SPECLIB_API_SCHEME": "Scoped",
            "SPECLIB_LOG_LEVEL": "debug",
        }
    )
    assert s.api_url == "https://specs.example.com"
    assert s.api_token == "tok"
    assert s.has_token is True
    assert s.scheme == "scoped"
    assert s.log_level == "DEBUG"


def test_empty_token_is_unset():
    assert load_settings({"SPECLIB_API_TOKEN": ""}).api_token is None


def test_unknown_scheme_rejected():
    with pytest.raises(ConfigError):
        load_settings({"SPECLIB_API_SCHEME": "v3"})


def test_settings_are_immutable():
    s = Settings()
    with pytest.raises(FrozenInstanceError):
        s.api_token = "x"
