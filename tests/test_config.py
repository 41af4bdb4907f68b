"""Settings loading tests."""

import pytest
from pydantic import ValidationError

from shortener.config import Settings, get_settings


def test_defaults() -> None:
    settings = Settings(_env_file=None)
    assert settings.PORT == 3030
    assert settings.SHORT_CODE_LENGTH == 6
    assert settings.BASE_URL == "http://localhost:3030"


def test_environment_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("BASE_URL", "http://short.example:8080")
    settings = Settings(_env_file=None)
    assert settings.PORT == 8080
    assert settings.BASE_URL == "http://short.example:8080"


def test_invalid_port(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "not-a-port")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()
