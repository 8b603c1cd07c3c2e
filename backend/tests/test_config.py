import asyncio
from datetime import date

import pytest
from pydantic import ValidationError as PydanticValidationError

from _helpers import BACKEND_DIR  # noqa: F401

from app.core.config import Settings, get_settings
from app.tours.sources import LiveTourOperatorClient, MockTourOperatorClient, build_tour_operator_client


def _reset_settings_cache():
    get_settings.cache_clear()


def test_defaults_without_environment(monkeypatch):
    for key in ("PORT", "TOUR_SOURCE", "DEFAULT_RESULTS_LIMIT", "TOUR_API_TIMEOUT", "API_PREFIX"):
        monkeypatch.delenv(key, raising=False)

    settings = Settings(_env_file=None)

    assert settings.port == 3000
    assert settings.tour_source == "mock"
    assert settings.default_results_limit == 20
    assert settings.api_prefix == "/api"
    assert settings.origins() == ["*"]


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("TOUR_SOURCE", "live")
    monkeypatch.setenv("TOUR_API_BASE_URL", "https://partner.example.ru/api/")
    monkeypatch.setenv("TOUR_API_KEY", "key-123")
    monkeypatch.setenv("TOUR_API_TIMEOUT", "12.5")
    monkeypatch.setenv("TOUR_API_RETRY_ATTEMPTS", "5")
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.ru, https://b.ru")
    _reset_settings_cache()

    settings = get_settings()
    config = settings.tour_operator_config()

    assert settings.port == 8080
    assert config.base_url == "https://partner.example.ru/api"
    assert config.api_key == "key-123"
    assert config.timeout == 12.5
    assert config.retry_attempts == 5
    assert config.is_configured() is True
    assert settings.origins() == ["https://a.ru", "https://b.ru"]
    _reset_settings_cache()


def test_today_respects_timezone():
    settings = Settings(_env_file=None, TIMEZONE="Europe/Moscow")

    assert isinstance(settings.today(), date)


def test_source_selection():
    mock = build_tour_operator_client(Settings(_env_file=None, TOUR_SOURCE="mock"))
    live = build_tour_operator_client(Settings(_env_file=None, TOUR_SOURCE="live", TOUR_API_KEY="k"))

    assert isinstance(mock, MockTourOperatorClient)
    assert isinstance(live, LiveTourOperatorClient)
    asyncio.run(live.close())


def test_unknown_timezone_fails_at_startup():
    with pytest.raises(PydanticValidationError, match="Unknown time zone"):
        Settings(_env_file=None, TIMEZONE="Mars/Olympus_Mons")
