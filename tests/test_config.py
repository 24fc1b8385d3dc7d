import logging

from smarthub import logging_config
from smarthub.config import get_settings


def test_defaults():
    settings = get_settings()
    assert settings.api_url == "http://localhost:8080"
    assert settings.api_timeout == 15.0
    assert settings.quiz_time_limit_minutes == 30


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SMARTHUB_API_URL", "https://hub.example.org/")
    monkeypatch.setenv("SMARTHUB_API_TIMEOUT", "2.5")
    monkeypatch.setenv("SMARTHUB_QUIZ_TIME_LIMIT_MINUTES", "45")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    get_settings.cache_clear()
    settings = get_settings()
    assert settings.api_url == "https://hub.example.org"
    assert settings.api_timeout == 2.5
    assert settings.quiz_time_limit_minutes == 45
    assert settings.log_level == "DEBUG"


def test_bad_numbers_fall_back(monkeypatch):
    monkeypatch.setenv("SMARTHUB_QUIZ_TIME_LIMIT_MINUTES", "soon")
    monkeypatch.setenv("SMARTHUB_API_TIMEOUT", "fast")
    get_settings.cache_clear()
    assert get_settings().quiz_time_limit_minutes == 30
    assert get_settings().api_timeout == 15.0


def test_setup_logging_runs_once(monkeypatch):
    calls = []
    monkeypatch.setattr(logging_config, "_configured", False)
    monkeypatch.setattr(logging_config.logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    logging_config.setup_logging()
    logging_config.setup_logging()
    assert len(calls) == 1
    assert calls[0]["level"] == logging.INFO
    assert logging.getLogger("urllib3").level == logging.WARNING
