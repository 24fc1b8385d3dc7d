import os
from dataclasses import dataclass
from functools import lru_cache


DEFAULT_API_URL = "http://localhost:8080"


@dataclass(frozen=True)
class Settings:
    api_url: str
    api_timeout: float
    quiz_time_limit_minutes: int
    log_level: str
    log_file: str | None


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@lru_cache
def get_settings() -> Settings:
    return Settings(
        api_url=(os.getenv("SMARTHUB_API_URL") or DEFAULT_API_URL).rstrip("/"),
        api_timeout=_float_env("SMARTHUB_API_TIMEOUT", 15.0),
        quiz_time_limit_minutes=max(1, _int_env("SMARTHUB_QUIZ_TIME_LIMIT_MINUTES", 30)),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        log_file=os.getenv("LOG_FILE") or None,
    )
