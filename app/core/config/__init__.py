from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    log_level: str
    sentry_dsn: str | None
    rate_limit: str
    validate_rate_limit: str
    rate_limit_enabled: bool
    cors_allowed_origins: tuple[str, ...]
    cors_allow_origin_regex: str | None
    cors_allow_credentials: bool
    scoring_config_path: str | None
    max_job_description_chars: int


settings = Settings(
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    rate_limit=_get_env("RATE_LIMIT", "60/minute") or "60/minute",
    validate_rate_limit=_get_env("VALIDATE_RATE_LIMIT", "20/minute") or "20/minute",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    cors_allowed_origins=_get_env_list(
        "CORS_ALLOWED_ORIGINS",
        [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:3000",
        ],
    ),
    cors_allow_origin_regex=(_get_env("CORS_ALLOW_ORIGIN_REGEX") or "").strip() or None,
    cors_allow_credentials=_get_env_bool("CORS_ALLOW_CREDENTIALS", False),
    scoring_config_path=_get_env("SCORING_CONFIG_PATH"),
    max_job_description_chars=_get_env_int("MAX_JOB_DESCRIPTION_CHARS", 50000),
)

if settings.max_job_description_chars <= 0:
    raise RuntimeError("MAX_JOB_DESCRIPTION_CHARS must be a positive integer.")

__all__ = ["Settings", "settings"]
