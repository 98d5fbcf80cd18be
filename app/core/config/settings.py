from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

_CONFIG_DIR = Path(__file__).resolve().parents[3] / "config"


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


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
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
    admin_api_key: str | None
    rate_limit: str
    rate_limit_enabled: bool
    log_level: str
    sentry_dsn: str | None
    cors_allowed_origins: tuple[str, ...]
    cors_allow_credentials: bool
    career_db_path: str
    seed_on_startup: bool
    questions_seed_path: str
    colleges_seed_path: str
    session_token_ttl_days: int
    analytics_enabled: bool
    analytics_db_path: str
    analytics_retention_days: int
    analytics_purge_interval_s: float


settings = Settings(
    admin_api_key=_get_env("ADMIN_API_KEY"),
    rate_limit=_get_env("RATE_LIMIT", "10/minute") or "10/minute",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    cors_allowed_origins=_get_env_list(
        "CORS_ALLOWED_ORIGINS",
        [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:8080",
            "http://localhost:3000",
        ],
    ),
    cors_allow_credentials=_get_env_bool("CORS_ALLOW_CREDENTIALS", False),
    career_db_path=_get_env("CAREER_DB_PATH", "data/career.db") or "data/career.db",
    seed_on_startup=_get_env_bool("SEED_ON_STARTUP", True),
    questions_seed_path=_get_env("QUESTIONS_SEED_PATH", str(_CONFIG_DIR / "assessment_questions.yaml"))
    or str(_CONFIG_DIR / "assessment_questions.yaml"),
    colleges_seed_path=_get_env("COLLEGES_SEED_PATH", str(_CONFIG_DIR / "colleges.yaml"))
    or str(_CONFIG_DIR / "colleges.yaml"),
    session_token_ttl_days=_get_env_int("SESSION_TOKEN_TTL_DAYS", 30),
    analytics_enabled=_get_env_bool("ANALYTICS_ENABLED", True),
    analytics_db_path=_get_env("ANALYTICS_DB_PATH", "data/analytics.db") or "data/analytics.db",
    analytics_retention_days=_get_env_int("ANALYTICS_RETENTION_DAYS", 180),
    analytics_purge_interval_s=_get_env_float("ANALYTICS_PURGE_INTERVAL_S", 3600.0),
)

if settings.session_token_ttl_days < 1:
    raise RuntimeError("SESSION_TOKEN_TTL_DAYS must be at least 1.")
