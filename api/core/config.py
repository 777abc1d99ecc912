"""
Environment-backed settings.

Values are read on every call so tests can `monkeypatch.setenv` freely.
"""

from __future__ import annotations

import os

DEFAULT_CORS_ORIGINS = (
    "http://localhost:3000",
    "https://turbodoc.ai",
    "https://www.turbodoc.ai",
)


def _env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, "").strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def db_pool_min_size() -> int:
    return max(1, _env_int("DB_POOL_MIN_SIZE", 1))


def db_pool_max_size() -> int:
    return max(db_pool_min_size(), _env_int("DB_POOL_MAX_SIZE", 5))


def db_command_timeout_s() -> float:
    return _env_float("DB_COMMAND_TIMEOUT_S", 30.0)


def db_rls_role() -> str:
    return _env_str("DB_RLS_ROLE", "authenticated")


def auth_url() -> str:
    return _env_str("AUTH_URL").rstrip("/")


def auth_api_key() -> str:
    return _env_str("AUTH_API_KEY")


def auth_timeout_s() -> float:
    return _env_float("AUTH_TIMEOUT_S", 10.0)


def link_preview_timeout_s() -> float:
    return _env_float("LINK_PREVIEW_TIMEOUT_S", 10.0)


def resend_api_url() -> str:
    return _env_str("RESEND_API_URL", "https://api.resend.com").rstrip("/")


def resend_api_key() -> str:
    return _env_str("RESEND_API_KEY")


def contact_email() -> str:
    return _env_str("CONTACT_EMAIL")


def contact_from() -> str:
    return _env_str("CONTACT_FROM", "Turbodoc Contact <noreply@mail.turbodoc.ai>")


def cors_origins() -> list[str]:
    raw = _env_str("CORS_ORIGINS")
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()
