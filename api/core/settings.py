"""
Environment-driven configuration.

Every value is read on demand so tests can change the environment with
`monkeypatch.setenv` without reloading modules.
"""

from __future__ import annotations

import os
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

DEFAULT_MAX_BODY_BYTES = 2 * 1024 * 1024  # 2 MiB


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


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "on"}


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str | None:
    url = _env_str("DATABASE_URL")
    if not url:
        return None
    return _sanitize_database_url(url)


def database_params() -> dict[str, Any]:
    """
    Connection parts from the libpq-style PG* variables.
    """
    return {
        "user": _env_str("PGUSER", "postgres"),
        "host": _env_str("PGHOST", "db"),
        "database": _env_str("PGDATABASE", "postgres"),
        "password": os.environ.get("PGPASSWORD") or None,
        "port": _env_int("PGPORT", 5432),
    }


def database_label() -> str:
    # Safe to log: never includes the password.
    url = database_url()
    if url:
        parts = urlsplit(url)
        return f"{parts.hostname}:{parts.port or 5432}{parts.path}"
    params = database_params()
    return f"{params['host']}:{params['port']}/{params['database']}"


def pool_min_size() -> int:
    return max(1, _env_int("DB_POOL_MIN_SIZE", 1))


def pool_max_size() -> int:
    return max(pool_min_size(), _env_int("DB_POOL_MAX_SIZE", 5))


def command_timeout_s() -> float:
    return float(max(1, _env_int("DB_COMMAND_TIMEOUT", 30)))


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def app_env() -> str:
    return _env_str("APP_ENV") or _env_str("NODE_ENV", "development")


def default_employee_id() -> int:
    return _env_int("DEFAULT_EMPLOYEE_ID", 1)


def verify_password_on_login() -> bool:
    return _env_bool("AUTH_VERIFY_PASSWORD", False)


def max_body_bytes() -> int:
    value = _env_int("MAX_BODY_BYTES", DEFAULT_MAX_BODY_BYTES)
    return value if value > 0 else DEFAULT_MAX_BODY_BYTES


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()
