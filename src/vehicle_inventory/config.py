from __future__ import annotations

import os

_TRUTHY = {"1", "true", "t", "yes", "on"}


def database_url() -> str:
    url = os.getenv("DATABASE_URL")

    if not url:
        raise RuntimeError("DATABASE_URL environment variable is not set")

    return url


def vehicle_partition() -> str:
    """The vehicle type (new/used) this deployment serves."""
    partition = os.getenv("VEHICLE_TYPE", "new")

    if partition not in ("new", "used"):
        raise RuntimeError(f"VEHICLE_TYPE must be 'new' or 'used', got {partition!r}")

    return partition


def api_prefix() -> str:
    return os.getenv("API_PREFIX", "/api").rstrip("/")


def expose_error_details() -> bool:
    return os.getenv("EXPOSE_ERROR_DETAILS", "false").strip().lower() in _TRUTHY


def log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def db_pool_size() -> int:
    return _int_setting("DB_POOL_SIZE", 10)


def db_max_overflow() -> int:
    return _int_setting("DB_MAX_OVERFLOW", 20)


def _int_setting(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default

    try:
        value = int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from None

    if value < 0:
        raise RuntimeError(f"{name} must not be negative, got {value}")

    return value
