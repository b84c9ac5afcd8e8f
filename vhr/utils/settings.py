"""Service settings sourced from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple

logger = logging.getLogger(__name__)

_DEV_JWT_SECRET = "vhr-dev-secret-change-me"

_DEFAULT_CORS_ORIGINS = (
    "http://localhost",
    "http://localhost:3000",
    "http://localhost:5173",
    "http://localhost:8000",
)


@dataclass(frozen=True)
class Settings:
    jwt_secret: str
    jwt_algorithm: str
    jwt_expires_hours: int
    otp_expiry_minutes: int
    customer_code_expiry_minutes: int
    frontend_login_url: str
    frontend_reset_password_url: str
    cors_origins: Tuple[str, ...]


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r, using %s", name, raw, default)
        return default


_POSTGRES_VARS = ("POSTGRES_USER", "POSTGRES_PASSWORD", "POSTGRES_HOST", "POSTGRES_PORT", "POSTGRES_DB")


def database_url_from_env() -> str:
    """
    Return ``DATABASE_URL``, or a Postgres URL assembled from ``POSTGRES_*``.

    Raises:
        ValueError: Naming every missing ``POSTGRES_*`` variable
    """
    explicit = os.getenv("DATABASE_URL")
    if explicit:
        return explicit
    values = {name: os.getenv(name) for name in _POSTGRES_VARS}
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise ValueError(f"Missing required database environment variables: {', '.join(missing)}")
    return (
        f"postgresql://{values['POSTGRES_USER']}:{values['POSTGRES_PASSWORD']}"
        f"@{values['POSTGRES_HOST']}:{values['POSTGRES_PORT']}/{values['POSTGRES_DB']}"
    )


@lru_cache(maxsize=None)
def get_settings() -> Settings:
    """Return the cached settings; call ``get_settings.cache_clear()`` after changing env vars."""
    secret = os.getenv("JWT_SECRET", "")
    if not secret:
        logger.warning("JWT_SECRET is not set; using the development secret")
        secret = _DEV_JWT_SECRET
    origins_raw = os.getenv("CORS_ORIGINS", "")
    origins = tuple(o.strip() for o in origins_raw.split(",") if o.strip()) or _DEFAULT_CORS_ORIGINS
    return Settings(
        jwt_secret=secret,
        jwt_algorithm="HS256",
        jwt_expires_hours=_int_env("JWT_EXPIRES_HOURS", 24),
        otp_expiry_minutes=_int_env("OTP_EXPIRY_MINUTES", 10),
        customer_code_expiry_minutes=5,
        frontend_login_url=os.getenv("FRONTEND_LOGIN_URL", "http://localhost:3000/login"),
        frontend_reset_password_url=os.getenv("FRONTEND_RESET_PASSWORD_URL", "http://localhost:3000/reset-password"),
        cors_origins=origins,
    )
