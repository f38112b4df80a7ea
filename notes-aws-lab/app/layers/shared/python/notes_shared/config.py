# notes_shared/config.py
import logging
import os
from dataclasses import dataclass

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    db_secret_arn: str
    pool_max_size: int = 2
    pool_idle_timeout: float = 30.0
    db_connect_timeout: float = 2.0
    cors_allow_origin: str = "*"
    expose_error_details: bool = True
    log_level: str = "INFO"


def _flag(value):
    return value.strip().lower() in _TRUE_VALUES


def log_level(environ=None):
    """LOG_LEVEL as a logging level name; unknown names fall back to INFO."""
    env = os.environ if environ is None else environ
    name = env.get("LOG_LEVEL", "INFO").strip().upper()
    if isinstance(logging.getLevelName(name), int):
        return name
    return "INFO"


def load_settings(environ=None):
    """
    Read handler settings from the Lambda environment.
    DB_SECRET_ARN may be empty here; resolving credentials fails on it later.
    Malformed numbers raise ValueError.
    """
    env = os.environ if environ is None else environ
    return Settings(
        db_secret_arn=env.get("DB_SECRET_ARN", ""),
        pool_max_size=int(env.get("POOL_MAX_SIZE", "2")),
        pool_idle_timeout=float(env.get("POOL_IDLE_TIMEOUT", "30")),
        db_connect_timeout=float(env.get("DB_CONNECT_TIMEOUT", "2")),
        cors_allow_origin=env.get("CORS_ALLOW_ORIGIN", "*"),
        expose_error_details=_flag(env.get("EXPOSE_ERROR_DETAILS", "true")),
        log_level=log_level(env),
    )


_settings = None


def get_settings():
    """Settings for this process, read once. A failed read is retried on the next call."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings
