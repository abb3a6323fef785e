"""Configuration via environment variables."""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


def get_database_url() -> str:
    """Return the DATABASE_URL from the environment."""
    url = os.environ.get("DATABASE_URL")
    if not url:
        msg = "DATABASE_URL environment variable is required"
        raise ValueError(msg)
    return url


def get_strict_patterns() -> bool:
    """Return whether a malformed subject pattern aborts the whole run.

    Reads EMAIL_PARSER_STRICT_PATTERNS; defaults to false, which skips only
    the offending definition.
    """
    raw = os.environ.get("EMAIL_PARSER_STRICT_PATTERNS", "").strip().lower()
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    msg = f"EMAIL_PARSER_STRICT_PATTERNS must be a boolean, got {raw!r}"
    raise ValueError(msg)


def get_log_level() -> str:
    """Return the log level name, defaulting to INFO."""
    level = os.environ.get("EMAIL_PARSER_LOG_LEVEL", "INFO").upper()
    if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        msg = f"EMAIL_PARSER_LOG_LEVEL must be a logging level name, got {level!r}"
        raise ValueError(msg)
    return level


def get_connect_timeout() -> int:
    """Return the database connect timeout in seconds (EMAIL_PARSER_DB_TIMEOUT, default 10)."""
    raw = os.environ.get("EMAIL_PARSER_DB_TIMEOUT", "10")
    try:
        timeout = int(raw)
    except ValueError:
        msg = f"EMAIL_PARSER_DB_TIMEOUT must be an integer, got {raw!r}"
        raise ValueError(msg) from None
    if timeout <= 0:
        msg = "EMAIL_PARSER_DB_TIMEOUT must be positive"
        raise ValueError(msg)
    return timeout
