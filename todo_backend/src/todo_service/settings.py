from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Optional

LOG_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - TODO_HOST: bind address (default '0.0.0.0')
    - TODO_PORT: listen port (default 9285)
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - REQUEST_LOG_LEVEL: initial level of the request-logger (default INFO)
    - TODO_LOG_LEVEL: initial level of the todo-logger (default INFO)
    - LOG_FILE: optional file that receives a copy of every log record
    """

    host: str
    port: int
    cors_allow_origins: List[str]
    request_log_level: str
    todo_log_level: str
    log_file: Optional[str]


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_port(value: str, default: int) -> int:
    try:
        port = int(value.strip())
    except ValueError:
        return default
    if not (0 < port < 65536):
        return default
    return port


def parse_level_name(value: str) -> Optional[str]:
    """Return the canonical level name for value (WARN and FATAL are aliases), or None."""
    v = value.strip().upper()
    v = _LEVEL_ALIASES.get(v, v)
    return v if v in LOG_LEVEL_NAMES else None


def _parse_level(value: str, default: str = "INFO") -> str:
    return parse_level_name(value) or default


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    log_file = os.getenv("LOG_FILE", "").strip()
    return Settings(
        host=_get_env("TODO_HOST", "0.0.0.0").strip(),
        port=_parse_port(_get_env("TODO_PORT", "9285"), 9285),
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
        request_log_level=_parse_level(_get_env("REQUEST_LOG_LEVEL", "INFO")),
        todo_log_level=_parse_level(_get_env("TODO_LOG_LEVEL", "INFO")),
        log_file=log_file or None,
    )
