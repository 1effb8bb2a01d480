"""Settings for ambientlog.

Configuration is explicit, validated and environment-driven. Every field can
be overridden with an ``AMBIENTLOG_`` prefixed environment variable or from a
``.env`` file.

Fields
──────
log_level              : Level for structlog and the stdlib root logger
log_format             : ``console`` (colored, dev) or ``json`` (aggregation)
service_name           : Added to every event as ``service.name``
max_destructure_depth  : Nesting limit when destructuring pushed values
request_id_header      : Header the ASGI middleware reads / echoes

Examples:
    >>> from ambientlog.core.settings import LogContextSettings
    >>> LogContextSettings(log_format="json").log_format
    'json'
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogContextSettings(BaseSettings):
    """Settings shared by the logging integration and the middleware."""

    model_config = SettingsConfigDict(
        env_prefix="AMBIENTLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["console", "json"] = "console"
    service_name: str = "ambientlog"

    # ── Property conversion ──────────────────────────────────────
    max_destructure_depth: int = Field(default=10, ge=1, le=100)

    # ── ASGI ─────────────────────────────────────────────────────
    request_id_header: str = "X-Request-ID"


@lru_cache
def get_settings() -> LogContextSettings:
    return LogContextSettings()


__all__ = ["LogContextSettings", "get_settings"]
