"""
Logging configuration.

Provides a single entry point for configuring structlog with the ambient
context installed as an enrichment source.

Configuration is resolved from arguments first, then from
``LogContextSettings`` (``AMBIENTLOG_*`` environment variables / ``.env``):
- AMBIENTLOG_LOG_LEVEL: DEBUG | INFO | WARNING | ERROR | CRITICAL (default: INFO)
- AMBIENTLOG_LOG_FORMAT: json | console (default: console)
- AMBIENTLOG_SERVICE_NAME: added to every event as ``service.name``

Usage:
    from ambientlog.framework.logging import configure_logging
    configure_logging()

    # Or with explicit settings
    configure_logging(level="DEBUG", format="json")
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from ambientlog.context.log_context import ContextStack
from ambientlog.core.errors import InvalidConfigError
from ambientlog.core.settings import LogContextSettings, get_settings
from ambientlog.framework.logging.processors import PropertyValueFactory, from_log_context

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_FORMATS = ("console", "json")

# Track if logging has been configured
_configured = False


def _service_metadata(service: str) -> Processor:
    def add_service_metadata(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service.name", service)
        return event_dict

    return add_service_metadata


def build_processors(
    format: str,
    service: str,
    *stacks: ContextStack,
    max_destructure_depth: int = 10,
) -> list[Processor]:
    """Processor chain used by configure_logging, exposed for custom setups."""
    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        # Explicit event keys first, then ambient context, then global context
        from_log_context(*stacks, property_factory=PropertyValueFactory(max_destructure_depth)),
        _service_metadata(service),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )
    return processors


def configure_logging(
    level: str | None = None,
    format: str | None = None,
    *,
    service: str | None = None,
    stacks: tuple[ContextStack, ...] = (),
    settings: LogContextSettings | None = None,
    force: bool = False,
) -> None:
    """
    Configure structured logging for the application.

    Should be called once at startup. Subsequent calls are no-ops unless
    force=True.

    Args:
        level: Log level (overrides AMBIENTLOG_LOG_LEVEL)
        format: ``json`` or ``console`` (overrides AMBIENTLOG_LOG_FORMAT)
        service: Service name (overrides AMBIENTLOG_SERVICE_NAME)
        stacks: Context stacks to enrich from (default: ambient, then global)
        settings: Settings object to read defaults from
        force: Reconfigure even if already configured

    Raises:
        InvalidConfigError: unknown level or format
    """
    global _configured

    if _configured and not force:
        return

    settings = settings or get_settings()
    log_level = (level or settings.log_level).upper()
    log_format = (format or settings.log_format).lower()
    service_name = service or settings.service_name

    if log_level not in _LEVELS:
        raise InvalidConfigError(f"Unknown log level: {log_level!r}", setting="log_level")
    if log_format not in _FORMATS:
        raise InvalidConfigError(f"Unknown log format: {log_format!r}", setting="log_format")

    structlog.configure(
        processors=build_processors(
            log_format,
            service_name,
            *stacks,
            max_destructure_depth=settings.max_destructure_depth,
        ),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Configure stdlib logging to match
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level),
        force=True,
    )
    logging.getLogger("ambientlog").setLevel(getattr(logging, log_level))

    _configured = True
    get_logger(__name__).debug(
        "logging_configured", level=log_level, format=log_format, service=service_name
    )


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger; context is attached to everything it logs."""
    return structlog.get_logger(name)


def is_debug_enabled() -> bool:
    """Check if DEBUG level logging is enabled."""
    return logging.getLogger().isEnabledFor(logging.DEBUG)


def is_configured() -> bool:
    """Check if logging has been configured."""
    return _configured
