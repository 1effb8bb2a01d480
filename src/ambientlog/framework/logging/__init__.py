"""
ambientlog logging integration - structlog and stdlib.

This module provides:
- A structlog processor that enriches events from the context stacks
- A property value factory (scalars, collections, destructuring)
- A logging.Filter for stdlib-only handlers
- Environment-based configuration

Usage:
    from ambientlog.context import log_context
    from ambientlog.framework.logging import configure_logging, get_logger

    configure_logging()
    log = get_logger(__name__)

    with log_context.push_property("order_id", 1234):
        log.info("order_loaded")   # carries order_id=1234
"""

from ambientlog.framework.logging.config import (
    build_processors,
    configure_logging,
    get_logger,
    is_configured,
    is_debug_enabled,
)
from ambientlog.framework.logging.processors import (
    LogContextEnricher,
    PropertyValueFactory,
    from_log_context,
)
from ambientlog.framework.logging.stdlib import LogContextFilter

__all__ = [
    # Configuration
    "configure_logging",
    "build_processors",
    "get_logger",
    "is_configured",
    "is_debug_enabled",
    # Enrichment
    "LogContextEnricher",
    "PropertyValueFactory",
    "from_log_context",
    "LogContextFilter",
]
