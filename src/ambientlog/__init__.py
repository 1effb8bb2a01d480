"""
ambientlog - ambient, flow-aware log context for structlog and stdlib logging.

Push properties onto an implicit stack and every log event emitted while
they are active carries them, without passing anything around:

    from ambientlog import log_context, global_log_context

    global_log_context.push_property("app_version", "1.4.2")

    with log_context.push_property("request_id", rid):
        log.info("handled")   # app_version + request_id
"""

__version__ = "0.1.0"

from ambientlog.context import (
    Bookmark,
    CallableEnricher,
    ContextStack,
    LockToken,
    PropertyEnricher,
    ScopeLock,
    global_log_context,
    log_context,
)
from ambientlog.core.errors import AmbientLogError, InvalidArgumentError

__all__ = [
    "__version__",
    "log_context",
    "global_log_context",
    "ContextStack",
    "Bookmark",
    "ScopeLock",
    "LockToken",
    "PropertyEnricher",
    "CallableEnricher",
    "AmbientLogError",
    "InvalidArgumentError",
]
