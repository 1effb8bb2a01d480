"""
ambientlog.context - the ambient context stack.

Usage:
    from ambientlog.context import log_context, global_log_context

    with log_context.push_property("request_id", rid):
        handle(request)

    with global_log_context.lock():
        global_log_context.push_properties(app="billing", version="1.4.2")
"""

from ambientlog.context.bookmark import Bookmark
from ambientlog.context.enrichers import CallableEnricher, PropertyEnricher
from ambientlog.context.lock import LockToken, ScopeLock
from ambientlog.context.log_context import ContextStack, global_log_context, log_context
from ambientlog.context.propagation import FlowPoolExecutor, FlowThread, flow_bound
from ambientlog.context.stack import EnricherStack
from ambientlog.context.storage import AmbientStorage, SharedStorage

__all__ = [
    # Stacks
    "ContextStack",
    "log_context",
    "global_log_context",
    # Building blocks
    "EnricherStack",
    "AmbientStorage",
    "SharedStorage",
    "Bookmark",
    "ScopeLock",
    "LockToken",
    # Enrichers
    "PropertyEnricher",
    "CallableEnricher",
    # Propagation
    "flow_bound",
    "FlowThread",
    "FlowPoolExecutor",
]
