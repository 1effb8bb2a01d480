"""Context enrichment for stdlib-only logging handlers."""

from __future__ import annotations

import logging
from typing import Any

from ambientlog.context.log_context import ContextStack, global_log_context, log_context
from ambientlog.core.protocols import PropertyFactory
from ambientlog.framework.logging.processors import PropertyValueFactory


class LogContextFilter(logging.Filter):
    """
    Attaches the current context to every LogRecord passing through.

    The merged properties are stored as ``record.log_context`` (a dict) and,
    where the name does not clash with an existing LogRecord attribute, as
    individual attributes so ``%(request_id)s`` style format strings work.
    Never filters anything out.

    Usage:
        handler = logging.StreamHandler()
        handler.addFilter(LogContextFilter())
    """

    def __init__(
        self,
        *stacks: ContextStack,
        property_factory: PropertyFactory | None = None,
        name: str = "",
    ):
        super().__init__(name)
        self.stacks = stacks or (log_context, global_log_context)
        self.property_factory = property_factory or PropertyValueFactory()

    def filter(self, record: logging.LogRecord) -> bool:
        properties: dict[str, Any] = {}
        for stack in self.stacks:
            stack.enrich(properties, self.property_factory)

        record.log_context = properties
        for key, value in properties.items():
            if key not in record.__dict__:
                setattr(record, key, value)
        return True


__all__ = ["LogContextFilter"]
