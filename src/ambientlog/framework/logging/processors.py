"""
structlog processors that read the ambient context.

``LogContextEnricher`` is the single point where the logging pipeline reads a
context stack: for every event it walks the current stack(s) top-to-bottom
and lets each enricher write into the event dict. Enrichers only add keys
that are absent, so explicit event keys win first, then the most recently
pushed entry, then older ones.

Usage:
    structlog.configure(processors=[
        structlog.stdlib.add_log_level,
        from_log_context(),              # ambient first, then global
        structlog.processors.JSONRenderer(),
    ])
"""

from __future__ import annotations

import dataclasses
import datetime
import uuid
from collections.abc import Mapping, MutableMapping, Set
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel

from ambientlog.context.log_context import ContextStack, global_log_context, log_context
from ambientlog.core.errors import InvalidArgumentError
from ambientlog.core.protocols import PropertyFactory

_SCALARS = (
    str,
    int,
    float,
    bool,
    bytes,
    Decimal,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    uuid.UUID,
    Enum,
)


class PropertyValueFactory:
    """
    Converts pushed values into event-friendly values.

    - Scalars (None, str, numbers, dates, UUIDs, enums) pass through.
    - Mappings become dicts, other collections become lists, recursively.
    - Anything else becomes ``str(value)``, unless ``destructure`` is set, in
      which case dataclasses, pydantic models and plain objects become dicts
      of their public fields.
    - Below ``max_depth`` levels of nesting, values fall back to ``str()``.
    """

    def __init__(self, max_depth: int = 10):
        if max_depth < 1:
            raise InvalidArgumentError("max_depth must be >= 1", argument="max_depth", value=max_depth)
        self.max_depth = max_depth

    def create_property(self, name: str, value: Any, destructure: bool = False) -> tuple[str, Any]:
        if not isinstance(name, str) or not name.strip():
            raise InvalidArgumentError("Property name must be a non-empty string", argument="name", value=name)
        return name, self.convert(value, destructure)

    def convert(self, value: Any, destructure: bool = False, depth: int = 0) -> Any:
        if value is None or isinstance(value, _SCALARS):
            return value
        if depth >= self.max_depth:
            return str(value)

        if isinstance(value, Mapping):
            return {str(k): self.convert(v, destructure, depth + 1) for k, v in value.items()}
        if isinstance(value, (list, tuple, Set)):
            return [self.convert(v, destructure, depth + 1) for v in value]

        if not destructure:
            return str(value)

        if isinstance(value, BaseModel):
            fields = value.model_dump()
        elif dataclasses.is_dataclass(value) and not isinstance(value, type):
            fields = {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
        elif hasattr(value, "__dict__") and not isinstance(value, type):
            fields = {k: v for k, v in vars(value).items() if not k.startswith("_")}
        else:
            return str(value)
        return {k: self.convert(v, destructure, depth + 1) for k, v in fields.items()}


class LogContextEnricher:
    """
    structlog processor applying one or more context stacks to each event.

    Stacks are applied in the order given; with add-if-absent enrichers the
    first stack wins on key collisions.
    """

    def __init__(self, *stacks: ContextStack, property_factory: PropertyFactory | None = None):
        if not stacks:
            raise InvalidArgumentError("At least one context stack is required", argument="stacks")
        self.stacks = stacks
        self.property_factory = property_factory or PropertyValueFactory()

    def __call__(self, logger: Any, method_name: str, event_dict: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
        for stack in self.stacks:
            stack.enrich(event_dict, self.property_factory)
        return event_dict

    def __repr__(self) -> str:
        names = ", ".join(s.name for s in self.stacks)
        return f"LogContextEnricher({names})"


def from_log_context(
    *stacks: ContextStack,
    property_factory: PropertyFactory | None = None,
) -> LogContextEnricher:
    """
    Register context stacks as an enrichment source.

    With no arguments, enriches from the ambient ``log_context`` first and the
    process-wide ``global_log_context`` second.
    """
    return LogContextEnricher(*(stacks or (log_context, global_log_context)), property_factory=property_factory)


__all__ = ["PropertyValueFactory", "LogContextEnricher", "from_log_context"]
