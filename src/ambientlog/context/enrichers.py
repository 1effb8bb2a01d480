"""Enrichers: the entries that live on a context stack."""

from __future__ import annotations

from collections.abc import Callable, MutableMapping
from dataclasses import dataclass
from typing import Any

from ambientlog.core.errors import InvalidArgumentError
from ambientlog.core.protocols import Enricher, PropertyFactory


@dataclass(frozen=True, slots=True)
class PropertyEnricher:
    """
    Adds a single named property to the event, unless the event already has it.

    Args:
        name: Property name (non-empty string)
        value: Raw value; converted by the property factory at enrichment time
        destructure: If True and the value is a non-primitive object, it is
            converted to a structure instead of its string form
    """

    name: str
    value: Any
    destructure: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidArgumentError(
                "Property name must be a non-empty string",
                argument="name",
                value=self.name,
            )

    def enrich(self, event: MutableMapping[str, Any], property_factory: PropertyFactory) -> None:
        if self.name in event:
            return
        name, value = property_factory.create_property(self.name, self.value, self.destructure)
        event.setdefault(name, value)


@dataclass(frozen=True, slots=True)
class CallableEnricher:
    """
    Wraps a plain function ``fn(event, property_factory)`` as an enricher.

    Useful for values computed at log time (thread name, elapsed time, ...).
    """

    fn: Callable[[MutableMapping[str, Any], PropertyFactory], None]

    def __post_init__(self) -> None:
        if not callable(self.fn):
            raise InvalidArgumentError("Enricher function must be callable", argument="fn", value=self.fn)

    def enrich(self, event: MutableMapping[str, Any], property_factory: PropertyFactory) -> None:
        self.fn(event, property_factory)


def is_enricher(obj: Any) -> bool:
    # Classes pass the protocol check through their unbound ``enrich``.
    if obj is None or isinstance(obj, type):
        return False
    return isinstance(obj, Enricher) and callable(obj.enrich)


def require_enricher(obj: Any, argument: str = "enricher") -> Enricher:
    """Return ``obj`` if it is an enricher, else raise InvalidArgumentError."""
    if obj is None:
        raise InvalidArgumentError(f"{argument} must not be None", argument=argument)
    if not is_enricher(obj):
        raise InvalidArgumentError(
            f"{argument} must provide an enrich(event, property_factory) method",
            argument=argument,
            value=obj,
        )
    return obj


__all__ = ["PropertyEnricher", "CallableEnricher", "is_enricher", "require_enricher"]
