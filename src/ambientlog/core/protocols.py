"""
Structural protocols shared across ambientlog.

Protocols define contracts without inheritance: anything with an ``enrich``
method can sit on a context stack, and anything with ``get``/``set`` can hold
the current stack reference.

Architecture:
    ::

        protocols.py
        ├── Enricher          - one entry on a context stack
        ├── PropertyFactory   - framework-supplied value converter
        └── StackStorage      - the mutable "current stack" slot

    Consumers:
        context/log_context.py, context/bookmark.py, context/enrichers.py,
        framework/logging/processors.py
"""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ambientlog.context.stack import EnricherStack


@runtime_checkable
class PropertyFactory(Protocol):
    """Converts a raw pushed value into what the event record stores."""

    def create_property(
        self, name: str, value: Any, destructure: bool = False
    ) -> tuple[str, Any]: ...


@runtime_checkable
class Enricher(Protocol):
    """
    An immutable enrichment unit.

    ``enrich`` writes into the outgoing event. The event decides what a
    repeated key means; the built-in enrichers only add keys that are absent.
    """

    def enrich(
        self, event: MutableMapping[str, Any], property_factory: PropertyFactory
    ) -> None: ...


@runtime_checkable
class StackStorage(Protocol):
    """Holds the current EnricherStack for one storage discipline."""

    def get(self) -> EnricherStack: ...

    def set(self, stack: EnricherStack) -> None: ...


__all__ = ["Enricher", "PropertyFactory", "StackStorage"]
