"""
Ambient log context: a stack of enrichers that logging picks up implicitly.

Producer code pushes properties (or arbitrary enrichers) and gets a Bookmark
back; anything logged while the bookmark is active carries those properties.
Disposing the bookmark restores the stack to exactly what it was.

Manifesto:
    - **Implicit, not global by accident:** the default ``log_context`` is
      flow-local (ContextVar), so concurrent requests and tasks never see
      each other's properties
    - **Global on purpose:** ``global_log_context`` is one shared cell for
      process-wide facts (app version, host); batch updates to it are
      serialized with its lock
    - **Snapshots are frozen:** the stack is persistent, so a read in flight
      is never disturbed by a concurrent push

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────┐
        │ ContextStack                                             │
        │   push / push_property / push_properties  ──► Bookmark   │
        │   suspend                                 ──► Bookmark   │
        │   reset, snapshot, enrich                                │
        │   lock / lock_async                       ──► LockToken  │
        ├──────────────────────────┬───────────────────────────────┤
        │ StackStorage             │ ScopeLock                     │
        │  AmbientStorage (var)    │  FIFO, threads + tasks        │
        │  SharedStorage  (cell)   │                               │
        └──────────────────────────┴───────────────────────────────┘

Examples:
    >>> from ambientlog.context import log_context, global_log_context
    >>> with log_context.push_property("A", 1):
    ...     with log_context.push_property("A", 2):
    ...         [e.value for e in log_context.snapshot()]
    [2, 1]

    >>> global_log_context.push_property("app_version", "1.4.2")  # no scope
    Bookmark(saved_count=0, active)

Ordering:
    ``enrich`` applies entries top-to-bottom (most recently pushed first).
    The built-in enrichers add a key only when it is absent, so the entry
    nearest the top wins; a custom event type may decide differently.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any

from ambientlog.context.bookmark import Bookmark
from ambientlog.context.enrichers import PropertyEnricher, require_enricher
from ambientlog.context.lock import LockToken, ScopeLock
from ambientlog.context.stack import EnricherStack
from ambientlog.context.storage import AmbientStorage, SharedStorage
from ambientlog.core.errors import InvalidArgumentError
from ambientlog.core.protocols import Enricher, PropertyFactory, StackStorage


class ContextStack:
    """
    A stack of enrichers behind one storage discipline.

    Args:
        storage: Where the current stack lives (ambient or shared)
        lock: Lock for caller-serialized sequences; a new one if omitted
        name: Used in reprs, error context and lock logs
    """

    def __init__(
        self,
        storage: StackStorage,
        *,
        lock: ScopeLock | None = None,
        name: str = "log_context",
    ):
        self.name = name
        self._storage = storage
        self._lock = lock or ScopeLock(name=f"{name}.lock")

    @property
    def storage(self) -> StackStorage:
        return self._storage

    @property
    def scope_lock(self) -> ScopeLock:
        return self._lock

    @property
    def depth(self) -> int:
        """Number of active entries in the current view."""
        return self._storage.get().count

    # ── Mutation ─────────────────────────────────────────────────

    def push(self, *enrichers: Enricher) -> Bookmark:
        """
        Push one or more enrichers; the last argument ends up on top.

        Returns one Bookmark for the whole batch: restoring it removes every
        enricher pushed here, along with anything pushed on top of them since.

        Raises:
            InvalidArgumentError: an argument is None or not an enricher.
                Nothing is pushed in that case.
        """
        for index, enricher in enumerate(enrichers):
            try:
                require_enricher(enricher)
            except InvalidArgumentError as e:
                raise e.with_context(stack=self.name, position=index)

        current = self._storage.get()
        bookmark = Bookmark(self._storage, current)

        stack = current
        for enricher in enrichers:
            stack = stack.push(enricher)
        self._storage.set(stack)

        return bookmark

    def push_property(self, name: str, value: Any, destructure: bool = False) -> Bookmark:
        """
        Push a single named property.

        Args:
            name: Property name
            value: Property value
            destructure: Convert non-primitive values to a structure instead
                of their string form

        Raises:
            InvalidArgumentError: ``name`` is empty or not a string
        """
        try:
            enricher = PropertyEnricher(name, value, destructure)
        except InvalidArgumentError as e:
            raise e.with_context(stack=self.name)
        return self.push(enricher)

    def push_properties(self, destructure: bool = False, /, **properties: Any) -> Bookmark:
        """
        Push several properties as one batch, in keyword order.

        Usage:
            with log_context.push_properties(tenant="acme", job_id=17):
                ...
        """
        try:
            enrichers = [PropertyEnricher(k, v, destructure) for k, v in properties.items()]
        except InvalidArgumentError as e:
            raise e.with_context(stack=self.name)
        return self.push(*enrichers)

    def suspend(self) -> Bookmark:
        """
        Hide every entry until the returned bookmark is restored.

        Entries are not discarded; restoring brings back the exact previous
        stack.
        """
        bookmark = Bookmark(self._storage, self._storage.get())
        self._storage.set(EnricherStack.EMPTY)
        return bookmark

    def reset(self) -> None:
        """
        Clear the current view unconditionally. Nothing is returned to undo it.

        Meant for flow boundaries (start of a request or job), not for scoped
        use. Bookmarks captured earlier still restore their own snapshot.
        """
        if self._storage.get() is not EnricherStack.EMPTY:
            self._storage.set(EnricherStack.EMPTY)

    # ── Read path ────────────────────────────────────────────────

    def snapshot(self) -> tuple[Enricher, ...]:
        """Current enrichers, most recently pushed first."""
        return tuple(self._storage.get())

    def enrich(self, event: MutableMapping[str, Any], property_factory: PropertyFactory) -> None:
        """Apply every current enricher to ``event``, top-to-bottom."""
        stack = self._storage.get()
        if stack is EnricherStack.EMPTY:
            return
        for enricher in stack:
            enricher.enrich(event, property_factory)

    # ── Serialization ────────────────────────────────────────────

    def lock(self) -> LockToken:
        """Block until this stack's lock is held."""
        return self._lock.acquire()

    async def lock_async(self) -> LockToken:
        """Wait (without blocking a thread) until this stack's lock is held."""
        return await self._lock.acquire_async()

    def __repr__(self) -> str:
        return f"ContextStack(name={self.name!r}, storage={self._storage!r}, depth={self.depth})"


# Flow-local view: each thread / task sees its own stack.
log_context = ContextStack(AmbientStorage("ambientlog_log_context"), name="log_context")

# Process-wide view: every flow sees the same stack.
global_log_context = ContextStack(SharedStorage(), name="global_log_context")


__all__ = ["ContextStack", "log_context", "global_log_context"]
