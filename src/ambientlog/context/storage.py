"""
Storage disciplines for the "current stack" slot.

Two disciplines sit behind the same StackStorage protocol and must not be
conflated:

- AmbientStorage keeps the current stack in a ContextVar. Every thread starts
  with its own empty view; every asyncio task inherits the view that was
  current when it was created, and what it pushes afterwards stays in that
  task and its descendants. Threads inherit a view only when started through
  ``ambientlog.context.propagation``.
- SharedStorage keeps one process-wide cell. Every flow sees every push;
  callers that need a multi-step update to be atomic serialize on the
  ScopeLock of the owning ContextStack.

Both perform a single reference replacement per mutation. On the shared cell
two unserialized pushes can race (the later replacement is built on a stale
base and wins); that is accepted and is what the lock is for.
"""

from __future__ import annotations

from contextvars import ContextVar

from ambientlog.context.stack import EnricherStack


class AmbientStorage:
    """Flow-local storage backed by a ContextVar."""

    __slots__ = ("_var",)

    def __init__(self, name: str = "ambientlog_log_context"):
        self._var: ContextVar[EnricherStack] = ContextVar(name, default=EnricherStack.EMPTY)  # noqa: B039

    @property
    def name(self) -> str:
        return self._var.name

    def get(self) -> EnricherStack:
        return self._var.get()

    def set(self, stack: EnricherStack) -> None:
        self._var.set(stack)

    def __repr__(self) -> str:
        return f"AmbientStorage(name={self.name!r})"


class SharedStorage:
    """Process-wide storage: one cell visible to every thread and task."""

    __slots__ = ("_stack",)

    def __init__(self) -> None:
        self._stack = EnricherStack.EMPTY

    def get(self) -> EnricherStack:
        return self._stack

    def set(self, stack: EnricherStack) -> None:
        self._stack = stack

    def __repr__(self) -> str:
        return f"SharedStorage(count={self._stack.count})"


__all__ = ["AmbientStorage", "SharedStorage"]
