"""
Carrying the ambient log context into threads and executors.

asyncio already does the right thing: ``create_task``, ``gather`` and
``asyncio.to_thread`` run their work in a copy of the caller's context, so
children start from the parent's view and never leak pushes back.

Plain threads do not: a ``threading.Thread`` starts with an empty context,
and ``ThreadPoolExecutor.submit`` / ``loop.run_in_executor`` run work in
whatever context the worker happens to have. The helpers here copy the
caller's context at fork time instead.

Usage:
    with log_context.push_property("job_id", 17):
        FlowThread(target=work).start()            # sees job_id
        with FlowPoolExecutor(max_workers=4) as pool:
            pool.submit(work)                      # sees job_id
        threading.Thread(target=flow_bound(work)).start()
"""

from __future__ import annotations

import contextvars
import functools
import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, TypeVar

T = TypeVar("T")


def flow_bound(fn: Callable[..., T]) -> Callable[..., T]:
    """
    Bind ``fn`` to a copy of the caller's context, captured now.

    Each call runs in its own fresh copy of that snapshot, so two concurrent
    calls never share pushes with each other.
    """
    ctx = contextvars.copy_context()

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        return ctx.copy().run(fn, *args, **kwargs)

    return wrapper


class FlowThread(threading.Thread):
    """A Thread whose target runs in a copy of the creating thread's context."""

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._flow_context = contextvars.copy_context()

    def run(self) -> None:
        self._flow_context.run(super().run)


class FlowPoolExecutor(ThreadPoolExecutor):
    """A ThreadPoolExecutor that propagates the submitter's context to workers."""

    def submit(self, fn: Callable[..., T], /, *args: Any, **kwargs: Any) -> Future[T]:
        ctx = contextvars.copy_context()
        return super().submit(ctx.run, fn, *args, **kwargs)


__all__ = ["flow_bound", "FlowThread", "FlowPoolExecutor"]
