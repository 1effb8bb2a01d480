"""
ScopeLock: one binary lock with a blocking and a suspending entry point.

Pushes on a context stack do not need the lock to be individually correct.
The lock exists for callers that want a *sequence* of operations (push, log,
read back, pop) to run with no other flow's pushes interleaved.

Design:
    Threads and asyncio tasks wait in a single FIFO queue guarded by a
    ``threading.Lock``. Release hands ownership straight to the oldest
    waiter, so both entry points share the same fairness and mutual
    exclusion, and no late arrival can barge ahead of a queued waiter.

    - ``acquire()`` parks the calling thread on a ``threading.Event``.
    - ``acquire_async()`` awaits a future on the caller's event loop; the
      releasing thread resolves it with ``call_soon_threadsafe``. No worker
      thread is parked, and the waiter may come from any loop on any thread.

Guardrails:
    ❌ DON'T: acquire twice from the same flow (the lock is not re-entrant)
    ✅ DO: keep the critical section short; other threads are blocked

    ❌ DON'T: call ``acquire()`` from inside a running event loop
    ✅ DO: use ``await acquire_async()`` from coroutines
"""

from __future__ import annotations

import asyncio
import threading
from collections import deque
from types import TracebackType

import structlog

logger = structlog.get_logger(__name__)


class _ThreadWaiter:
    __slots__ = ("granted", "event")

    def __init__(self) -> None:
        self.granted = False
        self.event = threading.Event()

    def wake(self) -> bool:
        self.granted = True
        self.event.set()
        return True


class _TaskWaiter:
    __slots__ = ("granted", "loop", "future")

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self.granted = False
        self.loop = loop
        self.future: asyncio.Future[None] = loop.create_future()

    def wake(self) -> bool:
        try:
            self.loop.call_soon_threadsafe(self._resolve)
        except RuntimeError:
            # Loop already closed; nobody is left to resume this waiter.
            return False
        self.granted = True
        return True

    def _resolve(self) -> None:
        if not self.future.done():
            self.future.set_result(None)


class LockToken:
    """
    Handle for a held ScopeLock. Releasing it more than once is a no-op.

    Usage:
        with global_log_context.lock():
            ...

        with await global_log_context.lock_async():
            ...
    """

    __slots__ = ("_lock", "_released", "_guard")

    def __init__(self, lock: ScopeLock):
        self._lock = lock
        self._released = False
        self._guard = threading.Lock()

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        with self._guard:
            if self._released:
                return
            self._released = True
        self._lock._release()

    def __enter__(self) -> LockToken:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()

    async def __aenter__(self) -> LockToken:
        return self

    async def __aexit__(self, *args: object) -> None:
        self.release()

    def __repr__(self) -> str:
        return f"LockToken(released={self._released})"


class ScopeLock:
    """
    Binary, FIFO-fair lock usable from threads and asyncio tasks alike.

    Exactly one holder at a time, regardless of which entry point it used.
    """

    def __init__(self, name: str = "scope_lock"):
        self.name = name
        self._mutex = threading.Lock()
        self._locked = False
        self._waiters: deque[_ThreadWaiter | _TaskWaiter] = deque()

    def locked(self) -> bool:
        return self._locked

    @property
    def waiting(self) -> int:
        """Number of queued waiters (threads and tasks)."""
        return len(self._waiters)

    def acquire(self) -> LockToken:
        """Block the calling thread until the lock is held."""
        with self._mutex:
            if not self._locked:
                self._locked = True
                return LockToken(self)
            waiter = _ThreadWaiter()
            self._waiters.append(waiter)

        try:
            waiter.event.wait()
        except BaseException:
            with self._mutex:
                granted = waiter.granted
                if not granted:
                    self._waiters.remove(waiter)
            logger.debug("scope_lock.wait_interrupted", lock=self.name, granted=granted)
            if granted:
                self._release()
            raise
        return LockToken(self)

    async def acquire_async(self) -> LockToken:
        """Suspend the current task (never a thread) until the lock is held."""
        loop = asyncio.get_running_loop()
        with self._mutex:
            if not self._locked:
                self._locked = True
                return LockToken(self)
            waiter = _TaskWaiter(loop)
            self._waiters.append(waiter)

        try:
            await waiter.future
        except asyncio.CancelledError:
            with self._mutex:
                granted = waiter.granted
                if not granted:
                    self._waiters.remove(waiter)
            logger.debug("scope_lock.wait_cancelled", lock=self.name, granted=granted)
            if granted:
                # Ownership was handed over while we were being cancelled; pass it on.
                self._release()
            raise
        return LockToken(self)

    def _release(self) -> None:
        with self._mutex:
            while self._waiters:
                waiter = self._waiters.popleft()
                if waiter.wake():
                    return
            self._locked = False

    # Convenience: ``with lock:`` / ``async with lock:`` without a token.
    def __enter__(self) -> ScopeLock:
        self.acquire()
        return self

    def __exit__(self, *args: object) -> None:
        self._release()

    async def __aenter__(self) -> ScopeLock:
        await self.acquire_async()
        return self

    async def __aexit__(self, *args: object) -> None:
        self._release()

    def __repr__(self) -> str:
        return f"ScopeLock(name={self.name!r}, locked={self._locked}, waiting={len(self._waiters)})"


__all__ = ["ScopeLock", "LockToken"]
