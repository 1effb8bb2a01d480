"""Bookmarks: scoped restoration of a context stack."""

from __future__ import annotations

import threading
from types import TracebackType

from ambientlog.context.stack import EnricherStack
from ambientlog.core.protocols import StackStorage


class Bookmark:
    """
    Captures the stack as it was and puts it back on release.

    Restoration is unconditional: whatever was pushed or popped through other
    paths in between, ``restore()`` sets the storage back to the captured
    node. Restoring out of LIFO order is legal and yields "the stack as of
    this bookmark's capture". Only the first ``restore()`` has an effect.

    Usage:
        with log_context.push_property("user_id", 42):
            log.info("has user_id")

        bookmark = log_context.push_property("step", "load")
        try:
            ...
        finally:
            bookmark.restore()
    """

    __slots__ = ("_storage", "_saved", "_released", "_guard")

    def __init__(self, storage: StackStorage, saved: EnricherStack):
        self._storage = storage
        self._saved = saved
        self._released = False
        self._guard = threading.Lock()

    @property
    def saved(self) -> EnricherStack:
        return self._saved

    @property
    def released(self) -> bool:
        return self._released

    def restore(self) -> None:
        with self._guard:
            if self._released:
                return
            self._released = True
        self._storage.set(self._saved)

    def __enter__(self) -> Bookmark:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.restore()

    async def __aenter__(self) -> Bookmark:
        return self

    async def __aexit__(self, *args: object) -> None:
        self.restore()

    def __repr__(self) -> str:
        state = "released" if self._released else "active"
        return f"Bookmark(saved_count={self._saved.count}, {state})"


__all__ = ["Bookmark"]
