"""
Persistent immutable stack of enrichers.

An EnricherStack is a singly-linked list node: pushing allocates one new node
whose tail is the previous stack, and popping is simply going back to a
reference that was held before. Nodes are frozen after construction, so a
reader holding any node walks a stable chain no matter what other flows push
afterwards. Many nodes may share the same tail.

Architecture:
    ::

        push(C) on [B, A]

            new ──► C
                    │ tail
            old ──► B ──► A ──► EMPTY

        ``old`` is untouched; a Bookmark holding it restores [B, A] exactly.

Performance:
    - push: O(1), one allocation
    - iteration: O(n), top-to-bottom
    - len(): O(1), the depth is stored on each node
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import ClassVar

from ambientlog.core.protocols import Enricher


@dataclass(frozen=True, slots=True, eq=False)
class EnricherStack:
    """
    One immutable node of the stack.

    ``EnricherStack.EMPTY`` is the canonical empty sentinel; compare against it
    with ``is`` (identity), never by value.
    """

    head: Enricher | None
    tail: EnricherStack | None
    count: int

    EMPTY: ClassVar[EnricherStack]

    @property
    def is_empty(self) -> bool:
        return self.count == 0

    def push(self, enricher: Enricher) -> EnricherStack:
        """Return a new stack with ``enricher`` on top of this one."""
        return EnricherStack(enricher, self, self.count + 1)

    def peek(self) -> Enricher | None:
        return self.head

    def __iter__(self) -> Iterator[Enricher]:
        node: EnricherStack | None = self
        while node is not None and node.count:
            yield node.head  # type: ignore[misc]
            node = node.tail

    def __len__(self) -> int:
        return self.count

    def __bool__(self) -> bool:
        return self.count > 0

    def __repr__(self) -> str:
        return f"EnricherStack(count={self.count})"


EnricherStack.EMPTY = EnricherStack(None, None, 0)


__all__ = ["EnricherStack"]
