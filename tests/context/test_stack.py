"""Tests for the persistent EnricherStack."""

from __future__ import annotations

import dataclasses

import pytest

from ambientlog.context.enrichers import PropertyEnricher
from ambientlog.context.stack import EnricherStack


def prop(name, value):
    return PropertyEnricher(name, value)


class TestEnricherStack:
    def test_empty_sentinel(self):
        empty = EnricherStack.EMPTY
        assert empty.is_empty
        assert len(empty) == 0
        assert not empty
        assert list(empty) == []
        assert empty.peek() is None

    def test_push_returns_new_node(self):
        a = prop("A", 1)
        stack = EnricherStack.EMPTY.push(a)
        assert stack is not EnricherStack.EMPTY
        assert stack.tail is EnricherStack.EMPTY
        assert stack.peek() is a
        assert len(stack) == 1

    def test_iterates_top_to_bottom(self):
        a, b, c = prop("A", 1), prop("B", 2), prop("C", 3)
        stack = EnricherStack.EMPTY.push(a).push(b).push(c)
        assert list(stack) == [c, b, a]

    def test_older_nodes_are_unaffected_by_later_pushes(self):
        a, b = prop("A", 1), prop("B", 2)
        base = EnricherStack.EMPTY.push(a)
        left = base.push(b)
        right = base.push(prop("C", 3))

        assert list(base) == [a]
        assert left.tail is base and right.tail is base
        assert len(left) == len(right) == 2

    def test_nodes_are_frozen(self):
        stack = EnricherStack.EMPTY.push(prop("A", 1))
        with pytest.raises(dataclasses.FrozenInstanceError):
            stack.head = prop("B", 2)  # type: ignore[misc]

    def test_iteration_survives_concurrent_growth(self):
        stack = EnricherStack.EMPTY
        for i in range(5):
            stack = stack.push(prop(f"P{i}", i))
        it = iter(stack)
        first = next(it)
        stack.push(prop("late", 99))  # new node; the walk in progress is untouched
        rest = list(it)
        assert [e.name for e in [first, *rest]] == ["P4", "P3", "P2", "P1", "P0"]
