"""Tests for PropertyEnricher / CallableEnricher."""

from __future__ import annotations

import pytest

from ambientlog.context.enrichers import CallableEnricher, PropertyEnricher, is_enricher, require_enricher
from ambientlog.core.errors import InvalidArgumentError
from ambientlog.framework.logging.processors import PropertyValueFactory


@pytest.fixture
def factory():
    return PropertyValueFactory()


class TestPropertyEnricher:
    def test_adds_absent_property(self, factory):
        event = {}
        PropertyEnricher("A", 1).enrich(event, factory)
        assert event == {"A": 1}

    def test_does_not_overwrite_existing_key(self, factory):
        event = {"A": "explicit"}
        PropertyEnricher("A", 1).enrich(event, factory)
        assert event == {"A": "explicit"}

    def test_destructure_hint_reaches_factory(self):
        class Recorder:
            def create_property(self, name, value, destructure=False):
                self.seen = (name, value, destructure)
                return name, value

        recorder = Recorder()
        PropertyEnricher("user", {"id": 1}, destructure=True).enrich({}, recorder)
        assert recorder.seen == ("user", {"id": 1}, True)

    @pytest.mark.parametrize("name", [None, "", "   ", 42])
    def test_invalid_name(self, name):
        with pytest.raises(InvalidArgumentError) as exc_info:
            PropertyEnricher(name, 1)
        assert exc_info.value.context.argument == "name"


class TestCallableEnricher:
    def test_calls_function(self, factory):
        def add_thread(event, property_factory):
            event.setdefault("thread", "main")

        event = {}
        CallableEnricher(add_thread).enrich(event, factory)
        assert event == {"thread": "main"}

    def test_rejects_non_callable(self):
        with pytest.raises(InvalidArgumentError):
            CallableEnricher("not callable")  # type: ignore[arg-type]


class TestRequireEnricher:
    def test_accepts_duck_typed_enricher(self):
        class Custom:
            def enrich(self, event, property_factory):
                pass

        custom = Custom()
        assert is_enricher(custom)
        assert require_enricher(custom) is custom

    def test_rejects_none(self):
        with pytest.raises(InvalidArgumentError, match="must not be None"):
            require_enricher(None)

    def test_rejects_object_without_enrich(self):
        with pytest.raises(InvalidArgumentError, match="enrich"):
            require_enricher(object())

    def test_rejects_enricher_class(self):
        assert not is_enricher(PropertyEnricher)
        with pytest.raises(InvalidArgumentError, match="enrich"):
            require_enricher(PropertyEnricher)

    def test_rejects_non_callable_enrich(self):
        class Broken:
            enrich = 5

        assert not is_enricher(Broken())
        with pytest.raises(InvalidArgumentError, match="enrich"):
            require_enricher(Broken())
