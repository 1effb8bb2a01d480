"""Tests for ambientlog.framework.logging.config.

Covers:
- is_configured() / is_debug_enabled()
- configure_logging idempotency (second call no-op without force)
- JSON renderer output carrying context properties
- invalid level / format handling
- settings-driven defaults
"""

import json
import logging

import pytest
import structlog

from ambientlog.context import global_log_context, log_context
from ambientlog.core.errors import InvalidConfigError
from ambientlog.core.settings import LogContextSettings
from ambientlog.framework.logging import (
    LogContextEnricher,
    build_processors,
    configure_logging,
    get_logger,
    is_configured,
    is_debug_enabled,
)


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """configure_logging() replaces root handlers; put them back afterwards."""
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


@pytest.fixture
def settings():
    return LogContextSettings(_env_file=None, log_level="INFO", log_format="console", service_name="test-svc")


class TestIsConfigured:
    def test_not_configured_initially(self):
        assert is_configured() is False

    def test_configured_after_call(self, settings):
        configure_logging(settings=settings)
        assert is_configured() is True


class TestIsDebugEnabled:
    def test_debug_enabled_at_debug_level(self, settings):
        configure_logging(level="DEBUG", settings=settings, force=True)
        assert is_debug_enabled() is True

    def test_debug_not_enabled_at_info(self, settings):
        configure_logging(level="INFO", settings=settings, force=True)
        assert is_debug_enabled() is False


class TestIdempotency:
    def test_second_call_is_no_op(self, settings):
        configure_logging(format="console", settings=settings)
        processors = structlog.get_config()["processors"]
        configure_logging(format="json", settings=settings)
        assert structlog.get_config()["processors"] is processors

    def test_force_reconfigures(self, settings):
        configure_logging(format="console", settings=settings)
        configure_logging(format="json", settings=settings, force=True)
        assert isinstance(structlog.get_config()["processors"][-1], structlog.processors.JSONRenderer)


class TestValidation:
    def test_unknown_format(self, settings):
        with pytest.raises(InvalidConfigError) as exc_info:
            configure_logging(format="xml", settings=settings)
        assert exc_info.value.setting == "log_format"
        assert is_configured() is False

    def test_unknown_level(self, settings):
        with pytest.raises(InvalidConfigError):
            configure_logging(level="LOUD", settings=settings)


class TestBuildProcessors:
    def test_context_enricher_is_installed(self):
        processors = build_processors("console", "svc")
        enrichers = [p for p in processors if isinstance(p, LogContextEnricher)]
        assert len(enrichers) == 1
        assert enrichers[0].stacks == (log_context, global_log_context)

    def test_custom_stacks(self):
        processors = build_processors("json", "svc", global_log_context)
        (enricher,) = [p for p in processors if isinstance(p, LogContextEnricher)]
        assert enricher.stacks == (global_log_context,)

    def test_destructure_depth_is_passed_through(self):
        processors = build_processors("json", "svc", max_destructure_depth=3)
        (enricher,) = [p for p in processors if isinstance(p, LogContextEnricher)]
        assert enricher.property_factory.max_depth == 3


class TestJsonOutput:
    def test_events_carry_context_and_service(self, capsys):
        settings = LogContextSettings(_env_file=None, log_format="json", service_name="billing")
        configure_logging(settings=settings, force=True)

        global_log_context.push_property("app_version", "1.4.2")
        with log_context.push_property("request_id", "r-17"):
            get_logger("ambientlog.tests").info("handled", items=3)

        line = capsys.readouterr().err.strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["event"] == "handled"
        assert payload["items"] == 3
        assert payload["request_id"] == "r-17"
        assert payload["app_version"] == "1.4.2"
        assert payload["service.name"] == "billing"
        assert payload["level"] == "info"
