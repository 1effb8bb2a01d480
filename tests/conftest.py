"""
Shared pytest fixtures for ambientlog tests.

This module provides:
- Isolation: both context stacks are cleared around every test
- structlog reset so configure_logging tests don't leak into each other
- A capturing logger factory that returns processed event dicts

Usage:
    def test_something(make_logger):
        log = make_logger(log_context)
        event = log.info("hello")
        assert event["A"] == 1
"""

from pathlib import Path

import pytest
import structlog

import ambientlog.framework.logging.config as log_config
from ambientlog.context import ContextStack, global_log_context, log_context
from ambientlog.framework.logging import LogContextEnricher


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.fspath).relative_to(Path(__file__).parent)

        if "api" in test_path.parts:
            item.add_marker(pytest.mark.integration)

        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration", "slow"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_context():
    """Start and finish every test with empty stacks."""
    log_context.reset()
    global_log_context.reset()
    yield
    log_context.reset()
    global_log_context.reset()


@pytest.fixture(autouse=True)
def clean_structlog():
    """Undo configure_logging() between tests."""
    log_config._configured = False
    yield
    log_config._configured = False
    structlog.reset_defaults()


# =============================================================================
# Logger Fixtures
# =============================================================================


@pytest.fixture
def make_logger():
    """
    Factory for loggers whose calls return the final event dict.

    ``make_logger()`` enriches from the ambient stack then the global stack;
    pass stacks explicitly to restrict it.
    """

    def _make(*stacks: ContextStack, **kwargs):
        enricher = LogContextEnricher(*(stacks or (log_context, global_log_context)), **kwargs)
        return structlog.wrap_logger(
            structlog.ReturnLogger(),
            # ReturnLogger hands back a lone positional argument as-is.
            processors=[enricher, lambda _, __, event_dict: ((event_dict,), {})],
            wrapper_class=structlog.BoundLogger,
            cache_logger_on_first_use=False,
        )

    return _make
