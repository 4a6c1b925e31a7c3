"""
Tests for logging setup.
"""

import pytest
import structlog

from boothbook.core import logging as app_logging


@pytest.mark.parametrize(
    "log_format,environment,expected",
    [
        ("auto", "production", True),
        ("auto", "development", False),
        ("json", "development", True),
        ("console", "production", False),
    ],
)
def test_render_mode(log_format, environment, expected):
    assert app_logging._use_json(log_format, environment) is expected


def test_setup_is_idempotent():
    app_logging.setup_logging()
    app_logging.setup_logging()
    assert app_logging._configured is True


def test_service_context_does_not_override_bound_values():
    event = app_logging._add_service_context(None, "info", {"event": "x", "env": "custom"})
    assert event["env"] == "custom"
    assert "service" in event


def test_request_context_is_merged():
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id="abc123")
    try:
        event = structlog.contextvars.merge_contextvars(None, "info", {"event": "x"})
        assert event["request_id"] == "abc123"
    finally:
        structlog.contextvars.clear_contextvars()
