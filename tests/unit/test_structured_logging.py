"""Tests for structured logging context."""

from unittest.mock import MagicMock
from uuid import uuid4

import pytest
import structlog
from structlog.testing import CapturingLogger

from src.teamhub.core.logging import (
    bind_request_context,
    bind_user_context,
    clear_request_context,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def capturing_logger():
    """Create a capturing logger for tests."""
    cap_logger = CapturingLogger()

    # Save original configuration to restore later
    old_config = structlog.get_config()

    structlog.configure(
        processors=[structlog.contextvars.merge_contextvars],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=lambda *args, **kwargs: cap_logger,
        cache_logger_on_first_use=False,
    )

    clear_request_context()
    yield cap_logger
    clear_request_context()
    structlog.configure(**old_config)


def test_bind_request_context(capturing_logger):
    """Test binding request_id to log context."""
    bind_request_context("test-request-123")
    structlog.get_logger().info("test message")

    entries = capturing_logger.calls
    assert len(entries) == 1
    assert entries[0].kwargs["request_id"] == "test-request-123"


def test_bind_request_context_with_none(capturing_logger):
    """Test that None request_id is not bound."""
    bind_request_context(None)
    structlog.get_logger().info("test message")

    entries = capturing_logger.calls
    assert len(entries) == 1
    assert "request_id" not in entries[0].kwargs


def test_bind_request_route(capturing_logger):
    bind_request_context("test-request-123", "PATCH", "/api/files/abc/move")
    structlog.get_logger().info("test message")

    entry = capturing_logger.calls[0].kwargs
    assert entry["http_method"] == "PATCH"
    assert entry["http_path"] == "/api/files/abc/move"


def test_bind_user_context(capturing_logger):
    """User id and access level are bound; email is withheld by default."""
    user_id = uuid4()

    bind_user_context(user_id, 2, "kim@example.com")
    structlog.get_logger().info("test message")

    entries = capturing_logger.calls
    assert len(entries) == 1
    assert entries[0].kwargs["user_id"] == str(user_id)
    assert entries[0].kwargs["access_level"] == 2
    assert "user_email" not in entries[0].kwargs


def test_bind_user_context_with_email_logging_enabled(capturing_logger, monkeypatch):
    from src.teamhub.core import config

    mock_settings = MagicMock()
    mock_settings.log_user_emails = True
    monkeypatch.setattr(config, "get_settings", lambda: mock_settings)

    bind_user_context(uuid4(), 0, "admin@example.com")
    structlog.get_logger().info("test message")

    entries = capturing_logger.calls
    assert entries[0].kwargs["access_level"] == 0
    assert entries[0].kwargs["user_email"] == "admin@example.com"


def test_clear_request_context(capturing_logger):
    bind_request_context("test-request-123")
    bind_user_context(uuid4(), 1)

    clear_request_context()

    structlog.get_logger().info("test message")
    entries = capturing_logger.calls
    assert len(entries) == 1
    assert "request_id" not in entries[0].kwargs
    assert "user_id" not in entries[0].kwargs
    assert "access_level" not in entries[0].kwargs


def test_context_accumulation(capturing_logger):
    """Test that context accumulates across multiple bind calls."""
    user_id = uuid4()

    bind_request_context("test-request-123")
    bind_user_context(user_id, 1)

    structlog.get_logger().info("test message")
    entries = capturing_logger.calls
    assert len(entries) == 1
    assert entries[0].kwargs["request_id"] == "test-request-123"
    assert entries[0].kwargs["user_id"] == str(user_id)
    assert entries[0].kwargs["access_level"] == 1
