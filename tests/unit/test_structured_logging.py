"""Tests for structured logging context."""

from unittest.mock import MagicMock
from uuid import uuid4

import pytest
import structlog
from structlog.testing import CapturingLogger

from src.rbac.core import config
from src.rbac.core.logging import (
    bind_request_context,
    bind_user_context,
    clear_request_context,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def capturing_logger():
    """Route structlog output into a capturing logger for the test."""
    cap_logger = CapturingLogger()
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
    bind_request_context("test-request-123")
    structlog.get_logger().info("test message")

    entries = capturing_logger.calls
    assert len(entries) == 1
    assert entries[0].kwargs["request_id"] == "test-request-123"


def test_bind_request_context_with_none(capturing_logger):
    bind_request_context(None)
    structlog.get_logger().info("test message")

    assert "request_id" not in capturing_logger.calls[0].kwargs


def test_bind_user_context_hides_email_by_default(capturing_logger):
    """Email is only logged when log_user_emails is enabled."""
    user_id = uuid4()
    tenant_id = uuid4()

    bind_user_context(user_id, tenant_id, "test@example.com")
    structlog.get_logger().info("test message")

    kwargs = capturing_logger.calls[0].kwargs
    assert kwargs["user_id"] == str(user_id)
    assert kwargs["tenant_id"] == str(tenant_id)
    assert "user_email" not in kwargs


def test_bind_user_context_with_email_logging_enabled(capturing_logger, monkeypatch):
    mock_settings = MagicMock()
    mock_settings.log_user_emails = True
    monkeypatch.setattr(config, "get_settings", lambda: mock_settings)

    bind_user_context(uuid4(), None, "test@example.com")
    structlog.get_logger().info("test message")

    kwargs = capturing_logger.calls[0].kwargs
    assert kwargs["user_email"] == "test@example.com"
    assert "tenant_id" not in kwargs


def test_clear_request_context(capturing_logger):
    bind_request_context("req-1")
    bind_user_context(uuid4())
    clear_request_context()
    structlog.get_logger().info("test message")

    kwargs = capturing_logger.calls[0].kwargs
    assert "request_id" not in kwargs
    assert "user_id" not in kwargs
