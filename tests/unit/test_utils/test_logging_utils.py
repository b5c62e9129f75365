"""Tests for structured logging utilities."""

import pytest
from unittest.mock import MagicMock, Mock, patch

from src.utils.logging import (
    StructuredLogger,
    correlation_context,
    generate_correlation_id,
    get_correlation_id,
    log_timing,
    mask_payload,
    mask_sensitive_data,
    mask_user_id,
    timed,
)
from src.utils.logging_config import LoggingConfig


@pytest.mark.unit
def test_generate_correlation_id_format():
    correlation_id = generate_correlation_id()
    assert correlation_id.startswith("req_")
    assert len(correlation_id) == 16


@pytest.mark.unit
def test_correlation_context_scopes_id():
    assert get_correlation_id() is None

    with correlation_context("req_outer"):
        assert get_correlation_id() == "req_outer"
        with correlation_context() as inner:
            assert get_correlation_id() == inner
        assert get_correlation_id() == "req_outer"

    assert get_correlation_id() is None


@pytest.mark.unit
def test_mask_sensitive_data():
    text = "Contact jane@example.com or 415-555-0134, api_key=abcdefghijklmnopqrstuvwxyz"

    masked = mask_sensitive_data(text)

    assert "jane@example.com" not in masked
    assert "[REDACTED_EMAIL]" in masked
    assert "[REDACTED_PHONE]" in masked
    assert "abcdefghijklmnopqrstuvwxyz" not in masked


@pytest.mark.unit
def test_mask_user_id_hashes_long_ids():
    assert mask_user_id("user1") == "user1"

    masked = mask_user_id("0x1234567890abcdef1234")
    assert masked.startswith("0x12...")
    assert len(masked) == 15


@pytest.mark.unit
def test_mask_payload_redacts_sensitive_keys():
    masked = mask_payload({"email": "a@b.co", "name": "Jane", "note": "call a@b.co", "count": 3})

    assert masked["email"] == "[REDACTED]"
    assert masked["name"] == "Jane"
    assert masked["note"] == "call [REDACTED_EMAIL]"
    assert masked["count"] == 3


@pytest.mark.unit
def test_masking_can_be_disabled():
    with patch.object(LoggingConfig, "LOG_MASK_SENSITIVE", False):
        assert mask_sensitive_data("jane@example.com") == "jane@example.com"
        assert mask_payload({"email": "a@b.co"}) == {"email": "a@b.co"}


@pytest.mark.unit
def test_structured_logger_passes_fields_as_extra():
    base = MagicMock()
    logger = StructuredLogger(base)

    with correlation_context("req_123"):
        logger.info("Note created", note_id="note-1")

    args, kwargs = base.info.call_args
    assert args == ("Note created",)
    assert kwargs["extra"]["note_id"] == "note-1"
    assert kwargs["extra"]["correlation_id"] == "req_123"
    assert "timestamp" in kwargs["extra"]


@pytest.mark.unit
def test_log_timing_warns_on_slow_operations():
    logger = Mock()

    with patch.object(LoggingConfig, "LOG_SLOW_OPERATION_THRESHOLD_MS", -1):
        with log_timing("market.analysis", logger=logger, location="Austin, TX"):
            pass

    logger.debug.assert_called_once()
    assert logger.info.call_args.kwargs["operation"] == "market.analysis"
    assert logger.warning.call_args.kwargs["location"] == "Austin, TX"


@pytest.mark.unit
def test_timed_wraps_sync_functions():
    logger = Mock()

    @timed("double", logger=logger)
    def double(value):
        return value * 2

    assert double(4) == 8
    assert logger.info.call_args.kwargs["operation"] == "double"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_timed_wraps_async_functions():
    logger = Mock()

    @timed(logger=logger)
    async def fetch():
        return "done"

    assert await fetch() == "done"
    assert logger.info.call_args.kwargs["operation"].endswith(".fetch")
