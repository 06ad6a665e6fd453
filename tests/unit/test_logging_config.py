"""Tests for logging setup and request correlation."""

from __future__ import annotations

import logging
import sys

import pytest

from toolkit_broker.logging_config import (
    RequestIdFilter,
    create_logger,
    get_request_id,
    request_id_ctx,
    setup_logging,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    def test_logs_to_stderr(self, restore_root_logger: None) -> None:
        root = setup_logging("debug")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert root.handlers[0].stream is sys.stderr  # type: ignore[attr-defined]

    def test_env_level(self, restore_root_logger: None, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOGGING_LEVEL", "WARNING")
        assert setup_logging().level == logging.WARNING


class TestRequestId:
    def test_filter_sets_placeholder(self) -> None:
        record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)
        RequestIdFilter().filter(record)
        assert record.request_id == "-"  # type: ignore[attr-defined]

    def test_filter_uses_context(self) -> None:
        token = request_id_ctx.set("req-1")
        try:
            record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)
            RequestIdFilter().filter(record)
            assert record.request_id == "req-1"  # type: ignore[attr-defined]
            assert get_request_id() == "req-1"
        finally:
            request_id_ctx.reset(token)

    def test_adapter_adds_request_id(self) -> None:
        logger = create_logger("toolkit_broker.test")
        token = request_id_ctx.set("req-2")
        try:
            _, kwargs = logger.process("hello", {})
        finally:
            request_id_ctx.reset(token)
        assert kwargs["extra"]["request_id"] == "req-2"
