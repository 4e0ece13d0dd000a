"""Tests for the structured logging system (inventory_kernel/logging_config.py)."""

import json
import logging
from datetime import UTC, datetime
from io import StringIO
from pathlib import Path

import pytest

from inventory_engines.diagnostics.types import CheckStatus
from inventory_kernel.exceptions import DiagnosticTimeoutError
from inventory_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    get_logger,
    reset_logging,
)


@pytest.fixture(autouse=True)
def _clean_logging():
    """Reset logging state between tests."""
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()
    configure_logging(level=logging.DEBUG)


def _make_handler() -> tuple[logging.Handler, StringIO]:
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    return handler, stream


def _parse_log(stream: StringIO) -> dict:
    """Parse the first JSON log line from a stream."""
    line = stream.getvalue().strip().split("\n")[0]
    return json.loads(line)


def _parse_all_logs(stream: StringIO) -> list[dict]:
    """Parse all JSON log lines from a stream."""
    lines = stream.getvalue().strip().split("\n")
    return [json.loads(line) for line in lines if line]


# ---------------------------------------------------------------------------
# StructuredFormatter tests
# ---------------------------------------------------------------------------


class TestStructuredFormatter:
    """Tests for JSON log output format."""

    def test_basic_json_output(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        logger = get_logger("test")
        logger.info("hello")

        record = _parse_log(stream)
        assert record["level"] == "INFO"
        assert record["message"] == "hello"
        assert record["logger"] == "inventory_kernel.test"
        assert "ts" in record

    def test_extra_fields_included(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        logger = get_logger("test")
        logger.info("checked", extra={"evidence_count": 3, "status": "FAIL"})

        record = _parse_log(stream)
        assert record["evidence_count"] == 3
        assert record["status"] == "FAIL"

    def test_context_fields_included(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        logger = get_logger("test")
        with LogContext.bind(run_id="run-1", check_id="inventory_sync"):
            logger.info("test_msg")

        record = _parse_log(stream)
        assert record["run_id"] == "run-1"
        assert record["check_id"] == "inventory_sync"

    def test_exception_fields(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        logger = get_logger("test")
        try:
            raise ValueError("boom")
        except ValueError:
            logger.error("failed", exc_info=True)

        record = _parse_log(stream)
        assert record["exc_type"] == "ValueError"
        assert record["exc_message"] == "boom"
        assert "traceback" in record

    def test_kernel_exception_code_extracted(self):
        """Kernel exceptions carry a .code attribute and structured fields."""
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        logger = get_logger("test")
        from inventory_kernel.exceptions import GatewayQueryError

        try:
            raise GatewayQueryError("list_parts", "no such table: parts")
        except GatewayQueryError:
            logger.error("gateway_error", exc_info=True)

        record = _parse_log(stream)
        assert record["exc_code"] == "GATEWAY_QUERY_FAILED"
        assert record["exc_type"] == "GatewayQueryError"
        assert record["exc_operation"] == "list_parts"
        assert record["exc_reason"] == "no such table: parts"

    def test_no_context_fields_when_empty(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        logger = get_logger("test")
        logger.info("bare_message")

        record = _parse_log(stream)
        assert "run_id" not in record
        assert "check_id" not in record

    def test_non_json_values_serialized(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        logger = get_logger("test")
        logger.info("typed", extra={
            "generated_at": datetime(2024, 1, 1, tzinfo=UTC),
            "overall": CheckStatus.WARNING,
            "config_path": Path("/etc/inventory/diagnostics.yaml"),
        })

        record = _parse_log(stream)
        assert record["generated_at"] == "2024-01-01T00:00:00+00:00"
        assert record["overall"] == "WARNING"
        assert record["config_path"] == "/etc/inventory/diagnostics.yaml"

    def test_abort_pending_checks_serialized(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        logger = get_logger("test")
        try:
            raise DiagnosticTimeoutError(2.0, ("inventory_sync", "duplicate_records"))
        except DiagnosticTimeoutError:
            logger.warning("aborted", exc_info=True)

        record = _parse_log(stream)
        assert record["exc_code"] == "DIAGNOSTIC_TIMEOUT"
        assert record["exc_pending_checks"] == ["inventory_sync", "duplicate_records"]
        assert record["exc_timeout_seconds"] == 2.0

    def test_valid_json_every_line(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        logger = get_logger("test")
        logger.info("first")
        logger.warning("second", extra={"k": "v"})
        logger.debug("third")

        logs = _parse_all_logs(stream)
        # Default level is INFO, so the debug record is dropped
        assert len(logs) == 2
        for record in logs:
            assert "ts" in record
            assert "level" in record
            assert "logger" in record
            assert "message" in record


# ---------------------------------------------------------------------------
# LogContext tests
# ---------------------------------------------------------------------------


class TestLogContext:
    """Tests for context propagation."""

    def test_bind_and_get(self):
        with LogContext.bind(run_id="y", check_id="x"):
            assert LogContext.get_all() == {"run_id": "y", "check_id": "x"}
        assert LogContext.get_all() == {}

    def test_clear(self):
        with LogContext.bind(run_id="x"):
            LogContext.clear()
            assert LogContext.get_all() == {}

    def test_nested_bind_restores_outer(self):
        with LogContext.bind(run_id="outer"):
            with LogContext.bind(run_id="inner"):
                assert LogContext.get_all()["run_id"] == "inner"
            assert LogContext.get_all()["run_id"] == "outer"

    def test_bind_restores_on_error(self):
        with pytest.raises(RuntimeError):
            with LogContext.bind(check_id="temp"):
                raise RuntimeError("boom")
        assert "check_id" not in LogContext.get_all()

    def test_unknown_field_rejected(self):
        with pytest.raises(ValueError, match="actor_id"):
            with LogContext.bind(actor_id="a"):
                pass


# ---------------------------------------------------------------------------
# configure_logging tests
# ---------------------------------------------------------------------------


class TestConfigureLogging:
    """Tests for initialization."""

    def test_idempotent(self):
        h1, _ = _make_handler()
        configure_logging(handler=h1)
        h2, _ = _make_handler()
        configure_logging(handler=h2)  # second call is no-op
        root = logging.getLogger("inventory_kernel")
        assert len(root.handlers) == 1

    def test_get_logger_returns_child(self):
        logger = get_logger("services.diagnostic_runner")
        assert logger.name == "inventory_kernel.services.diagnostic_runner"

    def test_logger_hierarchy(self):
        """Child loggers inherit the inventory_kernel root config."""
        handler, stream = _make_handler()
        configure_logging(handler=handler, level=logging.DEBUG)
        child = get_logger("deep.nested.module")
        child.debug("hierarchy_test")

        record = _parse_log(stream)
        assert record["message"] == "hierarchy_test"
        assert record["logger"] == "inventory_kernel.deep.nested.module"
