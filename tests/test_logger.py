"""
Unit Tests - Structured logging and audit events
"""
import io
import json
import logging

import pytest

from expense_approval.logger import JSONFormatter, StructuredLogger
from expense_approval.utils.audit import log_audit_event


class TestJSONFormatter:
    """Tests for JSON log records"""

    @pytest.mark.unit
    def test_basic_fields(self):
        record = logging.LogRecord(
            name="expense_approval.engine", level=logging.INFO, pathname=__file__,
            lineno=1, msg="Expense %s approved", args=("abc",), exc_info=None,
        )
        entry = json.loads(JSONFormatter().format(record))
        assert entry["level"] == "INFO"
        assert entry["logger_name"] == "expense_approval.engine"
        assert entry["message"] == "Expense abc approved"
        assert "extra" not in entry

    @pytest.mark.unit
    def test_extra_fields(self):
        record = logging.LogRecord(
            name="x", level=logging.INFO, pathname=__file__,
            lineno=1, msg="ready", args=(), exc_info=None,
        )
        record.threshold = "1000"
        entry = json.loads(JSONFormatter().format(record))
        assert entry["extra"] == {"threshold": "1000"}


class TestStructuredLogger:
    """Tests for the injectable logger"""

    @pytest.mark.unit
    def test_writes_json_lines(self, request):
        stream = io.StringIO()
        log = StructuredLogger(name=f"tests.logger.{request.node.name}", stream=stream)
        log.info("Expense %s created", "abc", extra={"submitter": 1})
        entry = json.loads(stream.getvalue().strip())
        assert entry["message"] == "Expense abc created"
        assert entry["extra"] == {"submitter": 1}

    @pytest.mark.unit
    def test_handlers_not_duplicated(self, request):
        name = f"tests.logger.{request.node.name}"
        StructuredLogger(name=name, stream=io.StringIO())
        log = StructuredLogger(name=name, stream=io.StringIO())
        assert len(log.logger.handlers) == 1

    @pytest.mark.unit
    def test_file_handler_opt_in(self, request, tmp_path):
        log_file = tmp_path / "logs" / "approval.log"
        log = StructuredLogger(
            name=f"tests.logger.{request.node.name}",
            stream=io.StringIO(),
            log_file=str(log_file),
        )
        log.warning("written to file")
        for handler in log.logger.handlers:
            handler.flush()
        assert "written to file" in log_file.read_text(encoding="utf-8")

    @pytest.mark.unit
    def test_child_propagates_to_parent(self, request):
        stream = io.StringIO()
        parent = StructuredLogger(name=f"tests.logger.{request.node.name}", stream=stream)
        parent.child("engine").info("from child")
        entry = json.loads(stream.getvalue().strip())
        assert entry["logger_name"].endswith(".engine")


class TestAuditEvent:
    """Tests for log_audit_event"""

    @pytest.mark.unit
    def test_event_logged_and_returned(self, request):
        stream = io.StringIO()
        log = StructuredLogger(name=f"tests.logger.{request.node.name}", stream=stream)
        event = log_audit_event(
            logger=log,
            action="APPROVE",
            entity_type="Expense",
            entity_id="abc",
            user_id=2,
            details={"from_status": "PENDING_MANAGER", "to_status": "APPROVED"},
        )
        assert event.user_id == "2"
        message = json.loads(stream.getvalue().strip())["message"]
        assert message.startswith("AUDIT: ")
        assert json.loads(message[len("AUDIT: "):])["details"]["to_status"] == "APPROVED"
