"""Test trace-id propagation, action context and logging setup."""

import logging
from datetime import datetime, timezone

import structlog

from tournament_core.domain.identifiers import EnrollmentId
from tournament_core.domain.status import EnrollmentStatus
from tournament_core.observability.logger import (
    _HANDLER_NAME,
    _add_trace_id,
    _plain_values,
    action_context,
    get_logger,
    get_trace_id,
    new_trace_id,
    set_trace_id,
    setup_logging,
)


def _our_handlers() -> list[logging.Handler]:
    return [h for h in logging.getLogger().handlers if h.get_name() == _HANDLER_NAME]


class TestTraceId:
    def test_set_and_get(self):
        set_trace_id("trace-123")
        assert get_trace_id() == "trace-123"

    def test_new_trace_id_replaces(self):
        set_trace_id("old")
        tid = new_trace_id()
        assert tid != "old"
        assert get_trace_id() == tid

    def test_processor_adds_trace_id(self):
        set_trace_id("abc")
        event = _add_trace_id(None, "info", {"event": "hello"})
        assert event == {"event": "hello", "trace_id": "abc"}


class TestActionContext:
    def test_binds_ids_and_restores_trace(self):
        set_trace_id("outer")
        with action_context("approve_enrollment", competition_id="c1", enrollment_id=None) as tid:
            assert get_trace_id() == tid
            assert tid != "outer"
            bound = structlog.contextvars.get_contextvars()
            assert bound["action"] == "approve_enrollment"
            assert bound["competition_id"] == "c1"
            assert "enrollment_id" not in bound
        assert get_trace_id() == "outer"
        assert "action" not in structlog.contextvars.get_contextvars()

    def test_restores_on_error(self):
        set_trace_id("outer")
        try:
            with action_context("start_match", match_id="m1"):
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        assert get_trace_id() == "outer"
        assert "match_id" not in structlog.contextvars.get_contextvars()


class TestPlainValues:
    def test_domain_values_become_labels(self):
        eid = EnrollmentId.create()
        event = _plain_values(None, "info", {
            "event": "x",
            "status": EnrollmentStatus.APPROVED,
            "enrollment_id": eid,
            "at": datetime(2025, 1, 1, tzinfo=timezone.utc),
            "count": 3,
        })
        assert event["status"] == "APPROVED"
        assert type(event["status"]) is str
        assert event["enrollment_id"] == str(eid)
        assert event["at"] == "2025-01-01T00:00:00+00:00"
        assert event["count"] == 3


class TestSetup:
    def test_console_renderer(self):
        setup_logging(level="DEBUG", format="console")
        (handler,) = _our_handlers()
        assert isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter)
        assert isinstance(handler.formatter.processors[-1], structlog.dev.ConsoleRenderer)
        assert logging.getLogger().level == logging.DEBUG

    def test_json_renderer_and_level_fallback(self):
        setup_logging(level="nonsense", format="json")
        (handler,) = _our_handlers()
        assert isinstance(handler.formatter.processors[-1], structlog.processors.JSONRenderer)
        assert logging.getLogger().level == logging.INFO

    def test_repeated_setup_keeps_one_handler(self):
        setup_logging()
        setup_logging()
        assert len(_our_handlers()) == 1

    def test_trace_id_in_structlog_pipeline(self):
        setup_logging()
        assert _add_trace_id in structlog.get_config()["processors"]
        assert get_logger("tournament_core.test") is not None
