"""Tests for diagnostic events and observers."""

import logging

from vidcarve.events import (
    FAILED,
    SKIPPED,
    SUCCESS,
    DiagnosticEvent,
    EventRecorder,
    LoggingObserver,
    emit,
    null_observer,
)


class TestEmit:
    def test_builds_event(self):
        recorder = EventRecorder()
        emit(recorder, "modern", SUCCESS, "found", count=2)
        assert recorder.events == [DiagnosticEvent("modern", SUCCESS, "found", {"count": 2})]

    def test_default_observer_logs(self, caplog):
        with caplog.at_level(logging.WARNING, logger="vidcarve.events"):
            emit(None, "legacy", FAILED, "no ids")
        assert "[legacy] no ids" in caplog.text

    def test_null_observer_discards(self):
        assert null_observer(DiagnosticEvent("x", SKIPPED, "y")) is None


class TestLoggingObserver:
    def test_levels(self, caplog):
        observer = LoggingObserver(logging.getLogger("test.events"))
        with caplog.at_level(logging.DEBUG, logger="test.events"):
            observer(DiagnosticEvent("a", SUCCESS, "ok"))
            observer(DiagnosticEvent("a", SKIPPED, "meh"))
            observer(DiagnosticEvent("a", FAILED, "bad"))
        assert [r.levelno for r in caplog.records] == [
            logging.INFO,
            logging.DEBUG,
            logging.WARNING,
        ]


class TestEventRecorder:
    def test_filters_by_stage(self):
        recorder = EventRecorder()
        emit(recorder, "locator", SKIPPED, "a")
        emit(recorder, "modern", SUCCESS, "b")
        emit(recorder, "locator", SUCCESS, "c")
        assert recorder.statuses("locator") == [SKIPPED, SUCCESS]
        assert [e.message for e in recorder.for_stage("modern")] == ["b"]
