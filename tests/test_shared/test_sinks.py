"""
Tests for the reference notification sinks.
"""

import logging

import pytest

from shared.models import EventKind, NotificationExtra, PostRecord, Status
from shared.sinks import (
    LogSink,
    MemorySink,
    NotificationSink,
    build_sink,
    format_notification,
)


@pytest.fixture
def extra() -> NotificationExtra:
    return NotificationExtra(post=PostRecord(id=5, guid="hello"), result=9, transport_type="WP_RSS")


class TestFormatNotification:
    def test_success_line(self):
        line = format_notification(42, EventKind.NEW, Status(ok=True, message="hello,9"))

        assert line == "✓ site=42 event=new message=hello,9"

    def test_failure_line(self):
        line = format_notification(42, EventKind.DELETE, Status(ok=False, message="fail"))

        assert line.startswith("✗")
        assert "event=delete" in line


class TestLogSink:
    def test_success_logged_at_info(self, extra, caplog):
        with caplog.at_level(logging.INFO, logger="notifications"):
            accepted = LogSink().notify(42, EventKind.NEW, Status(ok=True, message="hello,9"), None, extra)

        assert accepted is True
        assert "site=42" in caplog.text
        assert caplog.records[-1].levelno == logging.INFO

    def test_failure_logged_at_warning(self, extra, caplog):
        with caplog.at_level(logging.INFO, logger="notifications"):
            LogSink().notify(42, EventKind.NEW, Status(ok=False, message="fail"), "2026-10-18", extra)

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert "log_time=2026-10-18" in record.getMessage()
        assert "transport=WP_RSS" in record.getMessage()


class TestMemorySink:
    def test_records_notifications(self, memory_sink: MemorySink, extra):
        memory_sink.notify(42, EventKind.NEW, Status(ok=True, message="hello,9"), None, extra)
        memory_sink.notify(43, EventKind.UPDATE, Status(ok=False, message="fail"), "t", extra)

        assert memory_sink.get_sent_count() == 2
        first, second = memory_sink.notifications
        assert first.site_id == 42
        assert second.event_kind == EventKind.UPDATE
        assert second.log_time == "t"

    def test_find_for_site(self, memory_sink: MemorySink, extra):
        memory_sink.notify(42, EventKind.NEW, Status(ok=True, message="a"), None, extra)
        memory_sink.notify(43, EventKind.NEW, Status(ok=True, message="b"), None, extra)

        found = memory_sink.find_for_site(43)

        assert [n.status.message for n in found] == ["b"]

    def test_clear_history(self, memory_sink: MemorySink, extra):
        memory_sink.notify(42, EventKind.NEW, Status(ok=True, message="a"), None, extra)
        memory_sink.clear_history()

        assert memory_sink.get_sent_count() == 0
        assert memory_sink.deliveries == []

    def test_simulated_failure(self, extra):
        sink = MemorySink(fail_rate=1.0)

        accepted = sink.notify(42, EventKind.NEW, Status(ok=True, message="a"), None, extra)

        assert accepted is False
        assert sink.get_sent_count() == 0
        assert sink.deliveries[0].accepted is False


class TestBuildSink:
    def test_log(self):
        assert isinstance(build_sink("log"), LogSink)

    def test_memory_with_fail_rate(self):
        sink = build_sink("memory", fail_rate=0.5)

        assert isinstance(sink, MemorySink)
        assert sink.fail_rate == 0.5

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown sink"):
            build_sink("carrier-pigeon")

    @pytest.mark.parametrize("kind", ["log", "memory"])
    def test_sinks_satisfy_protocol(self, kind):
        assert isinstance(build_sink(kind), NotificationSink)
