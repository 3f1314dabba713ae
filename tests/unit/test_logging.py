import asyncio
import logging

import pytest

from astraventa.core.logging import (
    NOISY_HTTP_LOGGERS,
    ConversationLogger,
    CorrelationFormatter,
    CorrelationIdFilter,
    HttpRequestLogDowngradeFilter,
    RequestTracker,
    configure_root_logging,
    current_correlation_id,
    normalize_log_level,
    set_noisy_http_logger_levels,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw, expected",
    [
        ("debug", "DEBUG"),
        ("WARNING", "WARNING"),
        ("info # default", "INFO"),
        ("verbose", "INFO"),
        ("", "INFO"),
    ],
)
def test_normalize_log_level(raw, expected):
    assert normalize_log_level(raw) == expected


@pytest.mark.unit
def test_noisy_http_loggers_follow_debug_level():
    set_noisy_http_logger_levels("DEBUG")
    assert logging.getLogger("httpx").level == logging.DEBUG

    set_noisy_http_logger_levels("INFO")
    for name in NOISY_HTTP_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING


@pytest.mark.unit
def test_http_request_logs_are_downgraded_to_debug():
    record = logging.LogRecord("httpx", logging.INFO, __file__, 1, "HTTP Request: POST", None, None)
    other = logging.LogRecord("astraventa", logging.INFO, __file__, 1, "hello", None, None)
    log_filter = HttpRequestLogDowngradeFilter("httpx")

    assert log_filter.filter(record) is True
    assert log_filter.filter(other) is True
    assert record.levelno == logging.DEBUG
    assert record.levelname == "DEBUG"
    assert other.levelno == logging.INFO


@pytest.mark.unit
class TestCorrelation:
    def test_records_carry_correlation_id_inside_context(self):
        correlation_filter = CorrelationIdFilter()
        inside = logging.LogRecord("test", logging.INFO, __file__, 1, "inside", None, None)
        outside = logging.LogRecord("test", logging.INFO, __file__, 1, "outside", None, None)

        with ConversationLogger.correlation_context("abcdef1234567890"):
            correlation_filter.filter(inside)
        correlation_filter.filter(outside)

        assert inside.correlation_id == "abcdef1234567890"
        assert not hasattr(outside, "correlation_id")

    @pytest.mark.asyncio
    async def test_overlapping_requests_keep_their_own_id(self):
        correlation_filter = CorrelationIdFilter()
        a_entered, b_entered, a_left = asyncio.Event(), asyncio.Event(), asyncio.Event()
        seen = {}

        def record_id(request_id):
            record = logging.LogRecord("t", logging.INFO, __file__, 1, "m", None, None)
            correlation_filter.filter(record)
            seen[request_id] = record.correlation_id

        async def request_a():
            with ConversationLogger.correlation_context("aaaaaaaa-A"):
                a_entered.set()
                await b_entered.wait()
                record_id("aaaaaaaa-A")
            a_left.set()

        async def request_b():
            await a_entered.wait()
            with ConversationLogger.correlation_context("bbbbbbbb-B"):
                b_entered.set()
                await a_left.wait()
                record_id("bbbbbbbb-B")

        # A leaves while B is still inside its context
        await asyncio.gather(request_a(), request_b())

        assert seen == {"aaaaaaaa-A": "aaaaaaaa-A", "bbbbbbbb-B": "bbbbbbbb-B"}
        assert current_correlation_id() is None
        after = logging.LogRecord("t", logging.INFO, __file__, 1, "later", None, None)
        correlation_filter.filter(after)
        assert not hasattr(after, "correlation_id")

    def test_formatter_prefixes_short_id_without_mutating_record(self):
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "routed", None, None)
        record.correlation_id = "abcdef1234567890"

        formatted = CorrelationFormatter("%(message)s").format(record)

        assert formatted == "[abcdef12] routed"
        assert record.msg == "routed"

    def test_formatter_leaves_plain_records_alone(self):
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "plain", None, None)

        assert CorrelationFormatter("%(message)s").format(record) == "plain"


@pytest.mark.unit
class TestRequestTracker:
    def test_tracks_and_finishes_requests(self):
        tracker = RequestTracker(summary_interval=10)
        metrics = tracker.start_request("r1", conversation_id="c1", message_count=3)

        assert tracker.get_request("r1") is metrics

        tracker.end_request("r1", model_identifier="llama-3.1-70b")

        assert tracker.get_request("r1") is None
        assert metrics.end_time is not None
        assert metrics.duration_ms >= 0
        assert tracker.summary_metrics.model_counts["llama-3.1-70b"] == 1

    def test_unknown_request_is_ignored(self):
        tracker = RequestTracker()

        tracker.end_request("missing", error="x")

        assert tracker.request_count == 0

    def test_summary_is_emitted_and_reset(self, caplog):
        tracker = RequestTracker(summary_interval=2)
        tracker.start_request("a")
        tracker.end_request("a", model_identifier="m1")
        tracker.start_request("b")

        with caplog.at_level(logging.INFO, logger="astraventa.core.logging"):
            tracker.end_request(
                "b", fallback=True, error="all failed", error_type="all_providers_failed"
            )

        messages = [record.getMessage() for record in caplog.records]
        assert any("SUMMARY" in m and "Total: 2" in m and "Fallbacks: 1" in m for m in messages)
        assert any("MODELS" in m and "m1: 1" in m for m in messages)
        assert any("ERRORS" in m and "all_providers_failed: 1" in m for m in messages)
        assert tracker.summary_metrics.total_requests == 0


@pytest.mark.unit
def test_configure_root_logging_installs_one_handler():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        level = configure_root_logging("warning")

        assert level == "WARNING"
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, CorrelationFormatter)
        assert any(isinstance(f, CorrelationIdFilter) for f in root.handlers[0].filters)
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
