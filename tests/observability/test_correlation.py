"""
Test suite for correlation ID propagation and log formatting.

System role: Verification of request tracing
"""

import logging

from cognition_api.observability.correlation import (
    clear_correlation_id,
    get_caller_uid,
    get_correlation_id,
    set_caller_uid,
    set_correlation_id,
)
from cognition_api.observability.logger import CorrelationIdFilter


class TestCorrelationContext:
    def test_generates_id_when_none_given(self) -> None:
        value = set_correlation_id()

        assert value
        assert get_correlation_id() == value
        clear_correlation_id()

    def test_keeps_given_id(self) -> None:
        assert set_correlation_id("req-42") == "req-42"
        assert get_correlation_id() == "req-42"
        clear_correlation_id()
        assert get_correlation_id() == ""


def test_filter_stamps_records() -> None:
    record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)

    set_correlation_id("req-7")
    CorrelationIdFilter().filter(record)
    clear_correlation_id()

    assert record.correlation_id == "req-7"


def test_middleware_echoes_header(client) -> None:
    response = client.get("/health", headers={"X-Correlation-ID": "trace-1"})

    assert response.headers["X-Correlation-ID"] == "trace-1"


def test_middleware_assigns_header(client) -> None:
    response = client.get("/health")

    assert response.headers["X-Correlation-ID"]


def test_caller_uid_is_stamped_and_cleared() -> None:
    record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)

    set_caller_uid("student-1")
    CorrelationIdFilter().filter(record)
    clear_correlation_id()

    assert record.caller_uid == "student-1"
    assert get_caller_uid() == ""


def test_blank_header_gets_fresh_id() -> None:
    value = set_correlation_id("   ")

    assert value.strip()
    assert value != "   "
    clear_correlation_id()
