"""Tests for email_parser.tracer."""

from __future__ import annotations

import logging

import pytest

from email_parser.tracer import LoggingTracer, NullTracer, Tracer


class TestLoggingTracer:
    """Tests for LoggingTracer."""

    def test_logs_message(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="email_parser"):
            LoggingTracer().trace("Mappings loaded")

        assert caplog.messages == ["Mappings loaded"]

    def test_logs_sorted_context(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="email_parser"):
            LoggingTracer().trace("Email parsed", record_id="r1", fields=2)

        assert caplog.messages == ["Email parsed (fields=2, record_id=r1)"]

    def test_custom_level(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="email_parser"):
            LoggingTracer(level=logging.DEBUG).trace("x")

        assert caplog.records[0].levelno == logging.DEBUG

    def test_satisfies_protocol(self) -> None:
        assert isinstance(LoggingTracer(), Tracer)


class TestNullTracer:
    """Tests for NullTracer."""

    def test_discards(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG):
            NullTracer().trace("ignored", a=1)

        assert caplog.records == []

    def test_satisfies_protocol(self) -> None:
        assert isinstance(NullTracer(), Tracer)
