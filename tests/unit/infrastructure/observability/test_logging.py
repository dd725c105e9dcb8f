"""Tests for structured logging."""

import json
import logging
import sys
from collections.abc import Iterator

import pytest

from scrobblekit.config.settings import Settings
from scrobblekit.domain.exceptions import NetworkError
from scrobblekit.infrastructure.observability.logging import (
    CompactExceptionFormatter,
    CorrelationIdFilter,
    LastfmJsonFormatter,
    configure_logging,
    configure_logging_from_settings,
    get_correlation_id,
    set_correlation_id,
)


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    """Put root handlers and levels back after tests that reconfigure logging."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("scrobblekit").setLevel(logging.NOTSET)


def make_record(msg: str = "hello", exc_info=None) -> logging.LogRecord:
    return logging.LogRecord(
        name="scrobblekit.test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=42,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )


class TestCorrelationId:
    """Test correlation ID functionality."""

    def test_set_and_get_correlation_id(self):
        """Test setting and getting correlation ID."""
        test_id = "test-123-abc"
        result = set_correlation_id(test_id)
        assert result == test_id
        assert get_correlation_id() == test_id

    def test_set_correlation_id_generates_uuid_when_none(self):
        """Test that setting None generates a UUID."""
        result = set_correlation_id(None)
        assert len(result) == 36
        assert get_correlation_id() == result

    def test_filter_copies_id_onto_record(self):
        """Test CorrelationIdFilter tags records."""
        set_correlation_id("scrobble-job-7")
        record = make_record()

        assert CorrelationIdFilter().filter(record) is True
        assert record.correlation_id == "scrobble-job-7"


class TestLoggingConfiguration:
    """Test logging configuration."""

    def test_configure_logging_debug_level(self):
        """Test configuring logging with DEBUG level."""
        configure_logging(log_level="DEBUG", json_format=False)
        logger = logging.getLogger("scrobblekit.test")
        assert logger.getEffectiveLevel() <= logging.DEBUG

    def test_unknown_level_falls_back_to_info(self):
        """Test a typo in the level does not crash setup."""
        configure_logging(log_level="LOUD", json_format=False)
        assert logging.getLogger().level == logging.INFO

    def test_configure_logging_json_format(self):
        """Test configuring logging with JSON format."""
        configure_logging(log_level="INFO", json_format=True)
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0].formatter, LastfmJsonFormatter)

    def test_configure_logging_text_format(self):
        """Test configuring logging with text format."""
        configure_logging(log_level="INFO", json_format=False)
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0].formatter, CompactExceptionFormatter)

    def test_reconfigure_replaces_handlers(self):
        """Test calling twice does not duplicate output."""
        configure_logging(log_level="INFO")
        configure_logging(log_level="INFO")
        assert len(logging.getLogger().handlers) == 1

    def test_http_libraries_are_quieted(self):
        """Test httpx/httpcore only log warnings and above."""
        configure_logging(log_level="DEBUG")
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING

    def test_package_level(self):
        """Test the scrobblekit loggers can be louder than the root."""
        configure_logging(log_level="WARNING", package_level="debug")

        assert logging.getLogger().level == logging.WARNING
        assert logging.getLogger("scrobblekit.infrastructure").getEffectiveLevel() == logging.DEBUG
        assert logging.getLogger("somebody.else").getEffectiveLevel() == logging.WARNING

    def test_package_level_resets_to_root(self):
        """Test leaving package_level out follows the root level again."""
        configure_logging(log_level="INFO", package_level="DEBUG")
        configure_logging(log_level="ERROR")

        assert logging.getLogger("scrobblekit").level == logging.NOTSET
        assert logging.getLogger("scrobblekit").getEffectiveLevel() == logging.ERROR

    def test_configure_from_settings(self):
        """Test the SCROBBLEKIT_LOG_* settings drive the setup."""
        settings = Settings(
            app_name="jukebox",
            log_level="ERROR",
            log_json=True,
            log_package_level="INFO",
        )

        configure_logging_from_settings(settings)

        formatter = logging.getLogger().handlers[0].formatter
        assert isinstance(formatter, LastfmJsonFormatter)
        assert formatter.app_name == "jukebox"
        assert logging.getLogger().level == logging.ERROR
        assert logging.getLogger("scrobblekit").level == logging.INFO


class TestCompactExceptionFormatter:
    """Test the human-readable exception chain output."""

    def test_chain_is_printed_root_cause_first(self):
        """Test the wrapped transport error comes before the NetworkError."""
        try:
            try:
                raise TimeoutError("timed out")
            except TimeoutError as e:
                raise NetworkError("Request to Last.fm failed: timed out") from e
        except NetworkError:
            exc_info = sys.exc_info()

        output = CompactExceptionFormatter().formatException(exc_info)
        markers = [line for line in output.splitlines() if line.startswith("╰─►")]

        assert markers == [
            "╰─► TimeoutError: timed out",
            "╰─► NetworkError: Request to Last.fm failed: timed out",
        ]

    def test_formatted_record_contains_message_and_chain(self):
        """Test a full record with exception info."""
        try:
            raise ValueError("bad payload")
        except ValueError:
            record = make_record("decode failed", exc_info=sys.exc_info())

        output = CompactExceptionFormatter(fmt="%(levelname)s %(message)s").format(record)

        assert output.startswith("WARNING decode failed")
        assert "╰─► ValueError: bad payload" in output

    def test_no_exception(self):
        """Test (None, None, None) gives an empty string."""
        assert CompactExceptionFormatter().formatException((None, None, None)) == ""


class TestLastfmJsonFormatter:
    """Test JSON log output."""

    def test_standard_fields(self):
        """Test level, logger and location end up in the JSON object."""
        formatter = LastfmJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
        record = make_record("Last.fm GET artist.getinfo")
        record.correlation_id = "abc-123"

        payload = json.loads(formatter.format(record))

        assert payload["message"] == "Last.fm GET artist.getinfo"
        assert payload["level"] == "WARNING"
        assert payload["logger"] == "scrobblekit.test"
        assert payload["source"].startswith("test_logging.")
        assert payload["source"].endswith(":42")
        assert payload["app"] == "scrobblekit"
        assert payload["correlation_id"] == "abc-123"

    def test_empty_correlation_id_is_left_out(self):
        """Test records outside a job carry no correlation_id key."""
        formatter = LastfmJsonFormatter("%(message)s")
        record = make_record()
        record.correlation_id = ""

        payload = json.loads(formatter.format(record))

        assert "correlation_id" not in payload
