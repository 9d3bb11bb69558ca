"""
Test suite for logging shutdown.
"""
import io
import logging

from utils.logging import close_handlers, get_log_file_location, logger


def test_close_handlers_skips_closed_console_stream():
    """A stream closed before shutdown must not break closing the other handlers."""
    closed_stream = io.StringIO()
    closed_stream.close()
    console = logging.StreamHandler(closed_stream)
    buffer = io.StringIO()
    other = logging.StreamHandler(buffer)
    other.close = lambda: setattr(other, "was_closed", True)

    close_handlers([console, other])

    assert getattr(other, "was_closed", False), "Handlers after the closed one must still be closed"


def test_logger_is_configured_once():
    assert logger.name == "calendarbot"
    assert logger._initialized is True
    assert get_log_file_location()
