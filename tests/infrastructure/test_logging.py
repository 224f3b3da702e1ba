"""Tests for the logging formatters and correlation id propagation."""

import json
import logging
import sys

import pytest

from library_api.infrastructure.config import EnvironmentOption, get_settings
from library_api.infrastructure.logging import config as logging_config
from library_api.infrastructure.logging.config import (
    CorrelationIdFilter,
    LevelColorHandler,
    build_console_handler,
    build_file_handler,
    configure_testing_logging,
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from library_api.infrastructure.logging.formatters import (
    DetailedFormatter,
    JSONFormatter,
    SimpleFormatter,
    StructuredFormatter,
    get_formatter,
)


def _record(message: str = "Book created", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="library_api.modules.book.services",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestFormatters:
    def test_simple(self):
        output = SimpleFormatter().format(_record())

        assert output == "[INFO] library_api.modules.book.services: Book created"

    def test_detailed_without_correlation_id(self):
        output = DetailedFormatter().format(_record())

        assert "[-]" in output
        assert output.endswith("Book created")

    def test_structured_includes_extra(self):
        output = StructuredFormatter().format(_record(book_id=42, title="Dune"))

        assert "level=INFO" in output
        assert 'message="Book created"' in output
        assert "book_id=42" in output
        assert 'title="Dune"' in output

    def test_json_includes_extra(self):
        output = json.loads(JSONFormatter().format(_record(book_id=42, obj=object())))

        assert output["message"] == "Book created"
        assert output["level"] == "INFO"
        assert output["book_id"] == 42
        assert isinstance(output["obj"], str)

    def test_json_includes_exception(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = _record()
            record.exc_info = sys.exc_info()

        output = json.loads(JSONFormatter().format(record))

        assert output["exception"]["type"] == "RuntimeError"
        assert output["exception"]["message"] == "boom"

    @pytest.mark.parametrize("format_type", ["simple", "detailed", "structured", "json", "JSON"])
    def test_get_formatter(self, format_type):
        assert isinstance(get_formatter(format_type), logging.Formatter)

    def test_get_formatter_unknown(self):
        with pytest.raises(ValueError):
            get_formatter("xml")


class TestCorrelationId:
    def test_set_and_reset(self):
        token = set_correlation_id("req-1")
        try:
            assert get_correlation_id() == "req-1"
        finally:
            reset_correlation_id(token)

        assert get_correlation_id() != "req-1"

    def test_generated_ids_are_unique(self):
        assert generate_correlation_id() != generate_correlation_id()

    def test_filter_stamps_current_id(self):
        token = set_correlation_id("req-2")
        try:
            record = _record()
            CorrelationIdFilter().filter(record)
        finally:
            reset_correlation_id(token)

        assert record.correlation_id == "req-2"

    def test_filter_keeps_explicit_id(self):
        token = set_correlation_id("req-3")
        try:
            record = _record(correlation_id="explicit")
            CorrelationIdFilter().filter(record)
        finally:
            reset_correlation_id(token)

        assert record.correlation_id == "explicit"

    def test_filter_outside_request(self):
        record = _record()
        CorrelationIdFilter().filter(record)

        assert record.correlation_id == "no-correlation"


class TestHandlers:
    def test_file_handler_creates_directory(self, tmp_path):
        log_file = tmp_path / "nested" / "library_api.log"
        settings = get_settings().model_copy(update={"LOG_FILE_PATH": str(log_file)})

        handler = build_file_handler(settings, format_type="json")
        try:
            handler.emit(_record(book_id=1))
        finally:
            handler.close()

        line = json.loads(log_file.read_text(encoding="utf-8").strip())
        assert line["message"] == "Book created"
        assert line["book_id"] == 1

    def test_console_handler_without_colors(self):
        handler = build_console_handler("simple", logging.WARNING)

        assert handler.level == logging.WARNING
        assert isinstance(handler.formatter, SimpleFormatter)
        assert not isinstance(handler, LevelColorHandler)

    def test_colored_console_handler(self):
        handler = build_console_handler("detailed", logging.DEBUG, colored=True)

        assert isinstance(handler, LevelColorHandler)
        assert isinstance(handler.formatter, DetailedFormatter)


class TestSetup:
    @pytest.fixture(autouse=True)
    def restore_testing_logging(self):
        yield
        configure_testing_logging()

    def test_production_uses_json_console_with_correlation_filter(self, monkeypatch):
        settings = get_settings().model_copy(
            update={"ENVIRONMENT": EnvironmentOption.PRODUCTION, "LOG_CONSOLE_ENABLED": True, "LOG_FILE_ENABLED": False}
        )
        monkeypatch.setattr(logging_config, "get_settings", lambda: settings)

        logging_config.setup_logging_configuration()

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0].formatter, JSONFormatter)
        assert any(isinstance(f, CorrelationIdFilter) for f in handlers[0].filters)
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

    def test_testing_configuration_discards_below_error(self):
        configure_testing_logging()

        root_logger = logging.getLogger()
        assert root_logger.level == logging.ERROR
        assert all(isinstance(h, logging.NullHandler) for h in root_logger.handlers)
