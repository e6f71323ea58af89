"""Tests for structured logging configuration."""

import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from logging_config import ConversionLogger, JSONFormatter, setup_logging


def _record(**attrs) -> logging.LogRecord:
    record = logging.LogRecord(
        name="okecho", level=logging.INFO, pathname=__file__, lineno=10,
        msg="hello %s", args=("world",), exc_info=None,
    )
    for key, value in attrs.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Test JSON log formatting."""

    def test_basic_fields(self):
        data = json.loads(JSONFormatter().format(_record()))
        assert data["level"] == "INFO"
        assert data["logger"] == "okecho"
        assert data["message"] == "hello world"
        assert data["source"]["line"] == 10

    def test_request_context_and_extra(self):
        data = json.loads(JSONFormatter().format(
            _record(request_id="abc123", path="/api/tanks", extra={"tank_id": "41"})
        ))
        assert data["request_id"] == "abc123"
        assert data["path"] == "/api/tanks"
        assert data["extra"] == {"tank_id": "41"}

    def test_exception(self):
        try:
            raise ValueError("bad table")
        except ValueError:
            record = _record(exc_info=sys.exc_info())
        data = json.loads(JSONFormatter().format(record))
        assert data["exception"]["type"] == "ValueError"
        assert data["exception"]["message"] == "bad table"

    def test_non_ascii_kept(self):
        output = JSONFormatter().format(_record(extra={"label": "41 ～ 43"}))
        assert "41 ～ 43" in output


class TestSetupLogging:
    """Test logger wiring."""

    def test_creates_log_files(self, tmp_path):
        app_logger, conversion_logger = setup_logging(
            app_name="okecho_test", log_level="INFO", log_dir=tmp_path, json_format=True,
        )
        app_logger.error("boom")
        conversion_logger.converted("1", "reading_to_volume", 3, {
            "display_value": 4950, "unit": "L", "exact": False,
        })
        for handler in app_logger.handlers + conversion_logger.logger.handlers:
            handler.flush()

        assert (tmp_path / "okecho_test.log").exists()
        assert "boom" in (tmp_path / "okecho_test_errors.log").read_text(encoding="utf-8")

        line = (tmp_path / "okecho_test_conversions.log").read_text(encoding="utf-8").splitlines()[0]
        event = json.loads(line)
        assert event["extra"]["event"] == "conversion.succeeded"
        assert event["extra"]["output"] == 4950

    def test_conversion_logger_does_not_propagate(self, tmp_path):
        _, conversion_logger = setup_logging(app_name="okecho_test2", log_dir=tmp_path)
        assert conversion_logger.logger.propagate is False


class TestConversionLogger:
    """Test conversion event records."""

    def test_rejected_logs_warning(self, caplog):
        logger = logging.getLogger("okecho_caplog.conversions")
        with caplog.at_level(logging.WARNING, logger="okecho_caplog.conversions"):
            ConversionLogger(logger).rejected("1", "volume_to_reading", "abc", "invalid_input")
        assert caplog.records[0].levelno == logging.WARNING
        assert caplog.records[0].extra["reason"] == "invalid_input"
