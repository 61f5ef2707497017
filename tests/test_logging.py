"""Tests for log setup and redaction."""

import json
import logging

import pytest
import structlog

from flowdock.config import Settings
from flowdock.utils.logging import _filter_sensitive, _redact, get_logger, setup_logging

STREAM_URL = "https://stream.test/flows/acme/main?access_token=abc123"


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    quieted = {name: logging.getLogger(name).level for name in ("httpx", "httpcore")}
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, value in quieted.items():
        logging.getLogger(name).setLevel(value)
    structlog.reset_defaults()


class TestRedaction:
    def test_query_token(self):
        assert "abc123" not in _redact(STREAM_URL)
        assert "access_token=***REDACTED***" in _redact(STREAM_URL)

    def test_key_value(self):
        assert "hunter2" not in _redact("password: hunter2")

    def test_plain_text_untouched(self):
        assert _redact("stream connected") == "stream connected"

    def test_processor_only_touches_strings(self):
        event = {"event": "api_request", "status": 200, "url": "x?token=s3cret"}
        result = _filter_sensitive(None, "info", event)
        assert result["status"] == 200
        assert "s3cret" not in result["url"]


class TestSetupLogging:
    def test_json_output_from_settings(self, capsys, restore_logging):
        settings = Settings(log_level="DEBUG", log_json=True)
        setup_logging(settings.log_level, settings.log_json)

        get_logger("flowdock.tests").info("stream_connecting", url=STREAM_URL)

        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert record["event"] == "stream_connecting"
        assert record["level"] == "info"
        assert record["logger"] == "flowdock.tests"
        assert "abc123" not in record["url"]
        assert "access_token=***REDACTED***" in record["url"]

    def test_level_filters_records(self, capsys, restore_logging):
        setup_logging("WARNING", json_output=True)
        log = get_logger("flowdock.tests")
        log.info("quiet")
        log.warning("loud")

        lines = capsys.readouterr().err.strip().splitlines()
        assert [json.loads(line)["event"] for line in lines] == ["loud"]

    def test_console_output_is_redacted(self, capsys, restore_logging):
        setup_logging("INFO")
        get_logger("flowdock.tests").info("stream_connecting", url=STREAM_URL)

        err = capsys.readouterr().err
        assert "stream_connecting" in err
        assert "abc123" not in err

    def test_httpx_request_logs_quieted(self, restore_logging):
        setup_logging("DEBUG")
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING
