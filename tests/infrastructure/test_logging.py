"""Tests for centralized logging."""

import json
import logging
import sys

from stratus.infrastructure.logging import JSONFormatter, configure_logging, resolve_level


class TestConfigureLogging:
    def test_level_from_constant(self):
        configure_logging(level=logging.DEBUG)
        assert logging.getLogger("stratus").level == logging.DEBUG

    def test_level_from_name(self):
        configure_logging(level="warning")
        assert logging.getLogger("stratus").level == logging.WARNING

    def test_json_format(self):
        configure_logging(level=logging.INFO, json_format=True)
        logger = logging.getLogger("stratus")
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)

    def test_human_format(self):
        configure_logging(level=logging.INFO, json_format=False)
        logger = logging.getLogger("stratus")
        assert len(logger.handlers) == 1
        assert not isinstance(logger.handlers[0].formatter, JSONFormatter)

    def test_replaces_handlers(self):
        configure_logging(level=logging.INFO)
        configure_logging(level=logging.DEBUG)
        assert len(logging.getLogger("stratus").handlers) == 1


class TestResolveLevel:
    def test_names(self):
        assert resolve_level("DEBUG") == logging.DEBUG
        assert resolve_level(" error ") == logging.ERROR

    def test_unknown_name_defaults_to_warning(self):
        assert resolve_level("LOUD") == logging.WARNING

    def test_int_passthrough(self):
        assert resolve_level(15) == 15


class TestJSONFormatter:
    def _record(self, **kwargs):
        fields = dict(
            name="stratus.test",
            level=logging.INFO,
            pathname="test.py",
            lineno=1,
            msg="loaded %d instance(s)",
            args=(4,),
            exc_info=None,
        )
        fields.update(kwargs)
        return logging.LogRecord(**fields)

    def test_format_basic(self):
        data = json.loads(JSONFormatter().format(self._record()))
        assert data["message"] == "loaded 4 instance(s)"
        assert data["level"] == "INFO"
        assert data["logger"] == "stratus.test"
        assert "timestamp" in data

    def test_format_with_exception(self):
        try:
            raise ValueError("test error")
        except ValueError:
            exc_info = sys.exc_info()

        data = json.loads(
            JSONFormatter().format(self._record(level=logging.ERROR, exc_info=exc_info))
        )
        assert "ValueError" in data["exception"]
