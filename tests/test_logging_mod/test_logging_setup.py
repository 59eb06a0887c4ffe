"""Tests for wasteflow.logging: formatters, request filter, configuration."""

from __future__ import annotations

import json
import logging
import sys
from types import SimpleNamespace

import pytest
from flask import Flask, g

from wasteflow.logging import configure_logging
from wasteflow.logging.setup import RequestContextFilter, StructuredFormatter, TextFormatter


@pytest.fixture(autouse=True)
def _restore_wasteflow_logger():
    """Undo configure_logging side effects on the shared logger tree."""
    logger = logging.getLogger("wasteflow")
    saved = (logger.level, list(logger.handlers), logger.propagate)
    yield
    logger.setLevel(saved[0])
    logger.handlers[:] = saved[1]
    logger.propagate = saved[2]


def _record(msg="hello %s", args=("world",), **extra) -> logging.LogRecord:
    record = logging.LogRecord("wasteflow.test", logging.INFO, __file__, 10, msg, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    def test_basic_fields(self):
        data = json.loads(StructuredFormatter().format(_record()))
        assert data["level"] == "INFO"
        assert data["logger"] == "wasteflow.test"
        assert data["message"] == "hello world"
        assert "timestamp" in data

    def test_extra_attributes_are_included(self):
        data = json.loads(StructuredFormatter().format(_record(order_id="abc", status=201)))
        assert data["order_id"] == "abc"
        assert data["status"] == 201

    def test_placeholder_context_is_omitted(self):
        data = json.loads(
            StructuredFormatter().format(_record(request_id="-", client_ip="10.0.0.1", path=None)),
        )
        assert "request_id" not in data
        assert "path" not in data
        assert data["client_ip"] == "10.0.0.1"

    def test_exception(self):
        try:
            raise ValueError("kaput")
        except ValueError:
            record = logging.LogRecord(
                "wasteflow.test", logging.ERROR, __file__, 1, "failed", (), sys.exc_info(),
            )
        data = json.loads(StructuredFormatter().format(record))
        assert "ValueError: kaput" in data["exception"]


class TestTextFormatter:
    def test_format(self):
        line = TextFormatter().format(_record(request_id="rid", client_ip="1.2.3.4"))
        assert "[rid]" in line
        assert "1.2.3.4" in line
        assert line.endswith("wasteflow.test: hello world")


class TestRequestContextFilter:
    def test_defaults_outside_request(self):
        record = _record()
        assert RequestContextFilter().filter(record) is True
        assert record.request_id == "-"
        assert record.client_ip == "-"
        assert record.distributor is None

    def test_request_context(self):
        app = Flask(__name__)
        with app.test_request_context("/api/orders", method="POST", environ_base={"REMOTE_ADDR": "9.9.9.9"}):
            g.request_id = "req-1"
            g.distributor = SimpleNamespace(email="ops@greenhaulers.lk")
            record = _record()
            RequestContextFilter().filter(record)

        assert record.request_id == "req-1"
        assert record.client_ip == "9.9.9.9"
        assert record.method == "POST"
        assert record.path == "/api/orders"
        assert record.distributor == "ops@greenhaulers.lk"


class TestConfigureLogging:
    def test_json_handler(self):
        root = configure_logging(SimpleNamespace(level="DEBUG", format="json"))
        assert root.name == "wasteflow"
        assert root.level == logging.DEBUG
        assert root.propagate is False
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, StructuredFormatter)

    def test_text_handler(self):
        root = configure_logging(SimpleNamespace(level="warning", format="text"))
        assert root.level == logging.WARNING
        assert isinstance(root.handlers[0].formatter, TextFormatter)

    def test_reconfigure_replaces_handlers(self):
        configure_logging(SimpleNamespace(level="INFO", format="json"))
        root = configure_logging(SimpleNamespace(level="INFO", format="json"))
        assert len(root.handlers) == 1

    def test_quietens_libraries(self):
        configure_logging(SimpleNamespace(level="DEBUG", format="json"))
        assert logging.getLogger("werkzeug").level == logging.WARNING
        assert logging.getLogger("wasteflow.access").level == logging.INFO
