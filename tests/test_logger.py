"""Tests for structured logging"""

import json
import logging

from nim_proxy.utils.logger import JSONFormatter, ProxyLogger


class TestJSONFormatter:
    """Test JSON log formatting"""

    def test_extra_fields_merged(self):
        record = logging.LogRecord(
            "nim_proxy", logging.INFO, __file__, 1, "hello", None, None
        )
        record.extra = {"model": "gpt-4", "request_id": "abc"}

        data = json.loads(JSONFormatter().format(record))
        assert data["message"] == "hello"
        assert data["level"] == "INFO"
        assert data["logger"] == "nim_proxy"
        assert data["model"] == "gpt-4"
        assert data["request_id"] == "abc"
        assert data["timestamp"].endswith("Z")


class TestProxyLogger:
    """Test event helpers"""

    def test_request_id_attached(self, caplog):
        proxy_logger = ProxyLogger("nim_proxy.test")
        request_id = proxy_logger.generate_request_id()

        with caplog.at_level(logging.INFO, logger="nim_proxy.test"):
            proxy_logger.log_forward(
                model="gpt-4", upstream_model="qwen/qwen3", message_count=2
            )

        record = caplog.records[-1]
        assert record.getMessage() == "Proxying request to NVIDIA NIM: qwen/qwen3"
        assert record.extra["request_id"] == request_id
        assert record.extra["message_count"] == 2

    def test_proxy_error_level(self, caplog):
        proxy_logger = ProxyLogger("nim_proxy.test")
        with caplog.at_level(logging.ERROR, logger="nim_proxy.test"):
            proxy_logger.log_proxy_error("timeout_error", "too slow", 504)

        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert record.extra["status_code"] == 504
