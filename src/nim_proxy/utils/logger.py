"""Structured JSON logging"""

import logging
import json
import sys
from datetime import datetime, timezone
from typing import Optional
import uuid
from contextvars import ContextVar


# Bound per request task
_request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON"""
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Add extra fields
        if hasattr(record, "extra"):
            log_data.update(record.extra)

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class ProxyLogger:
    """Logger for proxy events"""

    def __init__(self, name: str = "nim_proxy"):
        """
        Initialize logger

        Args:
            name: Logger name
        """
        self.logger = logging.getLogger(name)

    @property
    def request_id(self) -> Optional[str]:
        """Request ID bound to the current context"""
        return _request_id.get()

    def generate_request_id(self) -> str:
        """Generate new request ID for the current context"""
        request_id = uuid.uuid4().hex
        _request_id.set(request_id)
        return request_id

    def _log(self, level: int, message: str, **kwargs):
        """Internal log method with extra fields"""
        extra = kwargs.copy()
        if self.request_id:
            extra["request_id"] = self.request_id

        self.logger.log(level, message, extra={"extra": extra})

    def info(self, message: str, **kwargs):
        """Log info message"""
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message"""
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs):
        """Log error message"""
        self._log(logging.ERROR, message, **kwargs)

    def debug(self, message: str, **kwargs):
        """Log debug message"""
        self._log(logging.DEBUG, message, **kwargs)

    def log_model_fallback(self, requested_model: str, fallback_model: str):
        """
        Log a request for a model missing from the mapping table

        Args:
            requested_model: Public model id the client asked for
            fallback_model: Upstream model id used instead
        """
        self.warning(
            f"Model {requested_model} not found in mapping, using {fallback_model}",
            event_type="model_fallback",
            requested_model=requested_model,
            upstream_model=fallback_model,
        )

    def log_forward(
        self,
        model: str,
        upstream_model: str,
        message_count: int,
        **kwargs
    ):
        """
        Log a request being forwarded upstream

        Args:
            model: Public model id
            upstream_model: Upstream model id
            message_count: Number of messages in request
            **kwargs: Additional fields
        """
        self.info(
            f"Proxying request to NVIDIA NIM: {upstream_model}",
            event_type="forward",
            model=model,
            upstream_model=upstream_model,
            message_count=message_count,
            **kwargs
        )

    def log_completion(
        self,
        model: str,
        prompt_tokens: int,
        completion_tokens: int,
        total_tokens: int,
        **kwargs
    ):
        """
        Log a completed upstream call

        Args:
            model: Public model id
            prompt_tokens: Input token count
            completion_tokens: Output token count
            total_tokens: Total token count
            **kwargs: Additional fields
        """
        self.info(
            "Upstream call completed",
            event_type="completion",
            model=model,
            tokens={
                "prompt": prompt_tokens,
                "completion": completion_tokens,
                "total": total_tokens
            },
            **kwargs
        )

    def log_proxy_error(
        self,
        error_type: str,
        error_message: str,
        status_code: int,
        **kwargs
    ):
        """
        Log a failure converted into an error envelope

        Args:
            error_type: Envelope error type
            error_message: Error message
            status_code: HTTP status returned to the client
            **kwargs: Additional fields
        """
        self.error(
            f"Proxy error: {error_message}",
            event_type="proxy_error",
            error_type=error_type,
            status_code=status_code,
            **kwargs
        )


def setup_logging(log_level: str = "INFO"):
    """
    Set up logging configuration

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(JSONFormatter())
    root_logger.addHandler(console_handler)

    # Set level for third-party loggers
    logging.getLogger("uvicorn").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


# Global logger instance
logger = ProxyLogger()
