"""Core proxy components"""

from .config_loader import ConfigLoader, load_config
from .config_validator import ConfigValidator, validate_config
from .errors import (
    ProxyError,
    MethodNotAllowedError,
    InvalidRequestError,
    ConfigurationError,
    UpstreamTimeoutError,
    UpstreamAPIError,
    ServerError,
)
from .model_table import ModelTable, DEFAULT_MODEL_MAPPING, DEFAULT_UPSTREAM_MODEL
from .translation import build_upstream_request, parse_upstream_response
from .upstream_client import NimClient

__all__ = [
    "ConfigLoader",
    "load_config",
    "ConfigValidator",
    "validate_config",
    "ProxyError",
    "MethodNotAllowedError",
    "InvalidRequestError",
    "ConfigurationError",
    "UpstreamTimeoutError",
    "UpstreamAPIError",
    "ServerError",
    "ModelTable",
    "DEFAULT_MODEL_MAPPING",
    "DEFAULT_UPSTREAM_MODEL",
    "build_upstream_request",
    "parse_upstream_response",
    "NimClient",
]
