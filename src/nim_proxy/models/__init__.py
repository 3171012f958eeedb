"""Data models for the proxy"""

from .openai import (
    ChatCompletionRequest,
    UpstreamChatRequest,
    Message,
    Usage,
    Choice,
    ChatCompletionResponse,
    ModelInfo,
    ModelListResponse,
    ErrorDetail,
    ErrorResponse,
)

from .config import (
    DEFAULT_API_BASE,
    UpstreamConfig,
    SystemConfig,
    ProxyConfig,
)

__all__ = [
    # OpenAI models
    "ChatCompletionRequest",
    "UpstreamChatRequest",
    "Message",
    "Usage",
    "Choice",
    "ChatCompletionResponse",
    "ModelInfo",
    "ModelListResponse",
    "ErrorDetail",
    "ErrorResponse",
    # Config models
    "DEFAULT_API_BASE",
    "UpstreamConfig",
    "SystemConfig",
    "ProxyConfig",
]
