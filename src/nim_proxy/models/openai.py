"""OpenAI API compatible data models"""

from typing import List, Optional, Dict, Any
from pydantic import BaseModel, ConfigDict, Field


class ChatCompletionRequest(BaseModel):
    """Inbound chat completion request

    Messages are kept as plain dicts so they reach the upstream untouched.
    """
    model_config = ConfigDict(extra="ignore")

    model: str = Field(min_length=1)
    messages: List[Dict[str, Any]]
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    # Accepted in any shape and never forwarded: upstream streaming is always off
    stream: Any = None


class UpstreamChatRequest(BaseModel):
    """Request body sent to the upstream /chat/completions endpoint"""
    model: str
    messages: List[Dict[str, Any]]
    temperature: float
    max_tokens: int
    stream: bool = False


class Message(BaseModel):
    """Assistant message in a completion choice"""
    role: str = "assistant"
    # Plain text or a list of content parts, passed through as received
    content: Any = ""


class Usage(BaseModel):
    """Token usage information"""
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class Choice(BaseModel):
    """Single completion choice"""
    index: int
    message: Message
    finish_reason: str = "stop"


class ChatCompletionResponse(BaseModel):
    """Response model for chat completions endpoint"""
    id: str
    object: str = "chat.completion"
    created: int
    model: str
    choices: List[Choice]
    usage: Usage


class ModelInfo(BaseModel):
    """Model information"""
    id: str
    object: str = "model"
    created: int
    owned_by: str
    nim_model: str


class ModelListResponse(BaseModel):
    """Response for models list endpoint"""
    object: str = "list"
    data: List[ModelInfo]


class ErrorDetail(BaseModel):
    """Error detail information"""
    message: str
    type: str
    code: Optional[int] = None


class ErrorResponse(BaseModel):
    """Error response model"""
    error: ErrorDetail
