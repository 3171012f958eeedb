"""Translation between the client-facing and upstream chat completion shapes

All request and response defaulting lives here. Any field the upstream
omits is filled in, so a parsed reply is always a fully populated
``ChatCompletionResponse``.
"""

import time
from typing import Any, Dict, List, Optional

from ..models.openai import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    Choice,
    Message,
    UpstreamChatRequest,
    Usage,
)
from .errors import ServerError


DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 4096
DEFAULT_ROLE = "assistant"
DEFAULT_FINISH_REASON = "stop"


def _as_int(value: Any) -> int:
    """Coerce a count field, treating missing or malformed values as 0"""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    return 0


def parse_choice(choice: Dict[str, Any]) -> Choice:
    """
    Parse a single upstream choice with defaults

    Args:
        choice: Raw choice object from the upstream reply

    Returns:
        Choice with role, content, index and finish_reason populated
    """
    message = choice.get("message")
    if not isinstance(message, dict):
        message = {}

    return Choice(
        index=_as_int(choice.get("index")),
        message=Message(
            role=message.get("role") or DEFAULT_ROLE,
            content=message.get("content") or "",
        ),
        finish_reason=choice.get("finish_reason") or DEFAULT_FINISH_REASON,
    )


def parse_usage(usage: Any) -> Usage:
    """Parse token usage; a missing usage block yields all-zero counts"""
    if not isinstance(usage, dict):
        return Usage()
    return Usage(
        prompt_tokens=_as_int(usage.get("prompt_tokens")),
        completion_tokens=_as_int(usage.get("completion_tokens")),
        total_tokens=_as_int(usage.get("total_tokens")),
    )


def parse_upstream_response(
    response_data: Any,
    model: str,
    response_id: Optional[str] = None,
    created: Optional[int] = None,
) -> ChatCompletionResponse:
    """
    Reshape an upstream reply into a chat completion response

    Args:
        response_data: Decoded JSON body of the upstream reply
        model: Public model id requested by the client, echoed back
        response_id: Completion id (generated from the clock when omitted)
        created: Unix timestamp (current time when omitted)

    Returns:
        Fully populated ChatCompletionResponse

    Raises:
        ServerError: If the reply has no usable choices list
    """
    if not isinstance(response_data, dict):
        raise ServerError("Invalid upstream response: expected a JSON object")

    raw_choices = response_data.get("choices")
    if not isinstance(raw_choices, list):
        raise ServerError("Invalid upstream response: missing choices")

    choices: List[Choice] = []
    for raw_choice in raw_choices:
        if not isinstance(raw_choice, dict):
            raise ServerError("Invalid upstream response: malformed choice")
        choices.append(parse_choice(raw_choice))

    now = time.time()
    return ChatCompletionResponse(
        id=response_id or f"chatcmpl-{int(now * 1000)}",
        created=created if created is not None else int(now),
        model=model,
        choices=choices,
        usage=parse_usage(response_data.get("usage")),
    )


def build_upstream_request(
    request: ChatCompletionRequest,
    upstream_model: str,
) -> UpstreamChatRequest:
    """
    Translate a client request into the upstream request body

    Messages are forwarded verbatim. Streaming is always disabled: replies
    are returned in a single response.

    Args:
        request: Validated client request
        upstream_model: Resolved upstream model id

    Returns:
        UpstreamChatRequest ready to be sent
    """
    return UpstreamChatRequest(
        model=upstream_model,
        messages=request.messages,
        temperature=(
            request.temperature if request.temperature is not None
            else DEFAULT_TEMPERATURE
        ),
        max_tokens=(
            request.max_tokens if request.max_tokens is not None
            else DEFAULT_MAX_TOKENS
        ),
        stream=False,
    )
