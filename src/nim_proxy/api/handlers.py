"""Request handlers for the chat, model listing and diagnostics endpoints

Each handler is stateless: it only reads the configuration and model table
it was constructed with.
"""

import json
import platform
import time
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ..core.errors import (
    ConfigurationError,
    InvalidRequestError,
    MethodNotAllowedError,
    ProxyError,
    ServerError,
)
from ..core.model_table import ModelTable
from ..core.translation import build_upstream_request, parse_upstream_response
from ..core.upstream_client import NimClient
from ..models.config import UpstreamConfig
from ..models.openai import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    ModelInfo,
    ModelListResponse,
)
from ..utils import logger
from .cors import CHAT_METHODS, MODELS_METHODS, cors_headers


def preflight_response(headers: Dict[str, str]) -> Response:
    """Empty 200 reply to a CORS preflight"""
    return Response(status_code=200, headers=headers)


def error_response(error: ProxyError, headers: Dict[str, str]) -> JSONResponse:
    """Render a ProxyError as its error envelope"""
    return JSONResponse(
        status_code=error.status_code,
        content=error.to_response().model_dump(exclude_none=True),
        headers=headers,
    )


def _format_validation_error(exc: ValidationError) -> str:
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err["loc"])
        problems.append(f"{location}: {err['msg']}")
    return "Invalid request: " + "; ".join(problems)


class ChatCompletionHandler:
    """Translate and forward chat completion requests"""

    def __init__(
        self,
        config: UpstreamConfig,
        model_table: ModelTable,
        client: NimClient,
    ):
        self.config = config
        self.model_table = model_table
        self.client = client
        self.headers = cors_headers(CHAT_METHODS)

    async def handle(self, request: Request) -> Response:
        """
        Handle one chat completion call

        Every failure is converted to exactly one error envelope here.
        """
        if request.method == "OPTIONS":
            return preflight_response(self.headers)

        logger.generate_request_id()

        try:
            completion = await self._complete(request)
        except ProxyError as e:
            logger.log_proxy_error(e.error_type, e.message, e.status_code)
            return error_response(e, self.headers)
        except Exception as e:
            error = ServerError(str(e) or "Internal server error")
            logger.log_proxy_error(
                error.error_type, error.message, error.status_code,
                exception=type(e).__name__,
            )
            return error_response(error, self.headers)

        return JSONResponse(
            status_code=200,
            content=completion.model_dump(),
            headers=self.headers,
        )

    async def _complete(self, request: Request) -> ChatCompletionResponse:
        if request.method != "POST":
            raise MethodNotAllowedError()

        if not self.config.has_api_key:
            raise ConfigurationError(
                "NIM_API_KEY not configured in environment variables"
            )

        chat_request = await self._parse_request(request)

        upstream_model = self.model_table.resolve(chat_request.model)
        upstream_request = build_upstream_request(chat_request, upstream_model)

        logger.log_forward(
            model=chat_request.model,
            upstream_model=upstream_model,
            message_count=len(chat_request.messages),
            stream_requested=bool(chat_request.stream),
        )

        response_data = await self.client.create_chat_completion(upstream_request)
        completion = parse_upstream_response(response_data, chat_request.model)

        logger.log_completion(
            model=chat_request.model,
            prompt_tokens=completion.usage.prompt_tokens,
            completion_tokens=completion.usage.completion_tokens,
            total_tokens=completion.usage.total_tokens,
            upstream_model=upstream_model,
        )
        return completion

    async def _parse_request(self, request: Request) -> ChatCompletionRequest:
        raw = await request.body()
        try:
            body: Any = json.loads(raw) if raw else {}
        except (json.JSONDecodeError, UnicodeDecodeError):
            raise InvalidRequestError("Request body must be valid JSON")

        if not isinstance(body, dict):
            raise InvalidRequestError("Request body must be a JSON object")

        if not body.get("model") or body.get("messages") is None:
            raise InvalidRequestError(
                "Missing required fields: model and messages"
            )

        try:
            return ChatCompletionRequest.model_validate(body)
        except ValidationError as e:
            raise InvalidRequestError(_format_validation_error(e))


class ModelListingHandler:
    """List the public model ids from the model table"""

    def __init__(self, model_table: ModelTable, owned_by: str):
        self.model_table = model_table
        self.owned_by = owned_by
        self.headers = cors_headers(MODELS_METHODS)

    def list_models(self) -> ModelListResponse:
        created = int(time.time())
        return ModelListResponse(
            data=[
                ModelInfo(
                    id=public_id,
                    created=created,
                    owned_by=self.owned_by,
                    nim_model=upstream_id,
                )
                for public_id, upstream_id in self.model_table.items()
            ]
        )

    async def handle(self, request: Request) -> Response:
        # No method check: anything but a preflight gets the listing
        if request.method == "OPTIONS":
            return preflight_response(self.headers)

        return JSONResponse(
            status_code=200,
            content=self.list_models().model_dump(),
            headers=self.headers,
        )


class DiagnosticsHandler:
    """Report configuration state for troubleshooting

    Only the presence and length of the credential are reported, and only
    header names are echoed, never their values.
    """

    def __init__(self, config: UpstreamConfig):
        self.config = config
        self.headers = cors_headers()

    def diagnostics(self, request: Request) -> Dict[str, Any]:
        url = request.url.path
        if request.url.query:
            url = f"{url}?{request.url.query}"

        return {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "environment": {
                "has_api_key": self.config.has_api_key,
                "api_key_length": len(self.config.api_key or ""),
                "api_base": self.config.api_base,
                "python_version": platform.python_version(),
            },
            "request": {
                "method": request.method,
                "url": url,
                "headers": list(request.headers.keys()),
            },
        }

    async def handle(self, request: Request) -> Response:
        if request.method == "OPTIONS":
            return preflight_response(self.headers)

        return JSONResponse(
            status_code=200,
            content=self.diagnostics(request),
            headers=self.headers,
        )
