"""API endpoints"""

from fastapi import APIRouter, Depends, Request, Response

from .handlers import ChatCompletionHandler, DiagnosticsHandler, ModelListingHandler


# Method handling lives in the handlers, so routes accept everything
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

router = APIRouter()


# Dependency injection functions
def get_chat_handler(request: Request) -> ChatCompletionHandler:
    """Get chat completion handler"""
    return request.app.state.chat_handler


def get_models_handler(request: Request) -> ModelListingHandler:
    """Get model listing handler"""
    return request.app.state.models_handler


def get_diagnostics_handler(request: Request) -> DiagnosticsHandler:
    """Get diagnostics handler"""
    return request.app.state.diagnostics_handler


@router.api_route("/v1/chat/completions", methods=ALL_METHODS)
@router.api_route("/api/chat", methods=ALL_METHODS)
async def chat_completions(
    request: Request,
    handler: ChatCompletionHandler = Depends(get_chat_handler),
) -> Response:
    """
    Create chat completion

    OpenAI-compatible endpoint, forwarded to NVIDIA NIM
    """
    return await handler.handle(request)


@router.api_route("/v1/models", methods=ALL_METHODS)
@router.api_route("/api/models", methods=ALL_METHODS)
async def list_models(
    request: Request,
    handler: ModelListingHandler = Depends(get_models_handler),
) -> Response:
    """
    List available models

    OpenAI-compatible endpoint for listing models
    """
    return await handler.handle(request)


@router.api_route("/health", methods=ALL_METHODS)
@router.api_route("/api/health", methods=ALL_METHODS)
async def health(
    request: Request,
    handler: DiagnosticsHandler = Depends(get_diagnostics_handler),
) -> Response:
    """Diagnostics endpoint"""
    return await handler.handle(request)
