"""FastAPI application setup"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .. import __version__
from ..core import ModelTable, NimClient, ServerError, load_config, validate_config
from ..models.config import ProxyConfig
from ..utils import setup_logging, logger
from .cors import cors_headers
from .endpoints import router
from .handlers import ChatCompletionHandler, DiagnosticsHandler, ModelListingHandler


def create_app(config: Optional[ProxyConfig] = None) -> FastAPI:
    """
    Build the proxy application

    Args:
        config: Proxy configuration; loaded from the environment when omitted

    Returns:
        FastAPI application with all handlers wired to ``config``
    """
    if config is None:
        config = load_config()
    validate_config(config)

    model_table = ModelTable.from_config(config)
    nim_client = NimClient(config.upstream)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager"""
        setup_logging(config.system.log_level)
        logger.info(
            "NIM proxy started",
            models=len(model_table),
            api_base=config.upstream.api_base,
            api_key_configured=config.upstream.has_api_key,
        )

        yield

        # Close upstream HTTP client
        await nim_client.close()
        logger.info("NIM proxy stopped")

    app = FastAPI(
        title="NIM Proxy",
        description="OpenAI-compatible proxy for NVIDIA NIM chat completions",
        version=__version__,
        lifespan=lifespan
    )

    app.state.config = config
    app.state.model_table = model_table
    app.state.chat_handler = ChatCompletionHandler(
        config.upstream, model_table, nim_client
    )
    app.state.models_handler = ModelListingHandler(
        model_table, config.upstream.owned_by
    )
    app.state.diagnostics_handler = DiagnosticsHandler(config.upstream)

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle all unhandled exceptions"""
        error = ServerError(str(exc) or "Internal server error")
        logger.log_proxy_error(error.error_type, error.message, error.status_code)
        return JSONResponse(
            status_code=error.status_code,
            content=error.to_response().model_dump(exclude_none=True),
            headers=cors_headers(),
        )

    app.include_router(router)
    return app
