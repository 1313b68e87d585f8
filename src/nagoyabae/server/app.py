"""FastAPI application for the nagoyabae server."""

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from nagoyabae import __version__
from nagoyabae.llm.errors import TerminalFailure
from nagoyabae.llm.registry import create_registry
from nagoyabae.server.errors import (
    INTERNAL_ERROR_MESSAGE,
    INVALID_REQUEST_MESSAGE,
    error_response,
    failure_response,
)
from nagoyabae.server.routes import character, health, scoring
from nagoyabae.service import Orchestrator

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from nagoyabae.config import NagoyaConfig
    from nagoyabae.llm.registry import AdapterRegistry

logger = logging.getLogger(__name__)


def create_app(
    config: "NagoyaConfig",
    registry: "AdapterRegistry | None" = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        config: Loaded configuration.
        registry: Adapter registry; built from config when omitted.
    """
    registry = registry or create_registry(config)
    orchestrator = Orchestrator(registry, generation=config.generation)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> "AsyncIterator[None]":
        logger.info(
            "server_starting",
            extra={"environment": config.environment},
        )
        yield
        logger.info("server_stopping")

    app = FastAPI(
        title="nagoyabae",
        description="Nagoya-bae photo scoring and mascot generation API",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.config = config
    app.state.registry = registry
    app.state.orchestrator = orchestrator

    @app.exception_handler(TerminalFailure)
    async def handle_terminal_failure(
        request: Request, exc: TerminalFailure
    ) -> JSONResponse:
        logger.error(
            "request_failed",
            extra={
                "path": request.url.path,
                "error.kind": exc.kind.value,
                "error.message": exc.message,
            },
        )
        return failure_response(exc.kind, exc.message, config=config)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return error_response(
            INVALID_REQUEST_MESSAGE,
            status_code=400,
            config=config,
            details=str(exc.errors()),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error processing %s", request.url.path)
        return error_response(
            INTERNAL_ERROR_MESSAGE,
            status_code=500,
            config=config,
            details=str(exc),
        )

    app.include_router(health.router, tags=["health"])
    app.include_router(scoring.router, prefix="/api", tags=["scoring"])
    app.include_router(character.router, prefix="/api", tags=["character"])

    return app
