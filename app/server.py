"""FastAPI application wiring the search gateway."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import httpx
from fastapi import Body, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings
from .dispatcher import IntentDispatcher
from .errors import GatewayError, NotImplementedFeatureError, UpstreamError
from .models import (
    BadRequestResponse,
    ErrorResponse,
    HealthResponse,
    SearchResponse,
)
from .upstream import UpstreamClient

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(level_name: str) -> None:
    level = logging.getLevelName(level_name.upper())
    # ``force=True`` replaces uvicorn's default handlers so our own statements show up.
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(level)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logger.info("Logging configured at %s", level_name.upper())


def create_app(
    settings: Settings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the application. Missing configuration fails here, at startup."""
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    upstream = UpstreamClient(settings, transport=transport)
    dispatcher = IntentDispatcher(upstream)

    app = FastAPI(title="Intent Search Gateway")
    app.state.settings = settings
    app.state.dispatcher = dispatcher
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        await upstream.aclose()

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": "Request body must be valid JSON"})

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(
            status="ok",
            message="Backend server is running",
            timestamp=datetime.now(timezone.utc).isoformat(),
        )

    @app.post(
        "/search",
        response_model=SearchResponse,
        responses={400: {"model": BadRequestResponse}, 500: {"model": ErrorResponse}},
    )
    async def search(payload: Any = Body(None)) -> SearchResponse:
        try:
            return await dispatcher.search(payload)
        except GatewayError:
            raise
        except Exception as exc:
            logger.exception("Search failed")
            raise UpstreamError(str(exc)) from exc

    @app.post("/upload-image", status_code=501, responses={501: {"model": ErrorResponse}})
    async def upload_image() -> JSONResponse:
        raise NotImplementedFeatureError(
            "Image search needs the upstream image upload endpoint, which is not wired up",
            error="Image upload not yet implemented",
        )

    logger.info("Gateway ready; upstream=%s", settings.upstream_url)
    return app
