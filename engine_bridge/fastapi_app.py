"""
FastAPI Application Factory.
Creates and configures the bridge application with routers, middleware and DI.

Routes:
- POST /channel/message, POST /group/message (skill platform)
- POST /slack/events (mention bot)
- GET /health
"""

import logging
import uuid
from contextlib import asynccontextmanager

from dishka import make_async_container
from dishka.integrations.fastapi import setup_dishka
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from engine_bridge.config.logging_config import correlation_id_var, setup_logging
from engine_bridge.config.settings import Config, get_config
from engine_bridge.domain.exceptions import BridgeValidationError
from engine_bridge.presentation.api import channel_router, group_router, slack_router
from engine_bridge.services.engine_gateway import EngineGateway
from engine_bridge.setup.ioc.container import AppProvider

logger = logging.getLogger(__name__)


class CorrelationIdMiddleware:
    """ASGI middleware to extract and set correlation ID from request headers."""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        correlation_id = (
            Headers(scope=scope).get("X-Correlation-ID") or uuid.uuid4().hex[:12]
        )
        # Set in contextvars (propagates to background tasks and logging)
        token = correlation_id_var.set(correlation_id)

        async def send_with_header(message: Message) -> None:
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message)["X-Correlation-ID"] = correlation_id
            await send(message)

        try:
            await self.app(scope, receive, send_with_header)
        finally:
            correlation_id_var.reset(token)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan context manager.

    - Startup: build the authenticated engine gateway. Any failure propagates
      and aborts startup, so no request is served without an engine client.
    - Shutdown: close the DI container (closes the shared HTTP clients).
      In-flight background deliveries are not awaited.
    """
    container = app.state.dishka_container
    await container.get(EngineGateway)
    logger.info("Engine gateway initialized, accepting requests.")
    yield
    await container.close()
    logger.info("Engine bridge shut down.")


def create_fastapi_app(
    provider: AppProvider | None = None, config: type[Config] | None = None
) -> FastAPI:
    """
    Application factory for creating the FastAPI app.

    Args:
        provider: DI provider; tests pass one wired to mock transports
        config: Settings class the provider and routes read; defaults to
            get_config(), which selects by APP_ENV

    Returns:
        FastAPI application instance
    """
    config = config or get_config()
    setup_logging(config.LOG_LEVEL, config.LOG_PATH)

    app = FastAPI(
        title="Engine Bridge",
        description="Bridges chat-platform webhooks to the upstream engine",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.config = config

    container = make_async_container(provider or AppProvider(config=config))
    setup_dishka(container, app)

    app.add_middleware(CorrelationIdMiddleware)

    @app.exception_handler(BridgeValidationError)
    async def bridge_validation_handler(request: Request, exc: BridgeValidationError):
        logger.info("[VALIDATION] %s %s: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.info("[VALIDATION] %s", exc.errors())
        return JSONResponse(
            status_code=400,
            content={"error": "Validation error", "details": exc.errors()},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger.info("[HTTP ERROR %s] %s", exc.status_code, exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception("[GLOBAL ERROR] %s: %s", type(exc).__name__, exc)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"},
        )

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "ok"}

    app.include_router(channel_router)  # POST /channel/message
    app.include_router(group_router)  # POST /group/message
    app.include_router(slack_router)  # POST /slack/events

    return app


# Create the app instance
app = create_fastapi_app()
