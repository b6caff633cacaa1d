"""
FastAPI Application Entry Point

This module configures the throttled webhook relay. The relay:
- Accepts JSON payloads on POST /
- Queues them in memory, in arrival order
- Forwards them one at a time to a fixed webhook URL
- Keeps at least THROTTLE_MS between the start of consecutive calls
- Answers each caller with the webhook outcome for its own payload

The drainer runs in the same event loop as the API, so the relay must
be served by a single worker process.

Run with: uvicorn app.main:app --host 0.0.0.0 --port 8080
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from .core.config import settings as default_settings, Settings
from .core.utils import get_timestamp
from .models.schemas import ErrorResponse
from .api.routes import router
from .queue.forwarding import ForwardingQueue
from .workers.drainer import QueueDrainer
from .workers.webhook import WebhookClient

# Configure logging
logging.basicConfig(
    level=default_settings.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def build_drainer(settings: Settings) -> QueueDrainer:
    """Wire an empty queue and a webhook client into a drainer."""
    client = WebhookClient(
        settings.relay.webhook_url,
        headers=settings.relay.headers
    )
    return QueueDrainer(
        ForwardingQueue(),
        send=client.forward,
        throttle_ms=settings.relay.throttle_ms
    )


def create_app(
    settings: Settings = default_settings,
    drainer: Optional[QueueDrainer] = None
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Configuration to use
        drainer: Pre-built drainer (tests inject one with a fake webhook)
    """

    # ============================================================
    # Application Lifespan Handler
    # ============================================================

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan manager.

        - Startup: build the drainer, log configuration
        - Shutdown: stop the drainer; anything still queued is dropped
        """
        # ---- Startup ----
        logger.info("=" * 60)
        logger.info("THROTTLED WEBHOOK RELAY STARTING")
        logger.info("=" * 60)
        logger.info(f"Server Port: {settings.server_port}")
        logger.info(f"API Version: {settings.api_version}")
        logger.info(f"Webhook URL: {settings.relay.webhook_url}")
        logger.info(f"Throttle: {settings.relay.throttle_ms}ms")

        app.state.drainer = drainer if drainer is not None else build_drainer(settings)

        logger.info("=" * 60)
        logger.info(f"Relay ready to accept requests on port {settings.server_port}")
        logger.info("=" * 60)

        yield  # Application runs here

        # ---- Shutdown ----
        logger.info("Relay shutting down...")
        await app.state.drainer.close()

    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json"
    )

    # ============================================================
    # Exception Handlers
    # ============================================================

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError
    ):
        """
        Handle malformed or missing JSON bodies.

        Returns 422 with details about what failed validation.
        """
        logger.warning(f"Validation error: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=ErrorResponse(
                error="Validation failed",
                detail=jsonable_errors(exc),
                timestamp=get_timestamp()
            ).model_dump()
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Log unexpected errors and answer with a generic 500."""
        logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(
                error="Internal server error",
                detail="An unexpected error occurred. Please try again.",
                timestamp=get_timestamp()
            ).model_dump()
        )

    # ============================================================
    # Route Registration
    # ============================================================

    app.include_router(router, tags=["Relay"])

    @app.get("/", tags=["Root"])
    async def root():
        """Service information and endpoint list."""
        return {
            "service": settings.api_title,
            "version": settings.api_version,
            "description": settings.api_description,
            "endpoints": {
                "relay": "POST /",
                "queue_stats": "GET /queue/stats",
                "health": "GET /health",
                "docs": "GET /docs"
            },
            "timestamp": get_timestamp()
        }

    return app


def jsonable_errors(exc: RequestValidationError) -> list:
    """Validation errors with only JSON-safe fields (ctx may hold exceptions)."""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


# ============================================================
# FastAPI Application Instance
# ============================================================

app = create_app()


# ============================================================
# Run Configuration (for direct execution)
# ============================================================

if __name__ == "__main__":
    import uvicorn

    print("=" * 60)
    print("THROTTLED WEBHOOK RELAY")
    print("=" * 60)
    print(f"Binding to 0.0.0.0:{default_settings.server_port}")
    print(f"Docs: http://localhost:{default_settings.server_port}/docs")
    print("=" * 60)

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=default_settings.server_port,
        reload=False,
        workers=1,
        log_level="info"
    )
