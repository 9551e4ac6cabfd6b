"""
FastAPI application factory and module-level app instance.

This module provides:
- create_app(): Factory function for creating FastAPI instances
- app: Module-level instance for uvicorn (uvicorn api.app:app)
"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .deps import get_settings
from .models import HealthResponse, MessageResponse
from .routes import api_router

logger = logging.getLogger(__name__)

HELLO_MESSAGE = "Hello from EarnWale!"


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors as ``{"error": detail}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
    )


def create_app() -> FastAPI:
    """
    Create and configure a FastAPI application instance.

    Returns:
        FastAPI: Configured application with CORS, routers, error handlers and health endpoint.
    """
    app = FastAPI(
        title="EarnWale API",
        version="0.1.0",
        docs_url="/docs",
        openapi_url="/openapi.json",
    )

    cfg = get_settings()

    # Never log the secrets themselves
    logger.info(f"MongoDB database: {cfg.database_name}")
    logger.info(f"Admin token configured: {cfg.has_admin_token}")
    logger.info(f"Blob storage configured: {cfg.has_blob_token}")

    # Add CORS middleware only if origins are configured
    origins = cfg.API_CORS_ORIGINS or []
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_methods=["*"],
            allow_headers=["*"],
            allow_credentials=True,
        )

    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(api_router, prefix="/api")

    @app.get("/api/hello", response_model=MessageResponse, tags=["infra"])
    def hello() -> MessageResponse:
        return MessageResponse(message=HELLO_MESSAGE)

    # Lightweight health endpoint for observability
    @app.get("/healthz", response_model=HealthResponse, tags=["infra"])
    def health() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok"}

    return app


# For `uvicorn api.app:app --reload`
app = create_app()
