"""
Main FastAPI application for the business assistant

This module creates and configures the FastAPI application with:
- CORS middleware for the dashboard frontend
- API routes (chat, conversations, inventory, orders, analytics)
- JSON error bodies of the form {"error": "..."}
- Health check endpoint
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from bizassist import __version__
from bizassist.agents.pipeline import ChatPipeline
from bizassist.api.routes import analytics, chat, conversations, inventory, orders
from bizassist.api.schemas.chat import HealthResponse
from bizassist.config.settings import settings
from bizassist.llm.client import log_provider_status
from bizassist.storage import create_storage
from bizassist.storage.base import Storage


def _format_validation_errors(exc: RequestValidationError):
    details = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        details.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return details


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = _format_validation_errors(exc)
    logger.info(f"Rejected {request.method} {request.url.path}: {details}")
    return JSONResponse(status_code=400, content={"error": "Invalid request", "details": details})


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Error processing request"})


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan events

    Startup builds whatever storage / pipeline was not injected by create_app.
    """
    logger.info("🚀 FastAPI application starting...")
    log_provider_status()

    if getattr(app.state, "storage", None) is None:
        app.state.storage = create_storage()
    if getattr(app.state, "pipeline", None) is None:
        app.state.pipeline = ChatPipeline.from_settings(app.state.storage)

    logger.info(f"📚 API docs available at http://{settings.api_host}:{settings.api_port}/docs")

    yield

    logger.info("🛑 FastAPI application shutting down...")
    db = getattr(app.state.storage, "db", None)
    if db is not None:
        db.dispose()
        logger.info("✅ Database connections closed")


def create_app(storage: Optional[Storage] = None, pipeline: Optional[ChatPipeline] = None) -> FastAPI:
    """
    Create the FastAPI application

    Args:
        storage: Storage backend (defaults to STORAGE_BACKEND, built at startup)
        pipeline: Chat pipeline (defaults to one over the storage with the configured hosted model)
    """
    app = FastAPI(
        title=f"{settings.system_name} API",
        description="Chat assistant for inventory and order management, with catalog, order and analytics endpoints.",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.storage = storage
    if storage is not None and pipeline is None:
        pipeline = ChatPipeline.from_settings(storage)
    app.state.pipeline = pipeline

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(chat.router)
    app.include_router(conversations.router)
    app.include_router(inventory.router)
    app.include_router(orders.router)
    app.include_router(analytics.router)

    @app.get("/", tags=["root"])
    def root():
        """Root endpoint - API information"""
        return {
            "service": f"{settings.system_name} API",
            "version": __version__,
            "status": "running",
            "docs": "/docs",
            "endpoints": {
                "health": "/health",
                "chat": "/api/chat",
                "conversations": "/api/conversations",
                "inventory": "/api/inventory",
                "orders": "/api/orders",
                "analytics": "/api/analytics",
            },
        }

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    def health_check(request: Request):
        """Verify the service is running and report its backends."""
        current_pipeline = request.app.state.pipeline
        return HealthResponse(
            status="healthy",
            service="bizassist-api",
            version=__version__,
            storage=type(request.app.state.storage).__name__,
            hosted_model=bool(current_pipeline and current_pipeline.ctx.hosted),
        )

    return app


app = create_app()
