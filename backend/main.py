"""
Chat0 Backend Application.

FastAPI application relaying chat requests to LLM providers and
streaming their output back in a unified line protocol.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.api import chat_router, health_router
from backend.config import get_settings
from backend.core import (
    RequestContextMiddleware,
    get_logger,
    setup_exception_handlers,
    setup_logging,
)
from backend.providers import AdapterRegistry

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()

    setup_logging(
        level=settings.log_level,
        json_output=settings.is_production,
        log_file=settings.log_file or None,
    )
    logger.info(
        "Starting Chat0 backend",
        data={
            "host": settings.host,
            "port": settings.port,
            "environment": settings.environment,
            "allowed_origins": settings.allowed_origins_list,
        },
    )
    loaded = settings.loaded_key_names
    logger.info(f"API keys loaded: {', '.join(loaded) if loaded else 'None (will use headers)'}")

    # Tests may install their own registry before startup
    registry_created = False
    if not hasattr(_app.state, "adapter_registry"):
        _app.state.adapter_registry = AdapterRegistry(settings)
        registry_created = True

    yield

    logger.info("Shutting down Chat0 backend")
    if registry_created:
        await _app.state.adapter_registry.aclose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Chat0",
        description="Streaming relay for Gemini, OpenRouter, and OpenAI chat models",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    setup_exception_handlers(app)

    # Last added = first executed
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    app.include_router(health_router)
    app.include_router(chat_router)

    return app


app = create_app()
