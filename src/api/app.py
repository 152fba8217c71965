"""
FastAPI application factory.
Creates and configures the main API application.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from elasticapm.contrib.starlette import make_apm_client, ElasticAPM
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from src.config import settings, DEFAULT_ERROR_MESSAGE, INVALID_REQUEST_MESSAGE
from src.modules.review_analysis import OpenAIInferenceClient, get_orchestrator
from .middleware import CorrelationIdMiddleware, RequestLoggingMiddleware
from .rate_limit import limiter
from .routes import api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Application lifespan manager."""
    logger.info("Starting application...")

    orchestrator = get_orchestrator()
    if not orchestrator.inference_client.is_configured():
        logger.warning("OPENAI_API_KEY is not set; analysis requests will fail")
    else:
        logger.info(f"Inference client: {orchestrator.inference_client.name}")

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")

    client = orchestrator.inference_client
    if isinstance(client, OpenAIInferenceClient):
        await client.close()

    logger.info("Application shutdown complete")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""

    app = FastAPI(
        title=settings.app_name,
        description="""
        # Review Insight Service

        Sentiment breakdown and aspect keywords for batches of customer reviews.

        ## Pipeline

        - **Prompt Builder**: locale-specific instructions for the language model
        - **Inference Client**: OpenAI chat completions
        - **Response Extractor**: JSON object embedded in the model's text
        - **Normalizer**: strict result shape, percentage backfill, keyword ranking

        ## Strategies

        - **Single-pass**: one combined call (default)
        - **Two-pass**: sentiment classification, then keyword extraction (`ko`)
        """,
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Request context and access logging
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationIdMiddleware)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Elastic APM integration
    if settings.apm_enabled:
        apm_client = make_apm_client({
            'SERVICE_NAME': settings.app_name,
            'SERVER_URL': settings.apm_server_url,
            'ENVIRONMENT': settings.environment,
            'TRANSACTION_SAMPLE_RATE': 1.0,
        })
        app.add_middleware(ElasticAPM, client=apm_client)

    # Malformed bodies use the same error shape as pipeline failures
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Invalid request body: {len(exc.errors())} error(s)")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": INVALID_REQUEST_MESSAGE,
                "detail": str(exc.errors()) if settings.debug else None,
                "status_code": status.HTTP_400_BAD_REQUEST,
            },
        )

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal server error",
                "detail": str(exc) if settings.debug else DEFAULT_ERROR_MESSAGE,
                "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR,
            },
        )

    # Include API router
    app.include_router(api_router, prefix=settings.api_prefix)

    # Root endpoint
    @app.get("/", tags=["Root"])
    async def root():
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "docs": "/docs",
            "health": f"{settings.api_prefix}/health",
        }

    return app


# Application instance
app = create_app()
