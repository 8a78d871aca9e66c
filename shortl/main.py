"""Main application module.

This module initializes the FastAPI application, includes routes,
and configures middleware and exception handlers.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shortl.api import api_router
from shortl.core.access_log import setup_access_logging
from shortl.core.config import settings
from shortl.core.logging import setup_logging
from shortl.db.base import engine, init_models
from shortl.middleware.logging import RequestLoggingMiddleware

logger = setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Run startup tasks, then dispose of the engine on shutdown."""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT.value}")
    logger.info(f"Debug mode: {settings.DEBUG}")

    if settings.ACCESS_LOG_ENABLED:
        setup_access_logging()
        logger.info("Link access logging initialized")

    if settings.DB_CREATE_TABLES:
        await init_models()

    yield

    logger.info(f"Shutting down {settings.APP_NAME}")
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

if settings.REQUEST_LOGGING_ENABLED:
    app.add_middleware(RequestLoggingMiddleware)

app.include_router(api_router)


# Error bodies are plain, human-readable text
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return PlainTextResponse(
        str(exc.detail),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Reject unreadable request bodies and parameters with a 400."""
    logger.info(f"Request validation error on {request.method} {request.url.path}: {exc.errors()}")
    return PlainTextResponse("Wrong parameters sent", status_code=400)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler to catch and log all unhandled exceptions."""
    error_id = f"error-{time.time()}"

    logger.opt(exception=exc).error(
        f"Unhandled exception in {request.method} {request.url.path}",
        error_id=error_id,
        url=str(request.url),
        query_params=dict(request.query_params),
        client_host=request.client.host if request.client else None,
    )

    detail = f": {exc}" if settings.DEBUG else ""
    return PlainTextResponse(
        f"Internal server error ({error_id}){detail}",
        status_code=500,
    )

