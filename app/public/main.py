"""FastAPI application for the communications service."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config.service import settings
from app.core.exceptions import TradelinkException
from app.core.logging import setup_logging
from app.database.connection import get_database_manager
from app.public.api.v1.router import api_router

setup_logging(settings)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events."""
    logger.info(f"Starting {settings.SERVICE_NAME}...")

    database_manager = get_database_manager()
    if database_manager.health_check():
        logger.info("Database connection successful")
    else:
        logger.error("Database connection failed")

    yield

    logger.info(f"Shutting down {settings.SERVICE_NAME}...")
    database_manager.close()


app = FastAPI(
    title="Tradelink Communications API",
    description="Messaging and call logging between suppliers, retailers and sales",
    version=settings.VERSION,
    docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
    redoc_url="/redoc" if settings.ENVIRONMENT != "production" else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["*"],
)


@app.exception_handler(TradelinkException)
async def tradelink_exception_handler(request: Request, exc: TradelinkException) -> JSONResponse:
    """Render service errors as JSON with their own status code."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error_code, "message": exc.message, "details": exc.details},
    )


app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    database_ok = get_database_manager().health_check()
    return {
        "status": "healthy" if database_ok else "degraded",
        "service": settings.SERVICE_NAME,
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "database": "connected" if database_ok else "unavailable",
    }
