"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
import time

from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlmodel import Session

from app.api.v1.router import api_router
from app.core.config import settings
from app.core.exceptions import APIException, StorageUnavailableError
from app.core.logging import setup_logging
from app.db.session import get_db

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Mindfulness challenges, daily progress and personalised wellness content.",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json")


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every request with its status and timing."""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    logger.info(
        f"{request.method} {request.url.path} - {response.status_code}",
        extra={
            "extra_fields": {
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "process_time_ms": round(process_time * 1000, 2),
            }
        }
    )
    response.headers["X-Process-Time"] = str(process_time)
    return response


# Error handlers
@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    """Render API errors as ``{"detail", "error_code"}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "error_code": exc.error_code},
        headers=exc.headers,
    )


@app.exception_handler(OperationalError)
@app.exception_handler(InterfaceError)
async def storage_exception_handler(request: Request, exc: Exception):
    """The database is unreachable: tell the client to retry."""
    logger.error(f"Storage unavailable on {request.method} {request.url.path}: {exc}")
    return await api_exception_handler(request, StorageUnavailableError())


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors."""
    logger.error(
        f"Unhandled exception: {exc}",
        exc_info=True,
        extra={
            "extra_fields": {
                "method": request.method,
                "path": request.url.path,
            }
        }
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# Include API router
app.include_router(api_router, prefix="/api/v1")


@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {
        "message": "ZenMindful API",
        "version": settings.VERSION,
        "status": "healthy"
    }


@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    """Health check endpoint for monitoring. 503 when the database is down."""
    try:
        db.execute(text("SELECT 1"))
    except (OperationalError, InterfaceError):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy", "database": "unavailable"},
        )
    return {
        "status": "healthy",
        "service": "zenmindful-api",
        "version": settings.VERSION
    }


@app.get("/info")
async def info():
    return {
        "project name": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "authors": settings.AUTHORS,
        "authors emails": settings.AUTHORS_EMAILS,
        "project url": settings.PROJECT_URL
    }
