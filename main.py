"""
Gift Card Intake - Main Application

FastAPI application entry point.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import structlog
from datetime import datetime, timezone

from config import settings
from services.dataset_service import get_existing_cards
from services.session_service import get_session_service

logging.basicConfig(format="%(message)s", level=settings.log_level)

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer() if settings.is_production
            else structlog.dev.ConsoleRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger(__name__)


def dataset_status() -> dict:
    """
    Check that the existing card dataset can be loaded.

    Returns:
        dict: Load status with card count or error
    """
    try:
        cards = get_existing_cards()
        return {
            "status": "healthy",
            "configured": settings.dataset_configured,
            "cards_count": len(cards)
        }
    except Exception as e:
        return {
            "status": "unhealthy",
            "error": str(e)
        }


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup: Load the existing card dataset
    Shutdown: Nothing to release; sessions live in memory only
    """
    # Startup
    logger.info(
        "application_starting",
        environment=settings.environment,
        debug=settings.debug
    )

    status = dataset_status()
    if status["status"] == "healthy":
        logger.info("existing_cards_ready", cards=status["cards_count"])
    else:
        logger.error("existing_cards_unavailable", error=status.get("error"))

    yield

    # Shutdown
    logger.info("application_shutting_down", sessions=get_session_service().count())


# Create FastAPI app
app = FastAPI(
    title="Gift Card Intake",
    description="Register prepaid gift cards one at a time or by CSV upload",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://localhost:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ===================
# ROUTES
# ===================

@app.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns:
        Basic health status and dataset state
    """
    status = dataset_status()

    return {
        "status": "healthy" if status["status"] == "healthy" else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment,
        "dataset": status
    }


@app.get("/")
async def root():
    """
    Root endpoint.

    Returns:
        API information and available endpoints
    """
    return {
        "name": "Gift Card Intake API",
        "version": "0.1.0",
        "docs": "/docs" if settings.debug else "Disabled in production",
        "health": "/health",
        "endpoints": {
            "sessions": "/api/sessions",
            "import_template": "/api/imports/template",
            "reference": "/api/reference"
        }
    }


# ===================
# ERROR HANDLERS
# ===================

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler.

    Catches unhandled exceptions and returns standard error format.
    """
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "details": str(exc) if settings.debug else None,
                "timestamp": datetime.now(timezone.utc).isoformat()
            }
        }
    )


# ===================
# INCLUDE ROUTERS
# ===================
from routes.sessions import router as sessions_router
from routes.imports import router as imports_router
from routes.reference import router as reference_router

app.include_router(sessions_router, prefix="/api/sessions", tags=["Sessions"])
app.include_router(imports_router)  # Prefix already in router
app.include_router(reference_router, prefix="/api/reference", tags=["Reference"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug
    )
