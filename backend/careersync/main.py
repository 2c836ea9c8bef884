# backend/careersync/main.py
"""
FastAPI application entry point.

Run locally with:
    uvicorn careersync.main:app --reload --app-dir backend
"""

from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .core.config import settings
from .database import init_db
from .errors import register_error_handlers
from .routes import health, prometheus
from .routes.v1 import bookings as bookings_v1, sessions as sessions_v1, timeslots as timeslots_v1

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup/shutdown."""
    logger.info(f"CareerSync API {__version__} starting up (environment={settings.environment})")
    if settings.auto_create_tables and not settings.is_production:
        init_db()
    yield
    logger.info("CareerSync API shutting down")


def create_app() -> FastAPI:
    application = FastAPI(
        title="CareerSync Booking API",
        description="Mentor sessions, timeslots and bookings",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=app_lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "HEAD", "OPTIONS", "POST", "PATCH", "DELETE"],
        allow_headers=["*"],
    )
    logger.info(f"CORS allow_origins={settings.cors_origins}")

    register_error_handlers(application)

    api_v1 = APIRouter(prefix="/api/v1")
    api_v1.include_router(bookings_v1.router, prefix="/bookings")
    api_v1.include_router(timeslots_v1.router, prefix="/timeslots")
    api_v1.include_router(sessions_v1.router, prefix="/sessions")
    application.include_router(api_v1)

    # Infrastructure routes keep fixed, unversioned paths
    application.include_router(health.router)
    application.include_router(prometheus.router)
    return application


app = create_app()
