"""
FastAPI Application Entry Point.

This is the main application file for the Parcel Delivery Backend.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from parcel_delivery.app.core.config import settings
from parcel_delivery.app.api.v1.router import router as api_v1_router
from parcel_delivery.app.core.jwt import build_token_verifier
from parcel_delivery.app.core.observability import ObservabilityMiddleware, configure_logging
from parcel_delivery.app.db.session import Database
from parcel_delivery.app.services.payment_gateway import build_payment_gateway
from parcel_delivery.app.core.exceptions import (
    AppException,
    app_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    store_exception_handler,
    generic_exception_handler
)

# Import models to ensure they are registered with Base
from parcel_delivery.app.models.user import User
from parcel_delivery.app.models.parcel import Parcel
from parcel_delivery.app.models.payment import Payment
from parcel_delivery.app.models.rider_application import RiderApplication
from parcel_delivery.app.models.tracking_event import TrackingEvent
from parcel_delivery.app.models.audit_log import AuditLog

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for application startup/shutdown.

    1. Opens the store and creates tables on startup.
    2. Builds the token verifier and payment gateway.
    3. Disposes the engine on shutdown.
    """
    configure_logging(settings.log_level)

    engine_kwargs = {"echo": settings.db_echo}
    if not settings.database_url.startswith("sqlite"):
        engine_kwargs.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=True,
        )

    database = Database(settings.database_url, **engine_kwargs)
    await database.create_all()

    app.state.database = database
    app.state.token_verifier = build_token_verifier()
    app.state.payment_gateway = build_payment_gateway()
    logger.info("%s started", settings.app_name)

    yield

    await database.dispose()
    logger.info("%s stopped", settings.app_name)


# Initialize FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.api_version,
    debug=settings.debug,
    description="Parcel delivery backend: parcels, payments, riders and tracking",
    lifespan=lifespan,
)

app.add_middleware(ObservabilityMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register global exception handlers
app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(SQLAlchemyError, store_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health check endpoint.

    Returns:
        dict: Status and application information
    """
    return {
        "status": "healthy",
        "app_name": settings.app_name,
        "version": settings.api_version,
    }


# Include API v1 router
app.include_router(api_v1_router, prefix=settings.api_prefix)


@app.get("/", tags=["Root"], response_class=PlainTextResponse)
async def root():
    """Liveness probe."""
    return "Parcel Delivery Server is running"
