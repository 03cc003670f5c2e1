"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request timing), registers exception handlers and includes all API routers.
It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cdi_platform.core.database.session import init_db
from cdi_platform.core.logging_config import get_logger, setup_logging
from cdi_platform.core.monitoring import initialize_logfire

from .api.v1 import (
    analytics,
    calendar,
    estimates,
    health,
    inbox,
    invitations,
    leaderboard,
    sms,
    tool_rentals,
    verification,
)
from .core import constant
from .core.config import settings
from .deps import get_edge_client
from .exception_handlers import setup_exception_handlers
from .middleware import LogfireMiddleware

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Creates missing tables on startup and closes the shared edge function
    client on shutdown.
    """
    try:
        logger.info("Starting up CDI Platform Server...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    logger.info("Shutting down CDI Platform Server...")
    await get_edge_client().aclose()


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    CDI Platform Server API

    Backend services for the contractor community platform: seller analytics,
    rent-to-own tools, AI estimates, team invitations, calendar sync and SMS.
    """,
    version=constant.API_VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

initialize_logfire(app)
setup_exception_handlers(app)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(LogfireMiddleware)


app.include_router(health.router, tags=["health"])
app.include_router(analytics.router, prefix=f"{constant.API_V1_STR}/analytics", tags=["analytics"])
app.include_router(tool_rentals.router, prefix=f"{constant.API_V1_STR}/tool-rentals", tags=["tool-rentals"])
app.include_router(estimates.router, prefix=f"{constant.API_V1_STR}/estimates", tags=["estimates"])
app.include_router(sms.router, prefix=f"{constant.API_V1_STR}/sms", tags=["sms"])
app.include_router(calendar.router, prefix=f"{constant.API_V1_STR}/calendar", tags=["calendar"])
app.include_router(invitations.router, prefix=f"{constant.API_V1_STR}/invitations", tags=["invitations"])
app.include_router(verification.router, prefix=f"{constant.API_V1_STR}/verification", tags=["verification"])
app.include_router(leaderboard.router, prefix=f"{constant.API_V1_STR}/leaderboard", tags=["leaderboard"])
app.include_router(inbox.router, prefix=f"{constant.API_V1_STR}/inbox", tags=["inbox"])
