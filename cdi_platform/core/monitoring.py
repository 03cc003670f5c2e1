"""
Monitoring and Tracing Configuration Module.

This module wires Pydantic Logfire into the platform when it is enabled:

- Pydantic AI estimate calls
- SQLAlchemy queries
- HTTPX calls to edge functions
- FastAPI endpoints

Logfire stays off unless ``LOGFIRE_ENABLED`` is set and a token is present,
so local development and tests never ship telemetry.
"""

import logging
import os
from typing import Optional

import logfire
from fastapi import FastAPI

logger = logging.getLogger(__name__)


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


# Logfire configuration from environment
LOGFIRE_ENABLED = _flag("LOGFIRE_ENABLED", "false")
LOGFIRE_TOKEN = os.getenv("LOGFIRE_TOKEN", "")
LOGFIRE_PROJECT_NAME = os.getenv("LOGFIRE_PROJECT_NAME", "cdi-platform")
LOGFIRE_ENVIRONMENT = os.getenv("LOGFIRE_ENVIRONMENT", "development")
LOGFIRE_SERVICE_NAME = os.getenv("LOGFIRE_SERVICE_NAME", "cdi-platform-server")
LOGFIRE_SERVICE_VERSION = os.getenv("LOGFIRE_SERVICE_VERSION", "0.1.0")

# Feature flags
LOGFIRE_TRACE_PYDANTIC_AI = _flag("LOGFIRE_TRACE_PYDANTIC_AI", "true")
LOGFIRE_TRACE_SQLALCHEMY = _flag("LOGFIRE_TRACE_SQLALCHEMY", "true")
LOGFIRE_TRACE_HTTPX = _flag("LOGFIRE_TRACE_HTTPX", "true")
LOGFIRE_TRACE_FASTAPI = _flag("LOGFIRE_TRACE_FASTAPI", "true")

_initialized = False


def initialize_logfire(app: FastAPI | None = None) -> bool:
    """
    Initialize Pydantic Logfire for monitoring and tracing.

    Args:
        app: FastAPI application to instrument (optional).

    Returns:
        True when Logfire was configured.
    """
    global _initialized

    if not LOGFIRE_ENABLED:
        logger.info("Logfire monitoring is disabled. Set LOGFIRE_ENABLED=true to enable.")
        return False

    if not LOGFIRE_TOKEN:
        logger.warning("Logfire is enabled but LOGFIRE_TOKEN is not set. Monitoring will not work.")
        return False

    try:
        logfire.configure(
            token=LOGFIRE_TOKEN,
            service_name=LOGFIRE_SERVICE_NAME,
            service_version=LOGFIRE_SERVICE_VERSION,
            environment=LOGFIRE_ENVIRONMENT,
        )
    except Exception as e:
        logger.error(f"Failed to initialize Logfire: {e}", exc_info=True)
        return False

    instrumentations = (
        (LOGFIRE_TRACE_PYDANTIC_AI, "Pydantic AI", logfire.instrument_pydantic_ai),
        (LOGFIRE_TRACE_SQLALCHEMY, "SQLAlchemy", logfire.instrument_sqlalchemy),
        (LOGFIRE_TRACE_HTTPX, "HTTPX", logfire.instrument_httpx),
    )
    for enabled, label, instrument in instrumentations:
        if not enabled:
            continue
        try:
            instrument()
            logger.info(f"Logfire: {label} instrumentation enabled")
        except Exception as e:
            logger.warning(f"Failed to instrument {label}: {e}")

    if LOGFIRE_TRACE_FASTAPI:
        if app is not None:
            try:
                logfire.instrument_fastapi(app=app)
                logger.info("Logfire: FastAPI instrumentation enabled")
            except Exception as e:
                logger.warning(f"Failed to instrument FastAPI: {e}")
        else:
            logger.debug("FastAPI app instance not provided, skipping FastAPI instrumentation")

    _initialized = True
    logger.info(
        f"Logfire monitoring initialized: project={LOGFIRE_PROJECT_NAME}, "
        f"environment={LOGFIRE_ENVIRONMENT}, service={LOGFIRE_SERVICE_NAME}"
    )
    return True


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    """
    Log an API request with performance metrics.

    Args:
        method: HTTP method
        path: Request path
        status_code: HTTP status code
        duration_ms: Request duration in milliseconds
    """
    if not _initialized:
        return
    try:
        logfire.info(
            "API request completed",
            method=method,
            path=path,
            status_code=status_code,
            duration_ms=duration_ms,
        )
    except Exception:
        logger.debug(f"Could not log API request to Logfire: {method} {path}")


def log_notification(channel: str, kind: str, success: bool, error: Optional[str] = None) -> None:
    """
    Log an outbound notification (sms, email, calendar) dispatch.

    Args:
        channel: Delivery channel name
        kind: Message type, for example ``task-invitation``
        success: Whether the edge function accepted the message
        error: Failure reason, when any
    """
    if not _initialized:
        return
    try:
        logfire.info("Notification dispatched", channel=channel, kind=kind, success=success, error=error)
    except Exception:
        logger.debug(f"Could not log notification to Logfire: {channel}/{kind}")
