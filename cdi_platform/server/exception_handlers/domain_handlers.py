"""
Domain Exception Handlers.

Map the platform's typed errors to JSON responses with an HTTP status that
tells the client whether to fix the request (4xx) or report an upstream
failure (5xx).
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from cdi_platform.ai.errors import AIConfigurationError, AIError, EstimateParseError
from cdi_platform.core.errors import ConflictError, NotFoundError, PlatformError, ValidationError
from cdi_platform.core.logging_config import get_logger
from cdi_platform.edge_functions.errors import EdgeFunctionError

logger = get_logger(__name__)

# Most specific first; the first matching class wins.
STATUS_BY_ERROR = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ConflictError, status.HTTP_400_BAD_REQUEST),
    (AIConfigurationError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (EstimateParseError, status.HTTP_502_BAD_GATEWAY),
    (AIError, status.HTTP_502_BAD_GATEWAY),
    (PlatformError, status.HTTP_400_BAD_REQUEST),
)


def status_for(exc: Exception) -> int:
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def platform_error_handler(request: Request, exc: PlatformError) -> JSONResponse:
    status_code = status_for(exc)
    log = logger.warning if status_code >= 500 else logger.info
    log(f"{type(exc).__name__} in {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "error_type": type(exc).__name__},
    )


async def edge_function_error_handler(request: Request, exc: EdgeFunctionError) -> JSONResponse:
    logger.warning(
        f"Edge function {exc.function_name} failed during {request.method} {request.url.path}: {exc}",
        extra={"function_name": exc.function_name, "status_code": exc.status_code},
    )
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={
            "detail": str(exc),
            "error_type": type(exc).__name__,
            "function_name": exc.function_name,
        },
    )
