"""Core infrastructure: logging, monitoring, errors and the database layer."""

from .errors import ConflictError, NotFoundError, PlatformError, ValidationError
from .logging_config import get_logger, setup_logging

__all__ = [
    "ConflictError",
    "NotFoundError",
    "PlatformError",
    "ValidationError",
    "get_logger",
    "setup_logging",
]
