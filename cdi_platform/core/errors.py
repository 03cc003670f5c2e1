"""Domain error types shared by the service layer.

Services raise these instead of HTTP errors; the server maps them to status
codes in ``cdi_platform.server.exception_handlers``.
"""

from __future__ import annotations

from typing import Any, Optional


class PlatformError(Exception):
    """Base error for platform service failures.

    Args:
        message: Human-readable error description.
        details: Optional structured context for diagnosis.
    """

    def __init__(self, message: str, *, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(PlatformError):
    """Raised when a referenced row does not exist."""

    def __init__(self, entity: str, entity_id: str) -> None:
        super().__init__(f"{entity} not found: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


class ValidationError(PlatformError):
    """Raised when caller input breaks a business rule."""


class ConflictError(PlatformError):
    """Raised when the current row state does not allow the requested change."""
