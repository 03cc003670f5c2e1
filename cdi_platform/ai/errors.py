"""Error types raised by the AI estimate layer."""

from __future__ import annotations

from cdi_platform.core.errors import PlatformError


class AIError(PlatformError):
    """Base error for AI generation failures."""


class AIConfigurationError(AIError):
    """Raised when no model or API key is configured."""


class AIServiceError(AIError):
    """Raised when the model call itself fails."""


class EstimateParseError(AIError):
    """Raised when the model answer is not a valid estimate document.

    ``details`` holds the raw model text.
    """
