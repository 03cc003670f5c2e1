"""Client for backend hosted edge functions (SMS, email, calendar, workspace)."""

from .client import EdgeFunctionClient
from .errors import EdgeFunctionError, EdgeFunctionUnavailableError

__all__ = ["EdgeFunctionClient", "EdgeFunctionError", "EdgeFunctionUnavailableError"]
