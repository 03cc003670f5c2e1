"""Error types raised by the edge function client.

Purpose:
- Provide typed exceptions thrown by ``EdgeFunctionClient``.
- Expose HTTP-oriented context (status code, response body) for diagnosis.

Usage:
- Catch ``EdgeFunctionError`` for any failure and inspect ``function_name``,
  ``status_code`` or ``details``.
- ``EdgeFunctionUnavailableError`` marks failures where no response arrived.
"""

from __future__ import annotations

from typing import Any, Optional


class EdgeFunctionError(Exception):
    """Base error for edge function failures.

    Args:
        message: Human-readable error description.
        function_name: Name of the invoked function.
        status_code: Optional HTTP status code associated with the failure.
        details: Optional structured payload from the server (e.g., JSON body).
    """

    def __init__(
        self,
        message: str,
        *,
        function_name: str,
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.function_name = function_name
        self.status_code = status_code
        self.details = details


class EdgeFunctionUnavailableError(EdgeFunctionError):
    """Raised when the function could not be reached (DNS, connect, timeout)."""
