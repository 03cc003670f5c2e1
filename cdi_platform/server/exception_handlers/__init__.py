"""
Exception handlers for the CDI Platform server.

This package contains the handlers that map domain errors to HTTP responses,
the global fallback handler, and a setup function that registers them.
"""

from .global_handler import setup_exception_handlers

__all__ = ["setup_exception_handlers"]
