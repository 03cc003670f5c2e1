"""HTTP server for the CDI Platform service layer.

The FastAPI application lives in ``cdi_platform.server.main``.
"""
