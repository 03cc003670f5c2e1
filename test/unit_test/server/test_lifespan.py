"""
Unit tests for FastAPI application lifespan management.

Tests verify that startup creates the schema, that a failing database does
not stop the server from starting, and that shutdown closes the shared edge
function client.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI

from cdi_platform.server.main import lifespan

pytestmark = pytest.mark.asyncio


@pytest.fixture
def edge_client():
    client = MagicMock()
    client.aclose = AsyncMock()
    with patch("cdi_platform.server.main.get_edge_client", return_value=client):
        yield client


class TestLifespanStartup:
    """Test application startup lifespan events."""

    async def test_lifespan_startup_initializes_database(self, edge_client):
        with patch("cdi_platform.server.main.init_db", new_callable=AsyncMock) as mock_init_db:
            async with lifespan(FastAPI()):
                mock_init_db.assert_called_once()

    async def test_lifespan_startup_logs_success(self, edge_client):
        with (
            patch("cdi_platform.server.main.init_db", new_callable=AsyncMock),
            patch("cdi_platform.server.main.logger") as mock_logger,
        ):
            async with lifespan(FastAPI()):
                pass

            calls = [call[0][0] for call in mock_logger.info.call_args_list]
            assert any("Starting up" in call for call in calls)
            assert any("Database initialized successfully" in call for call in calls)

    async def test_lifespan_startup_handles_init_db_exception(self, edge_client):
        """A database outage is logged and the server still starts."""
        with (
            patch("cdi_platform.server.main.init_db", new_callable=AsyncMock) as mock_init_db,
            patch("cdi_platform.server.main.logger") as mock_logger,
        ):
            mock_init_db.side_effect = Exception("Database connection failed")

            async with lifespan(FastAPI()):
                mock_logger.error.assert_called_once()
                assert "Database connection failed" in mock_logger.error.call_args[0][0]


class TestLifespanShutdown:
    async def test_lifespan_shutdown_closes_edge_client(self, edge_client):
        with patch("cdi_platform.server.main.init_db", new_callable=AsyncMock):
            async with lifespan(FastAPI()):
                edge_client.aclose.assert_not_called()

        edge_client.aclose.assert_awaited_once()
