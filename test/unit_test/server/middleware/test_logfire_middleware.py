"""
Unit tests for Logfire middleware.

This test suite covers:
- Request timing and the X-Process-Time header
- Error handling and exception tracking
- Slow request detection
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import Request
from starlette.responses import Response

from cdi_platform.server.middleware.logfire_middleware import LogfireMiddleware


def _request(method: str = "GET", path: str = "/api/v1/test"):
    mock_request = AsyncMock(spec=Request)
    mock_request.method = method
    mock_request.url.path = path
    mock_request.url.query = ""
    mock_request.state = MagicMock()
    return mock_request


class TestLogfireMiddlewareDispatch:
    """Test LogfireMiddleware.dispatch method."""

    @pytest.mark.asyncio
    async def test_middleware_processes_successful_request(self):
        """Test that middleware processes successful requests."""

        async def mock_call_next(request):
            return Response(content="test", status_code=200)

        middleware = LogfireMiddleware(app=AsyncMock())

        with patch("cdi_platform.server.middleware.logfire_middleware.log_api_request") as mock_log:
            response = await middleware.dispatch(_request(), mock_call_next)

            assert response.status_code == 200
            mock_log.assert_called_once()
            call_args = mock_log.call_args
            assert call_args[1]["method"] == "GET"
            assert call_args[1]["path"] == "/api/v1/test"
            assert call_args[1]["status_code"] == 200
            assert call_args[1]["duration_ms"] >= 0

    @pytest.mark.asyncio
    async def test_middleware_adds_process_time_header(self):
        async def mock_call_next(request):
            return Response(content="created", status_code=201)

        middleware = LogfireMiddleware(app=AsyncMock())

        with patch("cdi_platform.server.middleware.logfire_middleware.log_api_request"):
            response = await middleware.dispatch(_request("POST", "/api/v1/tool-rentals"), mock_call_next)

        assert float(response.headers["X-Process-Time"]) >= 0

    @pytest.mark.asyncio
    async def test_middleware_records_start_time(self):
        mock_request = _request()

        async def mock_call_next(request):
            return Response(status_code=204)

        middleware = LogfireMiddleware(app=AsyncMock())

        with patch("cdi_platform.server.middleware.logfire_middleware.log_api_request"):
            await middleware.dispatch(mock_request, mock_call_next)

        assert isinstance(mock_request.state.start_time, float)

    @pytest.mark.asyncio
    async def test_middleware_logs_and_reraises_errors(self):
        """Test that failures are reported as 500 and propagated."""

        async def mock_call_next(request):
            raise RuntimeError("handler exploded")

        middleware = LogfireMiddleware(app=AsyncMock())

        with patch("cdi_platform.server.middleware.logfire_middleware.log_api_request") as mock_log, patch(
            "cdi_platform.server.middleware.logfire_middleware.logger"
        ) as mock_logger:
            with pytest.raises(RuntimeError, match="handler exploded"):
                await middleware.dispatch(_request(), mock_call_next)

            assert mock_log.call_args[1]["status_code"] == 500
            mock_logger.error.assert_called_once()
            assert mock_logger.error.call_args[1]["extra"]["error"] == "handler exploded"

    @pytest.mark.asyncio
    async def test_middleware_warns_on_slow_requests(self):
        async def mock_call_next(request):
            return Response(status_code=200)

        middleware = LogfireMiddleware(app=AsyncMock())

        with patch("cdi_platform.server.middleware.logfire_middleware.log_api_request"), patch(
            "cdi_platform.server.middleware.logfire_middleware.logger"
        ) as mock_logger, patch(
            "cdi_platform.server.middleware.logfire_middleware.time"
        ) as mock_time:
            mock_time.perf_counter.side_effect = [0.0, 2.5]
            response = await middleware.dispatch(_request(), mock_call_next)

        assert response.headers["X-Process-Time"] == "2500.00"
        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args[1]["extra"]["duration_ms"] == 2500.0

    @pytest.mark.asyncio
    async def test_middleware_fast_requests_do_not_warn(self):
        async def mock_call_next(request):
            return Response(status_code=200)

        middleware = LogfireMiddleware(app=AsyncMock())

        with patch("cdi_platform.server.middleware.logfire_middleware.log_api_request"), patch(
            "cdi_platform.server.middleware.logfire_middleware.logger"
        ) as mock_logger:
            await middleware.dispatch(_request(), mock_call_next)

        mock_logger.warning.assert_not_called()
