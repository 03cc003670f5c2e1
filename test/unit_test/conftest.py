"""Shared fixtures for unit tests that need a real database.

Every test gets a fresh in-memory SQLite database with all tables created,
plus helpers for edge function clients backed by ``httpx.MockTransport``.
"""

from __future__ import annotations

import json
from typing import AsyncGenerator, Callable, List

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlmodel.pool import StaticPool

from cdi_platform.core.database.repositories import RepositoryBundle, build_repositories
from cdi_platform.core.database.utils import create_all, create_sessionmaker
from cdi_platform.edge_functions import EdgeFunctionClient


@pytest_asyncio.fixture
async def in_memory_engine():
    """Create in-memory SQLite engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def in_memory_session(in_memory_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create in-memory SQLite session for testing."""
    async with create_sessionmaker(in_memory_engine)() as session:
        yield session


@pytest.fixture
def repos(in_memory_session: AsyncSession) -> RepositoryBundle:
    return build_repositories(in_memory_session)


class EdgeRecorder:
    """Records edge function calls and answers them from a handler."""

    def __init__(self, handler: Callable[[str, dict], httpx.Response]) -> None:
        self.handler = handler
        self.calls: List[tuple[str, dict]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        name = request.url.path.rsplit("/", 1)[-1]
        body = json.loads(request.content) if request.content else {}
        self.calls.append((name, body))
        return self.handler(name, body)

    def names(self) -> List[str]:
        return [name for name, _ in self.calls]


@pytest.fixture
def edge_factory():
    """Build an ``(EdgeFunctionClient, EdgeRecorder)`` pair for a handler.

    The default handler answers every call with ``{"success": true}``.
    """

    def _build(handler: Callable[[str, dict], httpx.Response] | None = None):
        recorder = EdgeRecorder(handler or (lambda name, body: httpx.Response(200, json={"success": True})))
        client = EdgeFunctionClient(
            "http://mock",
            api_key="service-key",
            client=httpx.AsyncClient(transport=httpx.MockTransport(recorder)),
        )
        return client, recorder

    return _build
