"""API test client wired to the in-memory database and mocked externals."""

import json
from typing import AsyncGenerator, List
from unittest.mock import patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from pydantic_ai.messages import ModelMessage, ModelResponse, TextPart
from pydantic_ai.models.function import AgentInfo, FunctionModel
from sqlalchemy.ext.asyncio import AsyncSession

from cdi_platform.ai import EstimateGenerator

ESTIMATE_REPLY = json.dumps(
    {
        "projectName": "Bedroom Repaint",
        "projectDescription": "Repaint walls and ceiling",
        "lineItems": [
            {
                "name": "Paint walls",
                "taskCategory": "Painting",
                "quantity": 400,
                "unitType": "square_foot",
                "unitCost": 3.5,
                "laborCost": 800,
                "materialCost": 600,
                "totalCost": 1400,
            }
        ],
        "subtotal": 1400,
        "taxRate": 0.1,
        "taxAmount": 140,
        "total": 1540,
        "estimatedDuration": 2,
    }
)


class ModelScript:
    """Canned model answers; records the prompts it receives."""

    def __init__(self, reply: str = f"```json\n{ESTIMATE_REPLY}\n```") -> None:
        self.reply = reply
        self.calls: List[List[ModelMessage]] = []

    def __call__(self, messages: List[ModelMessage], info: AgentInfo) -> ModelResponse:
        self.calls.append(messages)
        return ModelResponse(parts=[TextPart(self.reply)])


@pytest.fixture
def model_script() -> ModelScript:
    return ModelScript()


@pytest.fixture
def server_edge(edge_factory):
    """Edge client and recorder shared with the app; swap ``recorder.handler`` to change replies."""
    return edge_factory()


@pytest_asyncio.fixture(name="client")
async def client_fixture(
    in_memory_session: AsyncSession, server_edge, model_script: ModelScript
) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with mocked lifespan and overridden dependencies."""
    from cdi_platform.core.database.session import get_session
    from cdi_platform.server.deps import get_edge_client, get_estimate_generator
    from cdi_platform.server.main import app

    edge, _ = server_edge

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield in_memory_session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_edge_client] = lambda: edge
    app.dependency_overrides[get_estimate_generator] = lambda: EstimateGenerator(model=FunctionModel(model_script))

    # Mock the lifespan to prevent database initialization during tests
    async def mock_lifespan(app):
        yield

    with patch("cdi_platform.server.main.lifespan", mock_lifespan):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
            yield client

    app.dependency_overrides.clear()
