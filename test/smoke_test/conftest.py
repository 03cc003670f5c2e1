"""
Test infrastructure for smoke tests with real AI model calls.

Smoke tests only run when ``TEST__RUN_SMOKE_TESTS`` is true and a Google API
key is configured in ``test/.env``; otherwise they are skipped.
"""

from __future__ import annotations

import pytest
from pydantic_ai import models

from cdi_platform.ai import EstimateGenerator
from cdi_platform.server.core.config import GoogleAIConfig
from test.settings import test_settings


def pytest_collection_modifyitems(config, items):
    reason = None
    if not test_settings.test.run_smoke_tests:
        reason = "smoke tests disabled (set TEST__RUN_SMOKE_TESTS=true)"
    elif test_settings.google_ai.api_key is None:
        reason = "GOOGLE_AI__API_KEY is not set"
    if reason is None:
        return
    skip = pytest.mark.skip(reason=reason)
    for item in items:
        if "smoke" in item.keywords:
            item.add_marker(skip)


@pytest.fixture(autouse=True)
def _global_offline_http_guard():
    """Smoke tests talk to the real model API."""
    yield


@pytest.fixture
def generator(monkeypatch: pytest.MonkeyPatch) -> EstimateGenerator:
    monkeypatch.setattr(models, "ALLOW_MODEL_REQUESTS", True)
    config = GoogleAIConfig(api_key=test_settings.google_ai.api_key, model=test_settings.google_ai.model)
    return EstimateGenerator.from_config(config)
