"""
Fixtures for web endpoint tests: an app around a scripted completion provider.
"""
import json

import pytest
from fastapi.testclient import TestClient

from core.app_context import AppContext
from core.config_loader import AppConfig
from tests.fixtures.candidate_fixtures import SAMPLE_RECORDS
from tests.mocks.llm_mocks import ScriptedLLMProvider, roles_response
from web.backend.app import create_app
from web.backend.routers.upload import limiter


@pytest.fixture
def llm():
    return ScriptedLLMProvider(query=roles_response(
        {"title": "Backend Engineer", "count": 1, "mustHaveSkills": ["Node.js"]}
    ))


@pytest.fixture
def ctx(llm):
    return AppContext.build(AppConfig(), ai_service=llm)


@pytest.fixture
def client(ctx):
    # Disable rate limiting for tests
    limiter.enabled = False
    return TestClient(create_app(ctx), raise_server_exceptions=False)


@pytest.fixture
def upload(client):
    def _upload(payload=None, filename="candidates.json"):
        content = payload if isinstance(payload, (str, bytes)) else json.dumps(payload or SAMPLE_RECORDS)
        return client.post("/api/upload", files={"file": (filename, content, "application/json")})
    return _upload
