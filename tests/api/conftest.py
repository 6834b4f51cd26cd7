"""Fixtures for API tests — an app over an InMemoryGateway."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from task_spawner.api.app import create_app
from task_spawner.api.settings import APISettings


@pytest.fixture
def api_settings() -> APISettings:
    return APISettings(gateway_backend="memory")


@pytest.fixture
def app(api_settings, repository):
    return create_app(settings=api_settings, repository=repository)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def spawn_body() -> dict[str, str]:
    return {
        "data_location": "s3://bucket/x",
        "requester_id": "r1",
        "client_id": "c1",
        "vendor": "bloomberg",
    }
