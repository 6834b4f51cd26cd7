"""Tests for the FastAPI app factory, settings and dependencies."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from pydantic import ValidationError as PydanticValidationError

from task_spawner import __version__
from task_spawner.api import create_app
from task_spawner.api.deps import build_gateway, build_repository
from task_spawner.api.settings import APISettings
from task_spawner.tasks.config import DeploymentSettings
from task_spawner.tasks.gateways import EcsGateway, InMemoryGateway


class TestCreateApp:
    def test_returns_fastapi(self, app):
        assert isinstance(app, FastAPI)
        assert app.title == "ecs-task-spawner"
        assert app.version == __version__

    def test_routes_registered(self, app):
        paths = set(app.openapi()["paths"])
        assert {"/spawn-worker", "/task-family", "/task-tag", "/health", "/health/live"} <= paths

    def test_repository_on_state(self, app, repository):
        assert app.state.repository is repository

    def test_builds_memory_repository(self):
        app = create_app(settings=APISettings(gateway_backend="memory"))
        assert isinstance(app.state.repository.gateway, InMemoryGateway)

    def test_deployment_override(self):
        app = create_app(
            settings=APISettings(gateway_backend="memory"),
            deployment=DeploymentSettings(cluster_name="batch"),
        )
        assert app.state.repository.queries.cluster == "batch"

    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["service"] == "ecs-task-spawner"
        assert resp.json()["version"] == __version__

    def test_lifespan_runs(self, app):
        from fastapi.testclient import TestClient

        with TestClient(app) as client:
            assert client.get("/health/live").status_code == 200


class TestSettings:
    def test_defaults(self):
        s = APISettings()
        assert s.host == "0.0.0.0"
        assert s.port == 3000
        assert s.api_key is None
        assert s.gateway_backend == "ecs"
        assert s.aws_region == "us-east-1"
        assert s.aws_max_attempts == 3

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("SPAWNER_PORT", "8080")
        monkeypatch.setenv("SPAWNER_API_KEY", "k")
        monkeypatch.setenv("SPAWNER_GATEWAY_BACKEND", "memory")
        s = APISettings()
        assert s.port == 8080
        assert s.api_key == "k"
        assert s.gateway_backend == "memory"

    def test_rejects_unknown_backend(self):
        with pytest.raises(PydanticValidationError):
            APISettings(gateway_backend="k8s")

    def test_deployment_defaults(self):
        d = DeploymentSettings()
        assert d.cluster_name == "default"
        assert d.log_group == "/ecs/soi-worker"
        assert d.family_prefix == "worker"
        assert d.cpu == 256
        assert d.memory == 512
        assert d.assign_public_ip is False

    def test_deployment_env_override(self, monkeypatch):
        monkeypatch.setenv("SPAWNER_ECS_CLUSTER_NAME", "batch")
        monkeypatch.setenv("SPAWNER_ECS_SUBNET_ID", "subnet-abc")
        d = DeploymentSettings()
        assert d.cluster_name == "batch"
        assert d.subnet_id == "subnet-abc"

    def test_deployment_is_frozen(self):
        d = DeploymentSettings()
        with pytest.raises(PydanticValidationError):
            d.cluster_name = "other"


class TestDeps:
    def test_memory_gateway(self):
        gateway = build_gateway(APISettings(gateway_backend="memory", aws_region="eu-west-1"), DeploymentSettings())
        assert isinstance(gateway, InMemoryGateway)
        assert gateway.region == "eu-west-1"

    def test_ecs_gateway(self, monkeypatch):
        monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
        monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
        deployment = DeploymentSettings()
        gateway = build_gateway(APISettings(gateway_backend="ecs"), deployment)
        assert isinstance(gateway, EcsGateway)
        assert gateway.deployment is deployment
        assert gateway.client.meta.region_name == "us-east-1"

    def test_repository_shares_deployment(self):
        deployment = DeploymentSettings(cluster_name="batch")
        repo = build_repository(APISettings(gateway_backend="memory"), deployment)
        assert repo.deployment is deployment
        assert repo.builder.deployment is deployment
