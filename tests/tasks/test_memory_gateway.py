"""
Tests for InMemoryGateway.

The in-memory gateway backs the API tests and ``serve --gateway memory``,
so its ECS-shaped records and injected failures are checked here directly.
"""

from __future__ import annotations

import threading

import pytest

from task_spawner.core.errors import DescribeError, ListError, RegistrationError, RunError
from task_spawner.tasks.builder import TaskSpecBuilder


@pytest.fixture
def definition(deployment, work_request):
    return TaskSpecBuilder(deployment).build(work_request)


class TestRegisterAndRun:
    def test_register_returns_revisioned_arn(self, gateway, definition):
        arn = gateway.register_definition(definition)
        assert arn == "arn:aws:ecs:us-east-1:000000000000:task-definition/worker-bloomberg:1"
        assert gateway.definitions[arn] is definition

    def test_region_in_arns(self, definition):
        from task_spawner.tasks.gateways.memory import InMemoryGateway

        gateway = InMemoryGateway(region="eu-west-1")
        assert ":eu-west-1:" in gateway.register_definition(definition)

    def test_run_creates_ecs_shaped_task(self, gateway, definition):
        arn = gateway.register_definition(definition)
        (raw,) = gateway.run("workers", arn, definition)

        assert raw["taskDefinitionArn"] == arn
        assert raw["lastStatus"] == "PROVISIONING"
        assert raw["containers"] == [{"name": "worker", "image": definition.image}]
        assert raw["tags"] == [t.to_dict() for t in definition.tags]
        assert raw["createdAt"].tzinfo is not None
        assert gateway.list_task_ids("workers") == [raw["taskArn"]]

    def test_run_unknown_definition(self, gateway, definition):
        with pytest.raises(RunError, match="Unknown task definition"):
            gateway.run("workers", "arn:missing", definition)

    def test_initial_status(self, definition):
        from task_spawner.tasks.gateways.memory import InMemoryGateway

        gateway = InMemoryGateway(initial_status="RUNNING")
        arn = gateway.register_definition(definition)
        assert gateway.run("workers", arn, definition)[0]["lastStatus"] == "RUNNING"


class TestListAndDescribe:
    def test_empty_cluster(self, gateway):
        assert gateway.list_task_ids("nowhere") == []

    def test_describe_skips_unknown_ids(self, gateway):
        gateway.add_task({"taskArn": "t1"}, cluster="workers")
        described = gateway.describe("workers", ["t1", "t2"])
        assert [r["taskArn"] for r in described] == ["t1"]

    def test_describe_returns_copies(self, gateway):
        gateway.add_task({"taskArn": "t1", "lastStatus": "RUNNING"}, cluster="workers")
        gateway.describe("workers", ["t1"])[0]["lastStatus"] = "STOPPED"
        assert gateway.describe("workers", ["t1"])[0]["lastStatus"] == "RUNNING"

    def test_add_task_generates_id(self, gateway):
        task_id = gateway.add_task({"lastStatus": "RUNNING"})
        assert task_id.startswith("task-")
        assert gateway.list_task_ids("default") == [task_id]


class TestFailureInjection:
    def test_fail_register(self, gateway, definition):
        gateway.fail_register = True
        with pytest.raises(RegistrationError):
            gateway.register_definition(definition)
        assert gateway.register_count == 1

    def test_fail_run(self, gateway, definition):
        arn = gateway.register_definition(definition)
        gateway.fail_run = True
        with pytest.raises(RunError):
            gateway.run("workers", arn, definition)

    def test_start_no_tasks(self, gateway, definition):
        arn = gateway.register_definition(definition)
        gateway.start_no_tasks = True
        assert gateway.run("workers", arn, definition) == []
        assert gateway.list_task_ids("workers") == []

    def test_fail_list_and_describe(self, gateway):
        gateway.fail_list = True
        gateway.fail_describe = True
        with pytest.raises(ListError):
            gateway.list_task_ids("workers")
        with pytest.raises(DescribeError):
            gateway.describe("workers", ["t1"])

    def test_reset(self, gateway, definition):
        arn = gateway.register_definition(definition)
        gateway.run("workers", arn, definition)
        gateway.reset()
        assert gateway.definitions == {}
        assert gateway.list_task_ids("workers") == []
        assert gateway.register_count == 0
        assert gateway.run_count == 0
        assert gateway.list_count == 1


class TestConcurrency:
    def test_concurrent_runs(self, gateway, definition):
        arn = gateway.register_definition(definition)

        def spawn_many():
            for _ in range(20):
                gateway.run("workers", arn, definition)

        threads = [threading.Thread(target=spawn_many) for _ in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert gateway.run_count == 100
        assert len(gateway.list_task_ids("workers")) == 100
