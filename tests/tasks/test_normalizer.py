"""Tests for the raw-task normaliser."""

from __future__ import annotations

import time
from datetime import UTC, datetime, timedelta, timezone

import pytest

from task_spawner.tasks._types import Tag
from task_spawner.tasks.normalizer import normalize, parse_timestamp


class TestParseTimestamp:
    def test_aware_datetime_converted_to_utc(self):
        plus_two = timezone(timedelta(hours=2))
        parsed = parse_timestamp(datetime(2026, 1, 1, 14, 0, tzinfo=plus_two))
        assert parsed == datetime(2026, 1, 1, 12, 0, tzinfo=UTC)
        assert parsed.tzinfo == UTC

    def test_naive_datetime_taken_as_utc(self):
        parsed = parse_timestamp(datetime(2026, 1, 1, 12, 0))
        assert parsed == datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

    def test_epoch_seconds(self):
        assert parse_timestamp(0) == datetime(1970, 1, 1, tzinfo=UTC)
        assert parse_timestamp(1.5) == datetime(1970, 1, 1, 0, 0, 1, 500000, tzinfo=UTC)

    def test_negative_epoch_clamped(self):
        assert parse_timestamp(-10) == datetime(1970, 1, 1, tzinfo=UTC)

    @pytest.mark.parametrize(
        "value",
        [None, "2026-01-01", True, object(), 1e20, float("inf"), float("-inf"), float("nan")],
    )
    def test_unparseable(self, value):
        assert parse_timestamp(value) is None


class TestNormalize:
    def test_full_record(self, raw_task_factory, fixed_now):
        created = fixed_now - timedelta(minutes=5)
        raw = raw_task_factory(
            created_at=created,
            tags=[{"key": "client_id", "value": "c1"}],
        )

        info = normalize(raw, now=fixed_now)

        assert info.task_id == raw["taskArn"]
        assert info.status == "RUNNING"
        assert info.created_at == created
        assert info.running_duration == timedelta(minutes=5)
        assert info.image == "public.ecr.aws/soi/bloomberg-worker:latest"
        assert info.cpu_usage is None
        assert info.memory_usage is None
        assert info.tags == (Tag("client_id", "c1"),)

    def test_epoch_created_at(self, raw_task_factory, fixed_now):
        created = fixed_now.timestamp() - 30.0
        info = normalize(raw_task_factory(created_at=created), now=fixed_now)
        assert info.running_duration == timedelta(seconds=30)

    def test_missing_created_at(self, raw_task_factory, fixed_now):
        info = normalize(raw_task_factory(), now=fixed_now)
        assert info.created_at == fixed_now
        assert info.running_duration is None

    def test_future_created_at_clamps_to_zero(self, raw_task_factory, fixed_now):
        raw = raw_task_factory(created_at=fixed_now + timedelta(seconds=3))
        assert normalize(raw, now=fixed_now).running_duration == timedelta(0)

    def test_images_concatenated_in_order(self, raw_task_factory, fixed_now):
        raw = raw_task_factory(images=("a:1", "b:2"))
        assert normalize(raw, now=fixed_now).image == "a:1b:2"

    def test_no_containers(self, fixed_now):
        info = normalize({"taskArn": "t"}, now=fixed_now)
        assert info.image == ""
        assert info.status == ""
        assert info.tags == ()

    def test_container_without_image(self, fixed_now):
        raw = {"containers": [{"name": "a"}, {"name": "b", "image": "b:2"}]}
        assert normalize(raw, now=fixed_now).image == "b:2"

    def test_missing_tag_fields_default_to_empty(self, raw_task_factory, fixed_now):
        raw = raw_task_factory(tags=[{"key": "client_id"}, {"value": "orphan"}])
        assert normalize(raw, now=fixed_now).tags == (
            Tag("client_id", ""),
            Tag("", "orphan"),
        )

    def test_empty_record(self, fixed_now):
        info = normalize({}, now=fixed_now)
        assert info.task_id == ""
        assert info.created_at == fixed_now
        assert info.running_duration is None

    def test_idempotent_for_fixed_now(self, raw_task_factory, fixed_now):
        raw = raw_task_factory(created_at=fixed_now - timedelta(hours=1))
        assert normalize(raw, now=fixed_now) == normalize(raw, now=fixed_now)

    def test_default_now_is_utc(self, raw_task_factory):
        info = normalize(raw_task_factory())
        assert info.created_at.tzinfo == UTC

    @pytest.mark.parametrize("created_at", [1e20, float("inf"), float("nan")])
    def test_out_of_range_created_at_degrades(self, raw_task_factory, fixed_now, created_at):
        info = normalize(raw_task_factory(created_at=created_at), now=fixed_now)
        assert info.created_at == fixed_now
        assert info.running_duration is None


class TestRunningDurationWallClock:
    def test_tracks_real_time(self, raw_task_factory):
        raw = raw_task_factory(created_at=time.time() - 5)

        first = normalize(raw).running_duration
        time.sleep(0.05)
        second = normalize(raw).running_duration

        assert first is not None
        assert second is not None
        assert second >= first
        assert abs(first.total_seconds() - 5) < 1
