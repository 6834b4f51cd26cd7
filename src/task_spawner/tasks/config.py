"""
Deployment settings for spawned worker tasks.

Where the workers run: cluster, networking, IAM roles, log destination and
container sizing.  All values are opaque strings to the spawner; they are
validated by ECS when the task definition is registered.

Every field can be set via environment variables prefixed with
``SPAWNER_ECS_`` (``SPAWNER_ECS_CLUSTER_NAME``, ``SPAWNER_ECS_SUBNET_ID`` …).

Tags:
    ecs-task-spawner, settings, deployment, ecs, fargate

Doc-Types:
    - Configuration Guide
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_DEFAULT_ROLE_ARN = "arn:aws:iam::123456789012:role/ecsTaskExecutionRole"


class DeploymentSettings(BaseSettings):
    """Fixed parameters applied to every spawned worker."""

    model_config = SettingsConfigDict(
        env_prefix="SPAWNER_ECS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # ── Placement ────────────────────────────────────────────────────────
    cluster_name: str = Field(default="default", description="ECS cluster for spawn and queries")
    subnet_id: str = Field(default="subnet-0c8b6b6b", description="Private subnet for awsvpc networking")
    security_group_id: str = Field(default="sg-0c8b6b6b", description="Security group for the task ENI")
    assign_public_ip: bool = Field(default=False, description="Give the task ENI a public IP")

    # ── IAM ──────────────────────────────────────────────────────────────
    task_role_arn: str = Field(default=_DEFAULT_ROLE_ARN, description="Role assumed by the worker")
    execution_role_arn: str = Field(default=_DEFAULT_ROLE_ARN, description="Role used to pull and log")

    # ── Logging ──────────────────────────────────────────────────────────
    log_group: str = Field(default="/ecs/soi-worker", description="CloudWatch log group")
    log_region: str = Field(default="us-east-1", description="Region of the log group")
    log_stream_prefix: str = Field(default="ecs", description="awslogs stream prefix")

    # ── Container ────────────────────────────────────────────────────────
    family_prefix: str = Field(default="worker", description="Task family is '<prefix>-<vendor>'")
    container_name: str = Field(default="worker", description="Name of the single container")
    cpu: int = Field(default=256, gt=0, description="Fargate CPU units")
    memory: int = Field(default=512, gt=0, description="Fargate memory (MiB)")
