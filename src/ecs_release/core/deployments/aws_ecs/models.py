"""Data models for ECS releases."""

from dataclasses import dataclass, field
from datetime import datetime

NO_TAG = "<no-tag>"
LATEST_TAG = "latest"


@dataclass
class EcsReleaseConfig:
    """Configuration for building and releasing to ECS."""

    aws_region: str
    aws_profile: str | None
    cluster_name: str
    service_name: str
    task_family: str
    ecr_repository: str
    container_name: str | None = None
    build_context: str = "."
    wait_delay_seconds: int = 15
    wait_max_attempts: int = 40


@dataclass(frozen=True)
class ImageSummary:
    """An image stored in the ECR repository."""

    tags: list[str] = field(default_factory=list)
    pushed_at: datetime | None = None
    digest: str = ""

    @property
    def label(self) -> str:
        """Return the tags joined for display."""
        return ", ".join(self.tags) if self.tags else NO_TAG


@dataclass(frozen=True)
class ServiceStatus:
    """Current deployment state of an ECS service."""

    service_name: str
    task_definition_arn: str
    image: str
    running_count: int
    desired_count: int
    rollout_state: str


@dataclass(frozen=True)
class ReleaseResult:
    """Outcome of a deploy or rollback."""

    image_uri: str
    task_definition_arn: str
    stable: bool
