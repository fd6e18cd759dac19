"""AWS ECS release helpers."""

from ecs_release.core.deployments.aws_ecs.deploy import (
    build_release,
    deploy_release,
    list_images,
    release_image,
    rollback_release,
)
from ecs_release.core.deployments.aws_ecs.ecr import image_exists, list_recent_images
from ecs_release.core.deployments.aws_ecs.errors import (
    ImageNotFoundError,
    MissingDependencyError,
    ReleaseError,
    RepositoryNotFoundError,
    RevisionError,
    ServiceUpdateError,
    TaskDefinitionError,
)
from ecs_release.core.deployments.aws_ecs.images import ImageBuildConfig, build_and_push_image
from ecs_release.core.deployments.aws_ecs.models import (
    EcsReleaseConfig,
    ImageSummary,
    ReleaseResult,
    ServiceStatus,
)
from ecs_release.core.deployments.aws_ecs.revision import get_commit_hash
from ecs_release.core.deployments.aws_ecs.services import (
    describe_service_status,
    update_service,
    wait_for_service_stable,
)
from ecs_release.core.deployments.aws_ecs.session import (
    create_session,
    get_identity,
    image_uri,
    repository_uri,
)
from ecs_release.core.deployments.aws_ecs.task_definitions import (
    SERVER_ASSIGNED_FIELDS,
    describe_task_definition,
    register_task_definition,
    with_image,
)
from ecs_release.core.deployments.aws_ecs.tools import require_executables

__all__ = [
    "EcsReleaseConfig",
    "ImageBuildConfig",
    "ImageSummary",
    "ReleaseResult",
    "ServiceStatus",
    "ReleaseError",
    "RepositoryNotFoundError",
    "MissingDependencyError",
    "RevisionError",
    "ImageNotFoundError",
    "TaskDefinitionError",
    "ServiceUpdateError",
    "SERVER_ASSIGNED_FIELDS",
    "build_and_push_image",
    "build_release",
    "create_session",
    "deploy_release",
    "describe_service_status",
    "describe_task_definition",
    "get_commit_hash",
    "get_identity",
    "image_exists",
    "image_uri",
    "list_images",
    "list_recent_images",
    "register_task_definition",
    "release_image",
    "repository_uri",
    "require_executables",
    "rollback_release",
    "update_service",
    "wait_for_service_stable",
    "with_image",
]
