"""Build, deploy and rollback entrypoints for ECS."""

from collections.abc import Callable
from typing import Any

from ecs_release.core.deployments.aws_ecs.ecr import image_exists, list_recent_images
from ecs_release.core.deployments.aws_ecs.errors import ImageNotFoundError
from ecs_release.core.deployments.aws_ecs.images import ImageBuildConfig, build_and_push_image
from ecs_release.core.deployments.aws_ecs.models import (
    EcsReleaseConfig,
    ImageSummary,
    ReleaseResult,
)
from ecs_release.core.deployments.aws_ecs.revision import get_commit_hash
from ecs_release.core.deployments.aws_ecs.services import update_service, wait_for_service_stable
from ecs_release.core.deployments.aws_ecs.session import get_identity, image_uri, repository_uri
from ecs_release.core.deployments.aws_ecs.task_definitions import (
    describe_task_definition,
    register_task_definition,
    with_image,
)


def build_release(
    session: Any,
    config: EcsReleaseConfig,
    reporter: Callable[[str], None],
) -> str:
    """Build and push the image for the current commit.

    Returns:
        The image reference tagged with the commit hash.
    """
    reporter("Starting Docker image build")
    commit_hash = get_commit_hash()
    account_id = get_identity(session)["Account"]
    ecr_uri = repository_uri(account_id, config.aws_region, config.ecr_repository)
    reporter(f"Commit hash: {commit_hash}")
    reporter(f"ECR URI: {ecr_uri}")

    pushed = build_and_push_image(
        session,
        ImageBuildConfig(
            repository=config.ecr_repository,
            repository_uri=ecr_uri,
            image_tag=commit_hash,
            build_context=config.build_context,
        ),
        reporter,
    )
    reporter("Build completed successfully")
    reporter(f"Image available: {pushed[0]}")
    return pushed[0]


def deploy_release(
    session: Any,
    config: EcsReleaseConfig,
    reporter: Callable[[str], None],
) -> ReleaseResult:
    """Deploy the image built from the current commit."""
    reporter("Starting ECS deploy")
    commit_hash = get_commit_hash()
    return release_image(session, config, commit_hash, reporter)


def rollback_release(
    session: Any,
    config: EcsReleaseConfig,
    version: str,
    reporter: Callable[[str], None],
) -> ReleaseResult:
    """Roll the service back to a previously pushed image tag."""
    reporter(f"Starting rollback to version: {version}")
    return release_image(session, config, version, reporter)


def release_image(
    session: Any,
    config: EcsReleaseConfig,
    tag: str,
    reporter: Callable[[str], None],
) -> ReleaseResult:
    """Register a task definition for an image tag and roll the service onto it.

    The tag must already exist in ECR; nothing is registered otherwise.
    """
    account_id = get_identity(session)["Account"]
    target_image = image_uri(account_id, config.aws_region, config.ecr_repository, tag)

    if not image_exists(session, config.ecr_repository, tag):
        raise ImageNotFoundError(config.ecr_repository, tag)

    reporter("Creating new task definition")
    current = describe_task_definition(session, config.task_family)
    document = with_image(current, target_image, config.container_name)
    task_definition_arn = register_task_definition(session, document)
    reporter(f"New task definition created: {task_definition_arn}")

    reporter(f"Updating ECS service {config.service_name}")
    update_service(session, config.cluster_name, config.service_name, task_definition_arn)

    reporter("Waiting for the service to stabilise")
    stable = wait_for_service_stable(
        session,
        config.cluster_name,
        config.service_name,
        config.wait_delay_seconds,
        config.wait_max_attempts,
    )
    if stable:
        reporter(f"Service is stable on version: {tag}")
    return ReleaseResult(
        image_uri=target_image,
        task_definition_arn=task_definition_arn,
        stable=stable,
    )


def list_images(session: Any, config: EcsReleaseConfig) -> list[ImageSummary]:
    """Return the most recently pushed images of the release repository."""
    return list_recent_images(session, config.ecr_repository)
