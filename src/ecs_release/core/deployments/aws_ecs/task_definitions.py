"""Task definition helpers for ECS releases."""

import copy
import logging
from typing import Any, cast

from botocore.exceptions import ClientError

from ecs_release.core.deployments.aws_ecs.errors import TaskDefinitionError

logger = logging.getLogger(__name__)

# Fields assigned by ECS that register_task_definition rejects.
SERVER_ASSIGNED_FIELDS = (
    "taskDefinitionArn",
    "revision",
    "status",
    "requiresAttributes",
    "placementConstraints",
    "compatibilities",
    "registeredAt",
    "registeredBy",
    "deregisteredAt",
)


def describe_task_definition(session: Any, task_family: str) -> dict[str, Any]:
    """Fetch the latest active revision of a task definition family."""
    ecs = session.client("ecs")
    try:
        response = ecs.describe_task_definition(taskDefinition=task_family)
    except ClientError as exc:
        raise TaskDefinitionError(
            f"Could not read the current task definition {task_family}: {exc}"
        ) from exc
    return cast(dict[str, Any], response["taskDefinition"])


def with_image(
    task_definition: dict[str, Any],
    image: str,
    container_name: str | None = None,
) -> dict[str, Any]:
    """Return a registrable copy of a task definition using a new image.

    The first container definition is updated unless a container name is
    given. Server assigned fields are removed from the copy; the input
    document is left untouched.
    """
    document = copy.deepcopy(task_definition)
    containers = document.get("containerDefinitions") or []
    if not containers:
        raise TaskDefinitionError("Task definition has no container definitions.")

    target = _find_container(containers, container_name) if container_name else containers[0]
    if target is None:
        raise TaskDefinitionError(
            f"Container {container_name} not found in task definition "
            f"{document.get('family', '')}."
        )
    target["image"] = image

    for field_name in SERVER_ASSIGNED_FIELDS:
        document.pop(field_name, None)
    return document


def register_task_definition(session: Any, document: dict[str, Any]) -> str:
    """Register a new task definition revision and return its ARN."""
    ecs = session.client("ecs")
    try:
        response = ecs.register_task_definition(**document)
    except ClientError as exc:
        raise TaskDefinitionError(f"Failed to register new task definition: {exc}") from exc

    task_definition_arn = cast(str, response["taskDefinition"]["taskDefinitionArn"])
    logger.debug("Registered %s", task_definition_arn)
    return task_definition_arn


def container_image(task_definition: dict[str, Any], container_name: str | None = None) -> str:
    """Return the image of the target container in a task definition."""
    containers = task_definition.get("containerDefinitions") or []
    if not containers:
        return ""
    target = _find_container(containers, container_name) if container_name else containers[0]
    if target is None:
        return ""
    return str(target.get("image", ""))


def _find_container(containers: list[dict[str, Any]], name: str) -> dict[str, Any] | None:
    """Return a container definition by name."""
    for container in containers:
        if container.get("name") == name:
            return container
    return None
