"""ECS service helpers."""

import logging
from typing import Any

from botocore.exceptions import ClientError, WaiterError

from ecs_release.core.deployments.aws_ecs.errors import ServiceUpdateError
from ecs_release.core.deployments.aws_ecs.models import ServiceStatus
from ecs_release.core.deployments.aws_ecs.task_definitions import (
    container_image,
    describe_task_definition,
)

logger = logging.getLogger(__name__)


def update_service(
    session: Any,
    cluster_name: str,
    service_name: str,
    task_definition_arn: str,
) -> None:
    """Point a service at a task definition revision."""
    ecs = session.client("ecs")
    try:
        ecs.update_service(
            cluster=cluster_name,
            service=service_name,
            taskDefinition=task_definition_arn,
        )
    except ClientError as exc:
        code = exc.response.get("Error", {}).get("Code")
        if code == "ClusterNotFoundException":
            raise ServiceUpdateError(f"ECS cluster '{cluster_name}' does not exist.") from exc
        if code == "ServiceNotFoundException":
            raise ServiceUpdateError(
                f"ECS service '{service_name}' not found in cluster '{cluster_name}'."
            ) from exc
        raise ServiceUpdateError(f"Failed to update ECS service {service_name}: {exc}") from exc


def wait_for_service_stable(
    session: Any,
    cluster_name: str,
    service_name: str,
    delay_seconds: int = 15,
    max_attempts: int = 40,
) -> bool:
    """Block until the service is stable.

    Returns:
        False when the waiter gave up before the service stabilised.
    """
    ecs = session.client("ecs")
    waiter = ecs.get_waiter("services_stable")
    try:
        waiter.wait(
            cluster=cluster_name,
            services=[service_name],
            WaiterConfig={"Delay": delay_seconds, "MaxAttempts": max_attempts},
        )
    except WaiterError as exc:
        logger.debug("services_stable waiter stopped: %s", exc)
        return False
    return True


def describe_service_status(
    session: Any,
    cluster_name: str,
    service_name: str,
    container_name: str | None = None,
) -> ServiceStatus:
    """Return the active task definition and image of a service."""
    ecs = session.client("ecs")
    try:
        response = ecs.describe_services(cluster=cluster_name, services=[service_name])
    except ClientError as exc:
        raise ServiceUpdateError(f"Failed to read ECS service {service_name}: {exc}") from exc

    services = response.get("services", [])
    if not services:
        failures = response.get("failures", [])
        raise ServiceUpdateError(
            f"ECS service '{service_name}' not found in cluster '{cluster_name}': {failures}"
        )

    service = services[0]
    task_definition_arn = str(service.get("taskDefinition", ""))
    task_definition = describe_task_definition(session, task_definition_arn)
    rollout_state = ""
    for deployment in service.get("deployments", []):
        if deployment.get("status") == "PRIMARY":
            rollout_state = str(deployment.get("rolloutState", ""))
            break

    return ServiceStatus(
        service_name=str(service.get("serviceName", service_name)),
        task_definition_arn=task_definition_arn,
        image=container_image(task_definition, container_name),
        running_count=int(service.get("runningCount", 0)),
        desired_count=int(service.get("desiredCount", 0)),
        rollout_state=rollout_state,
    )
