"""Docker build and push helpers."""

import base64
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from botocore.exceptions import ClientError

from ecs_release.core.deployments.aws_ecs.errors import ReleaseError
from ecs_release.core.deployments.aws_ecs.models import LATEST_TAG
from ecs_release.core.deployments.aws_ecs.tools import require_executable, run_command


@dataclass(frozen=True)
class ImageBuildConfig:
    """Image build settings for a release."""

    repository: str
    repository_uri: str
    image_tag: str
    build_context: str = "."

    @property
    def tags(self) -> list[str]:
        """Return the tags produced by one build."""
        return [self.image_tag, LATEST_TAG]


def build_and_push_image(
    session: Any,
    image_config: ImageBuildConfig,
    reporter: Callable[[str], None],
) -> list[str]:
    """Build the image, tag it for ECR and push both tags.

    Returns:
        The pushed image references, revision tag first.
    """
    require_executable("docker")

    reporter("Logging in to ECR")
    username, password, proxy_endpoint = _ecr_login(session)
    run_command(
        [
            "docker",
            "login",
            "--username",
            username,
            "--password-stdin",
            proxy_endpoint,
        ],
        reporter,
        input_bytes=password.encode("utf-8"),
    )

    reporter("Running docker build")
    build_command = ["docker", "build"]
    for tag in image_config.tags:
        build_command.extend(["-t", f"{image_config.repository}:{tag}"])
    build_command.append(image_config.build_context)
    run_command(build_command, reporter)

    remote_refs = [f"{image_config.repository_uri}:{tag}" for tag in image_config.tags]
    for tag, remote_ref in zip(image_config.tags, remote_refs, strict=True):
        run_command(["docker", "tag", f"{image_config.repository}:{tag}", remote_ref], reporter)

    reporter("Pushing image to ECR")
    for remote_ref in remote_refs:
        run_command(["docker", "push", remote_ref], reporter)

    return remote_refs


def _ecr_login(session: Any) -> tuple[str, str, str]:
    """Return Docker login credentials for ECR."""
    ecr = session.client("ecr")
    try:
        # spellchecker:ignore-next-line
        response = ecr.get_authorization_token()
    except ClientError as exc:
        raise ReleaseError(f"Failed to authenticate with ECR: {exc}") from exc

    # spellchecker:ignore-next-line
    auth_data = response["authorizationData"][0]
    # spellchecker:ignore-next-line
    token = base64.b64decode(auth_data["authorizationToken"]).decode("utf-8")
    username, password = token.split(":", 1)
    proxy_endpoint = auth_data["proxyEndpoint"]
    return username, password, proxy_endpoint
