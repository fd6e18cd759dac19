"""ECR helpers for ECS releases."""

import logging
from datetime import UTC, datetime
from typing import Any

from botocore.exceptions import ClientError

from ecs_release.core.deployments.aws_ecs.errors import ReleaseError, RepositoryNotFoundError
from ecs_release.core.deployments.aws_ecs.models import ImageSummary

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 10
_EPOCH = datetime.min.replace(tzinfo=UTC)


def image_exists(session: Any, repository: str, tag: str) -> bool:
    """Return true when the tag is present in the ECR repository."""
    ecr = session.client("ecr")
    try:
        response = ecr.describe_images(
            repositoryName=repository,
            imageIds=[{"imageTag": tag}],
        )
    except ClientError as exc:
        code = exc.response.get("Error", {}).get("Code")
        if code == "ImageNotFoundException":
            return False
        if code == "RepositoryNotFoundException":
            raise RepositoryNotFoundError(f"ECR repository {repository} does not exist.") from exc
        raise ReleaseError(f"Failed to read ECR image {repository}:{tag}: {exc}") from exc

    return bool(response.get("imageDetails"))


def list_recent_images(
    session: Any,
    repository: str,
    limit: int = DEFAULT_LIST_LIMIT,
) -> list[ImageSummary]:
    """Return the most recently pushed images, oldest first."""
    ecr = session.client("ecr")
    paginator = ecr.get_paginator("describe_images")
    details: list[dict[str, Any]] = []
    try:
        for page in paginator.paginate(repositoryName=repository):
            details.extend(page.get("imageDetails", []))
    except ClientError as exc:
        code = exc.response.get("Error", {}).get("Code")
        if code == "RepositoryNotFoundException":
            raise RepositoryNotFoundError(f"ECR repository {repository} does not exist.") from exc
        raise ReleaseError(f"Failed to list images in ECR repo {repository}: {exc}") from exc

    logger.debug("Found %d images in %s", len(details), repository)
    details.sort(key=lambda detail: detail.get("imagePushedAt") or _EPOCH)
    recent = details[-limit:] if limit > 0 else []
    return [_summary_from_detail(detail) for detail in recent]


def _summary_from_detail(detail: dict[str, Any]) -> ImageSummary:
    return ImageSummary(
        tags=list(detail.get("imageTags") or []),
        pushed_at=detail.get("imagePushedAt"),
        digest=str(detail.get("imageDigest", "")),
    )
