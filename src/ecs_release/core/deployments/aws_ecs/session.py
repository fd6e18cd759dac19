"""AWS session helpers."""

import logging

import boto3
from botocore.exceptions import ClientError

from ecs_release.core.deployments.aws_ecs.errors import ReleaseError
from ecs_release.core.deployments.aws_ecs.models import EcsReleaseConfig

logger = logging.getLogger(__name__)


def create_session(config: EcsReleaseConfig) -> boto3.session.Session:
    """Create a boto3 session."""
    if config.aws_profile:
        return boto3.session.Session(
            profile_name=config.aws_profile,
            region_name=config.aws_region,
        )

    return boto3.session.Session(region_name=config.aws_region)


def get_identity(session: boto3.session.Session) -> dict[str, str]:
    """Fetch the current AWS identity."""
    client = session.client("sts")
    try:
        response = client.get_caller_identity()
    except ClientError as exc:
        raise ReleaseError(f"Failed to read AWS identity: {exc}") from exc

    identity = {
        "Account": str(response.get("Account", "")),
        "Arn": str(response.get("Arn", "")),
        "UserId": str(response.get("UserId", "")),
    }
    logger.debug("Resolved AWS identity %s", identity["Arn"])
    return identity


def repository_uri(account_id: str, region: str, repository: str) -> str:
    """Return the ECR repository URI for an account and region."""
    return f"{account_id}.dkr.ecr.{region}.amazonaws.com/{repository}"


def image_uri(account_id: str, region: str, repository: str, tag: str) -> str:
    """Return the full image reference for a tag."""
    return f"{repository_uri(account_id, region, repository)}:{tag}"
