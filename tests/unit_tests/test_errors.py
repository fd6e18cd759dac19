"""Tests for the operator hints attached to release errors."""

import pytest
from botocore.exceptions import EndpointConnectionError, NoCredentialsError
from conftest import client_error

from ecs_release.cli.errors import release_error_hint
from ecs_release.core.deployments.aws_ecs import (
    ImageNotFoundError,
    MissingDependencyError,
    ReleaseError,
    RepositoryNotFoundError,
    RevisionError,
    ServiceUpdateError,
    TaskDefinitionError,
)


@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (MissingDependencyError("Docker not found."), "PATH"),
        (RevisionError("no commit"), "Git checkout"),
        (ImageNotFoundError("bia", "a1b2c3d4"), "ecs-release build"),
        (RepositoryNotFoundError("ECR repository bia does not exist."), "--ecr-repo"),
        (TaskDefinitionError("Could not read bia-tf"), "--task-def"),
        (ServiceUpdateError("service missing"), "--service"),
    ],
)
def test_release_errors_map_to_hints(error: ReleaseError, expected: str) -> None:
    hint = release_error_hint(error)

    assert hint is not None
    assert expected in hint


def test_generic_release_error_has_no_hint() -> None:
    assert release_error_hint(ReleaseError("boom")) is None


def _wrapped(cause: Exception, error: ReleaseError) -> ReleaseError:
    try:
        try:
            raise cause
        except Exception as exc:
            raise error from exc
    except ReleaseError as wrapped:
        return wrapped


def test_expired_credentials_win_over_wrapping_error() -> None:
    error = _wrapped(
        client_error("ExpiredTokenException", "DescribeImages"),
        RepositoryNotFoundError("ECR repository bia does not exist."),
    )

    hint = release_error_hint(error)

    assert hint is not None
    assert "expired" in hint


def test_missing_credentials_suggest_profile() -> None:
    error = _wrapped(NoCredentialsError(), ReleaseError("Failed to read AWS identity"))

    assert "--profile" in (release_error_hint(error) or "")


def test_unreachable_endpoint_suggests_region() -> None:
    error = _wrapped(
        EndpointConnectionError(endpoint_url="https://ecs.mars-1.amazonaws.com"),
        TaskDefinitionError("Could not read bia-tf"),
    )

    assert "--region" in (release_error_hint(error) or "")
