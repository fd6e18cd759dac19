"""Release error rendering for the CLI."""

from collections.abc import Iterator

from botocore.exceptions import (
    ClientError,
    EndpointConnectionError,
    NoCredentialsError,
    ProfileNotFound,
)

from ecs_release.cli.ui import err_console, print_error
from ecs_release.core.deployments.aws_ecs import (
    ImageNotFoundError,
    MissingDependencyError,
    RepositoryNotFoundError,
    RevisionError,
    ServiceUpdateError,
    TaskDefinitionError,
)

EXPIRED_CREDENTIAL_CODES = {
    "ExpiredToken",
    "ExpiredTokenException",
    "InvalidClientTokenId",
    "UnrecognizedClientException",
}
DENIED_CODES = {"AccessDenied", "AccessDeniedException"}

# Checked in order; the first matching class wins.
RELEASE_HINTS: tuple[tuple[type[Exception], str], ...] = (
    (MissingDependencyError, "Install it and make sure it is on PATH, then retry."),
    (RevisionError, "Run ecs-release from inside the Git checkout of the service."),
    (ImageNotFoundError, "Run first: ecs-release build"),
    (RepositoryNotFoundError, "Check --ecr-repo and --region."),
    (TaskDefinitionError, "Check --task-def and --container."),
    (ServiceUpdateError, "Check --cluster and --service."),
)


def report_release_error(exc: Exception) -> None:
    """Print a release error followed by a hint on how to fix it.

    Args:
        exc: Raised exception from a release action.
    """
    if isinstance(exc, ClientError | ProfileNotFound | NoCredentialsError):
        print_error(f"AWS request failed: {exc}")
    else:
        print_error(str(exc))

    hint = release_error_hint(exc)
    if hint:
        err_console.print(f"[dim]{hint}[/dim]")


def release_error_hint(exc: Exception) -> str | None:
    """Return operator guidance for a release error, if there is any.

    AWS credential and connectivity problems take precedence over the
    release error that wrapped them.
    """
    for cause in _causes(exc):
        if isinstance(cause, NoCredentialsError | ProfileNotFound):
            return "No usable AWS credentials. Configure them or pass --profile."
        if isinstance(cause, EndpointConnectionError):
            return "Could not reach AWS. Check network connectivity and --region."
        if isinstance(cause, ClientError):
            code = str(cause.response.get("Error", {}).get("Code", ""))
            if code in EXPIRED_CREDENTIAL_CODES:
                return "AWS credentials are invalid or expired. Refresh them (aws sso login)."
            if code in DENIED_CODES:
                return "The AWS identity lacks permission for this call."

    for error_class, hint in RELEASE_HINTS:
        if isinstance(exc, error_class):
            return hint
    return None


def _causes(exc: BaseException) -> Iterator[BaseException]:
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__
