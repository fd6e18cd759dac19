"""Errors raised by the ECS release helpers."""


class ReleaseError(RuntimeError):
    """Base class for fatal release errors."""


class MissingDependencyError(ReleaseError):
    """A required executable is not installed."""


class RevisionError(ReleaseError):
    """The current source revision could not be resolved."""


class ImageNotFoundError(ReleaseError):
    """The requested image tag is not present in the registry."""

    def __init__(self, repository: str, tag: str) -> None:
        super().__init__(f"Image not found in ECR: {repository}:{tag}")
        self.repository = repository
        self.tag = tag


class TaskDefinitionError(ReleaseError):
    """A task definition could not be read, patched or registered."""


class ServiceUpdateError(ReleaseError):
    """The ECS service could not be pointed at a new task definition."""


class RepositoryNotFoundError(ReleaseError):
    """The ECR repository does not exist in the selected account and region."""
