"""Local executable checks and subprocess helpers."""

import logging
import shutil
import subprocess  # nosec B404
from collections.abc import Callable, Iterable

from ecs_release.core.deployments.aws_ecs.errors import MissingDependencyError, ReleaseError

logger = logging.getLogger(__name__)

INSTALL_HINTS = {
    "docker": "Docker not found. Install Docker first.",
    "git": "Git not found. Install Git first.",
}


def require_executable(name: str) -> str:
    """Return the resolved path of an executable or fail."""
    executable = shutil.which(name)
    if not executable:
        raise MissingDependencyError(INSTALL_HINTS.get(name, f"Executable not found: {name}"))
    return executable


def require_executables(names: Iterable[str]) -> None:
    """Ensure every named executable is installed."""
    for name in names:
        require_executable(name)


def run_command(
    command: list[str],
    reporter: Callable[[str], None],
    input_bytes: bytes | None = None,
) -> None:
    """Run a subprocess command."""
    resolved_command = [require_executable(command[0]), *command[1:]]
    reporter(f"Running: {' '.join(command)}")
    logger.debug("Executing %s", resolved_command)
    try:
        subprocess.run(resolved_command, check=True, input=input_bytes)  # nosec B603
    except subprocess.CalledProcessError as exc:
        raise ReleaseError(
            f"Command failed with exit code {exc.returncode}: {' '.join(command)}"
        ) from exc
