"""Source revision helpers."""

import logging
import subprocess  # nosec B404
from pathlib import Path

from ecs_release.core.deployments.aws_ecs.errors import RevisionError
from ecs_release.core.deployments.aws_ecs.tools import require_executable

logger = logging.getLogger(__name__)

SHORT_HASH_LENGTH = 8


def get_commit_hash(repo_dir: Path | None = None) -> str:
    """Return the short hash of the checked out HEAD commit."""
    git = require_executable("git")
    try:
        result = subprocess.run(  # nosec B603
            [git, "rev-parse", f"--short={SHORT_HASH_LENGTH}", "HEAD"],
            check=True,
            capture_output=True,
            text=True,
            cwd=repo_dir,
        )
    except subprocess.CalledProcessError as exc:
        raise RevisionError(
            "Could not resolve the commit hash. Make sure you are inside a Git repository."
        ) from exc

    commit_hash = result.stdout.strip()
    if not commit_hash:
        raise RevisionError(
            "Could not resolve the commit hash. Make sure you are inside a Git repository."
        )
    logger.debug("Resolved commit hash %s", commit_hash)
    return commit_hash
