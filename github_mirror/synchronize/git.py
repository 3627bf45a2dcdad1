"""Runs the git subcommands used to mirror an item."""

import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import structlog

from github_mirror.exceptions import GitOperationError

logger = structlog.get_logger(__name__)


class GitOperation(str, Enum):
    """The read-oriented git subcommands the mirror runs."""

    CLONE = "clone"
    PULL = "pull"
    FETCH = "fetch"


@dataclass(frozen=True)
class GitOperationResult:
    """Result of one git process invocation."""

    operation: GitOperation
    cwd: Path
    returncode: int = 0
    stderr: str = ""
    dry_run: bool = False

    @property
    def succeeded(self) -> bool:
        """True when git exited with status 0, or the operation was skipped by a dry run."""
        return self.returncode == 0

    @property
    def error(self) -> GitOperationError | None:
        """The failure as an exception value, or None on success."""
        if self.succeeded:
            return None
        return GitOperationError(self.operation.value, str(self.cwd), self.returncode, self.stderr)


def run_git(operation: GitOperation, *args: str, cwd: Path) -> GitOperationResult:
    """Run ``git <operation> [args]`` in ``cwd``; the exit status alone decides success."""
    cmd = ["git", operation.value, *args]
    logger.debug("Running git command", command=" ".join(cmd), cwd=str(cwd))
    try:
        completed = subprocess.run(cmd, cwd=cwd, check=False, capture_output=True, text=True, encoding="utf-8", errors="replace")
    except FileNotFoundError as exc:
        # Raised both for a missing git executable and for a missing cwd
        return GitOperationResult(operation, cwd, returncode=127, stderr=str(exc))
    except OSError as exc:
        return GitOperationResult(operation, cwd, returncode=126, stderr=str(exc))
    stderr = completed.stderr.strip() if completed.stderr else ""
    return GitOperationResult(operation, cwd, returncode=completed.returncode, stderr=stderr)


def git_clone(url: str, root: Path) -> GitOperationResult:
    """Clone ``url`` into a new directory beneath ``root``."""
    return run_git(GitOperation.CLONE, url, cwd=root)


def git_pull(working_copy: Path) -> GitOperationResult:
    """Pull the default branch of an existing working copy."""
    return run_git(GitOperation.PULL, cwd=working_copy)


def git_fetch(working_copy: Path) -> GitOperationResult:
    """Fetch an existing working copy without merging."""
    return run_git(GitOperation.FETCH, cwd=working_copy)
