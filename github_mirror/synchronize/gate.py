"""Gates every side-effecting git operation behind the dry-run setting.

The gate is the only place dry-run is enforced. The working copy state machine
hands each git invocation to the gate as a callable; a dry-run gate never
calls it and answers with a successful result, so a dry run reports exactly
what a fully successful run would.
"""

import asyncio
from pathlib import Path
from typing import Callable, Protocol

import structlog

from github_mirror.synchronize.git import GitOperation, GitOperationResult

logger = structlog.get_logger(__name__)

GitAction = Callable[[], GitOperationResult]


class ActionGate(Protocol):
    """Executes or skips a git operation."""

    async def run(self, operation: GitOperation, cwd: Path, action: GitAction) -> GitOperationResult:
        """Run ``action`` or describe it, returning the operation's result."""
        ...


class ExecutingGate:
    """Gate that runs every operation."""

    async def run(self, operation: GitOperation, cwd: Path, action: GitAction) -> GitOperationResult:
        """Run the git process off the event loop and return its result unchanged."""
        return await asyncio.to_thread(action)


class DryRunGate:
    """Gate that never runs an operation."""

    async def run(self, operation: GitOperation, cwd: Path, action: GitAction) -> GitOperationResult:
        """Skip the git process and report it as successful."""
        logger.debug("Dry run, skipping git operation", operation=operation.value, cwd=str(cwd))
        return GitOperationResult(operation, cwd, dry_run=True)


def build_action_gate(dry_run: bool) -> ActionGate:
    """Return the gate matching the dry-run setting."""
    if dry_run:
        return DryRunGate()
    return ExecutingGate()
