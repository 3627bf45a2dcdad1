"""Brings one item's local working copy up to date.

An item whose directory is absent is cloned. An item whose directory exists
is pulled; when the pull fails, a fetch is attempted instead. A directory
that already exists is never cloned over. Every git failure is reported
against the item and the run moves on.
"""

from pathlib import Path

import structlog

from github_mirror.synchronize.context import MirrorContext
from github_mirror.synchronize.git import GitOperation, GitOperationResult, git_clone, git_fetch, git_pull
from github_mirror.synchronize.models import RemoteItem, SyncOutcome, WorkingCopyState

logger = structlog.get_logger(__name__)


def detect_working_copy_state(path: Path) -> WorkingCopyState:
    """Only the existence of the directory is inspected, never its contents."""
    if path.exists():
        return WorkingCopyState.PRESENT
    return WorkingCopyState.ABSENT


async def clone(context: MirrorContext, url: str) -> GitOperationResult:
    """Clone ``url`` into the mirror root."""
    context.reporter.info(f"Cloning {url}...")
    result = await context.gate.run(GitOperation.CLONE, context.root, lambda: git_clone(url, context.root))
    if result.succeeded:
        context.reporter.success(f"{url} has been successfully cloned")
    return result


async def pull(context: MirrorContext, working_copy: Path) -> GitOperationResult:
    """Pull an existing working copy."""
    context.reporter.info(f"Pulling {working_copy}...")
    result = await context.gate.run(GitOperation.PULL, working_copy, lambda: git_pull(working_copy))
    if result.succeeded:
        context.reporter.success(f"{working_copy} has been successfully pulled")
    return result


async def fetch(context: MirrorContext, working_copy: Path) -> GitOperationResult:
    """Fetch an existing working copy."""
    context.reporter.info(f"Fetching {working_copy}...")
    result = await context.gate.run(GitOperation.FETCH, working_copy, lambda: git_fetch(working_copy))
    if result.succeeded:
        context.reporter.success(f"{working_copy} has been successfully fetched")
    return result


async def sync_working_copy(context: MirrorContext, item: RemoteItem) -> SyncOutcome:
    """Clone or update the working copy of a single item."""
    working_copy = context.working_copy_path(item.name)
    state = detect_working_copy_state(working_copy)
    logger.debug("Synchronizing item", item=item.name, state=state.value, working_copy=str(working_copy))

    if state is WorkingCopyState.ABSENT:
        result = await clone(context, item.clone_url)
        if result.succeeded:
            return SyncOutcome.CLONED
        logger.debug("Clone failed", item=item.name, error=str(result.error))
        context.reporter.error(f"Failed to clone {item.name}")
        return SyncOutcome.FAILED

    result = await pull(context, working_copy)
    if result.succeeded:
        return SyncOutcome.PULLED
    logger.debug("Pull failed", item=item.name, error=str(result.error))
    context.reporter.error(f"Failed to pull {item.name}. Trying to fetch it...")

    result = await fetch(context, working_copy)
    if result.succeeded:
        return SyncOutcome.FETCHED
    logger.debug("Fetch failed", item=item.name, error=str(result.error))
    context.reporter.error(f"Failed to fetch {item.name}")
    return SyncOutcome.FAILED
