"""Orchestrates the mirroring of an account's repositories or gists."""

import time
from pathlib import Path
from typing import Any, Sequence
from urllib.parse import urlsplit

import structlog
from pydantic import BaseModel, TypeAdapter, ValidationError

from github_mirror.configuration.models import DEFAULT_GITHUB_API_URL, SyncKind
from github_mirror.configuration.reconcile import parse_sync_kind, validate_mirror_configuration
from github_mirror.exceptions import RemoteError
from github_mirror.github.client import GitHubClient, get_github_client
from github_mirror.github.models import RemoteGist, RemoteRepository
from github_mirror.github.pagination import fetch_all
from github_mirror.synchronize.context import MirrorContext
from github_mirror.synchronize.gate import build_action_gate
from github_mirror.synchronize.models import ItemSyncResult, MirrorSyncResults, RemoteItem
from github_mirror.synchronize.ownership import filter_owned
from github_mirror.synchronize.reporting import StructlogReporter, SyncReporter
from github_mirror.synchronize.working_copy import sync_working_copy

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

REPOSITORIES_ENDPOINT = "/user/repos"
GISTS_ENDPOINT = "/gists"


def ssh_host_for_api_url(github_api_url: str) -> str:
    """Derive the git SSH host from the GitHub API URL.

    e.g. "https://api.github.com" -> "github.com"
    or "https://github.example.com:8443/api/v3" -> "github.example.com"
    """
    if "api.github.com" in github_api_url:
        return "github.com"
    return urlsplit(github_api_url).hostname or github_api_url


def repository_clone_url(account: str, name: str, github_api_url: str = DEFAULT_GITHUB_API_URL) -> str:
    """Build the SSH clone URL of a repository owned by ``account``."""
    return f"git@{ssh_host_for_api_url(github_api_url)}:{account}/{name}"


def _parse_listing(model: type[BaseModel], raw_items: list[dict[str, Any]], endpoint: str) -> list[Any]:
    try:
        return TypeAdapter(list[model]).validate_python(raw_items)  # type: ignore[valid-type]
    except ValidationError as exc:
        raise RemoteError(f"Unexpected item shape in listing at {endpoint}: {exc}", endpoint=endpoint) from exc


async def fetch_owned_repositories(client: GitHubClient, account: str) -> list[RemoteRepository]:
    """Fetch the repositories the account owns, in API order."""
    raw_items = await fetch_all(client, REPOSITORIES_ENDPOINT, account)
    repositories: list[RemoteRepository] = _parse_listing(RemoteRepository, raw_items, REPOSITORIES_ENDPOINT)
    return filter_owned(repositories, account)


async def fetch_owned_gists(client: GitHubClient, account: str) -> list[RemoteGist]:
    """Fetch the gists the account owns, in API order."""
    raw_items = await fetch_all(client, GISTS_ENDPOINT, account)
    gists: list[RemoteGist] = _parse_listing(RemoteGist, raw_items, GISTS_ENDPOINT)
    return filter_owned(gists, account)


async def sync_items(context: MirrorContext, kind: SyncKind, items: Sequence[RemoteItem]) -> MirrorSyncResults:
    """Synchronize items one at a time; a failed item never stops the batch."""
    results = MirrorSyncResults(kind=kind)
    start_time = time.time()
    for item in items:
        outcome = await sync_working_copy(context, item)
        results.results.append(ItemSyncResult(item=item, outcome=outcome))
    logger.info(
        "Processed items",
        kind=kind.value,
        item_count=len(items),
        failed_count=len(results.failed_items),
        duration=round(time.time() - start_time, 2),
    )
    return results


async def sync_repositories(context: MirrorContext, client: GitHubClient) -> MirrorSyncResults:
    """Mirror every repository owned by the configured account."""
    context.reporter.info("Fetching repositories info...")
    account = context.config.account
    repositories = await fetch_owned_repositories(client, account)
    items = [
        RemoteItem(
            name=repository.name,
            owner=account,
            clone_url=repository_clone_url(account, repository.name, context.config.github_api_url),
        )
        for repository in repositories
    ]
    return await sync_items(context, SyncKind.REPO, items)


async def sync_gists(context: MirrorContext, client: GitHubClient) -> MirrorSyncResults:
    """Mirror every gist owned by the configured account."""
    context.reporter.info("Fetching gist info...")
    account = context.config.account
    gists = await fetch_owned_gists(client, account)
    items = [RemoteItem(name=gist.id, owner=account, clone_url=gist.git_pull_url) for gist in gists]
    return await sync_items(context, SyncKind.GIST, items)


async def run_mirror_workflow(
    root: Path,
    kind: str | SyncKind,
    account: str | None,
    token: str | None,
    dry_run: bool = False,
    reporter: SyncReporter | None = None,
    github_api_url: str | None = None,
    client: GitHubClient | None = None,
) -> MirrorSyncResults:
    """Run the mirror workflow for one kind of item.

    The kind and configuration are validated before any network or filesystem
    activity. Remote listing failures propagate; per-item git failures are
    reported and recorded in the returned results.
    """
    sync_kind = parse_sync_kind(kind)
    config = validate_mirror_configuration(account=account, token=token, dry_run=dry_run, github_api_url=github_api_url)

    context = MirrorContext(
        root=Path(root),
        config=config,
        reporter=reporter if reporter is not None else StructlogReporter(),
        gate=build_action_gate(config.dry_run),
    )
    if client is None:
        client = await get_github_client(config)

    logger.info("Mirroring account", account=config.account, kind=sync_kind.value, root=str(context.root), dry_run=config.dry_run)
    if sync_kind is SyncKind.REPO:
        return await sync_repositories(context, client)
    return await sync_gists(context, client)
