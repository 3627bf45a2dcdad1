"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv
from typer import Argument, Option
from typing_extensions import Annotated

from github_mirror.configuration.models import DEFAULT_GITHUB_API_URL, SyncKind
from github_mirror.configuration.reconcile import parse_sync_kind, reconcile_mirror_configuration
from github_mirror.exceptions import MirrorValidationError, RemoteError
from github_mirror.synchronize.driver import run_mirror_workflow
from github_mirror.synchronize.models import MirrorSyncResults, SyncOutcome
from github_mirror.utils.logging import configure_logging

load_dotenv()

typer_app = typer.Typer(pretty_exceptions_show_locals=False)


@typer_app.callback()
def main() -> None:
    """Mirror a GitHub account's repositories or gists onto local disk."""


def echo_summary(results: MirrorSyncResults) -> None:
    """Print the totals of a finished mirror run."""
    typer.echo("")
    typer.echo("=" * 70)
    typer.echo(f"MIRROR SUMMARY ({results.kind.value})")
    typer.echo("=" * 70)
    typer.echo(f"  Items processed: {len(results.results)}")
    typer.echo(f"  Cloned: {results.count(SyncOutcome.CLONED)}")
    typer.echo(f"  Pulled: {results.count(SyncOutcome.PULLED)}")
    typer.echo(f"  Fetched after failed pull: {results.count(SyncOutcome.FETCHED)}")
    failed = results.failed_items
    if failed:
        typer.echo(f"  Failed: {len(failed)}")
        for item in failed:
            typer.echo(f"    - {item.name}")
    typer.echo("=" * 70)


@typer_app.command(name="sync")
def sync_cli(
    root: Annotated[
        Path,
        Argument(help="Directory holding the working copies.", exists=True, file_okay=False, dir_okay=True, resolve_path=True),
    ],
    kind: Annotated[str, Argument(envvar="SYNC_KIND", help=f"What to mirror, one of: {', '.join(SyncKind.allowed_values())}.")],
    user: Annotated[str | None, Option("--user", envvar="GITHUB_USER", help="GitHub login whose items are mirrored.")] = None,
    token: Annotated[str | None, Option("--token", envvar="GITHUB_PAT_TOKEN", help="GitHub Personal Access Token.")] = None,
    dry_run: Annotated[bool, Option("--dry-run", envvar="DRY_RUN", help="Describe git operations without running them.")] = False,
    github_api_url: Annotated[str, Option(envvar="GITHUB_API_URL", help="GitHub API URL.")] = DEFAULT_GITHUB_API_URL,
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug mode.")] = False,
) -> None:
    """Clone or update every repository or gist owned by a GitHub account."""
    configure_logging(debug)
    try:
        sync_kind = parse_sync_kind(kind)
        config = reconcile_mirror_configuration(
            cli_account=user,
            cli_token=token,
            cli_dry_run=dry_run or None,
            cli_github_api_url=github_api_url,
        )
    except MirrorValidationError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc

    if config.dry_run:
        typer.echo("Dry run is enabled - no git operation will be executed")

    try:
        results = asyncio.run(
            run_mirror_workflow(
                root=root,
                kind=sync_kind,
                account=config.account,
                token=config.token,
                dry_run=config.dry_run,
                github_api_url=config.github_api_url,
            )
        )
    except RemoteError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc

    echo_summary(results)


if __name__ == "__main__":
    typer_app()
