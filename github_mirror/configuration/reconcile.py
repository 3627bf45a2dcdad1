"""Reconcile and validate mirror configuration."""

from github_mirror.configuration.env import Settings
from github_mirror.configuration.exceptions import RequiredConfigurationElementError, UnknownSyncKindError
from github_mirror.configuration.models import MirrorConfig, SyncKind


def parse_sync_kind(kind: str | SyncKind) -> SyncKind:
    """Parses the kind selector into a SyncKind.

    Args:
        kind (str | SyncKind): The selector given by the caller, e.g. "repo" or "gist".

    Raises:
        UnknownSyncKindError: If the selector is not one of the supported kinds.

    Returns:
        SyncKind: The matching kind.
    """
    if isinstance(kind, SyncKind):
        return kind
    try:
        return SyncKind(kind)
    except ValueError as exc:
        raise UnknownSyncKindError(str(kind), SyncKind.allowed_values()) from exc


def validate_mirror_configuration(
    account: str | None,
    token: str | None,
    dry_run: bool = False,
    github_api_url: str | None = None,
) -> MirrorConfig:
    """Validates the account and token required to mirror an account.

    Args:
        account (str | None): The GitHub login whose items are mirrored.
        token (str | None): The GitHub Personal Access Token.
        dry_run (bool): Whether git operations are only described.
        github_api_url (str | None): The GitHub API URL, defaults to the public API.

    Raises:
        RequiredConfigurationElementError: If the account or token is missing or empty.

    Returns:
        MirrorConfig: The validated configuration.
    """
    if not account:
        raise RequiredConfigurationElementError(name="GitHub user", cli_name="--user", env_name="GITHUB_USER")
    if not token:
        raise RequiredConfigurationElementError(name="GitHub token", cli_name="--token", env_name="GITHUB_PAT_TOKEN")
    if github_api_url:
        return MirrorConfig(account=account, token=token, dry_run=dry_run, github_api_url=github_api_url.rstrip("/"))
    return MirrorConfig(account=account, token=token, dry_run=dry_run)


def reconcile_mirror_configuration(
    cli_account: str | None = None,
    cli_token: str | None = None,
    cli_dry_run: bool | None = None,
    cli_github_api_url: str | None = None,
    settings: Settings | None = None,
) -> MirrorConfig:
    """Reconciles CLI arguments with environment settings, CLI arguments taking precedence."""
    if settings is None:
        settings = Settings()
    return validate_mirror_configuration(
        account=cli_account if cli_account is not None else settings.GITHUB_USER,
        token=cli_token if cli_token is not None else settings.GITHUB_PAT_TOKEN,
        dry_run=cli_dry_run if cli_dry_run is not None else settings.DRY_RUN,
        github_api_url=cli_github_api_url if cli_github_api_url is not None else settings.GITHUB_API_URL,
    )
