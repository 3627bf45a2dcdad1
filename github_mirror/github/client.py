# This file is intended to hold the setup for the authenticated githubkit client.

"""Sets up the authenticated githubkit client."""

from typing import TypeAlias

from githubkit import GitHub
from githubkit.auth import TokenAuthStrategy

from github_mirror.configuration.models import DEFAULT_GITHUB_API_URL, MirrorConfig

GitHubClient: TypeAlias = GitHub[TokenAuthStrategy]


async def get_github_pat_client(github_pat_token: str, github_api_url: str = DEFAULT_GITHUB_API_URL) -> GitHubClient:
    """Returns an authenticated GitHub client using GitHub PAT credentials.

    The token strategy sends an ``Authorization: token <token>`` header with every request.
    """
    if not github_pat_token:
        raise RuntimeError("GitHub PAT authentication requires github_pat_token in config.")
    # Disable HTTP caching so every listing page reflects the current account state
    return GitHub(auth=TokenAuthStrategy(github_pat_token), base_url=github_api_url, http_cache=False)


async def get_github_client(config: MirrorConfig) -> GitHubClient:
    """Returns an authenticated GitHub client for a validated mirror configuration."""
    return await get_github_pat_client(config.token, config.github_api_url)
