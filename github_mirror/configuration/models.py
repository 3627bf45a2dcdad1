"""Models for configuration between CLI arguments and environment variables."""

from dataclasses import dataclass
from enum import Enum

DEFAULT_GITHUB_API_URL = "https://api.github.com"


class SyncKind(str, Enum):
    """Enum for the kinds of GitHub items that can be mirrored."""

    REPO = "repo"
    GIST = "gist"

    @classmethod
    def allowed_values(cls) -> list[str]:
        """Return the selector values accepted on the command line."""
        return [member.value for member in cls]


@dataclass(frozen=True)
class MirrorConfig:
    """Validated configuration for a single mirror run."""

    account: str
    token: str
    dry_run: bool = False
    github_api_url: str = DEFAULT_GITHUB_API_URL
