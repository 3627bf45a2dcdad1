"""The explicit context handed to every step of a mirror run."""

from dataclasses import dataclass
from pathlib import Path

from github_mirror.configuration.models import MirrorConfig
from github_mirror.synchronize.gate import ActionGate
from github_mirror.synchronize.reporting import SyncReporter


@dataclass(frozen=True)
class MirrorContext:
    """Everything a mirror run needs, built once at entry."""

    root: Path
    config: MirrorConfig
    reporter: SyncReporter
    gate: ActionGate

    def working_copy_path(self, name: str) -> Path:
        """Directory that holds the working copy of the named item."""
        return self.root / name
