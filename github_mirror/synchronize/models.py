"""Internal data models for a mirror run."""

from dataclasses import dataclass, field
from enum import Enum

from github_mirror.configuration.models import SyncKind


class WorkingCopyState(Enum):
    """Whether an item's local working copy directory exists."""

    ABSENT = "absent"
    PRESENT = "present"


class SyncOutcome(Enum):
    """How the synchronization of a single item ended."""

    CLONED = "cloned"
    PULLED = "pulled"
    FETCHED = "fetched"
    FAILED = "failed"


@dataclass(frozen=True)
class RemoteItem:
    """A repository or gist to mirror, derived from a listing entry."""

    name: str
    owner: str
    clone_url: str


@dataclass(frozen=True)
class ItemSyncResult:
    """Outcome of synchronizing one item."""

    item: RemoteItem
    outcome: SyncOutcome


@dataclass
class MirrorSyncResults:
    """Contains results of the mirror workflow for all items of one kind."""

    kind: SyncKind
    results: list[ItemSyncResult] = field(default_factory=list)

    def count(self, outcome: SyncOutcome) -> int:
        """Number of items that ended with the given outcome."""
        return sum(1 for result in self.results if result.outcome is outcome)

    @property
    def failed_items(self) -> list[RemoteItem]:
        """Items whose clone, or whose pull and fetch, failed."""
        return [result.item for result in self.results if result.outcome is SyncOutcome.FAILED]
