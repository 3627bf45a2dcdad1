"""Type hints for the synchronize module."""

from typing import Protocol, runtime_checkable

from github_mirror.github.models import RemoteOwner


@runtime_checkable
class HasOwner(Protocol):
    """Protocol for listing entries that carry an owner."""

    owner: RemoteOwner | None
