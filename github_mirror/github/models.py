"""Pydantic models for the GitHub listing payloads the mirror consumes.

Only the fields needed to mirror an item are declared; everything else GitHub
returns is ignored.
"""

from pydantic import BaseModel


class RemoteOwner(BaseModel):
    """Owner of a repository or gist."""

    login: str


class RemoteRepository(BaseModel):
    """Entry of the ``/user/repos`` listing."""

    name: str
    owner: RemoteOwner


class RemoteGist(BaseModel):
    """Entry of the ``/gists`` listing."""

    id: str
    git_pull_url: str
    # Anonymous gists carry no owner
    owner: RemoteOwner | None = None
