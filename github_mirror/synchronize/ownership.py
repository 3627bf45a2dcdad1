"""Narrows GitHub listings to the items an account owns."""

from typing import Sequence, TypeVar

from github_mirror.synchronize.types import HasOwner

T = TypeVar("T", bound=HasOwner)


def filter_owned(items: Sequence[T], account: str) -> list[T]:
    """Keep the items whose owner login equals the account, preserving order.

    Listing endpoints also return items the account can merely access, such as
    organization or collaborator repositories. Those are not mirrored.
    """
    return [item for item in items if item.owner is not None and item.owner.login == account]
