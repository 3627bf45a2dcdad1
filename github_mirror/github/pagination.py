"""Page-by-page listing of GitHub endpoints."""

from typing import Any

import structlog
from githubkit import Response
from githubkit.exception import RequestFailed

from github_mirror.exceptions import RemoteError
from github_mirror.github.client import GitHubClient
from github_mirror.utils.retry import retry_on_rate_limit

logger = structlog.get_logger(__name__)


def _server_message(body: Any) -> str:
    """Extract the ``message`` field GitHub puts in error bodies."""
    if isinstance(body, dict) and "message" in body:
        return str(body["message"])
    return str(body)


@retry_on_rate_limit()
async def fetch_page(client: GitHubClient, endpoint: str, page: int) -> Response[Any]:
    """Fetch a single page of a listing endpoint."""
    return await client.arequest("GET", endpoint, params={"page": page})


async def fetch_all(client: GitHubClient, endpoint: str, account: str) -> list[dict[str, Any]]:
    """Fetch every item of a listing endpoint, one page at a time.

    Pages are requested starting at 1 until a page comes back empty. No total
    count or "has more" hint is consulted, so a listing whose last non-empty
    page is ``k`` costs exactly ``k + 1`` requests.

    Args:
        client: Authenticated GitHub client.
        endpoint: Listing path beneath the API host, e.g. ``/user/repos``.
        account: Account the listing is fetched for, used in error messages.

    Returns:
        The items of all pages, in page order.

    Raises:
        RemoteError: If GitHub answers with an error status or the body is not a list.
    """
    items: list[dict[str, Any]] = []
    page: int = 1
    while True:
        logger.debug("Fetching page", endpoint=endpoint, page=page)
        try:
            response = await fetch_page(client, endpoint, page)
        except RequestFailed as exc:
            try:
                body: Any = exc.response.json()
            except ValueError:
                body = exc.response.text
            raise RemoteError(
                f"Failed to fetch data for user {account} at {endpoint}: {_server_message(body)}",
                endpoint=endpoint,
                page=page,
                status_code=exc.response.status_code,
            ) from exc

        try:
            data: Any = response.json()
        except ValueError as exc:
            raise RemoteError(
                f"Expected to be array. Actual value: {response.text}",
                endpoint=endpoint,
                page=page,
                status_code=response.status_code,
            ) from exc

        if response.status_code >= 400:
            raise RemoteError(
                f"Failed to fetch data for user {account} at {endpoint}: {_server_message(data)}",
                endpoint=endpoint,
                page=page,
                status_code=response.status_code,
            )
        if not isinstance(data, list):
            raise RemoteError(
                f"Expected to be array. Actual value: {response.text}",
                endpoint=endpoint,
                page=page,
                status_code=response.status_code,
            )

        if not data:
            break
        items.extend(data)
        page += 1

    logger.info("Fetched all pages", endpoint=endpoint, pages=page - 1, total_items=len(items))
    return items
