"""Unit tests for page-by-page fetching of GitHub listings."""

import logging
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from githubkit.exception import RequestFailed

from github_mirror.exceptions import RemoteError
from github_mirror.github.pagination import fetch_all


def make_client(responses: list[Any]) -> MagicMock:
    """Build a client whose requests answer with the given responses in order."""
    client = MagicMock()
    client.arequest = AsyncMock(side_effect=responses)
    return client


@pytest.mark.asyncio
@pytest.mark.parametrize("page_sizes", [[1], [3, 2], [2, 2, 2, 1]])
async def test_fetch_all_stops_at_first_empty_page(dummy_response: Any, page_sizes: list[int]) -> None:
    """Test that k non-empty pages cost k + 1 requests and are concatenated in order."""
    pages: list[list[dict[str, Any]]] = []
    for page_number, size in enumerate(page_sizes, start=1):
        pages.append([{"name": f"item-{page_number}-{i}"} for i in range(size)])
    client = make_client([dummy_response(page) for page in pages] + [dummy_response([])])

    items = await fetch_all(client, "/user/repos", "alice")

    assert items == [item for page in pages for item in page]
    assert client.arequest.await_count == len(pages) + 1
    requested_pages = [call.kwargs["params"]["page"] for call in client.arequest.await_args_list]
    assert requested_pages == list(range(1, len(pages) + 2))


@pytest.mark.asyncio
async def test_fetch_all_empty_first_page(dummy_response: Any) -> None:
    """Test that an empty first page yields an empty result without error."""
    client = make_client([dummy_response([])])

    assert await fetch_all(client, "/gists", "alice") == []
    client.arequest.assert_awaited_once_with("GET", "/gists", params={"page": 1})


@pytest.mark.asyncio
async def test_fetch_all_error_status(dummy_response: Any) -> None:
    """Test that an error status raises RemoteError carrying the server message."""
    client = make_client([dummy_response({"message": "Bad credentials"}, status_code=401)])

    with pytest.raises(RemoteError) as exc_info:
        await fetch_all(client, "/user/repos", "alice")

    assert str(exc_info.value) == "Failed to fetch data for user alice at /user/repos: Bad credentials"
    assert exc_info.value.status_code == 401
    assert exc_info.value.page == 1


@pytest.mark.asyncio
async def test_fetch_all_request_failed() -> None:
    """Test that a githubkit RequestFailed is classified as a RemoteError."""
    response = MagicMock()
    response.status_code = 404
    response.headers = {}
    response.json.return_value = {"message": "Not Found"}
    client = make_client([RequestFailed(response)])

    with pytest.raises(RemoteError) as exc_info:
        await fetch_all(client, "/gists", "alice")

    assert "Not Found" in str(exc_info.value)
    assert exc_info.value.status_code == 404
    assert client.arequest.await_count == 1


@pytest.mark.asyncio
async def test_fetch_all_non_list_body(dummy_response: Any) -> None:
    """Test that a body that is not a list raises RemoteError carrying the raw body."""
    client = make_client([dummy_response({"unexpected": True}, text='{"unexpected": true}')])

    with pytest.raises(RemoteError) as exc_info:
        await fetch_all(client, "/user/repos", "alice")

    assert str(exc_info.value) == 'Expected to be array. Actual value: {"unexpected": true}'


@pytest.mark.asyncio
async def test_fetch_all_error_on_later_page_discards_results(dummy_response: Any) -> None:
    """Test that a failure on a later page aborts the whole listing."""
    client = make_client([dummy_response([{"name": "a"}]), dummy_response({"message": "Server Error"}, status_code=500)])

    with pytest.raises(RemoteError) as exc_info:
        await fetch_all(client, "/user/repos", "alice")

    assert exc_info.value.page == 2


@pytest.mark.asyncio
async def test_fetch_all_logs_non_empty_page_count(dummy_response: Any, caplog: pytest.LogCaptureFixture) -> None:
    """Test that the summary log counts only the pages that carried items."""
    caplog.set_level(logging.INFO, logger="github_mirror.github.pagination")
    client = make_client([dummy_response([{"name": "a"}]), dummy_response([{"name": "b"}]), dummy_response([])])

    await fetch_all(client, "/user/repos", "alice")

    summaries = [record.msg for record in caplog.records if isinstance(record.msg, dict) and record.msg.get("event") == "Fetched all pages"]
    assert len(summaries) == 1
    assert summaries[0]["pages"] == 2
    assert summaries[0]["total_items"] == 2
