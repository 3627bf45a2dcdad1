"""Retry decorator for waiting out GitHub API rate limits.

Listing an account page by page can trip GitHub's primary or secondary rate
limits. The decorator sleeps until the limit resets and retries the request;
any other failure is raised to the caller unchanged.
"""

import asyncio
import functools
import inspect
import time
from typing import Any, Callable, TypeVar

import structlog
from githubkit.exception import PrimaryRateLimitExceeded, RequestFailed, SecondaryRateLimitExceeded

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

RATE_LIMIT_STATUS_CODES = (403, 429)


def is_rate_limit_error(exc: RequestFailed) -> bool:
    """Return True if a failed request was rejected because of a rate limit."""
    if isinstance(exc, (PrimaryRateLimitExceeded, SecondaryRateLimitExceeded)):
        return True
    status_code = exc.response.status_code
    if status_code not in RATE_LIMIT_STATUS_CODES:
        return False
    if status_code == 403:
        headers = exc.response.headers
        return headers.get("x-ratelimit-remaining") == "0" or "retry-after" in headers
    return True


def rate_limit_wait_time(exc: RequestFailed, delay: float, max_delay: float) -> float:
    """Compute how long to wait before retrying a rate-limited request.

    Prefers the exception's ``retry_after``, then the ``retry-after`` header,
    then the ``x-ratelimit-reset`` header, and finally the backoff delay.
    """
    retry_after = getattr(exc, "retry_after", None)
    if retry_after:
        return min(retry_after.total_seconds(), max_delay)

    headers = exc.response.headers
    header_value = headers.get("retry-after")
    if header_value:
        try:
            return min(float(header_value), max_delay)
        except ValueError:
            logger.warning("Invalid retry-after header value", retry_after=header_value)

    reset_value = headers.get("x-ratelimit-reset")
    if reset_value:
        try:
            reset_timestamp = int(reset_value)
        except ValueError:
            logger.warning("Invalid x-ratelimit-reset header value", rate_limit_reset=reset_value)
        else:
            now = int(time.time())
            if reset_timestamp > now:
                return min(reset_timestamp - now + 1, max_delay)

    return min(delay, max_delay)


def retry_on_rate_limit(
    max_retries: int = 5,
    initial_delay: float = 10.0,
    max_delay: float = 300.0,
    exponential_base: float = 2.0,
) -> Callable[[F], F]:
    """Decorator for retrying async GitHub calls that hit a rate limit.

    Args:
        max_retries: Maximum number of retry attempts (default: 5)
        initial_delay: Initial delay in seconds between retries (default: 10.0)
        max_delay: Maximum delay in seconds between retries (default: 300.0)
        exponential_base: Base for exponential backoff calculation (default: 2.0)

    Returns:
        Decorated function with retry logic

    Example:
        @retry_on_rate_limit()
        async def fetch_page(client, endpoint, page):
            return await client.arequest("GET", endpoint, params={"page": page})
    """

    def decorator(func: F) -> F:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"Function {func.__name__} decorated with @retry_on_rate_limit must be async.")

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            delay = initial_delay
            attempt = 0
            while True:
                try:
                    return await func(*args, **kwargs)
                except RequestFailed as exc:
                    if not is_rate_limit_error(exc):
                        raise
                    if attempt >= max_retries:
                        logger.error(
                            "Max retries reached for GitHub rate limit error",
                            function=func.__name__,
                            attempt=attempt + 1,
                            status_code=exc.response.status_code,
                        )
                        raise
                    wait_time = rate_limit_wait_time(exc, delay, max_delay)
                    logger.warning(
                        f"GitHub rate limit exceeded, waiting {wait_time} seconds",
                        function=func.__name__,
                        attempt=attempt + 1,
                        max_retries=max_retries,
                        wait_time=wait_time,
                        status_code=exc.response.status_code,
                    )
                    await asyncio.sleep(wait_time)
                    delay = min(delay * exponential_base, max_delay)
                    attempt += 1

        return wrapper  # type: ignore

    return decorator
