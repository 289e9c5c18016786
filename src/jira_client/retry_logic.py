"""Retry logic with exponential backoff for Jira API rate limits.

This module provides retry functionality specifically for handling 429 rate
limit responses from the Jira API. It implements exponential backoff (1s, 2s,
4s) with asyncio.sleep so that other issue fetches keep running while one
waits, and fails fast for every other error.
"""

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from .errors import APIAccessError

logger = logging.getLogger(__name__)

T = TypeVar('T')


class RateLimitedError(Exception):
    """Raised by a request callable when the server answered HTTP 429."""

    def __init__(self, status_code: int = 429):
        super().__init__(f"HTTP {status_code} Too Many Requests")
        self.status_code = status_code


async def retry_on_rate_limit(
    func: Callable[..., Awaitable[T]],
    *args,
    max_retries: int = 3,
    **kwargs,
) -> T:
    """Await func, retrying on 429 rate limits with exponential backoff.

    Args:
        func: Coroutine function to execute with retry logic
        *args: Positional arguments to pass to the function
        max_retries: Number of retries after the first attempt
        **kwargs: Keyword arguments to pass to the function

    Returns:
        The return value of the function

    Raises:
        APIAccessError: If rate limit persists after max_retries retries
        Other exceptions: Passed through immediately without retry

    Example:
        >>> record = await retry_on_rate_limit(fetcher._request_issue, url, headers)
    """
    for retry_num in range(max_retries + 1):
        try:
            return await func(*args, **kwargs)
        except Exception as e:
            if not _is_rate_limit_error(e):
                raise

            if retry_num >= max_retries:
                logger.error(
                    f"Rate limit persisted after {max_retries} retries, giving up"
                )
                raise APIAccessError(
                    f"Jira API failure (after {max_retries} retries)", status_code=429
                ) from e

            wait_time = 2 ** retry_num
            logger.info(
                f"Rate limit hit, retrying in {wait_time}s "
                f"(retry {retry_num + 1}/{max_retries})"
            )
            await asyncio.sleep(wait_time)

    # Unreachable: the loop either returns or raises
    raise APIAccessError(f"Jira API failure (after {max_retries} retries)", status_code=429)


def _is_rate_limit_error(exception: Exception) -> bool:
    """Check if an exception represents a rate limit (429) error.

    Args:
        exception: The exception to check

    Returns:
        True if this appears to be a rate limit error, False otherwise
    """
    if isinstance(exception, RateLimitedError):
        return True

    if getattr(exception, 'status_code', None) == 429:
        return True

    response = getattr(exception, 'response', None)
    if response is not None and getattr(response, 'status_code', None) == 429:
        return True

    return False
