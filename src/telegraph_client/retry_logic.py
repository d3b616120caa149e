"""Retry logic with exponential backoff for Telegraph API flood control.

Telegraph answers too frequent calls with a ``FLOOD_WAIT_<seconds>`` error
(or HTTP 429). This module retries such calls with exponential backoff
(1s, 2s, 4s) and fails fast for every other error.
"""

import re
import time
import logging
from typing import Callable, TypeVar
from functools import wraps

from .errors import APIAccessError

logger = logging.getLogger(__name__)

T = TypeVar('T')

MAX_RETRIES = 3

_FLOOD_WAIT_PATTERN = re.compile(r'flood_wait_\d+')


def retry_on_rate_limit(func: Callable[..., T], *args, **kwargs) -> T:
    """Retry function on flood control with exponential backoff.

    Executes the given function with the provided arguments, retrying up to 3 times
    with exponential backoff (1s, 2s, 4s) when a rate limit error is encountered.
    Fails fast for all other errors.

    Args:
        func: The function to execute with retry logic
        *args: Positional arguments to pass to the function
        **kwargs: Keyword arguments to pass to the function

    Returns:
        The return value of the function

    Raises:
        APIAccessError: If rate limit persists after 3 retries
        Other exceptions: Passed through immediately without retry

    Example:
        >>> result = retry_on_rate_limit(api.get_page, "Sample-Page-12-15")
    """
    for retry_num in range(MAX_RETRIES + 1):
        try:
            return func(*args, **kwargs)
        except Exception as e:
            if not _is_rate_limit_error(e):
                raise

            if retry_num >= MAX_RETRIES:
                logger.error(
                    f"Rate limit persisted after {MAX_RETRIES} retries, giving up"
                )
                raise APIAccessError(f"Telegraph API failure (after {MAX_RETRIES} retries)") from e

            wait_time = 2 ** retry_num
            logger.info(
                f"Rate limit hit, retrying in {wait_time}s "
                f"(retry {retry_num + 1}/{MAX_RETRIES})"
            )
            time.sleep(wait_time)

    raise APIAccessError(f"Telegraph API failure (after {MAX_RETRIES} retries)")


def as_decorator(func: Callable[..., T]) -> Callable[..., T]:
    """Decorator version of retry_on_rate_limit for use with @decorator syntax.

    Example:
        >>> @as_decorator
        ... def fetch_page(path: str):
        ...     return api.get_page(path)
    """
    @wraps(func)
    def wrapper(*args, **kwargs) -> T:
        return retry_on_rate_limit(func, *args, **kwargs)

    return wrapper


def _is_rate_limit_error(exception: Exception) -> bool:
    """Check if an exception represents Telegraph flood control or HTTP 429.

    Args:
        exception: The exception to check

    Returns:
        True if this appears to be a rate limit error, False otherwise
    """
    error_msg = str(exception).lower()
    if _FLOOD_WAIT_PATTERN.search(error_msg):
        return True
    if '429' in error_msg or 'too many requests' in error_msg:
        return True

    if getattr(exception, 'status_code', None) == 429:
        return True

    response = getattr(exception, 'response', None)
    if response is not None and getattr(response, 'status_code', None) == 429:
        return True

    return False
