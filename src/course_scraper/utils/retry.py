# ABOUTME: Retry policy for network-backed extraction sources using tenacity
# ABOUTME: Classifies httpx failures into transient (retried) and permanent (raised at once)

from collections.abc import Callable
from typing import Any

import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from course_scraper.extraction.base import ExtractionError
from course_scraper.utils.logging import get_logger

logger = get_logger(__name__)


class SourceFetchError(ExtractionError):
    """Base exception for failures talking to a remote source."""

    pass


class SourceTimeoutError(SourceFetchError):
    """Raised when a remote source does not answer in time."""

    pass


class SourceConnectionError(SourceFetchError):
    """Raised when a remote source cannot be reached."""

    pass


class SourceUnavailableError(SourceFetchError):
    """Raised when a remote source answers with a retryable status (429, 5xx)."""

    pass


class SourceRejectedError(SourceFetchError):
    """Raised when a remote source answers with a permanent client error."""

    pass


RETRYABLE_ERRORS = (SourceTimeoutError, SourceConnectionError, SourceUnavailableError)


def _convert_exception(e: Exception) -> Exception:
    """Convert httpx exceptions into source errors for retry classification."""
    if isinstance(e, httpx.TimeoutException):
        return SourceTimeoutError(f"Request timeout: {e}")
    if isinstance(e, httpx.HTTPStatusError):
        status = e.response.status_code
        if status == 429 or status >= 500:
            return SourceUnavailableError(f"Source unavailable ({status}): {e}")
        return SourceRejectedError(f"Source rejected request ({status}): {e}")
    if isinstance(e, httpx.TransportError):
        return SourceConnectionError(f"Connection failed: {e}")
    return SourceFetchError(f"Source fetch failed: {e}")


def source_retry(max_attempts: int = 3, min_wait: float = 0.5, max_wait: float = 5.0, multiplier: float = 2.0):
    """Retry decorator for async source fetches."""

    def decorator(func: Callable[..., Any]):
        async def wrapper(*args, **kwargs):
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(max_attempts),
                wait=wait_exponential(multiplier=multiplier, min=min_wait, max=max_wait),
                retry=retry_if_exception_type(RETRYABLE_ERRORS),
                reraise=True,
            ):
                with attempt:
                    try:
                        return await func(*args, **kwargs)
                    except ExtractionError:
                        raise
                    except httpx.HTTPError as e:
                        converted = _convert_exception(e)
                        logger.debug(
                            "Source fetch attempt failed",
                            attempt=attempt.retry_state.attempt_number,
                            error_type=type(converted).__name__,
                        )
                        raise converted from e

        return wrapper

    return decorator
