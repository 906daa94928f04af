# ABOUTME: Tests for the source retry policy using tenacity
# ABOUTME: Validates httpx error classification and which failures are retried

import httpx
import pytest

from course_scraper.extraction.base import ExtractionError
from course_scraper.utils.retry import (
    RETRYABLE_ERRORS,
    SourceConnectionError,
    SourceFetchError,
    SourceRejectedError,
    SourceTimeoutError,
    SourceUnavailableError,
    _convert_exception,
    source_retry,
)


def _status_error(status: int) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://bridge.example.com/probe")
    response = httpx.Response(status, request=request)
    return httpx.HTTPStatusError(f"HTTP {status}", request=request, response=response)


class TestSourceErrors:
    """Test source-specific exception types."""

    def test_error_hierarchy(self):
        """Test that all source errors are extraction errors."""
        assert issubclass(SourceFetchError, ExtractionError)
        for error_type in (SourceTimeoutError, SourceConnectionError, SourceUnavailableError, SourceRejectedError):
            assert issubclass(error_type, SourceFetchError)

    def test_rejected_is_not_retryable(self):
        """Test that permanent client errors are outside the retryable set."""
        assert SourceRejectedError not in RETRYABLE_ERRORS


class TestConvertException:
    """Test httpx exception classification."""

    def test_timeout(self):
        """Test that httpx timeouts become SourceTimeoutError."""
        assert isinstance(_convert_exception(httpx.ReadTimeout("slow")), SourceTimeoutError)

    def test_connection(self):
        """Test that transport failures become SourceConnectionError."""
        assert isinstance(_convert_exception(httpx.ConnectError("refused")), SourceConnectionError)

    @pytest.mark.parametrize("status", [429, 500, 503])
    def test_unavailable_statuses(self, status):
        """Test that 429 and 5xx answers are transient."""
        assert isinstance(_convert_exception(_status_error(status)), SourceUnavailableError)

    @pytest.mark.parametrize("status", [400, 401, 404])
    def test_rejected_statuses(self, status):
        """Test that other 4xx answers are permanent."""
        assert isinstance(_convert_exception(_status_error(status)), SourceRejectedError)


class TestSourceRetryDecorator:
    """Test the retry decorator."""

    @pytest.mark.asyncio
    async def test_success_first_try(self):
        """Test that a successful call runs once."""
        call_count = 0

        @source_retry(max_attempts=3, min_wait=0, max_wait=0)
        async def fetch():
            nonlocal call_count
            call_count += 1
            return {"success": True}

        assert await fetch() == {"success": True}
        assert call_count == 1

    @pytest.mark.asyncio
    async def test_transient_failures_retried(self):
        """Test that connection failures are retried until success."""
        call_count = 0

        @source_retry(max_attempts=3, min_wait=0, max_wait=0)
        async def fetch():
            nonlocal call_count
            call_count += 1
            if call_count < 3:
                raise httpx.ConnectError("refused")
            return "payload"

        assert await fetch() == "payload"
        assert call_count == 3

    @pytest.mark.asyncio
    async def test_gives_up_with_last_error(self):
        """Test that the converted error is raised once attempts run out."""
        call_count = 0

        @source_retry(max_attempts=2, min_wait=0, max_wait=0)
        async def fetch():
            nonlocal call_count
            call_count += 1
            raise httpx.ReadTimeout("slow")

        with pytest.raises(SourceTimeoutError):
            await fetch()
        assert call_count == 2

    @pytest.mark.asyncio
    async def test_extraction_errors_not_retried(self):
        """Test that extraction errors pass straight through."""
        call_count = 0

        @source_retry(max_attempts=3, min_wait=0, max_wait=0)
        async def fetch():
            nonlocal call_count
            call_count += 1
            raise ExtractionError("not JSON")

        with pytest.raises(ExtractionError, match="not JSON"):
            await fetch()
        assert call_count == 1
