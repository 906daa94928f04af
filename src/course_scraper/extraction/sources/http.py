# ABOUTME: Extraction source that fetches a probe payload as JSON over HTTP
# ABOUTME: Uses httpx with tenacity retries on timeouts, connection errors and 429/5xx answers

from typing import Any

import httpx

from course_scraper.extraction.base import ExtractionError
from course_scraper.utils.logging import log_source_fetch
from course_scraper.utils.retry import source_retry

USER_AGENT = "course-scraper/0.1"


class HttpJsonSource:
    """GETs a probe payload from a URL (e.g. a bridge that relays in-page probe output)."""

    def __init__(
        self,
        url: str,
        client: httpx.AsyncClient | None = None,
        name: str | None = None,
        attempts: int = 3,
        min_wait: float = 0.5,
        max_wait: float = 5.0,
    ):
        self.url = url
        self.name = name or url
        self.http_client = client or httpx.AsyncClient(  # Allow for dependency injection
            headers={"User-Agent": USER_AGENT}
        )
        self.attempts = attempts
        self.min_wait = min_wait
        self.max_wait = max_wait

    @log_source_fetch("http")
    async def fetch(self) -> Any:
        retrying = source_retry(max_attempts=self.attempts, min_wait=self.min_wait, max_wait=self.max_wait)
        return await retrying(self._get_json)()

    async def _get_json(self) -> Any:
        response = await self.http_client.get(self.url, follow_redirects=True)
        response.raise_for_status()

        try:
            return response.json()
        except ValueError as e:
            raise ExtractionError(f"Source {self.url} did not return JSON: {e}") from e

    async def close(self) -> None:
        await self.http_client.aclose()
