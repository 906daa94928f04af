# ABOUTME: Extraction source wrapping a payload already held in memory
# ABOUTME: Used when a collaborator hands over probe output directly

from typing import Any

from course_scraper.utils.logging import log_source_fetch


class StaticSource:
    def __init__(self, name: str, payload: Any):
        self.name = name
        self.payload = payload

    @log_source_fetch("memory")
    async def fetch(self) -> Any:
        return self.payload
