# ABOUTME: Extraction source backed by a probe payload saved as a JSON file
# ABOUTME: Lets captured probe output be replayed through the aggregation pipeline

import json
from pathlib import Path
from typing import Any

from anyio import to_thread

from course_scraper.extraction.base import ExtractionError
from course_scraper.utils.logging import log_source_fetch


class JsonFileSource:
    """Reads one probe's payload from disk."""

    def __init__(self, path: str | Path, name: str | None = None):
        self.path = Path(path)
        self.name = name or self.path.name

    @log_source_fetch("file")
    async def fetch(self) -> Any:
        return await to_thread.run_sync(self._read)

    def _read(self) -> Any:
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise ExtractionError(f"Cannot read payload file {self.path}: {e}") from e

        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise ExtractionError(f"Payload file {self.path} is not valid JSON: {e}") from e
