# ABOUTME: High-level scrape service: concurrent source fan-out joined into the aggregation pipeline
# ABOUTME: Every source is bounded by a timeout; a failing source contributes nothing instead of raising

import asyncio
from collections.abc import Sequence

from course_scraper.config import Config, get_config
from course_scraper.extraction.base import ExtractionSource
from course_scraper.extraction.capture import PayloadCapture
from course_scraper.extraction.filters import LabelFilter, SystemMessageFilter
from course_scraper.utils.logging import get_logger

from .merger import MergeInput
from .models import CombinedDocument, utc_timestamp
from .pipeline import AggregationPipeline


class ScrapeService:
    """Queries all sources concurrently and reconciles their results.

    Results are handed to the pipeline in the order the sources were given, so the
    caller's ordering is the priority order. Nothing is merged until every source has
    either answered, failed or timed out; if the scrape is cancelled in the meantime
    no document is produced at all.
    """

    def __init__(
        self,
        config: Config | None = None,
        capture: PayloadCapture | None = None,
        pipeline: AggregationPipeline | None = None,
        timeout: float | None = None,
    ):
        self.config = config or get_config()
        system_filter = SystemMessageFilter.from_config(self.config)
        self.capture = capture or PayloadCapture(
            label_filter=LabelFilter.from_config(self.config), system_filter=system_filter
        )
        self.pipeline = pipeline or AggregationPipeline(system_filter)
        self.timeout = timeout if timeout is not None else self.config.source_timeout
        self.logger = get_logger(__name__)

    async def collect(self, sources: Sequence[ExtractionSource]) -> list[MergeInput]:
        """Fetch and capture every source concurrently; results keep the sources' order."""
        return list(await asyncio.gather(*(self._collect_one(source) for source in sources)))

    async def _collect_one(self, source: ExtractionSource) -> MergeInput:
        try:
            payload = await asyncio.wait_for(source.fetch(), timeout=self.timeout)
            result = self.capture.capture(payload)
        except TimeoutError:
            self.logger.warning("Source timed out", source=source.name, timeout_seconds=self.timeout)
            return None
        except Exception as e:
            self.logger.warning("Source failed", source=source.name, error=str(e), error_type=type(e).__name__)
            return None

        if result is None:
            self.logger.info("Source returned no usable payload", source=source.name)
        return result

    async def scrape(self, sources: Sequence[ExtractionSource]) -> CombinedDocument:
        """Run one scrape invocation over the given priority-ordered sources."""
        scraped_at = utc_timestamp()
        self.logger.info("Starting scrape", sources=[source.name for source in sources])

        results = await self.collect(sources)
        document = self.pipeline.run(results, scraped_at=scraped_at)

        if document.is_empty:
            self.logger.info("Scrape found no content", sources=len(sources))
        return document

    async def close_sources(self, sources: Sequence[ExtractionSource]) -> None:
        """Release resources held by sources that own a client.

        A failing close is logged and skipped; the remaining sources are still closed.
        """
        for source in sources:
            close = getattr(source, "close", None)
            if close is None:
                continue
            try:
                await close()
            except Exception as e:
                self.logger.warning(
                    "Failed to close source", source=source.name, error=str(e), error_type=type(e).__name__
                )
