# ABOUTME: Aggregation pipeline turning resolved source results into one CombinedDocument
# ABOUTME: Merge, deduplicate, count - synchronous, single-threaded, fresh accumulator per run

from collections.abc import Sequence

from course_scraper.extraction.filters import SystemMessageFilter
from course_scraper.utils.logging import get_logger, with_operation_context

from .dedup import Deduplicator
from .merger import MergeInput, SourceMerger
from .models import CombinedDocument, utc_timestamp
from .statistics import compute_statistics


class AggregationPipeline:
    """Reconciles a priority-ordered list of source results into one document.

    The pipeline only ever sees results that have already resolved (or been given up
    on); output depends on the order of that list alone, never on which source
    finished first. Each run starts from an empty accumulator.
    """

    def __init__(self, system_filter: SystemMessageFilter | None = None):
        self.deduplicator = Deduplicator(system_filter)
        self.logger = get_logger(__name__)

    @with_operation_context("aggregate_results")
    def run(self, results: Sequence[MergeInput], scraped_at: str | None = None) -> CombinedDocument:
        merger = SourceMerger(scraped_at=scraped_at or utc_timestamp()).fold(results)
        content = self.deduplicator.run(merger.content)
        statistics = compute_statistics(content)

        self.logger.info(
            "Combined source results",
            sources=len(results),
            merged_sources=merger.merged_sources,
            total_items=statistics.total_items,
        )
        return CombinedDocument(metadata=merger.metadata, content=content, statistics=statistics)
