# ABOUTME: Order-sensitive fold of per-source extraction results into a single accumulator
# ABOUTME: Metadata is first-non-empty-wins; content is concatenated in arrival order without dedup

from collections.abc import Iterable

from course_scraper.utils.logging import get_logger

from .models import Category, ContentCollection, ExtractionResult, Metadata

MergeInput = ExtractionResult | Metadata | None


def merge_metadata(target: Metadata, source: Metadata) -> None:
    """Copy each non-empty source field into target unless target already has a value."""
    for name in Metadata.model_fields:
        value = getattr(source, name)
        if value and not getattr(target, name):
            setattr(target, name, value)


def merge_content(target: ContentCollection, source: ContentCollection) -> None:
    """Append every category's items after the ones already held; raw text is first-wins."""
    for category in Category:
        items = source.items_for(category)
        if items:
            target.items_for(category).extend(items)

    if source.raw_text and not target.raw_text:
        target.raw_text = source.raw_text


class SourceMerger:
    """Accumulates results from a priority-ordered list of sources.

    The order of the input list decides every tie: the first source to supply a
    metadata field keeps it, and items appear in the order their sources were listed.
    Duplicates are left in place for the deduplicator, which needs to see items from
    all sources at once.
    """

    def __init__(self, scraped_at: str = ""):
        self.metadata = Metadata(scraped_at=scraped_at)
        self.content = ContentCollection()
        self.merged_sources = 0
        self.skipped_sources = 0
        self.logger = get_logger(__name__)

    def add(self, result: MergeInput) -> bool:
        """Merge one source result. Returns False when the entry contributed nothing."""
        if result is None:
            self.skipped_sources += 1
            return False

        # Lightweight probes answer with bare metadata and no envelope
        if isinstance(result, Metadata):
            merge_metadata(self.metadata, result)
            self.merged_sources += 1
            return True

        if not result.success:
            self.skipped_sources += 1
            return False

        if result.metadata is not None:
            merge_metadata(self.metadata, result.metadata)
        if result.content is not None:
            merge_content(self.content, result.content)

        self.merged_sources += 1
        return True

    def fold(self, results: Iterable[MergeInput]) -> "SourceMerger":
        for result in results:
            self.add(result)

        self.logger.debug(
            "Merged source results",
            merged_sources=self.merged_sources,
            skipped_sources=self.skipped_sources,
        )
        return self
