# ABOUTME: Post-merge deduplication: generic fingerprint pass, hotspot collapse, category passes
# ABOUTME: Runs once over all merged sources so duplicates reported by different probes are caught

from collections.abc import Callable, Hashable, Iterable
from typing import TypeVar

from course_scraper.extraction.filters import SystemMessageFilter
from course_scraper.utils.logging import get_logger

from .fingerprint import DELIMITER, fingerprint, is_usable
from .models import Category, ContentCollection, Hotspot, HotspotPoint, KnowledgeCheck, ListBlock, TextBlock

T = TypeVar("T")

# Per-pass key windows, independent of FINGERPRINT_LENGTH
POINT_DETAIL_WINDOW = 100
TEXT_BLOCK_WINDOW = 100
LIST_WINDOW = 150
QUESTION_WINDOW = 100

MIN_POINT_KEY_LENGTH = 6
MIN_QUESTION_LENGTH = 10
COMBINED_HOTSPOT_ID = "hotspots-combined"


def unique_by(items: Iterable[T], key: Callable[[T], Hashable]) -> list[T]:
    """Keep the first item for each key, preserving first-seen order."""
    seen: set[Hashable] = set()
    kept: list[T] = []
    for item in items:
        item_key = key(item)
        if item_key in seen:
            continue
        seen.add(item_key)
        kept.append(item)
    return kept


def dedupe_by_fingerprint(items: Iterable[T]) -> list[T]:
    """Generic pass: drop items with an unusable fingerprint, then repeats."""
    seen: set[str] = set()
    kept: list[T] = []
    for item in items:
        key = fingerprint(item)  # type: ignore[arg-type]
        if not is_usable(key) or key in seen:
            continue
        seen.add(key)
        kept.append(item)
    return kept


def point_key(point: HotspotPoint) -> str:
    detail = point.description or point.raw_label
    return point.title + DELIMITER + detail[:POINT_DETAIL_WINDOW]


def collapse_hotspots(groups: Iterable[Hotspot]) -> list[Hotspot]:
    """Flatten every hotspot group into one canonical group with contiguous indices.

    The same interactive graphic is reported by several probes (and by several DOM
    fragments within one probe); only one point list is worth keeping.
    """
    points: list[HotspotPoint] = []
    seen: set[str] = set()
    for group in groups:
        for point in group.points:
            key = point_key(point)
            if len(key) < MIN_POINT_KEY_LENGTH or key in seen:
                continue
            seen.add(key)
            points.append(point.model_copy(update={"index": len(points)}))

    if not points:
        return []

    combined = Hotspot(id=COMBINED_HOTSPOT_ID, points=points)
    # The canonical group obeys the same fingerprint rule as any other item
    if not is_usable(fingerprint(combined)):
        return []
    return [combined]


def dedupe_text_blocks(blocks: Iterable[TextBlock]) -> list[TextBlock]:
    return unique_by(blocks, lambda block: block.content[:TEXT_BLOCK_WINDOW])


def dedupe_lists(lists: Iterable[ListBlock]) -> list[ListBlock]:
    return unique_by(lists, lambda block: DELIMITER.join(block.items)[:LIST_WINDOW])


class Deduplicator:
    """Removes duplicates from a merged content collection.

    Passes run in a fixed order: the generic fingerprint pass over every category,
    the hotspot collapse, then the text block, list and knowledge check passes with
    their own (shorter or longer) key windows. A shorter window can merge items the
    generic pass kept apart; that is accepted behaviour.
    """

    def __init__(self, system_filter: SystemMessageFilter | None = None):
        self.system_filter = system_filter or SystemMessageFilter()
        self.logger = get_logger(__name__)

    def dedupe_knowledge_checks(self, checks: Iterable[KnowledgeCheck]) -> list[KnowledgeCheck]:
        # Second, independent application of the system-message filter
        genuine = (
            check
            for check in checks
            if len(check.question) >= MIN_QUESTION_LENGTH and not self.system_filter.is_system_message(check.question)
        )
        return unique_by(genuine, lambda check: check.question[:QUESTION_WINDOW])

    def run(self, content: ContentCollection) -> ContentCollection:
        """Return a deduplicated copy of content; the input is left untouched."""
        result = ContentCollection(raw_text=content.raw_text)
        for category in Category:
            before = content.items_for(category)
            after = dedupe_by_fingerprint(before)
            result.set_items(category, after)
            if len(after) != len(before):
                self.logger.debug(
                    "Removed duplicate items", category=category.value, before=len(before), after=len(after)
                )

        result.hotspots = collapse_hotspots(result.hotspots)
        result.text_blocks = dedupe_text_blocks(result.text_blocks)
        result.lists = dedupe_lists(result.lists)
        result.knowledge_checks = self.dedupe_knowledge_checks(result.knowledge_checks)
        return result
