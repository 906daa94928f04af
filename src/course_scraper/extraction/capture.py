# ABOUTME: Normalizes raw probe payloads into typed extraction results at the input boundary
# ABOUTME: Applies label exclusion, label segmentation and the system-message filter per captured item

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from course_scraper.core.merger import merge_metadata
from course_scraper.core.models import (
    CATEGORY_MODELS,
    Category,
    ContentCollection,
    ContentItem,
    ExtractionResult,
    Hotspot,
    HotspotPoint,
    KnowledgeCheck,
    Metadata,
)
from course_scraper.utils.logging import get_logger

from .filters import LabelFilter, SystemMessageFilter
from .labels import LabelSegmenter, segment_label

METADATA_HINT_KEYS = ("url", "course", "lesson")
RAW_TEXT_KEYS = ("rawText", "raw_text")


class PayloadCapture:
    """Turns whatever a probe returned into an ExtractionResult, bare Metadata, or None.

    Accepted payload shapes:
    - ``{"success": true, "data": {"metadata": {...}, "content": {...}}}``
    - a bare metadata object (``url``/``course``/``lesson``) with no envelope
    - anything else (failures, ``None``, junk) yields ``None``

    Items are validated one at a time so a single malformed item never costs the
    rest of the payload.
    """

    def __init__(
        self,
        label_filter: LabelFilter | None = None,
        system_filter: SystemMessageFilter | None = None,
        segmenter: LabelSegmenter | None = None,
    ):
        self.label_filter = label_filter or LabelFilter()
        self.system_filter = system_filter or SystemMessageFilter()
        self.segmenter = segmenter or segment_label
        self.logger = get_logger(__name__)

    def capture(self, payload: Any) -> ExtractionResult | Metadata | None:
        if not isinstance(payload, Mapping):
            return None

        data = payload.get("data")
        if not payload.get("success") and not data:
            if any(payload.get(key) for key in METADATA_HINT_KEYS):
                return self.capture_metadata(payload)
            return None

        if not payload.get("success") or not isinstance(data, Mapping):
            return None

        metadata = self.capture_metadata(data.get("metadata"))
        content = ContentCollection()
        raw_content = data.get("content")
        if isinstance(raw_content, Mapping):
            content, nested_metadata = self.capture_content(raw_content)
            if nested_metadata is not None:
                merge_metadata(metadata, nested_metadata)

        return ExtractionResult(success=True, metadata=metadata, content=content)

    def capture_metadata(self, raw: Any) -> Metadata:
        if not isinstance(raw, Mapping):
            return Metadata()
        fields = {key: value for key, value in raw.items() if isinstance(value, str)}
        return Metadata.model_validate(fields)

    def capture_content(self, raw: Mapping[str, Any]) -> tuple[ContentCollection, Metadata | None]:
        """Capture every known category; returns metadata nested in the content block, if any."""
        content = ContentCollection()
        nested_metadata: Metadata | None = None

        for key, value in raw.items():
            if key == "metadata":
                nested_metadata = self.capture_metadata(value)
                continue

            if key in RAW_TEXT_KEYS:
                if isinstance(value, str) and not content.raw_text:
                    content.raw_text = value
                continue

            category = Category.from_key(key)
            if category is None or not isinstance(value, list):
                self.logger.debug("Ignoring unknown content key", key=key, value_type=type(value).__name__)
                continue

            items = (self.capture_item(category, item) for item in value)
            content.items_for(category).extend(item for item in items if item is not None)

        return content, nested_metadata

    def capture_item(self, category: Category, raw: Any) -> ContentItem | None:
        try:
            item = CATEGORY_MODELS[category].model_validate(raw)
        except ValidationError as e:
            self.logger.warning(
                "Dropping malformed item", category=category.value, error_count=e.error_count(), error=str(e)
            )
            return None

        if isinstance(item, Hotspot):
            return self.capture_hotspot(item)
        if isinstance(item, KnowledgeCheck) and self.system_filter.is_system_message(item.question):
            self.logger.debug("Dropping system message captured as question", question=item.question[:80])
            return None
        return item

    def capture_point(self, point: HotspotPoint) -> HotspotPoint | None:
        """Fill in title/description from the raw label; None if the label is UI chrome."""
        if point.title or point.description:
            return point

        raw_label = point.raw_label or point.text_field("label")
        if self.label_filter.should_exclude(raw_label):
            return None

        title, description = self.segmenter(raw_label)
        return point.model_copy(update={"title": title, "description": description, "raw_label": raw_label})

    def capture_hotspot(self, hotspot: Hotspot) -> Hotspot | None:
        points = [point for point in map(self.capture_point, hotspot.points) if point is not None]
        if not points:
            return None
        points = [point.model_copy(update={"index": index}) for index, point in enumerate(points)]
        return hotspot.model_copy(update={"points": points})

    def capture_hotspot_group(self, raw_labels: Iterable[str | None], group_id: str | None = None) -> Hotspot | None:
        """Build a hotspot group from the accessible names of a graphic's markers."""
        points = [HotspotPoint(raw_label=label) for label in raw_labels if label]
        group = Hotspot(points=points) if group_id is None else Hotspot(id=group_id, points=points)
        return self.capture_hotspot(group)
