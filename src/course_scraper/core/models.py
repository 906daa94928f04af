# ABOUTME: Pydantic models for extracted course content, per-source results and the combined document
# ABOUTME: Wire names are camelCase aliases so payloads and exports keep the probe JSON shape

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel, to_snake


class Category(StrEnum):
    """Closed set of content categories a probe can report."""

    FLIP_CARDS = "flipCards"
    HOTSPOTS = "hotspots"
    KNOWLEDGE_CHECKS = "knowledgeChecks"
    ACCORDIONS = "accordions"
    TABS = "tabs"
    IMAGES = "images"
    TEXT_BLOCKS = "textBlocks"
    LISTS = "lists"
    TABLES = "tables"
    VIDEOS = "videos"

    @property
    def field_name(self) -> str:
        """Attribute name of this category on ContentCollection and Statistics."""
        return to_snake(self.value)

    @classmethod
    def from_key(cls, key: str) -> "Category | None":
        """Resolve a wire (camelCase) or attribute (snake_case) key, None if unknown."""
        for category in cls:
            if key in (category.value, category.field_name):
                return category
        return None


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2025-01-31T09:15:00.000Z."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class WireModel(BaseModel):
    """Base for every model that crosses the JSON boundary."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_missing(cls, data: Any) -> Any:
        # Probes emit null for fields they could not find; treat those as absent
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    def text_field(self, name: str) -> str:
        """Return a string field by attribute name, looking at preserved extra fields too."""
        if name in type(self).model_fields:
            value = getattr(self, name)
        else:
            value = (self.model_extra or {}).get(name)
        return value if isinstance(value, str) else ""


class ContentItem(WireModel):
    """One extracted item. Unknown fields (ids, probe-specific tags) are kept as-is."""

    model_config = ConfigDict(extra="allow")


class FlipCard(ContentItem):
    front: str = ""
    back: str = ""

    @field_validator("front", "back", mode="before")
    @classmethod
    def _flatten_side(cls, value: Any) -> Any:
        # The frame probe reports each side as {title, content}
        if isinstance(value, dict):
            parts = (value.get("title"), value.get("content"))
            return " ".join(part.strip() for part in parts if isinstance(part, str) and part.strip())
        return value


class HotspotPoint(WireModel):
    model_config = ConfigDict(extra="allow")

    index: int = 0
    title: str = ""
    description: str = ""
    raw_label: str = ""


class Hotspot(ContentItem):
    points: list[HotspotPoint] = Field(default_factory=list)


class Choice(WireModel):
    model_config = ConfigDict(extra="allow")

    text: str = ""
    is_correct: bool = False

    @model_validator(mode="before")
    @classmethod
    def _from_text(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"text": data}
        return data


class KnowledgeCheck(ContentItem):
    question: str = ""
    choices: list[Choice] = Field(default_factory=list)
    feedback: str = ""


class AccordionPanel(WireModel):
    model_config = ConfigDict(extra="allow")

    title: str = ""
    content: str = ""


class Accordion(ContentItem):
    panels: list[AccordionPanel] = Field(default_factory=list)


class Tab(WireModel):
    model_config = ConfigDict(extra="allow")

    label: str = ""
    content: str = ""


class TabSet(ContentItem):
    tabs: list[Tab] = Field(default_factory=list)


class TextBlock(ContentItem):
    content: str = ""


class ListBlock(ContentItem):
    items: list[str] = Field(default_factory=list)

    @field_validator("items", mode="before")
    @classmethod
    def _item_text(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [
                (item.get("text") or item.get("content") or "") if isinstance(item, dict) else item for item in value
            ]
        return value


class Table(ContentItem):
    headers: list[str] = Field(default_factory=list)
    rows: list[list[str]] = Field(default_factory=list)


class Image(ContentItem):
    src: str = ""
    alt: str = ""
    caption: str = ""


class Video(ContentItem):
    src: str = ""
    type: str = ""


CATEGORY_MODELS: dict[Category, type[ContentItem]] = {
    Category.FLIP_CARDS: FlipCard,
    Category.HOTSPOTS: Hotspot,
    Category.KNOWLEDGE_CHECKS: KnowledgeCheck,
    Category.ACCORDIONS: Accordion,
    Category.TABS: TabSet,
    Category.IMAGES: Image,
    Category.TEXT_BLOCKS: TextBlock,
    Category.LISTS: ListBlock,
    Category.TABLES: Table,
    Category.VIDEOS: Video,
}


class Metadata(WireModel):
    """Page-level metadata. Every field defaults to an empty string when unset."""

    scraped_at: str = ""
    url: str = ""
    course: str = ""
    lesson: str = ""
    path: str = ""

    @property
    def is_empty(self) -> bool:
        return not any(getattr(self, name) for name in type(self).model_fields)


class ContentCollection(WireModel):
    """Content grouped by category, plus the free-form raw page text."""

    flip_cards: list[FlipCard] = Field(default_factory=list)
    hotspots: list[Hotspot] = Field(default_factory=list)
    knowledge_checks: list[KnowledgeCheck] = Field(default_factory=list)
    accordions: list[Accordion] = Field(default_factory=list)
    tabs: list[TabSet] = Field(default_factory=list)
    images: list[Image] = Field(default_factory=list)
    text_blocks: list[TextBlock] = Field(default_factory=list)
    lists: list[ListBlock] = Field(default_factory=list)
    tables: list[Table] = Field(default_factory=list)
    videos: list[Video] = Field(default_factory=list)
    raw_text: str = ""

    def items_for(self, category: Category) -> list[Any]:
        return getattr(self, category.field_name)

    def set_items(self, category: Category, items: list[Any]) -> None:
        setattr(self, category.field_name, items)


class Statistics(WireModel):
    """Item count per category and their total."""

    flip_cards: int = 0
    hotspots: int = 0
    knowledge_checks: int = 0
    accordions: int = 0
    tabs: int = 0
    images: int = 0
    text_blocks: int = 0
    lists: int = 0
    tables: int = 0
    videos: int = 0
    total_items: int = 0

    def count_for(self, category: Category) -> int:
        return getattr(self, category.field_name)


class ExtractionResult(WireModel):
    """One source's contribution to a scrape. Discarded once merged."""

    success: bool = False
    metadata: Metadata | None = None
    content: ContentCollection | None = None


class CombinedDocument(WireModel):
    """Deduplicated, statistics-annotated output of one scrape invocation."""

    metadata: Metadata
    content: ContentCollection
    statistics: Statistics

    @property
    def is_empty(self) -> bool:
        """True when no source contributed any content ("nothing found")."""
        return self.statistics.total_items == 0

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self, indent: int | None = 2) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)
