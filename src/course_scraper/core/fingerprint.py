# ABOUTME: Lossy text fingerprints used to recognise the same item reported by different probes
# ABOUTME: Not a hash - just a truncated primary-text key compared for equality

from collections.abc import Iterable

from .models import ContentItem, Hotspot, WireModel

FINGERPRINT_LENGTH = 200
MIN_FINGERPRINT_LENGTH = 5
DELIMITER = "|"

PRIMARY_TEXT_FIELDS = ("content", "question", "title", "description", "label")
POINT_TEXT_FIELDS = ("title", "description", "label")


def first_text(model: WireModel, fields: Iterable[str]) -> str:
    """First non-empty string among the given fields, in priority order."""
    for name in fields:
        value = model.text_field(name)
        if value:
            return value
    return ""


def fingerprint(item: ContentItem) -> str:
    """Derive the dedup key for an item.

    Hotspot groups are keyed on their points' text; every other item on its first
    non-empty primary text field, which may be an extra field kept from the payload.
    Items with none of those fields get an empty key. Keys are truncated to 200
    characters, so two items that only differ past that point are treated as the
    same item.
    """
    if isinstance(item, Hotspot):
        texts = (first_text(point, POINT_TEXT_FIELDS) for point in item.points)
        return DELIMITER.join(text for text in texts if text)[:FINGERPRINT_LENGTH]

    return first_text(item, PRIMARY_TEXT_FIELDS)[:FINGERPRINT_LENGTH]


def is_usable(key: str) -> bool:
    """Keys that are empty or shorter than five characters identify nothing."""
    return len(key) >= MIN_FINGERPRINT_LENGTH
