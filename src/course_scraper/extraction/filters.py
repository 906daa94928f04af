# ABOUTME: Noise filters applied to raw candidate strings before they become content items
# ABOUTME: Vocabularies are injected so tests and deployments can swap the word lists

from collections.abc import Iterable

from course_scraper.config import DEFAULT_EXCLUDE_LABELS, DEFAULT_SYSTEM_MESSAGES, Config

MIN_LABEL_LENGTH = 5


class LabelFilter:
    """Recognises interface controls (navigation buttons, markers) posing as labels."""

    def __init__(self, vocabulary: Iterable[str] | None = None, min_length: int = MIN_LABEL_LENGTH):
        source = DEFAULT_EXCLUDE_LABELS if vocabulary is None else vocabulary
        self.vocabulary = tuple(entry.lower() for entry in source if entry)
        self.min_length = min_length

    @classmethod
    def from_config(cls, config: Config) -> "LabelFilter":
        return cls(config.exclude_labels)

    def should_exclude(self, label: str | None) -> bool:
        """True for empty or very short labels and for anything naming a UI control."""
        if not label:
            return True
        normalized = label.lower().strip()
        if len(normalized) < self.min_length:
            return True
        return any(entry in normalized for entry in self.vocabulary)


class SystemMessageFilter:
    """Recognises transient player messages ("loading", "you are offline") captured as questions."""

    def __init__(self, patterns: Iterable[str] | None = None):
        source = DEFAULT_SYSTEM_MESSAGES if patterns is None else patterns
        self.patterns = tuple(pattern.lower() for pattern in source if pattern)

    @classmethod
    def from_config(cls, config: Config) -> "SystemMessageFilter":
        return cls(config.system_messages)

    def is_system_message(self, text: str | None) -> bool:
        if not text:
            return False
        lowered = text.lower()
        return any(pattern in lowered for pattern in self.patterns)
