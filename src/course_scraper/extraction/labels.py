# ABOUTME: Heuristic splitting of run-on accessible names into a title and a description
# ABOUTME: An ordered chain of independent matchers; the first one that recognises the label wins

"""
Course players render an interactive point's accessible name as its short label
immediately followed by the explanatory sentence, with no separator:

    "Require MFAThe first time a user logs in, they must set up MFA."

The matchers below reconstruct the two fields on a best-effort basis. They are
heuristics, not a parser: a label that happens to contain one of the sentence
starters mid-word will be split there.
"""

import re
from collections.abc import Callable, Sequence
from typing import NamedTuple

MAX_TITLE_LENGTH = 50

SENTENCE_STARTERS = (
    "The",
    "This",
    "You",
    "When",
    "If",
    "A ",
    "An ",
    "It ",
    "Select",
    "In ",
    "On ",
    "Use",
    "Click",
    "Choosing",
    "Enabling",
    "Disabling",
    "What",
    "Where",
    "How",
    "Why",
    "Which",
    "MFA ",
    "Note:",
    "Tip:",
    "Generally",
    "Additional",
)

_SENTENCE_START = re.compile(
    r"^(.+?)((?:" + "|".join(re.escape(token) for token in SENTENCE_STARTERS) + r")[\s\S]*)"
)
_CASE_BOUNDARY = re.compile(r"^([A-Z][a-zA-Z\s]{1,40}?)([A-Z][a-z].*)")
_SEPARATOR = re.compile(r"^([^:–—-]{3,40})(?:\s*[:–—-]\s*)(.+)")
_UPPER_LOWER = re.compile(r"[A-Z][a-z]")

Matcher = Callable[[str], tuple[str, str] | None]


class SegmentedLabel(NamedTuple):
    title: str
    description: str


def _reclaim_title_tail(title: str, description: str) -> tuple[str, str]:
    # Move everything from the last capitalised word of the title onto the description
    starts = [match.start() for match in _UPPER_LOWER.finditer(title) if match.start() > 0]
    if not starts:
        return title, description
    cut = starts[-1]
    return title[:cut].strip(), title[cut:] + description


def match_sentence_start(label: str) -> tuple[str, str] | None:
    """Split before the earliest sentence-introducing token, if the title part is short."""
    match = _SENTENCE_START.match(label)
    if not match or len(match.group(1)) > MAX_TITLE_LENGTH:
        return None

    title = match.group(1).strip()
    description = match.group(2).strip()
    if description[:1].islower():
        title, description = _reclaim_title_tail(title, description)
    return title, description


def match_case_boundary(label: str) -> tuple[str, str] | None:
    """Split where a capitalised word run is directly followed by a new capitalised word."""
    match = _CASE_BOUNDARY.match(label)
    if not match:
        return None
    return match.group(1).strip(), match.group(2).strip()


def match_separator(label: str) -> tuple[str, str] | None:
    """Split on a colon, en dash, em dash or hyphen near the start of the label."""
    match = _SEPARATOR.match(label)
    if not match:
        return None
    return match.group(1).strip(), match.group(2).strip()


DEFAULT_MATCHERS: tuple[Matcher, ...] = (match_sentence_start, match_case_boundary, match_separator)


class LabelSegmenter:
    """Runs matchers in order; falls back to an untitled description."""

    def __init__(self, matchers: Sequence[Matcher] = DEFAULT_MATCHERS):
        self.matchers = tuple(matchers)

    def __call__(self, label: str | None) -> SegmentedLabel:
        if not label:
            return SegmentedLabel("", "")

        for matcher in self.matchers:
            parts = matcher(label)
            if parts is not None:
                return SegmentedLabel(*parts)

        return SegmentedLabel("", label.strip())


_default_segmenter = LabelSegmenter()


def segment_label(label: str | None) -> SegmentedLabel:
    """Split a run-on label with the default matcher chain."""
    return _default_segmenter(label)
