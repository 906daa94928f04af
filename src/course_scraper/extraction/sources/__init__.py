# ABOUTME: Concrete extraction sources: saved payload files, HTTP endpoints, in-memory payloads
# ABOUTME: Each satisfies the ExtractionSource protocol

from .file import JsonFileSource
from .http import HttpJsonSource
from .memory import StaticSource

__all__ = ["HttpJsonSource", "JsonFileSource", "StaticSource", "source_from_location"]


def source_from_location(location: str, attempts: int = 3) -> JsonFileSource | HttpJsonSource:
    """Build a source from a CLI argument: http(s) URLs are fetched, anything else is a file path."""
    if location.startswith(("http://", "https://")):
        return HttpJsonSource(location, attempts=attempts)
    return JsonFileSource(location)
