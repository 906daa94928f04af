# ABOUTME: Protocol interface for extraction sources that return raw probe payloads
# ABOUTME: A source only fetches; normalization and merging happen downstream

from typing import Any, Protocol


class ExtractionSource(Protocol):
    """One independent probe of a course page (document probe, frame probe, metadata probe).

    ``fetch`` returns the probe's raw JSON payload. It may raise or hang; callers bound
    it with a timeout and treat any failure as "no contribution".
    """

    name: str

    async def fetch(self) -> Any:
        """Fetch the raw payload produced by this source.

        Returns:
            The decoded JSON payload (envelope, bare metadata, or anything else)

        Raises:
            ExtractionError: If the payload cannot be obtained
        """
        ...


class ExtractionError(Exception):
    """Raised when a source cannot produce a payload."""

    pass
