# ABOUTME: Aggregation core: data model, merge, deduplication, statistics and orchestration
# ABOUTME: Pipeline Stage 2: per-source results -> one CombinedDocument

"""
Core Layer: Reconcile per-source results into one document

This layer handles:
- Typed content items and the combined document model
- First-wins metadata merge and arrival-order content merge
- Fingerprint deduplication, hotspot collapse and category passes
- Statistics and the concurrent scrape service

Data Flow: extraction/ results → Merge → Dedup → Statistics → CombinedDocument
"""

from .models import (
    Category,
    CombinedDocument,
    ContentCollection,
    ContentItem,
    ExtractionResult,
    Metadata,
    Statistics,
)

# Import pipeline and service on demand to avoid circular imports
# Use: from course_scraper.core.pipeline import AggregationPipeline

__all__ = [
    "Category",
    "CombinedDocument",
    "ContentCollection",
    "ContentItem",
    "ExtractionResult",
    "Metadata",
    "Statistics",
]
