# ABOUTME: Extraction layer: sources, payload capture and per-candidate filters
# ABOUTME: Pipeline Stage 1: raw probe payloads -> typed extraction results

"""
Extraction Layer: Get raw probe payloads and normalize them

This layer handles:
- Fetching payloads from independent sources (files, HTTP, memory)
- Label exclusion and run-on label segmentation
- System-message filtering of captured questions
- Per-item validation into typed content items

Data Flow: Probe payloads → ExtractionResult → core/ aggregation pipeline
"""

from .filters import LabelFilter, SystemMessageFilter
from .labels import LabelSegmenter, SegmentedLabel, segment_label

__all__ = [
    "LabelFilter",
    "LabelSegmenter",
    "SegmentedLabel",
    "SystemMessageFilter",
    "segment_label",
]
