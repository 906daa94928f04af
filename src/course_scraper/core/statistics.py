# ABOUTME: Per-category item counts and the overall total for a combined document
# ABOUTME: Totals only ever add up numeric values, whatever else a stats mapping holds

from collections.abc import Mapping
from typing import Any

from .models import Category, ContentCollection, Statistics

TOTAL_KEY = "total_items"


def sum_numeric(values: Mapping[str, Any]) -> int:
    """Sum the integer values of a statistics mapping, skipping the total itself."""
    return sum(
        value
        for key, value in values.items()
        if key not in (TOTAL_KEY, "totalItems") and isinstance(value, int) and not isinstance(value, bool)
    )


def compute_statistics(content: ContentCollection) -> Statistics:
    counts = {category.field_name: len(content.items_for(category)) for category in Category}
    return Statistics(**counts, total_items=sum_numeric(counts))
