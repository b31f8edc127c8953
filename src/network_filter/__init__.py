from .engine import FilterEngine, category_options, has_active_filters
from .models import (
    SEARCH_FIELDS,
    CategoryFilter,
    CategoryOption,
    ClusterFilter,
    FilterResult,
    FilterSettings,
    FilterSummary,
    RangeFilter,
    SearchFilter,
    ValueRange,
)

__all__ = [
    "CategoryFilter",
    "CategoryOption",
    "ClusterFilter",
    "FilterEngine",
    "FilterResult",
    "FilterSettings",
    "FilterSummary",
    "RangeFilter",
    "SEARCH_FIELDS",
    "SearchFilter",
    "ValueRange",
    "category_options",
    "has_active_filters",
]
