"""
Browse-view filtering for a user's card collection.

Pure, synchronous computation over the in-memory snapshot: the engine
filters and sorts, the cascade keeps dependent dropdowns consistent,
badges describe active filters and the summary counts the full snapshot.
"""

from sportscards.filtering.badges import (
    FilterBadge,
    active_filter_badges,
    clear_all_filters,
    clear_filter,
)
from sportscards.filtering.cascade import (
    FilterOptions,
    apply_manufacturer,
    apply_sport,
    resolve_filter_options,
)
from sportscards.filtering.engine import (
    apply_criteria,
    filter_cards,
    matches_criteria,
    sort_cards,
)
from sportscards.filtering.summary import CollectionSummary, summarize_collection

__all__ = [
    "CollectionSummary",
    "FilterBadge",
    "FilterOptions",
    "active_filter_badges",
    "apply_criteria",
    "apply_manufacturer",
    "apply_sport",
    "clear_all_filters",
    "clear_filter",
    "filter_cards",
    "matches_criteria",
    "resolve_filter_options",
    "sort_cards",
    "summarize_collection",
]
