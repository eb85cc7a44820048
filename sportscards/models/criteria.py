"""
Browse criteria for the collection view.

FilterCriteria is an immutable value: every change produces a new
instance, so a computed view is a pure function of (snapshot, criteria).
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any


class SortField(str, Enum):
    """Fields the collection can be sorted by."""

    PLAYER = "player"
    YEAR = "year"
    MANUFACTURER = "manufacturer"
    SET = "set"
    SPORT = "sport"
    GRADE_NUMBER = "gradeNumber"
    CREATED_AT = "createdAt"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class ImageFilter(str, Enum):
    """Tri-state image presence filter."""

    ANY = "any"
    WITH = "with"
    WITHOUT = "without"


class GradeRange(str, Enum):
    """Grade buckets offered by the grade filter (inclusive bounds)."""

    GEM_MINT = "10"
    NINE_TO_TEN = "9-10"
    EIGHT_TO_NINE = "8-9"
    SIX_TO_EIGHT = "6-8"
    ONE_TO_SIX = "1-6"

    @property
    def bounds(self) -> tuple[int, int]:
        """Inclusive (low, high) grade bounds for this bucket."""
        return _GRADE_BOUNDS[self]

    def contains(self, grade: int) -> bool:
        low, high = self.bounds
        return low <= grade <= high


_GRADE_BOUNDS: dict[GradeRange, tuple[int, int]] = {
    GradeRange.GEM_MINT: (10, 10),
    GradeRange.NINE_TO_TEN: (9, 10),
    GradeRange.EIGHT_TO_NINE: (8, 9),
    GradeRange.SIX_TO_EIGHT: (6, 8),
    GradeRange.ONE_TO_SIX: (1, 6),
}


@dataclass(frozen=True)
class FilterCriteria:
    """
    Everything that decides which cards are visible and in what order.

    Unset filters (None, empty string, empty set, ImageFilter.ANY) match
    every card.
    """

    search_term: str = ""
    sport: str | None = None
    year_start: int | None = None
    year_end: int | None = None
    manufacturer: str | None = None
    set_name: str | None = None
    grading_companies: frozenset[str] = field(default_factory=frozenset)
    grade_range: GradeRange | None = None
    has_image: ImageFilter = ImageFilter.ANY
    sort_by: SortField = SortField.PLAYER
    sort_order: SortOrder = SortOrder.ASC

    def with_changes(self, **changes: Any) -> "FilterCriteria":
        """Return a copy with the given fields replaced."""
        if "grading_companies" in changes:
            changes["grading_companies"] = frozenset(changes["grading_companies"] or ())
        return replace(self, **changes)

    @property
    def normalized_search(self) -> str:
        """Lower-cased search term, empty when only whitespace was typed."""
        return self.search_term.strip().lower()
