"""
Collection filter/sort/search engine.

Computes the visible, ordered subset of a user's cards for the browse view.

All filters are ANDed together and a filter that is not set matches every
card. Supports queries like:
- "Everything with Jordan in it" -> search_term="jordan"
- "My 1980s Topps baseball" -> sport="Baseball", manufacturer="Topps",
  year_start=1980, year_end=1989
- "PSA or BGS gems" -> grading_companies={"PSA", "BGS"}, grade_range="10"
- "Cards I still need to photograph" -> has_image=ImageFilter.WITHOUT

INVARIANTS:
- The input sequence is never reordered or modified
- Output is a pure function of (cards, criteria): same input, same output
- Malformed records never raise; they fail numeric filters instead
- Sorting is stable; DESC flips the key order but keeps tie order
"""

from collections.abc import Callable, Iterable, Sequence
from typing import Any

from sportscards.models.card import CardRecord
from sportscards.models.criteria import FilterCriteria, ImageFilter, SortField, SortOrder

# Missing values sort before every present value
_MISSING = (0,)


def _matches_search(card: CardRecord, term: str) -> bool:
    """Case-insensitive substring match on player, year, manufacturer, set, notes."""
    if not term:
        return True

    year_text = "" if card.year is None else str(card.year)
    haystacks = (card.player, year_text, card.manufacturer, card.set_name, card.notes)
    return any(term in (value or "").lower() for value in haystacks)


def _matches_year_range(card: CardRecord, year_start: int | None, year_end: int | None) -> bool:
    """Inclusive range; a missing bound is unbounded on that side."""
    if year_start is None and year_end is None:
        return True
    if card.year is None:
        return False
    if year_start is not None and card.year < year_start:
        return False
    if year_end is not None and card.year > year_end:
        return False
    return True


def _matches_grading(card: CardRecord, criteria: FilterCriteria) -> bool:
    """Grading company and grade bucket filters (ungraded cards never match a set filter)."""
    if criteria.grading_companies:
        company = card.effective_grading_company
        if company is None or company not in criteria.grading_companies:
            return False

    if criteria.grade_range is not None:
        grade = card.effective_grade
        if grade is None or not criteria.grade_range.contains(grade):
            return False

    return True


def _matches_image(card: CardRecord, has_image: ImageFilter) -> bool:
    if has_image is ImageFilter.WITH:
        return card.has_image
    if has_image is ImageFilter.WITHOUT:
        return not card.has_image
    return True


def matches_criteria(card: CardRecord, criteria: FilterCriteria) -> bool:
    """Check one card against every filter in criteria."""
    if not _matches_search(card, criteria.normalized_search):
        return False

    # Exact-match dropdown filters
    if criteria.sport and card.sport != criteria.sport:
        return False
    if criteria.manufacturer and card.manufacturer != criteria.manufacturer:
        return False
    if criteria.set_name and card.set_name != criteria.set_name:
        return False

    if not _matches_year_range(card, criteria.year_start, criteria.year_end):
        return False

    if not _matches_grading(card, criteria):
        return False

    return _matches_image(card, criteria.has_image)


def filter_cards(cards: Iterable[CardRecord], criteria: FilterCriteria) -> list[CardRecord]:
    """Return the cards matching criteria, in input order."""
    return [card for card in cards if matches_criteria(card, criteria)]


def _text_key(value: str | None) -> tuple[Any, ...]:
    return (1, value.lower()) if value else _MISSING


def _number_key(value: float | None) -> tuple[Any, ...]:
    return (1, value) if value is not None else _MISSING


_SORT_KEYS: dict[SortField, Callable[[CardRecord], tuple[Any, ...]]] = {
    SortField.PLAYER: lambda card: _text_key(card.player),
    SortField.YEAR: lambda card: _number_key(card.year),
    SortField.MANUFACTURER: lambda card: _text_key(card.manufacturer),
    SortField.SET: lambda card: _text_key(card.set_name),
    SortField.SPORT: lambda card: _text_key(card.sport),
    SortField.GRADE_NUMBER: lambda card: _number_key(card.effective_grade),
    SortField.CREATED_AT: lambda card: _number_key(
        card.created_at.timestamp() if card.created_at is not None else None
    ),
}


def sort_cards(
    cards: Iterable[CardRecord],
    sort_by: SortField = SortField.PLAYER,
    sort_order: SortOrder = SortOrder.ASC,
) -> list[CardRecord]:
    """
    Return a new list of cards sorted by one field.

    Text fields compare case-insensitively, year and grade numerically and
    created_at by timestamp. Missing values sort as the smallest value.
    """
    return sorted(cards, key=_SORT_KEYS[sort_by], reverse=sort_order is SortOrder.DESC)


def apply_criteria(cards: Sequence[CardRecord], criteria: FilterCriteria) -> list[CardRecord]:
    """
    Compute the browse view: filter, then sort.

    Args:
        cards: The full snapshot (not modified)
        criteria: Filters and sort to apply

    Returns:
        A new list of matching cards in display order.

    Examples:
        # Default criteria: everything, by player A-Z
        >>> apply_criteria(cards, FilterCriteria())

        # Newest additions first
        >>> apply_criteria(cards, FilterCriteria(sort_by=SortField.CREATED_AT,
        ...                                      sort_order=SortOrder.DESC))
    """
    return sort_cards(filter_cards(cards, criteria), criteria.sort_by, criteria.sort_order)
