"""
Active filter badges.

Each set filter is shown as a removable chip above the card grid. Badges
are derived from the criteria; removing one clears exactly that filter.
"""

from dataclasses import dataclass

from sportscards.filtering.cascade import resolve_filter_options
from sportscards.models.criteria import FilterCriteria, ImageFilter

SEARCH = "search"
SPORT = "sport"
YEARS = "years"
MANUFACTURER = "manufacturer"
SET = "set"
GRADE = "grade"
IMAGE = "image"
# Grading company badges are keyed "company:<name>", one per company
COMPANY_PREFIX = "company:"


@dataclass(frozen=True, slots=True)
class FilterBadge:
    """A removable chip describing one active filter."""

    key: str
    label: str


def _years_label(year_start: int | None, year_end: int | None) -> str:
    if year_start is not None and year_end is not None:
        if year_start == year_end:
            return f"Year: {year_start}"
        return f"Years: {year_start}-{year_end}"
    if year_start is not None:
        return f"Years: {year_start} and later"
    return f"Years: {year_end} and earlier"


def active_filter_badges(criteria: FilterCriteria) -> list[FilterBadge]:
    """List badges for every active filter, in display order."""
    badges: list[FilterBadge] = []

    if criteria.normalized_search:
        badges.append(FilterBadge(SEARCH, f'Search: "{criteria.search_term.strip()}"'))
    if criteria.sport:
        badges.append(FilterBadge(SPORT, f"Sport: {criteria.sport}"))
    if criteria.year_start is not None or criteria.year_end is not None:
        badges.append(FilterBadge(YEARS, _years_label(criteria.year_start, criteria.year_end)))
    if criteria.manufacturer:
        badges.append(FilterBadge(MANUFACTURER, f"Manufacturer: {criteria.manufacturer}"))
    if criteria.set_name:
        badges.append(FilterBadge(SET, f"Set: {criteria.set_name}"))
    for company in sorted(criteria.grading_companies):
        badges.append(FilterBadge(f"{COMPANY_PREFIX}{company}", f"Graded by {company}"))
    if criteria.grade_range is not None:
        badges.append(FilterBadge(GRADE, f"Grade: {criteria.grade_range.value}"))
    if criteria.has_image is ImageFilter.WITH:
        badges.append(FilterBadge(IMAGE, "With image"))
    elif criteria.has_image is ImageFilter.WITHOUT:
        badges.append(FilterBadge(IMAGE, "Without image"))

    return badges


def clear_filter(criteria: FilterCriteria, key: str) -> FilterCriteria:
    """
    Remove the filter behind one badge.

    Clearing sport or manufacturer re-runs the option cascade.

    Raises:
        ValueError: If key does not name a badge
    """
    if key.startswith(COMPANY_PREFIX):
        company = key.removeprefix(COMPANY_PREFIX)
        return criteria.with_changes(grading_companies=criteria.grading_companies - {company})

    if key == SEARCH:
        return criteria.with_changes(search_term="")
    if key == SPORT:
        criteria, _ = resolve_filter_options(criteria.with_changes(sport=None))
        return criteria
    if key == YEARS:
        return criteria.with_changes(year_start=None, year_end=None)
    if key == MANUFACTURER:
        return criteria.with_changes(manufacturer=None, set_name=None)
    if key == SET:
        return criteria.with_changes(set_name=None)
    if key == GRADE:
        return criteria.with_changes(grade_range=None)
    if key == IMAGE:
        return criteria.with_changes(has_image=ImageFilter.ANY)

    msg = f"Unknown filter badge: {key}"
    raise ValueError(msg)


def clear_all_filters(criteria: FilterCriteria) -> FilterCriteria:
    """Reset every filter, keeping the current sort."""
    return FilterCriteria(sort_by=criteria.sort_by, sort_order=criteria.sort_order)
