"""
Dependent dropdown options for the browse filters.

The manufacturer options depend on the sport filter and the set options
depend on manufacturer (and sport). Whenever either changes, the cascade
re-runs before the view is re-filtered so the criteria never hold a value
the dropdowns cannot show.

INVARIANTS:
- resolve_filter_options() output criteria are always consistent with the
  returned options
- A still-valid selection is kept; only stale ones are cleared
"""

from dataclasses import dataclass

from sportscards.models.criteria import FilterCriteria
from sportscards.services.reference_data import (
    get_all_manufacturers,
    get_manufacturers_for_sport,
    get_sets_for_manufacturer,
)


@dataclass(frozen=True, slots=True)
class FilterOptions:
    """Options currently offered by the manufacturer and set dropdowns."""

    manufacturers: tuple[str, ...] = ()
    sets: tuple[str, ...] = ()


def resolve_filter_options(criteria: FilterCriteria) -> tuple[FilterCriteria, FilterOptions]:
    """
    Compute dropdown options and drop stale manufacturer/set selections.

    - With a sport, manufacturers come from that sport's list; without
      one, every manufacturer is offered.
    - A manufacturer outside the allowed list clears manufacturer and set.
    - Sets come from (manufacturer, sport); a set outside them is cleared.
    - No manufacturer means no set options and no set selection.
    """
    if criteria.sport:
        manufacturers = tuple(get_manufacturers_for_sport(criteria.sport))
    else:
        manufacturers = tuple(get_all_manufacturers())

    manufacturer = criteria.manufacturer
    set_name = criteria.set_name
    if manufacturer and manufacturer not in manufacturers:
        manufacturer = None
        set_name = None

    sets: tuple[str, ...] = ()
    if manufacturer:
        sets = tuple(get_sets_for_manufacturer(manufacturer, criteria.sport))
        if set_name and set_name not in sets:
            set_name = None
    else:
        set_name = None

    if manufacturer != criteria.manufacturer or set_name != criteria.set_name:
        criteria = criteria.with_changes(manufacturer=manufacturer, set_name=set_name)

    return criteria, FilterOptions(manufacturers=manufacturers, sets=sets)


def apply_sport(
    criteria: FilterCriteria, sport: str | None
) -> tuple[FilterCriteria, FilterOptions]:
    """Select a sport filter and cascade to manufacturer/set."""
    return resolve_filter_options(criteria.with_changes(sport=sport or None))


def apply_manufacturer(
    criteria: FilterCriteria, manufacturer: str | None
) -> tuple[FilterCriteria, FilterOptions]:
    """Select a manufacturer filter and cascade to set."""
    return resolve_filter_options(criteria.with_changes(manufacturer=manufacturer or None))
