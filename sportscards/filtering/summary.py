from collections.abc import Iterable
from dataclasses import dataclass, field

from sportscards.models.card import CardRecord


@dataclass
class CollectionSummary:
    """Counts shown alongside the collection (always over the full snapshot)."""

    total_cards: int = 0
    graded_cards: int = 0
    cards_with_images: int = 0
    by_sport: dict[str, int] = field(default_factory=dict)
    by_grading_company: dict[str, int] = field(default_factory=dict)


def summarize_collection(cards: Iterable[CardRecord]) -> CollectionSummary:
    """
    Get a summary of the collection.

    Cards without a sport are counted under "Unknown". Breakdowns are sorted
    by count descending, then name.
    """
    summary = CollectionSummary()

    for card in cards:
        summary.total_cards += 1

        sport = card.sport or "Unknown"
        summary.by_sport[sport] = summary.by_sport.get(sport, 0) + 1

        if card.has_image:
            summary.cards_with_images += 1

        company = card.effective_grading_company
        if card.graded:
            summary.graded_cards += 1
            if company:
                summary.by_grading_company[company] = (
                    summary.by_grading_company.get(company, 0) + 1
                )

    summary.by_sport = dict(sorted(summary.by_sport.items(), key=lambda x: (-x[1], x[0])))
    summary.by_grading_company = dict(
        sorted(summary.by_grading_company.items(), key=lambda x: (-x[1], x[0]))
    )
    return summary
