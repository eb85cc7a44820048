"""Tests for collection summary counts."""

from collections.abc import Callable

from sportscards.filtering.summary import summarize_collection
from sportscards.models.card import CardRecord


class TestSummarizeCollection:
    def test_empty_collection(self) -> None:
        summary = summarize_collection([])

        assert summary.total_cards == 0
        assert summary.by_sport == {}

    def test_counts(self, make_card: Callable[..., CardRecord]) -> None:
        cards = [
            make_card(sport="Baseball", graded=True, grading_company="PSA", grade_number=10),
            make_card(sport="Baseball", image_url="https://img.example.com/a.jpg"),
            make_card(sport="Hockey", graded=True, grading_company="BGS", grade_number=9),
            make_card(sport="", graded=False, grading_company="PSA"),
        ]

        summary = summarize_collection(cards)

        assert summary.total_cards == 4
        assert summary.graded_cards == 2
        assert summary.cards_with_images == 1
        assert list(summary.by_sport.items()) == [("Baseball", 2), ("Hockey", 1), ("Unknown", 1)]
        assert summary.by_grading_company == {"BGS": 1, "PSA": 1}
