"""
Card form draft and its parse boundary.

A CardDraft holds exactly what the user typed (all strings). Nothing is
interpreted until validate_draft() turns it into a ParsedCard, which is
the only shape the form hands to storage.

INVARIANTS:
- A ParsedCard always satisfies the form constraints (year range,
  enumerated sport, grading fields present iff graded)
- Invalid numeric input is a field error, never a silent NaN-like value
"""

from dataclasses import dataclass, fields
from typing import Any

from sportscards.config import MAX_CARD_YEAR, MAX_GRADE, MIN_CARD_YEAR, MIN_GRADE
from sportscards.models.card import (
    GRADED_NO,
    GRADED_YES,
    CardRecord,
    GradingCompany,
    Sport,
    parse_int,
)
from sportscards.models.failure import DraftValidationError

REQUIRED = "required"


@dataclass(frozen=True, slots=True)
class CardDraft:
    """Raw form input for one card."""

    player: str = ""
    year: str = ""
    sport: str = ""
    manufacturer: str = ""
    set_name: str = ""
    card_number: str = ""
    graded: str = GRADED_NO
    grading_company: str = ""
    grade_number: str = ""
    notes: str = ""
    image_url: str = ""

    @classmethod
    def from_record(cls, record: CardRecord) -> "CardDraft":
        """Seed a draft from an existing record (edit mode)."""
        return cls(
            player=record.player,
            year="" if record.year is None else str(record.year),
            sport=record.sport,
            manufacturer=record.manufacturer,
            set_name=record.set_name,
            card_number=record.card_number,
            graded=GRADED_YES if record.graded else GRADED_NO,
            grading_company=(record.grading_company or "") if record.graded else "",
            grade_number=(
                str(record.grade_number)
                if record.graded and record.grade_number is not None
                else ""
            ),
            notes=record.notes,
            image_url=record.image_url,
        )


DRAFT_FIELDS: frozenset[str] = frozenset(f.name for f in fields(CardDraft))


@dataclass(frozen=True, slots=True)
class ParsedCard:
    """A draft that passed validation, with typed values."""

    player: str
    year: int
    sport: Sport
    manufacturer: str
    set_name: str
    card_number: str
    graded: bool
    grading_company: GradingCompany | None
    grade_number: int | None
    notes: str
    image_url: str

    def to_fields(self) -> dict[str, Any]:
        """Document fields for storage (no owner or timestamps)."""
        return {
            "player": self.player,
            "year": self.year,
            "sport": self.sport.value,
            "manufacturer": self.manufacturer,
            "set": self.set_name,
            "cardNumber": self.card_number,
            "graded": GRADED_YES if self.graded else GRADED_NO,
            "gradingCompany": self.grading_company.value if self.grading_company else "",
            "gradeNumber": "" if self.grade_number is None else str(self.grade_number),
            "notes": self.notes,
            "imageUrl": self.image_url,
        }


def _parse_bounded(raw: str, low: int, high: int) -> tuple[int | None, str | None]:
    if not raw.strip():
        return None, REQUIRED
    value = parse_int(raw)
    if value is None:
        return None, "must be a whole number"
    if not low <= value <= high:
        return None, f"must be between {low} and {high}"
    return value, None


def validate_draft(draft: CardDraft) -> ParsedCard:
    """
    Parse a draft into a ParsedCard.

    Collects every problem before raising so the user sees them all.

    Raises:
        DraftValidationError: If any field is missing or malformed
    """
    errors: dict[str, str] = {}

    player = draft.player.strip()
    if not player:
        errors["player"] = REQUIRED

    year, year_error = _parse_bounded(draft.year, MIN_CARD_YEAR, MAX_CARD_YEAR)
    if year_error:
        errors["year"] = year_error

    sport: Sport | None = None
    if not draft.sport:
        errors["sport"] = REQUIRED
    else:
        try:
            sport = Sport(draft.sport)
        except ValueError:
            errors["sport"] = "unknown sport"

    manufacturer = draft.manufacturer.strip()
    if not manufacturer:
        errors["manufacturer"] = REQUIRED

    set_name = draft.set_name.strip()
    if not set_name:
        errors["set_name"] = REQUIRED

    if draft.graded not in (GRADED_YES, GRADED_NO):
        errors["graded"] = "must be Yes or No"
    graded = draft.graded == GRADED_YES

    company: GradingCompany | None = None
    grade: int | None = None
    if graded:
        if not draft.grading_company:
            errors["grading_company"] = REQUIRED
        else:
            try:
                company = GradingCompany(draft.grading_company)
            except ValueError:
                errors["grading_company"] = "unknown grading company"

        grade, grade_error = _parse_bounded(draft.grade_number, MIN_GRADE, MAX_GRADE)
        if grade_error:
            errors["grade_number"] = grade_error

    if errors or year is None or sport is None:
        raise DraftValidationError(errors)

    return ParsedCard(
        player=player,
        year=year,
        sport=sport,
        manufacturer=manufacturer,
        set_name=set_name,
        card_number=draft.card_number.strip(),
        graded=graded,
        grading_company=company,
        grade_number=grade,
        notes=draft.notes,
        image_url=draft.image_url,
    )
