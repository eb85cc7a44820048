"""
Card record model.

A CardRecord is one physical card owned by one user. Records are read from
schemaless documents, so construction from a document never fails: missing
or malformed fields become empty values and numeric predicates simply do
not match them.

INVARIANTS:
- user_id is set at creation and never changes
- When graded is False, grading_company and grade_number are ignored
- Manufacturer and set are not checked against the reference tables here
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class Sport(str, Enum):
    """Sports a card can belong to."""

    BASEBALL = "Baseball"
    FOOTBALL = "Football"
    BASKETBALL = "Basketball"
    WNBA = "WNBA"
    HOCKEY = "Hockey"
    SOCCER = "Soccer"
    OTHER = "Other"


class GradingCompany(str, Enum):
    """Professional grading services."""

    PSA = "PSA"
    BGS = "BGS"
    SGC = "SGC"
    CGC = "CGC"
    HGA = "HGA"
    CSG = "CSG"
    GMA = "GMA"
    FLAWLESS = "Flawless"
    OTHER = "Other"


GRADED_YES = "Yes"
GRADED_NO = "No"

_INTEGER = re.compile(r"-?[0-9]+")


def parse_int(value: Any) -> int | None:
    """
    Parse a stored or typed integer.

    Accepts ints, integral floats and ASCII digit strings ("1989", " 10 ").
    Returns None for anything else, including booleans.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        if _INTEGER.fullmatch(text):
            try:
                return int(text)
            except ValueError:
                # Longer than the interpreter's integer string limit
                return None
    return None


def parse_timestamp(value: Any) -> datetime | None:
    """Parse a stored timestamp (datetime, ISO-8601 string or epoch seconds)."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return None
    return None


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


@dataclass(frozen=True, slots=True)
class CardRecord:
    """
    One card in a user's collection.

    Attributes:
        id: Storage-assigned document id (None until first persisted)
        player: Player name
        year: Card year, None when the stored value is not a number
        sport: Sport name (normally a Sport value)
        manufacturer: Manufacturer name
        set_name: Set name, empty when unknown
        card_number: Number printed on the card
        graded: Whether the card has been professionally graded
        grading_company: Grading service (only meaningful when graded)
        grade_number: Grade 1-10 (only meaningful when graded)
        notes: Free text notes
        image_url: Hosted image URL, empty when there is no image
        user_id: Owner id
        created_at: Creation time
        updated_at: Last edit time
    """

    player: str
    user_id: str
    id: str | None = None
    year: int | None = None
    sport: str = ""
    manufacturer: str = ""
    set_name: str = ""
    card_number: str = ""
    graded: bool = False
    grading_company: str | None = None
    grade_number: int | None = None
    notes: str = ""
    image_url: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def has_image(self) -> bool:
        return bool(self.image_url and self.image_url.strip())

    @property
    def effective_grading_company(self) -> str | None:
        """Grading company, or None when the card is not graded."""
        return self.grading_company if self.graded else None

    @property
    def effective_grade(self) -> int | None:
        """Grade number, or None when the card is not graded."""
        return self.grade_number if self.graded else None

    @property
    def grade_label(self) -> str:
        """Short grade description, e.g. "PSA 10" or "Raw"."""
        if not self.graded:
            return "Raw"
        parts = [p for p in (self.grading_company, _text(self.grade_number)) if p]
        return " ".join(parts) or "Graded"

    @classmethod
    def from_document(cls, document_id: str | None, data: dict[str, Any]) -> "CardRecord":
        """Build a record from a stored document. Never raises."""
        graded = _text(data.get("graded")).strip().lower() in ("yes", "true")
        company = _text(data.get("gradingCompany")).strip() or None
        return cls(
            id=document_id,
            player=_text(data.get("player")),
            user_id=_text(data.get("userId")),
            year=parse_int(data.get("year")),
            sport=_text(data.get("sport")),
            manufacturer=_text(data.get("manufacturer")),
            set_name=_text(data.get("set")),
            card_number=_text(data.get("cardNumber")),
            graded=graded,
            grading_company=company,
            grade_number=parse_int(data.get("gradeNumber")),
            notes=_text(data.get("notes")),
            image_url=_text(data.get("imageUrl")),
            created_at=parse_timestamp(data.get("createdAt")),
            updated_at=parse_timestamp(data.get("updatedAt")),
        )

    def to_document(self) -> dict[str, Any]:
        """Serialize to the stored document shape (camelCase keys, no id)."""
        document: dict[str, Any] = {
            "player": self.player,
            "year": self.year,
            "sport": self.sport,
            "manufacturer": self.manufacturer,
            "set": self.set_name,
            "cardNumber": self.card_number,
            "graded": GRADED_YES if self.graded else GRADED_NO,
            "gradingCompany": (self.grading_company or "") if self.graded else "",
            "gradeNumber": _text(self.grade_number) if self.graded else "",
            "notes": self.notes,
            "imageUrl": self.image_url,
            "userId": self.user_id,
        }
        if self.created_at is not None:
            document["createdAt"] = self.created_at.isoformat()
        if self.updated_at is not None:
            document["updatedAt"] = self.updated_at.isoformat()
        return document
