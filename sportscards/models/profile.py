from dataclasses import dataclass
from datetime import datetime
from typing import Any

from sportscards.models.card import parse_timestamp


@dataclass(frozen=True, slots=True)
class UserProfile:
    """
    Profile document stored under users/{uid}.

    Created at registration; only the name changes afterwards.
    """

    uid: str
    name: str
    email: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_document(cls, uid: str, data: dict[str, Any]) -> "UserProfile":
        return cls(
            uid=uid,
            name=str(data.get("name") or ""),
            email=str(data.get("email") or ""),
            created_at=parse_timestamp(data.get("createdAt")),
            updated_at=parse_timestamp(data.get("updatedAt")),
        )
