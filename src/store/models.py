"""Record types for the user and movie collections."""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any

# Movies are free-form: whatever fields the caller sent, plus the store's "_id"
Document = dict[str, Any]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class User:
    fullname: str
    email: str
    password: str  # stored verbatim
    createdAt: datetime = field(default_factory=_utcnow)

    def to_document(self) -> Document:
        return asdict(self)

    def public_profile(self) -> dict[str, str]:
        """Fields safe to return to the caller (never the password)."""
        return {"fullname": self.fullname, "email": self.email}

    @classmethod
    def from_document(cls, doc: Document) -> "User":
        return cls(
            fullname=doc.get("fullname", ""),
            email=doc["email"],
            password=doc.get("password", ""),
            createdAt=doc.get("createdAt") or _utcnow(),
        )
