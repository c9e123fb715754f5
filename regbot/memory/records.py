from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional


def utcnow():
    return datetime.now(timezone.utc)


# Document field name -> UserRecord attribute
_DOCUMENT_FIELDS = {
    "telegramId": "telegram_id",
    "username": "username",
    "firstName": "first_name",
    "lastName": "last_name",
    "fullName": "full_name",
    "department": "department",
    "year": "year",
    "joinedAt": "joined_at",
    "updatedAt": "updated_at",
}


@dataclass
class UserRecord:
    """One registered user. Only telegram_id is required until the form is complete."""

    telegram_id: int
    username: str = ""
    first_name: str = ""
    last_name: str = ""
    full_name: Optional[str] = None
    department: Optional[str] = None
    year: Optional[str] = None
    joined_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def display_name(self):
        return self.full_name or self.first_name

    def copy(self, **changes):
        return replace(self, **changes)

    def to_document(self):
        """Serialize to the camelCase layout stored in the users collection."""
        doc = {}
        for key, attr in _DOCUMENT_FIELDS.items():
            value = getattr(self, attr)
            if value is not None:
                doc[key] = value
        return doc

    @classmethod
    def from_document(cls, doc, doc_id=None):
        """Build a record from a stored document.

        The document key is the telegram id, so doc_id stands in when the
        document itself has no telegramId field.
        """
        kwargs = {attr: doc[key] for key, attr in _DOCUMENT_FIELDS.items() if doc.get(key) is not None}
        if "telegram_id" not in kwargs:
            if doc_id is None:
                raise ValueError("document has no telegramId and no document id")
            kwargs["telegram_id"] = doc_id
        kwargs["telegram_id"] = int(kwargs["telegram_id"])
        return cls(**kwargs)
