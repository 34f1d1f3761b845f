from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError


class MemoEntry(BaseModel):
    """
    Mirrors a memoized value as stored in the document:
      { "value": <any JSON>, "expires_at": <unix seconds> }
    """

    model_config = ConfigDict(strict=True)

    value: Any
    expires_at: int | float

    @classmethod
    def create(cls, value: Any, now: int | float, ttl_seconds: int | float) -> "MemoEntry":
        return cls(value=value, expires_at=now + ttl_seconds)

    @classmethod
    def from_document(cls, doc: Any) -> "MemoEntry | None":
        """Return the entry stored in `doc`, or None when it is not a memo entry."""
        if not isinstance(doc, dict):
            return None
        try:
            return cls.model_validate(doc)
        except ValidationError:
            return None

    def is_fresh(self, now: int | float) -> bool:
        return self.expires_at > now

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


def fresh_value(doc: Any, now: int | float) -> tuple[bool, Any]:
    """(hit, value) for whatever is stored at a memo path."""
    entry = MemoEntry.from_document(doc)
    if entry is None or not entry.is_fresh(now):
        return False, None
    return True, entry.value
