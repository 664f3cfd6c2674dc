"""Pure captured-email domain model - no I/O dependencies."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, treating a trailing Z (and naive values) as UTC."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


@dataclass(frozen=True)
class Item:
    """A captured newsletter email. Read-only from the builder's perspective."""

    id: str
    sender_email: str
    sender_name: str | None
    subject: str
    category: str | None
    timestamp: datetime
    body_ref: Any = None

    @property
    def display_name(self) -> str:
        """Sender name, falling back to the address."""
        return self.sender_name or self.sender_email

    def matches_text(self, query: str) -> bool:
        """Case-insensitive substring match on subject, address and sender name."""
        query = query.lower()
        return (
            query in self.subject.lower()
            or query in self.sender_email.lower()
            or (self.sender_name is not None and query in self.sender_name.lower())
        )

    @classmethod
    def from_api(cls, data: dict) -> "Item":
        """Create Item from a captured_newsletters row."""
        return cls(
            id=str(data["id"]),
            sender_email=data["from_email"],
            sender_name=data.get("from_name") or None,
            subject=data.get("subject") or "",
            category=data.get("category") or None,
            timestamp=parse_timestamp(data["received_at"]),
            body_ref=data.get("html_content"),
        )


def index_by_id(items: list[Item]) -> dict[str, Item]:
    """Map item id to item. Later duplicates do not override earlier ones."""
    index: dict[str, Item] = {}
    for item in items:
        index.setdefault(item.id, item)
    return index


def resolve_ids(ids: list[str], catalog: list[Item]) -> list[Item]:
    """
    Materialize ids into Items in the given order.

    Ids missing from the catalog are dropped. Pure function - no I/O.
    """
    index = index_by_id(catalog)
    return [index[i] for i in ids if i in index]


def sort_by_recency(items: list[Item]) -> list[Item]:
    """Sort items newest first."""
    return sorted(items, key=lambda i: i.timestamp, reverse=True)
