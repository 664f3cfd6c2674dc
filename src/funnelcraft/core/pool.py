"""Pure candidate pool filtering - no I/O dependencies."""

from dataclasses import dataclass

from .items import Item

# Sentinel for "no restriction" on the sender and category selectors
ALL = "all"


def _unrestricted(value: str | None) -> bool:
    return value is None or value == "" or value == ALL


@dataclass(frozen=True)
class FilterCriteria:
    """Search box plus sender and category selectors."""

    text: str = ""
    sender_email: str = ALL
    category: str = ALL

    @property
    def is_active(self) -> bool:
        """True when any criterion narrows the pool."""
        return bool(self.text.strip()) or not (
            _unrestricted(self.sender_email) and _unrestricted(self.category)
        )

    def to_dict(self) -> dict:
        return {"text": self.text, "sender_email": self.sender_email, "category": self.category}

    @classmethod
    def from_dict(cls, data: dict) -> "FilterCriteria":
        return cls(
            text=data.get("text") or "",
            sender_email=data.get("sender_email") or ALL,
            category=data.get("category") or ALL,
        )


@dataclass(frozen=True)
class Sender:
    """A sender option for the filter selector."""

    email: str
    name: str


def filter_pool(
    catalog: list[Item],
    selected_ids: list[str],
    criteria: FilterCriteria | None = None,
) -> list[Item]:
    """
    Items that are not on the timeline and match the criteria.

    Pure function - no I/O. Keeps catalog order.
    """
    criteria = criteria or FilterCriteria()
    selected = set(selected_ids)
    query = criteria.text.strip()

    def keep(item: Item) -> bool:
        if item.id in selected:
            return False
        if query and not item.matches_text(query):
            return False
        if not _unrestricted(criteria.sender_email) and item.sender_email != criteria.sender_email:
            return False
        if not _unrestricted(criteria.category) and item.category != criteria.category:
            return False
        return True

    return [item for item in catalog if keep(item)]


def unique_senders(catalog: list[Item]) -> list[Sender]:
    """Distinct senders in first-seen order, named after their first email."""
    names: dict[str, str] = {}
    for item in catalog:
        if item.sender_email not in names:
            names[item.sender_email] = item.display_name
    return [Sender(email=email, name=name) for email, name in names.items()]


def unique_categories(catalog: list[Item]) -> list[str]:
    """Distinct non-empty categories in first-seen order."""
    categories: list[str] = []
    for item in catalog:
        if item.category and item.category not in categories:
            categories.append(item.category)
    return categories
