"""
Funnel composer - binds the timeline, candidate pool and cadence analytics.

Holds one funnel being edited. Every mutation recomputes the read model
immediately; the catalog is expected to be small (hundreds of emails).
No I/O: the catalog is handed in and the draft is handed back.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime

from . import sequence
from .cadence import CadenceStats, TimelineEntry, build_timeline, compute_stats
from .drag import DragMachine, DropAction
from .items import Item, parse_timestamp, resolve_ids
from .pool import FilterCriteria, Sender, filter_pool, unique_categories, unique_senders

DEFAULT_COLOR = "#3b82f6"
FUNNEL_COLORS = ["#3b82f6", "#10b981", "#f59e0b", "#ef4444", "#8b5cf6", "#ec4899", "#06b6d4"]

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


def is_valid_color(color: str) -> bool:
    return bool(_HEX_COLOR.match(color))


def resolve_color(value: str) -> str:
    """Turn a 1-based palette number into its hex colour; anything else passes through."""
    if value.isdigit():
        index = int(value)
        if not 1 <= index <= len(FUNNEL_COLORS):
            raise ValueError(f"Palette has colours 1-{len(FUNNEL_COLORS)}, got {index}")
        return FUNNEL_COLORS[index - 1]
    return value


class ValidationFailure(Exception):
    """Raised when the current composition cannot become a funnel."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


@dataclass
class FunnelDraft:
    """Persistence payload for a funnel record."""

    name: str
    description: str
    color: str
    selected_ids: list[str]
    sender_email: str
    sender_name: str | None
    total_emails: int
    first_email_at: datetime
    last_email_at: datetime
    avg_interval_hours: int | None
    funnel_id: str | None = None

    @property
    def is_update(self) -> bool:
        return self.funnel_id is not None

    def to_record(self) -> dict:
        """Column mapping for the email_funnels table."""
        return {
            "name": self.name,
            "description": self.description,
            "color": self.color,
            "email_ids": list(self.selected_ids),
            "sender_email": self.sender_email,
            "sender_name": self.sender_name,
            "total_emails": self.total_emails,
            "first_email_at": self.first_email_at.isoformat(),
            "last_email_at": self.last_email_at.isoformat(),
            "avg_interval_hours": self.avg_interval_hours,
        }

    @classmethod
    def from_record(cls, data: dict) -> "FunnelDraft":
        """Create FunnelDraft from a stored email_funnels row."""
        email_ids = data.get("email_ids") or []
        return cls(
            name=data["name"],
            description=data.get("description") or "",
            color=data.get("color") or DEFAULT_COLOR,
            selected_ids=list(email_ids),
            sender_email=data.get("sender_email", ""),
            sender_name=data.get("sender_name"),
            total_emails=data.get("total_emails") or len(email_ids),
            first_email_at=parse_timestamp(data["first_email_at"]),
            last_email_at=parse_timestamp(data["last_email_at"]),
            avg_interval_hours=data.get("avg_interval_hours"),
            funnel_id=data.get("id"),
        )


@dataclass
class ComposerState:
    """Everything the builder screen renders."""

    selected_ids: list[str]
    available_items: list[Item]
    stats: CadenceStats | None
    selected_items: list[Item] = field(default_factory=list)
    timeline: list[TimelineEntry] = field(default_factory=list)
    senders: list[Sender] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)
    criteria: FilterCriteria = field(default_factory=FilterCriteria)
    dragging_id: str | None = None


class FunnelComposer:
    """Create or edit one funnel's email timeline."""

    def __init__(
        self,
        catalog: list[Item],
        selected_ids: list[str] | None = None,
        name: str = "",
        description: str = "",
        color: str = DEFAULT_COLOR,
        criteria: FilterCriteria | None = None,
        funnel_id: str | None = None,
    ):
        self.catalog = list(catalog)
        self.name = name
        self.description = description
        self.color = color
        self.funnel_id = funnel_id
        self._selected_ids = sequence.normalize(selected_ids or [])
        self._criteria = criteria or FilterCriteria()
        self._drag = DragMachine()
        self._recompute()

    # ============== Read model ==============

    @property
    def selected_ids(self) -> list[str]:
        return list(self._selected_ids)

    @property
    def criteria(self) -> FilterCriteria:
        return self._criteria

    def get_state(self) -> ComposerState:
        return self._state

    def _recompute(self) -> ComposerState:
        # Unresolved ids stay on the timeline; they are only skipped here
        selected_items = resolve_ids(self._selected_ids, self.catalog)
        self._state = ComposerState(
            selected_ids=list(self._selected_ids),
            available_items=filter_pool(self.catalog, self._selected_ids, self._criteria),
            stats=compute_stats(selected_items),
            selected_items=selected_items,
            timeline=build_timeline(selected_items),
            senders=unique_senders(self.catalog),
            categories=unique_categories(self.catalog),
            criteria=self._criteria,
            dragging_id=self._drag.active_id,
        )
        return self._state

    def _apply(self, new_ids: list[str]) -> ComposerState:
        self._selected_ids = new_ids
        return self._recompute()

    # ============== Timeline mutations ==============

    def append(self, item_id: str) -> ComposerState:
        return self._apply(sequence.append(self._selected_ids, item_id))

    def insert_before(self, item_id: str, anchor_id: str) -> ComposerState:
        return self._apply(sequence.insert_before(self._selected_ids, item_id, anchor_id))

    def remove(self, item_id: str) -> ComposerState:
        return self._apply(sequence.remove(self._selected_ids, item_id))

    def move(self, item_id: str, to_index: int) -> ComposerState:
        return self._apply(sequence.move(self._selected_ids, item_id, to_index))

    def clear(self) -> ComposerState:
        return self._apply(sequence.clear(self._selected_ids))

    def set_filter_criteria(self, criteria: FilterCriteria) -> ComposerState:
        self._criteria = criteria
        return self._recompute()

    def set_catalog(self, catalog: list[Item]) -> ComposerState:
        """Swap in a refreshed catalog snapshot. The timeline is kept as is."""
        self.catalog = list(catalog)
        return self._recompute()

    def set_details(
        self,
        name: str | None = None,
        description: str | None = None,
        color: str | None = None,
    ) -> None:
        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if color is not None:
            self.color = color

    # ============== Drag gestures ==============

    def start_drag(self, item_id: str) -> bool:
        started = self._drag.start(item_id)
        if started:
            self._recompute()
        return started

    def drag_over(self, target_id: str | None) -> DropAction:
        return self._drag.move_over(self._selected_ids, target_id)

    def drop(self, target_id: str | None) -> ComposerState:
        return self._apply(self._drag.drop(self._selected_ids, target_id))

    def cancel_drag(self) -> ComposerState:
        self._drag.cancel()
        return self._recompute()

    # ============== Submission ==============

    def submit(self) -> FunnelDraft:
        """
        Build the persistence payload.

        Raises ValidationFailure when the name is blank, the timeline is
        empty, no selected email is in the catalog, or the colour is not
        a #rrggbb value.
        """
        errors = []
        if not self.name.strip():
            errors.append("Funnel name is required")
        if not self._selected_ids:
            errors.append("Add at least one email to the timeline")
        elif not self._state.selected_items:
            errors.append("None of the selected emails are in the catalog")
        if not is_valid_color(self.color):
            errors.append(f"Invalid color: {self.color!r}")
        if errors:
            raise ValidationFailure(errors)

        items = self._state.selected_items
        stats = self._state.stats
        first, last = items[0], items[-1]
        return FunnelDraft(
            name=self.name.strip(),
            description=self.description.strip(),
            color=self.color,
            selected_ids=list(self._selected_ids),
            sender_email=first.sender_email,
            sender_name=first.sender_name,
            total_emails=len(self._selected_ids),
            first_email_at=first.timestamp,
            last_email_at=last.timestamp,
            avg_interval_hours=stats.average_gap_hours if stats else None,
            funnel_id=self.funnel_id,
        )

    # ============== Snapshots ==============

    def snapshot(self) -> dict:
        """Serializable editing session. Drag state is never included."""
        return {
            "funnel_id": self.funnel_id,
            "name": self.name,
            "description": self.description,
            "color": self.color,
            "selected_ids": list(self._selected_ids),
            "criteria": self._criteria.to_dict(),
        }

    @classmethod
    def from_snapshot(cls, catalog: list[Item], data: dict) -> "FunnelComposer":
        return cls(
            catalog,
            selected_ids=data.get("selected_ids", []),
            name=data.get("name", ""),
            description=data.get("description", ""),
            color=data.get("color") or DEFAULT_COLOR,
            criteria=FilterCriteria.from_dict(data.get("criteria") or {}),
            funnel_id=data.get("funnel_id"),
        )

    @classmethod
    def from_draft(cls, catalog: list[Item], draft: FunnelDraft) -> "FunnelComposer":
        """Reopen a stored funnel for editing."""
        return cls(
            catalog,
            selected_ids=draft.selected_ids,
            name=draft.name,
            description=draft.description,
            color=draft.color,
            funnel_id=draft.funnel_id,
        )
