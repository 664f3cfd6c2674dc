"""Functional core - pure business logic with no I/O."""

from .items import Item, resolve_ids
from .pool import ALL, FilterCriteria, Sender, filter_pool, unique_senders, unique_categories
from .cadence import CadenceStats, TimelineEntry, compute_stats, day_offset, build_timeline
from .drag import TIMELINE_DROP_ZONE, DragMachine, DragPhase, DropAction
from .composer import (
    FUNNEL_COLORS,
    ComposerState,
    FunnelComposer,
    FunnelDraft,
    ValidationFailure,
    is_valid_color,
    resolve_color,
)

__all__ = [
    # Items
    "Item",
    "resolve_ids",
    # Candidate pool
    "ALL",
    "FilterCriteria",
    "Sender",
    "filter_pool",
    "unique_senders",
    "unique_categories",
    # Cadence
    "CadenceStats",
    "TimelineEntry",
    "compute_stats",
    "day_offset",
    "build_timeline",
    # Drag
    "TIMELINE_DROP_ZONE",
    "DragMachine",
    "DragPhase",
    "DropAction",
    # Composer
    "FUNNEL_COLORS",
    "ComposerState",
    "FunnelComposer",
    "FunnelDraft",
    "ValidationFailure",
    "is_valid_color",
    "resolve_color",
]
