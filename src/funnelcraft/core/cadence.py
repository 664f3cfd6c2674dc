"""Pure cadence analytics over an ordered timeline - no I/O dependencies."""

import math
from dataclasses import dataclass
from datetime import timedelta

from .items import Item

SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400


def whole_hours(delta: timedelta) -> int:
    """Whole hours in delta, truncated toward zero."""
    return int(delta.total_seconds() / SECONDS_PER_HOUR)


def whole_days(delta: timedelta) -> int:
    """Whole days in delta, truncated toward zero."""
    return int(delta.total_seconds() / SECONDS_PER_DAY)


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class CadenceStats:
    """Derived spacing figures for a timeline of two or more emails."""

    total_duration_days: int
    average_gap_hours: int
    min_gap_hours: int
    max_gap_hours: int
    ordered_emails: tuple[Item, ...]

    @property
    def first(self) -> Item:
        """First email in timeline order (not necessarily the oldest)."""
        return self.ordered_emails[0]

    @property
    def last(self) -> Item:
        return self.ordered_emails[-1]


@dataclass(frozen=True)
class TimelineEntry:
    """One row of the rendered timeline."""

    position: int
    item: Item
    day_offset: int
    hours_since_previous: int | None


def gaps_in_hours(ordered_items: list[Item]) -> list[int]:
    """
    Signed whole-hour gap between each item and its predecessor.

    Follows timeline order, so an item placed before an older one yields a
    negative gap. Returns n-1 values.
    """
    return [
        whole_hours(ordered_items[i].timestamp - ordered_items[i - 1].timestamp)
        for i in range(1, len(ordered_items))
    ]


def day_offset(item: Item, anchor: Item) -> int:
    """Whole days from the anchor (first timeline email) to item."""
    return whole_days(item.timestamp - anchor.timestamp)


def compute_stats(ordered_items: list[Item]) -> CadenceStats | None:
    """
    Cadence statistics for items already in timeline order.

    Pure function - no I/O. Returns None below two items.

    The duration spans the chronologically earliest and latest emails,
    whatever their timeline position. The gap figures use consecutive pairs
    in timeline order with absolute values, so reordering adjacent items can
    change the average.
    """
    if len(ordered_items) < 2:
        return None

    chronological = sorted(ordered_items, key=lambda i: i.timestamp)
    total_days = whole_days(chronological[-1].timestamp - chronological[0].timestamp)

    gaps = [abs(g) for g in gaps_in_hours(ordered_items)]
    average = round_half_up(sum(gaps) / len(gaps))

    return CadenceStats(
        total_duration_days=total_days,
        average_gap_hours=average,
        min_gap_hours=min(gaps),
        max_gap_hours=max(gaps),
        ordered_emails=tuple(ordered_items),
    )


def build_timeline(ordered_items: list[Item]) -> list[TimelineEntry]:
    """Timeline rows with day badges and the interval since the previous email."""
    if not ordered_items:
        return []

    anchor = ordered_items[0]
    gaps = gaps_in_hours(ordered_items)
    return [
        TimelineEntry(
            position=index,
            item=item,
            day_offset=day_offset(item, anchor),
            hours_since_previous=gaps[index - 1] if index > 0 else None,
        )
        for index, item in enumerate(ordered_items)
    ]
