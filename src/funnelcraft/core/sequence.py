"""
Pure timeline sequence logic - no I/O dependencies.

A timeline is an ordered list of item ids with no duplicates. Every
operation takes the current list and returns a new one; the input is never
mutated, and invalid input degrades to a no-op instead of raising.
"""


def append(ids: list[str], item_id: str) -> list[str]:
    """Add item_id at the end unless already present."""
    if item_id in ids:
        return list(ids)
    return [*ids, item_id]


def insert_before(ids: list[str], item_id: str, anchor_id: str) -> list[str]:
    """
    Insert item_id immediately before anchor_id.

    Falls back to append when the anchor is not on the timeline. No-op if
    item_id is already present.
    """
    if item_id in ids:
        return list(ids)
    if anchor_id not in ids:
        return append(ids, item_id)
    position = ids.index(anchor_id)
    return [*ids[:position], item_id, *ids[position:]]


def remove(ids: list[str], item_id: str) -> list[str]:
    """Drop item_id if present."""
    return [i for i in ids if i != item_id]


def move(ids: list[str], item_id: str, to_index: int) -> list[str]:
    """
    Relocate an existing item_id to to_index, shifting the items in between.

    to_index is clamped to the valid range.
    """
    if item_id not in ids:
        return list(ids)
    from_index = ids.index(item_id)
    to_index = max(0, min(to_index, len(ids) - 1))
    if from_index == to_index:
        return list(ids)

    result = list(ids)
    result.pop(from_index)
    result.insert(to_index, item_id)
    return result


def clear(ids: list[str]) -> list[str]:
    """Empty the timeline."""
    return []


def normalize(ids: list[str]) -> list[str]:
    """Drop duplicate ids, keeping the first occurrence."""
    seen: set[str] = set()
    result = []
    for i in ids:
        if i not in seen:
            seen.add(i)
            result.append(i)
    return result
