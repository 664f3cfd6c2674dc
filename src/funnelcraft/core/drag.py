"""
Drag gesture state machine - no I/O dependencies.

One gesture goes Idle -> Dragging -> Idle. Hovering never mutates the
timeline; the drop resolves into at most one sequence operation.
"""

from dataclasses import dataclass
from enum import Enum

from . import sequence

# Target id of the timeline surface itself (as opposed to an item on it)
TIMELINE_DROP_ZONE = "timeline-drop-zone"


class DragPhase(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


class DropAction(Enum):
    """What a drop on a given target does to the timeline."""

    APPEND = "append"  # pool item onto the empty surface
    INSERT_BEFORE = "insert_before"  # pool item onto a timeline item
    MOVE = "move"  # timeline item onto another timeline item
    NONE = "none"


@dataclass(frozen=True)
class DragSession:
    """State of the current gesture. active_id is None when idle."""

    active_id: str | None = None

    @property
    def phase(self) -> DragPhase:
        return DragPhase.IDLE if self.active_id is None else DragPhase.DRAGGING


IDLE = DragSession()


@dataclass(frozen=True)
class DropResolution:
    """The single timeline operation a drop resolves to."""

    action: DropAction
    active_id: str
    target_id: str | None = None
    to_index: int | None = None


def resolve_drop(selected_ids: list[str], active_id: str, target_id: str | None) -> DropResolution:
    """
    Decide which operation releasing active_id over target_id performs.

    Pure function - no I/O.
    """
    none = DropResolution(DropAction.NONE, active_id, target_id)
    if target_id is None:
        return none

    if active_id not in selected_ids:
        if target_id == TIMELINE_DROP_ZONE:
            return DropResolution(DropAction.APPEND, active_id, target_id)
        if target_id in selected_ids:
            return DropResolution(DropAction.INSERT_BEFORE, active_id, target_id)
        return none

    if target_id != active_id and target_id in selected_ids:
        return DropResolution(
            DropAction.MOVE, active_id, target_id, to_index=selected_ids.index(target_id)
        )
    return none


def apply_drop(selected_ids: list[str], resolution: DropResolution) -> list[str]:
    """Run the resolved operation against the timeline."""
    match resolution.action:
        case DropAction.APPEND:
            return sequence.append(selected_ids, resolution.active_id)
        case DropAction.INSERT_BEFORE:
            return sequence.insert_before(selected_ids, resolution.active_id, resolution.target_id)
        case DropAction.MOVE:
            return sequence.move(selected_ids, resolution.active_id, resolution.to_index)
        case _:
            return list(selected_ids)


class DragMachine:
    """
    Tracks one drag gesture at a time.

    Every method is total: calls that make no sense in the current phase
    are ignored rather than raising.
    """

    def __init__(self):
        self._session = IDLE

    @property
    def session(self) -> DragSession:
        return self._session

    @property
    def phase(self) -> DragPhase:
        return self._session.phase

    @property
    def active_id(self) -> str | None:
        return self._session.active_id

    def start(self, item_id: str) -> bool:
        """Begin dragging item_id. Rejected while another gesture is active."""
        if self._session.phase is DragPhase.DRAGGING:
            return False
        self._session = DragSession(active_id=item_id)
        return True

    def move_over(self, selected_ids: list[str], target_id: str | None) -> DropAction:
        """Preview what dropping here would do. Does not change state."""
        if self._session.active_id is None:
            return DropAction.NONE
        return resolve_drop(selected_ids, self._session.active_id, target_id).action

    def drop(self, selected_ids: list[str], target_id: str | None) -> list[str]:
        """End the gesture and return the resulting timeline."""
        active_id = self._session.active_id
        self._session = IDLE
        if active_id is None:
            return list(selected_ids)
        return apply_drop(selected_ids, resolve_drop(selected_ids, active_id, target_id))

    def cancel(self) -> None:
        """Abandon the gesture without touching the timeline."""
        self._session = IDLE
