"""Tests for the drag gesture state machine."""

import pytest

from funnelcraft.core.drag import (
    TIMELINE_DROP_ZONE,
    DragMachine,
    DragPhase,
    DropAction,
    apply_drop,
    resolve_drop,
)


@pytest.fixture
def machine():
    return DragMachine()


class TestResolveDrop:
    def test_pool_item_on_drop_zone_appends(self):
        resolution = resolve_drop(["a", "b"], "c", TIMELINE_DROP_ZONE)
        assert resolution.action is DropAction.APPEND

    def test_pool_item_on_timeline_item_inserts(self):
        resolution = resolve_drop(["a", "b"], "c", "b")
        assert resolution.action is DropAction.INSERT_BEFORE
        assert resolution.target_id == "b"

    def test_timeline_item_on_other_timeline_item_moves(self):
        resolution = resolve_drop(["a", "b", "c"], "a", "c")
        assert resolution.action is DropAction.MOVE
        assert resolution.to_index == 2

    def test_timeline_item_on_itself_is_noop(self):
        assert resolve_drop(["a", "b"], "a", "a").action is DropAction.NONE

    def test_timeline_item_on_drop_zone_is_noop(self):
        assert resolve_drop(["a", "b"], "a", TIMELINE_DROP_ZONE).action is DropAction.NONE

    def test_no_target_is_noop(self):
        assert resolve_drop(["a"], "b", None).action is DropAction.NONE

    def test_pool_item_on_pool_item_is_noop(self):
        assert resolve_drop(["a"], "b", "c").action is DropAction.NONE

    def test_apply_move(self):
        resolution = resolve_drop(["a", "b", "c"], "c", "a")
        assert apply_drop(["a", "b", "c"], resolution) == ["c", "a", "b"]


class TestDragMachine:
    def test_starts_idle(self, machine):
        assert machine.phase is DragPhase.IDLE
        assert machine.active_id is None

    def test_start_enters_dragging(self, machine):
        assert machine.start("a") is True
        assert machine.phase is DragPhase.DRAGGING
        assert machine.active_id == "a"

    def test_second_start_rejected(self, machine):
        machine.start("a")
        assert machine.start("b") is False
        assert machine.active_id == "a"

    def test_move_over_previews_without_state_change(self, machine):
        machine.start("c")
        assert machine.move_over(["a", "b"], "b") is DropAction.INSERT_BEFORE
        assert machine.move_over(["a", "b"], None) is DropAction.NONE
        assert machine.phase is DragPhase.DRAGGING

    def test_move_over_while_idle(self, machine):
        assert machine.move_over(["a"], TIMELINE_DROP_ZONE) is DropAction.NONE

    def test_drop_on_empty_timeline(self, machine):
        machine.start("a")
        assert machine.drop([], TIMELINE_DROP_ZONE) == ["a"]
        assert machine.phase is DragPhase.IDLE

    def test_drop_inserts_before_target(self, machine):
        machine.start("c")
        assert machine.drop(["a", "b"], "b") == ["a", "c", "b"]

    def test_drop_reorders(self, machine):
        machine.start("a")
        assert machine.drop(["a", "b", "c"], "b") == ["b", "a", "c"]

    def test_drop_outside_is_cancel(self, machine):
        machine.start("c")
        assert machine.drop(["a", "b"], None) == ["a", "b"]
        assert machine.phase is DragPhase.IDLE

    def test_drop_while_idle_is_noop(self, machine):
        assert machine.drop(["a"], TIMELINE_DROP_ZONE) == ["a"]

    def test_cancel_returns_to_idle(self, machine):
        machine.start("a")
        machine.cancel()
        assert machine.phase is DragPhase.IDLE

    def test_reentrant_after_drop(self, machine):
        machine.start("a")
        machine.drop([], TIMELINE_DROP_ZONE)
        assert machine.start("b") is True

    def test_reentrant_after_cancel(self, machine):
        machine.start("a")
        machine.cancel()
        assert machine.start("b") is True
