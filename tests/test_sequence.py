"""Tests for core timeline sequence logic."""

import random

import pytest

from funnelcraft.core.sequence import append, clear, insert_before, move, normalize, remove


class TestAppend:
    def test_adds_at_end(self):
        assert append(["a", "b"], "c") == ["a", "b", "c"]

    def test_empty_timeline(self):
        assert append([], "a") == ["a"]

    def test_idempotent(self):
        once = append(["a"], "b")
        twice = append(once, "b")
        assert once == twice == ["a", "b"]

    def test_does_not_mutate_input(self):
        ids = ["a"]
        append(ids, "b")
        assert ids == ["a"]


class TestInsertBefore:
    def test_inserts_before_anchor(self):
        assert insert_before(["a", "b"], "c", "b") == ["a", "c", "b"]

    def test_inserts_at_front(self):
        assert insert_before(["a", "b"], "c", "a") == ["c", "a", "b"]

    def test_missing_anchor_appends(self):
        assert insert_before(["a", "b"], "c", "zzz") == ["a", "b", "c"]

    def test_already_present_is_noop(self):
        assert insert_before(["a", "b", "c"], "c", "a") == ["a", "b", "c"]


class TestRemove:
    def test_removes_present_id(self):
        assert remove(["a", "c", "b"], "b") == ["a", "c"]

    def test_absent_id_is_noop(self):
        assert remove(["a", "b"], "zzz") == ["a", "b"]


class TestMove:
    def test_move_forward(self):
        assert move(["a", "b", "c", "d"], "a", 2) == ["b", "c", "a", "d"]

    def test_move_backward(self):
        assert move(["a", "b", "c", "d"], "d", 1) == ["a", "d", "b", "c"]

    def test_move_to_current_index_is_noop(self):
        ids = ["a", "b", "c"]
        assert move(ids, "b", ids.index("b")) == ids

    def test_clamps_past_end(self):
        assert move(["a", "b", "c"], "a", 99) == ["b", "c", "a"]

    def test_clamps_negative(self):
        assert move(["a", "b", "c"], "c", -5) == ["c", "a", "b"]

    def test_absent_id_is_noop(self):
        assert move(["a", "b"], "zzz", 0) == ["a", "b"]


class TestClearAndNormalize:
    def test_clear(self):
        assert clear(["a", "b"]) == []

    def test_normalize_keeps_first_occurrence(self):
        assert normalize(["a", "b", "a", "c", "b"]) == ["a", "b", "c"]


@pytest.mark.parametrize("seed", range(20))
def test_random_operations_never_duplicate(seed):
    rng = random.Random(seed)
    pool = [f"id{i}" for i in range(6)]
    ids: list[str] = []

    for _ in range(60):
        op = rng.choice(["append", "insert", "move", "remove"])
        item_id = rng.choice(pool)
        if op == "append":
            ids = append(ids, item_id)
        elif op == "insert":
            ids = insert_before(ids, item_id, rng.choice(pool))
        elif op == "move":
            ids = move(ids, item_id, rng.randint(-2, 8))
        else:
            ids = remove(ids, item_id)
        assert len(ids) == len(set(ids))
