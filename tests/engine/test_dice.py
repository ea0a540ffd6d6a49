"""
Tavern Farkle - Dice Pool Tests
"""

import pytest
from src.engine.base import DiceRoll, DieStatus
from src.engine.dice import DicePool, random_roller


@pytest.fixture
def pool() -> DicePool:
    pool = DicePool()
    pool.roll_available((1, 2, 3, 4, 5, 6))
    return pool


class TestRolling:
    """Tests for DicePool.roll_available()."""

    def test_new_pool_has_six_available_dice(self):
        pool = DicePool()
        assert len(pool) == 6
        assert pool.statuses == (DieStatus.AVAILABLE,) * 6

    def test_scripted_faces_assigned_in_slot_order(self, pool):
        assert pool.values == (1, 2, 3, 4, 5, 6)

    def test_returns_dice_roll(self):
        roll = DicePool().roll_available((6, 5, 4, 3, 2, 1))
        assert isinstance(roll, DiceRoll)
        assert roll.values == (6, 5, 4, 3, 2, 1)

    def test_only_available_dice_change(self, pool):
        pool.toggle_selection(0)
        pool.lock_selected()
        pool.toggle_selection(1)

        roll = pool.roll_available((6, 6, 6, 6))

        assert roll.values == (6, 6, 6, 6)
        assert pool.values == (1, 2, 6, 6, 6, 6)

    def test_uses_roller_for_available_count(self):
        requested = []

        def roller(count):
            requested.append(count)
            return (3,) * count

        pool = DicePool(roller)
        pool.roll_available()
        pool.toggle_selection(5)
        pool.lock_selected()
        pool.roll_available()

        assert requested == [6, 5]

    def test_wrong_face_count_raises(self):
        with pytest.raises(ValueError, match="Expected 6 faces"):
            DicePool().roll_available((1, 2, 3))

    def test_invalid_face_raises(self):
        with pytest.raises(ValueError, match="between 1 and 6"):
            DicePool().roll_available((1, 2, 3, 4, 5, 0))

    def test_random_roller_range(self):
        for _ in range(100):
            faces = random_roller(6)
            assert len(faces) == 6
            assert all(1 <= f <= 6 for f in faces)


class TestSelection:
    """Tests for toggling, locking and resetting."""

    def test_toggle_selects_and_deselects(self, pool):
        assert pool.toggle_selection(2) is True
        assert pool[2].status is DieStatus.SELECTED
        assert pool.selected_values() == (3,)

        assert pool.toggle_selection(2) is True
        assert pool[2].status is DieStatus.AVAILABLE

    def test_locked_die_cannot_be_toggled(self, pool):
        pool.toggle_selection(0)
        pool.lock_selected()

        assert pool.toggle_selection(0) is False
        assert pool[0].status is DieStatus.LOCKED

    def test_lock_selected_commits_selection_only(self, pool):
        pool.toggle_selection(0)
        pool.toggle_selection(4)
        pool.lock_selected()

        assert pool.locked_values() == (1, 5)
        assert pool.selected_values() == ()
        assert pool.available_values() == (2, 3, 4, 6)
        assert pool.available_indices() == (1, 2, 3, 5)

    def test_locked_die_is_never_selected(self, pool):
        pool.toggle_selection(0)
        pool.lock_selected()
        pool.toggle_selection(0)
        assert not pool[0].is_selected

    def test_out_of_range_index_raises(self, pool):
        with pytest.raises(ValueError, match="out of range"):
            pool.toggle_selection(6)

    def test_reset_all(self, pool):
        pool.toggle_selection(0)
        pool.lock_selected()
        pool.toggle_selection(1)

        pool.reset_all()

        assert pool.statuses == (DieStatus.AVAILABLE,) * 6
        assert pool.values == (1, 2, 3, 4, 5, 6)


class TestAllCommitted:
    """Hot dice detection."""

    def test_fresh_pool_is_not_committed(self, pool):
        assert pool.all_committed() is False

    def test_selected_and_locked_count_as_committed(self, pool):
        for i in range(3):
            pool.toggle_selection(i)
        pool.lock_selected()
        for i in range(3, 6):
            pool.toggle_selection(i)

        assert pool.all_committed() is True

    def test_one_available_die_is_not_committed(self, pool):
        for i in range(5):
            pool.toggle_selection(i)
        assert pool.all_committed() is False
