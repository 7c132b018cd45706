"""
Unit tests for PuzzleState: rotation, solved check, cement aging and perfect tracking.
"""

import pytest

from loops.engine import (
    ColorRule, InvariantViolation, LevelParameters, PuzzleState, RecentTouchQueue, Shape,
    generate_level, one_color,
)

LEVEL_ONE_TILES = one_color([
    0, 0, 0, 0,
    0, 6, 1, 0,
    0, 6, 2, 0,
    0, 0, 0, 0,
])


def make_level_one(perfectable=False):
    parameters = LevelParameters(size=[4, 4], shape=Shape.SQUARE, color_rule=ColorRule.SINGLE,
                                 perfectable=perfectable)
    return generate_level(parameters, tiles=LEVEL_ONE_TILES)


# =============================================================================
# Construction
# =============================================================================

class TestPuzzleStateConstruction:

    def test_tiles_start_empty(self):
        level = PuzzleState([5, 4], Shape.SQUARE, ColorRule.TWO_OVERLAP)
        assert len(level.tiles) == 20
        assert all(tile == [0, 0] for tile in level.tiles)
        assert level.color_count == 2
        assert level.allow_overlap

    def test_accepts_plain_strings(self):
        level = PuzzleState([4, 4], "hexagon", "two_separate")
        assert level.shape == Shape.HEXAGON
        assert level.color_rule == ColorRule.TWO_SEPARATE
        assert not level.allow_overlap

    def test_unknown_color_rule_fails_fast(self):
        with pytest.raises(InvariantViolation):
            PuzzleState([4, 4], Shape.SQUARE, "rainbow")

    def test_bad_size_fails_fast(self):
        with pytest.raises(InvariantViolation):
            PuzzleState([4], Shape.SQUARE, ColorRule.SINGLE)


# =============================================================================
# Rotation and solved check
# =============================================================================

class TestRotateAndSolve:

    def test_unsolved_count_of_level_one(self):
        """Six (edge, color) pairs disagree on the first tutorial board."""
        level = make_level_one()
        assert level.unsolved_count() == 6
        assert not level.is_solved()

    def test_rotate_one_click(self):
        level = make_level_one()
        level.rotate(5, 1)
        assert level.tiles[5] == [12]

    def test_solving_level_one(self):
        level = make_level_one()
        for tile_index, clicks in [(5, 3), (6, 2), (9, 2), (10, 1)]:
            for _ in range(clicks):
                level.rotate(tile_index, 1)
        assert level.unsolved_count() == 0
        assert level.is_solved()

    def test_solved_is_not_sticky(self):
        level = make_level_one()
        level.tiles = one_color([0] * 16)
        assert level.is_solved()
        level.tiles[5] = [1]
        assert not level.is_solved()

    def test_rotate_ignores_frozen(self):
        """Gating frozen tiles is the caller's job; rotate itself always turns."""
        level = make_level_one()
        level.tiles[0] = [1]
        assert level.is_frozen(0)
        level.rotate(0, 1)
        assert level.tiles[0] == [2]

    def test_two_colors_counted_separately(self):
        level = PuzzleState([2, 1], Shape.SQUARE, ColorRule.TWO_OVERLAP, toroidal=True)
        # tile 0 has both colors on its right edge, tile 1 only the first on its left
        level.tiles = [[1, 1], [4, 0]]
        assert level.unsolved_count() == 1

    def test_edge_value(self):
        level = make_level_one()
        assert level.edge_value(5, 0, 2) == 1
        assert level.edge_value(5, 0, 1) == 0


# =============================================================================
# Cement aging
# =============================================================================

class TestCement:

    def test_touch_is_noop_without_cement_mode(self):
        level = PuzzleState([6, 6], Shape.SQUARE, ColorRule.SINGLE)
        for index in (7, 8, 9, 10):
            assert level.touch(index) is None
        assert level.recent_touch_queue == []
        assert level.frozen_tiles == set()

    def test_queue_is_most_recent_first(self):
        level = PuzzleState([6, 6], Shape.SQUARE, ColorRule.SINGLE, cement_mode=True)
        for index in (7, 8, 9):
            level.touch(index)
        assert level.recent_touch_queue == [9, 8, 7]
        level.touch(8)
        assert level.recent_touch_queue == [8, 9, 7]

    def test_fourth_distinct_touch_freezes_oldest(self):
        level = PuzzleState([6, 6], Shape.SQUARE, ColorRule.SINGLE, cement_mode=True)
        for index in (7, 8, 9):
            assert level.touch(index) is None
        assert level.touch(10) == 7
        assert level.recent_touch_queue == [10, 9, 8]
        assert level.is_frozen(7)

    def test_queue_bound_and_permanent_freeze(self):
        level = PuzzleState([6, 6], Shape.SQUARE, ColorRule.SINGLE, cement_mode=True)
        evicted = set()
        for index in [7, 8, 7, 9, 10, 8, 14, 15, 7, 9, 20, 21, 14]:
            frozen = level.touch(index)
            if frozen is not None:
                evicted.add(frozen)
            assert len(level.recent_touch_queue) <= 3
            assert evicted <= level.frozen_tiles

    def test_queue_shares_frozen_set(self):
        frozen = set()
        queue = RecentTouchQueue(frozen)
        for index in (1, 2, 3, 4):
            queue.touch(index)
        assert frozen == {1}
        assert queue.age_of(4) == 0
        assert queue.age_of(1) is None
        assert 2 in queue and len(queue) == 3


# =============================================================================
# Perfect tracking
# =============================================================================

class TestPerfectTracking:

    def test_not_perfectable_by_default(self):
        level = make_level_one()
        assert level.original_tiles is None
        assert not level.perfect_so_far

    def test_full_turn_loses_perfect(self):
        level = make_level_one(perfectable=True)
        assert level.perfect_so_far
        for _ in range(3):
            level.rotate(5, 1)
            assert level.perfect_so_far
        level.rotate(5, 1)
        assert level.tiles[5] == [6]
        assert not level.perfect_so_far

    def test_perfect_never_comes_back(self):
        level = make_level_one(perfectable=True)
        level.rotate(6, 4)
        assert not level.perfect_so_far
        for tile_index in (5, 6, 9, 10):
            for _ in range(5):
                level.rotate(tile_index, 1)
                assert not level.perfect_so_far

    def test_other_tiles_keep_perfect(self):
        level = make_level_one(perfectable=True)
        level.rotate(5, 1)
        level.rotate(6, 1)
        level.rotate(9, 2)
        assert level.perfect_so_far
