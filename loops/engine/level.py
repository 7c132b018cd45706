"""
Puzzle state of one level attempt.

A PuzzleState is built by `generate_level` (or restored from a validated
snapshot), mutated in place by the input layer through `touch` and `rotate`,
and thrown away when the player moves on to another level.
"""
import random
from enum import Enum
from typing import List, Optional, Sequence, Set, Tuple

from loops.engine.cement import RecentTouchQueue
from loops.engine.errors import check
from loops.engine.tile import Tile, edge_value, empty_tile, rotate_tile
from loops.engine.topology import GridTopology, Shape


class ColorRule(str, Enum):
    SINGLE = "single"
    TWO_SEPARATE = "two_separate"
    TWO_OVERLAP = "two_overlap"


# color rule -> (color_count, allow_overlap)
COLOR_RULES = {
    ColorRule.SINGLE: (1, False),  # overlap doesn't matter
    ColorRule.TWO_SEPARATE: (2, False),
    ColorRule.TWO_OVERLAP: (2, True),
}


def color_count_for(color_rule: ColorRule) -> int:
    check(color_rule in [rule.value for rule in ColorRule], f"unknown color rule: {color_rule!r}")
    return COLOR_RULES[ColorRule(color_rule)][0]


class PuzzleState:

    def __init__(
            self,
            size: Sequence[int],
            shape: Shape,
            color_rule: ColorRule,
            cement_mode: bool = False,
            toroidal: bool = False,
            rough: bool = False,
    ):
        check(len(size) == 2, "size must be [tiles_per_row, tiles_per_column]")
        self.topology = GridTopology(shape, size[0], size[1], toroidal)
        self.color_count = color_count_for(color_rule)
        self.color_rule = ColorRule(color_rule)
        self.allow_overlap = COLOR_RULES[self.color_rule][1]
        self.cement_mode = cement_mode
        self.rough = rough

        # all tiles start empty
        self.tiles: List[Tile] = [empty_tile(self.color_count) for _ in self.topology.all_tile_indexes()]
        self.frozen_tiles: Set[int] = set()
        self.touch_queue = RecentTouchQueue(self.frozen_tiles)

        # perfect tracking, see initialize_possibility_for_perfect()
        self.original_tiles: Optional[List[Tile]] = None
        self.perfect_so_far = False

    def __repr__(self):
        return (f"PuzzleState({self.topology!r}, {self.color_rule.value}, "
                f"frozen={len(self.frozen_tiles)}, unsolved={self.unsolved_count()})")

    # parameters

    @property
    def shape(self) -> Shape:
        return self.topology.shape

    @property
    def size(self) -> Tuple[int, int]:
        return self.topology.tiles_per_row, self.topology.tiles_per_column

    @property
    def toroidal(self) -> bool:
        return self.topology.toroidal

    @property
    def edges_per_tile(self) -> int:
        return self.topology.edges_per_tile

    @property
    def recent_touch_queue(self) -> List[int]:
        return list(self.touch_queue.items)

    # game state

    def is_frozen(self, tile_index: int) -> bool:
        return tile_index in self.frozen_tiles

    def initialize_possibility_for_perfect(self):
        """Remember the current orientation of every tile and start tracking a perfect solve"""
        self.original_tiles = [list(tile) for tile in self.tiles]
        self.perfect_so_far = True

    def rotate(self, tile_index: int, times: int):
        """
        Rotate every color of a tile by `times` edges.

        Precondition: the caller decides whether the tile may rotate. Nothing
        here checks `frozen_tiles` or bounds; the generator relies on that.

        Turning a tile all the way back to its generated orientation loses the
        perfect solve for this attempt.
        """
        tile = rotate_tile(self.tiles[tile_index], times, self.edges_per_tile)
        self.tiles[tile_index] = tile

        if self.perfect_so_far and self.original_tiles is not None:
            if tile == self.original_tiles[tile_index]:
                # you rotated a tile all the way around
                self.perfect_so_far = False

    def rotate_randomly(self, tile_index: int, rng: Optional[random.Random] = None) -> int:
        times = (rng or random).randrange(self.edges_per_tile)
        self.rotate(tile_index, times)
        return times

    def touch(self, tile_index: int) -> Optional[int]:
        """Age the cement; returns the tile that just froze, if any. No-op outside cement mode."""
        if not self.cement_mode:
            return None
        return self.touch_queue.touch(tile_index)

    def edge_value(self, tile_index: int, color_index: int, direction: int) -> int:
        return edge_value(self.tiles[tile_index], color_index, direction)

    def unsolved_count(self) -> int:
        """Number of (edge, color) pairs whose two sides disagree"""
        # recomputed from scratch every call
        topology = self.topology
        result = 0
        for tile_index, direction in topology.all_edges():
            other_tile = topology.neighbor_index(tile_index, direction)
            reverse = topology.reverse_direction(direction)
            for color_index in range(self.color_count):
                a = self.edge_value(tile_index, color_index, direction)
                b = self.edge_value(other_tile, color_index, reverse)
                if a != b:
                    result += 1
        return result

    def is_solved(self) -> bool:
        return self.unsolved_count() == 0

    def restore(
            self,
            tiles: List[Tile],
            frozen_tiles: Set[int],
            recent_touch_queue: List[int],
            original_tiles: Optional[List[Tile]] = None,
            perfect_so_far: bool = False,
    ):
        """Replace the game state wholesale (used when loading a snapshot)"""
        check(len(tiles) == self.topology.tile_count, "tile count does not match the grid")
        check(all(len(tile) == self.color_count for tile in tiles), "tile color count does not match")
        self.tiles = [list(tile) for tile in tiles]
        # the touch queue shares this set, so update it in place
        self.frozen_tiles.clear()
        self.frozen_tiles.update(frozen_tiles)
        self.touch_queue.items = list(recent_touch_queue)
        self.original_tiles = [list(tile) for tile in original_tiles] if original_tiles is not None else None
        self.perfect_so_far = perfect_so_far if original_tiles is not None else False
