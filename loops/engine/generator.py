"""
Level generation.

The generator writes a solved board first, one random value per shared edge
applied symmetrically to both tiles, and only then scrambles it by rotating
tiles. Every generated level is therefore solvable by undoing the scramble;
there is no separate solvability check.
"""
import logging
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from loops.engine.errors import check
from loops.engine.level import ColorRule, PuzzleState
from loops.engine.tile import Tile
from loops.engine.topology import Shape

logger = logging.getLogger(__name__)


@dataclass
class LevelParameters:
    """Declarative description of a level"""
    size: Sequence[int]
    shape: Shape
    color_rule: ColorRule
    toroidal: bool = False
    cement_mode: bool = False
    rough: bool = False
    perfectable: bool = False
    shuffle_tiles: bool = True


def freeze_frame(level: PuzzleState):
    """Freeze the border (or, for a rough toroid, a seed in the middle)"""
    topology = level.topology
    # mark out of bounds tiles as already frozen
    for tile_index in topology.all_tile_indexes():
        if not topology.is_in_bounds(tile_index):
            level.frozen_tiles.add(tile_index)

    if not (level.rough and level.toroidal):
        return

    # there are no border tiles for rough edges, so freeze some tiles in the center
    w, h = topology.tiles_per_row, topology.tiles_per_column
    if level.shape == Shape.SQUARE:
        # 1 tile for odd and 2 for even
        for y in range((h - 1) // 2, h // 2 + 1):
            for x in range((w - 1) // 2, w // 2 + 1):
                level.frozen_tiles.add(topology.coord_to_index(x, y))
    else:
        check(w % 2 == 0, "rough toroidal hexagon grids need an even width")
        check(h % 2 == 0, "rough toroidal hexagon grids need an even height")
        for x, y in ((w // 2 - 1, h // 2 - 1),
                     (w // 2 - 2, h // 2 - 1),
                     (w // 2, h // 2 - 1),
                     (w // 2 - 1, h // 2)):
            level.frozen_tiles.add(topology.coord_to_index(x % w, y % h))


def possible_edge_values(level: PuzzleState) -> int:
    """How many distinct values a shared edge can take"""
    check(level.color_count <= 2, "at most two colors are supported")
    if level.color_count == 1:
        return 2  # empty or ribbon
    if level.allow_overlap:
        return 4  # any combination of the two colors
    return 3  # empty, color a or color b


def assign_solved_edges(level: PuzzleState, rng) -> int:
    """Give every playable edge a random value on both of its sides. Returns the number of edges assigned."""
    topology = level.topology
    value_count = possible_edge_values(level)
    assigned = 0
    for tile_index, direction in topology.all_edges():
        other_tile = topology.neighbor_index(tile_index, direction)
        out_of_bounds_count = (int(not topology.is_in_bounds(tile_index)) +
                               int(not topology.is_in_bounds(other_tile)))
        if level.rough:
            # dangling ribbons into the frame are allowed
            if out_of_bounds_count >= 2:
                continue
        elif out_of_bounds_count >= 1:
            continue

        edge_value = rng.randrange(value_count)
        reverse = topology.reverse_direction(direction)
        for color_index in range(level.color_count):
            if edge_value & (1 << color_index):
                level.tiles[tile_index][color_index] |= direction
                level.tiles[other_tile][color_index] |= reverse
        assigned += 1
    return assigned


def scramble(level: PuzzleState, rng) -> Dict[int, int]:
    """Rotate every non-frozen tile randomly. Returns tile index -> rotation applied."""
    rotations = {}
    for tile_index in level.topology.all_tile_indexes():
        if tile_index not in level.frozen_tiles:
            rotations[tile_index] = level.rotate_randomly(tile_index, rng)
    return rotations


def generate_level(
        parameters: LevelParameters,
        tiles: Optional[List[Tile]] = None,
        rng: Optional[random.Random] = None,
) -> PuzzleState:
    """
    Build a new PuzzleState.

    Explicit `tiles` (hand-authored levels) are used as given; otherwise a
    solved board is generated and, unless `shuffle_tiles` is False, scrambled.
    `rng` defaults to the module level `random` functions.
    """
    rng = rng or random
    level = PuzzleState(
        size=parameters.size,
        shape=parameters.shape,
        color_rule=parameters.color_rule,
        cement_mode=parameters.cement_mode,
        toroidal=parameters.toroidal,
        rough=parameters.rough,
    )
    freeze_frame(level)

    if tiles is not None:
        # tiles already ready to use
        check(len(tiles) == level.topology.tile_count,
              f"expected {level.topology.tile_count} tiles, got {len(tiles)}")
        for tile in tiles:
            check(len(tile) == level.color_count,
                  f"expected {level.color_count} colors per tile, got {len(tile)}")
        level.tiles = [list(tile) for tile in tiles]
    else:
        edge_count = assign_solved_edges(level, rng)
        if parameters.shuffle_tiles:
            scramble(level, rng)
        logger.debug("Generated %r with %d assigned edges", level.topology, edge_count)

    if parameters.perfectable:
        level.initialize_possibility_for_perfect()

    return level
