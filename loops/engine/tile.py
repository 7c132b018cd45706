"""
Bitfield model of a tile.

A tile is a list with one integer per color. Each set bit of a color value
marks an edge of the tile where a ribbon of that color ends:

    square          hexagon
      8               16
    4   1          08    32
      2            04    01
                      02
"""
from typing import List

Tile = List[int]


def color_mask(edges_per_tile: int) -> int:
    return (1 << edges_per_tile) - 1


def rotate_value(value: int, times: int, edges_per_tile: int) -> int:
    """Rotate a color value clockwise by `times` edges (negative turns the other way)"""
    times %= edges_per_tile
    mask = color_mask(edges_per_tile)
    return mask & ((value << times) | (value >> (edges_per_tile - times)))


def clamp_value(value: int, edges_per_tile: int) -> int:
    """Drop any bits that do not belong to an edge"""
    return value & color_mask(edges_per_tile)


def edge_value(tile: Tile, color_index: int, direction: int) -> int:
    """1 if the tile has a ribbon of this color on the edge `direction`, else 0"""
    return 1 if tile[color_index] & direction else 0


def rotate_tile(tile: Tile, times: int, edges_per_tile: int) -> Tile:
    return [rotate_value(color_value, times, edges_per_tile) for color_value in tile]


def empty_tile(color_count: int) -> Tile:
    return [0] * color_count


def one_color(values: List[int]) -> List[Tile]:
    """Wrap plain values as single-color tiles (used by hand-authored levels)"""
    return [[value] for value in values]
