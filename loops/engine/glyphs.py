"""
Rotation-normalized glyphs for the renderer.

A skin only needs to draw one canonical glyph per rotation class; any tile
value is that glyph turned some number of edges clockwise.
"""
from typing import Dict, Optional, Tuple

from loops.engine.tile import color_mask, rotate_value
from loops.engine.topology import Shape

EDGES_PER_TILE = {
    Shape.SQUARE: 4,
    Shape.HEXAGON: 6,
}

SQUARE_GLYPHS: Dict[int, str] = {
    1: "end",
    3: "corner",
    5: "straight",
    7: "tee",
    15: "cross",
}

HEXAGON_GLYPHS: Dict[int, str] = {
    1: "hoop",
    3: "hook",
    5: "noodle",
    7: "bird",
    9: "stick",
    11: "right shoe",
    13: "left shoe",
    15: "comb",
    21: "triangle",
    23: "space ship",
    27: "pisces",
    31: "dragon",
    63: "shuriken",
}


def normalize(value: int, shape: Shape) -> Tuple[int, int]:
    """
    Return (canonical, times) such that rotate_value(canonical, times) == value.
    The canonical value is the smallest value in the rotation class.
    """
    edges_per_tile = EDGES_PER_TILE[Shape(shape)]
    value &= color_mask(edges_per_tile)
    rotations = [rotate_value(value, -times, edges_per_tile) for times in range(edges_per_tile)]
    canonical = min(rotations)
    return canonical, rotations.index(canonical)


def glyph_name(value: int, shape: Shape) -> Optional[str]:
    """Name of the glyph drawn for a value, None for an empty tile"""
    canonical, _ = normalize(value, shape)
    if canonical == 0:
        return None
    if Shape(shape) == Shape.SQUARE:
        return SQUARE_GLYPHS[canonical]
    return HEXAGON_GLYPHS[canonical]
