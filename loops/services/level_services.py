import logging
from typing import Dict, List, Optional, Tuple

from loops.core.config import settings
from loops.engine import ColorRule, LevelParameters, PuzzleState, Shape, Tile, generate_level, one_color
from loops.schemas import CustomLevelRequest

logger = logging.getLogger(__name__)

LAST_LEVEL_NUMBER = 28

SQUARE, HEXAGON = Shape.SQUARE, Shape.HEXAGON
SINGLE, TWO_SEPARATE, TWO_OVERLAP = ColorRule.SINGLE, ColorRule.TWO_SEPARATE, ColorRule.TWO_OVERLAP

# hand-authored tutorial levels
AUTHORED_LEVELS: Dict[int, Tuple[LevelParameters, List[Tile]]] = {
    1: (LevelParameters(size=[4, 4], shape=SQUARE, color_rule=SINGLE), one_color([
        0, 0, 0, 0,
        0, 6, 1, 0,
        0, 6, 2, 0,
        0, 0, 0, 0,
    ])),
    2: (LevelParameters(size=[5, 4], shape=SQUARE, color_rule=SINGLE), one_color([
        0, 0, 0, 0, 0,
        0, 6, 14, 12, 0,
        0, 3, 9, 4, 0,
        0, 0, 0, 0, 0,
    ])),
    3: (LevelParameters(size=[5, 5], shape=SQUARE, color_rule=SINGLE), one_color([
        0, 0, 0, 0, 0,
        0, 2, 3, 4, 0,
        0, 2, 1, 5, 0,
        0, 12, 1, 4, 0,
        0, 0, 0, 0, 0,
    ])),
}

# (size, shape, color rule, extra flags)
LEVEL_PRESETS: Dict[int, tuple] = {
    4: ([7, 7], SQUARE, SINGLE, {}),
    5: ([8, 8], SQUARE, SINGLE, {}),
    6: ([5, 5], HEXAGON, SINGLE, {}),
    7: ([6, 6], HEXAGON, SINGLE, {}),
    8: ([7, 7], HEXAGON, SINGLE, {}),
    9: ([8, 8], HEXAGON, SINGLE, {}),
    10: ([7, 7], SQUARE, TWO_SEPARATE, {}),
    11: ([9, 9], SQUARE, TWO_SEPARATE, {"rough": True}),
    12: ([6, 6], HEXAGON, TWO_SEPARATE, {}),
    13: ([8, 8], HEXAGON, TWO_SEPARATE, {"rough": True}),
    14: ([9, 9], SQUARE, TWO_OVERLAP, {}),
    15: ([8, 8], HEXAGON, TWO_OVERLAP, {"rough": True}),

    # toroidal topology
    16: ([6, 6], SQUARE, TWO_OVERLAP, {"toroidal": True, "rough": True}),
    17: ([6, 6], SQUARE, TWO_SEPARATE, {"toroidal": True, "rough": True}),
    18: ([6, 6], SQUARE, SINGLE, {"toroidal": True, "rough": True}),
    19: ([6, 6], HEXAGON, TWO_OVERLAP, {"toroidal": True, "rough": True}),
    20: ([6, 6], HEXAGON, TWO_SEPARATE, {"toroidal": True, "rough": True}),
    21: ([6, 6], HEXAGON, SINGLE, {"toroidal": True, "rough": True}),

    # cement mode
    22: ([10, 10], SQUARE, TWO_OVERLAP, {"cement_mode": True, "rough": True}),
    23: ([9, 9], HEXAGON, TWO_OVERLAP, {"cement_mode": True, "rough": True}),
    24: ([10, 10], SQUARE, TWO_SEPARATE, {"cement_mode": True, "rough": True}),
    25: ([9, 9], HEXAGON, TWO_SEPARATE, {"cement_mode": True, "rough": True}),
    26: ([10, 10], SQUARE, SINGLE, {"cement_mode": True, "rough": True}),
    27: ([9, 9], HEXAGON, SINGLE, {"cement_mode": True, "rough": True}),

    # the final challenge
    LAST_LEVEL_NUMBER: ([6, 6], HEXAGON, SINGLE,
                        {"cement_mode": True, "toroidal": True, "rough": True, "perfectable": True}),
}


def clamp(minimum: int, x: int, maximum: int) -> int:
    if x < minimum:
        return minimum
    if x > maximum:
        return maximum
    return x


class LevelServices:
    """ Turns level numbers and custom settings into fresh PuzzleStates"""

    def __init__(self, rng=None):
        self.rng = rng  # None means the module level random functions

    @staticmethod
    def clamp_level_number(level_number) -> int:
        if not isinstance(level_number, int) or isinstance(level_number, bool):
            return 1
        return clamp(1, level_number, LAST_LEVEL_NUMBER)

    def get_level_parameters(self, level_number: int, shuffle_tiles: bool = True) -> LevelParameters:
        """Parameters of a numbered level (authored levels included)"""
        level_number = self.clamp_level_number(level_number)
        if level_number in AUTHORED_LEVELS:
            return AUTHORED_LEVELS[level_number][0]
        size, shape, color_rule, flags = LEVEL_PRESETS[level_number]
        return LevelParameters(size=list(size), shape=shape, color_rule=color_rule,
                               shuffle_tiles=shuffle_tiles, **flags)

    def get_level_for_number(self, level_number: int, shuffle_tiles: bool = True) -> PuzzleState:
        level_number = self.clamp_level_number(level_number)
        logger.info("Generating level %d", level_number)
        if level_number in AUTHORED_LEVELS:
            parameters, tiles = AUTHORED_LEVELS[level_number]
            return generate_level(parameters, tiles=tiles, rng=self.rng)
        return generate_level(self.get_level_parameters(level_number, shuffle_tiles), rng=self.rng)

    def custom_level_parameters(self, request: CustomLevelRequest, shuffle_tiles: bool = True) -> LevelParameters:
        """Translate the custom level settings the player sees into generator parameters"""
        size = [
            clamp(settings.MIN_LEVEL_SIZE, request.width, settings.MAX_LEVEL_SIZE),
            clamp(settings.MIN_LEVEL_SIZE, request.height, settings.MAX_LEVEL_SIZE),
        ]
        if request.shape == HEXAGON and request.toroidal:
            # only even sizes work for this
            size = [extent + 1 if extent % 2 else extent for extent in size]
        if not request.toroidal:
            # the player sees the size without the frame
            size = [extent + 2 for extent in size]

        parameters = LevelParameters(
            size=size,
            shape=request.shape,
            color_rule=request.color_rule,
            toroidal=request.toroidal,
            cement_mode=request.cement_mode,
            rough=request.rough,
            shuffle_tiles=shuffle_tiles,
        )
        # big enough and hard enough custom levels can be solved perfectly
        if size[0] >= 6 and size[1] >= 6 and request.toroidal and request.cement_mode and (
                (request.color_rule == SINGLE and request.shape == HEXAGON) or not request.rough):
            parameters.perfectable = True
        return parameters

    def get_custom_level(self, request: CustomLevelRequest, shuffle_tiles: bool = True) -> PuzzleState:
        parameters = self.custom_level_parameters(request, shuffle_tiles)
        logger.info("Generating custom level %s", parameters)
        return generate_level(parameters, rng=self.rng)
