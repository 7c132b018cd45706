r"""
Grid geometry for the two supported lattices.

Square grid: tile (x, y) covers the unit square [x, x+1) x [y, y+1).

Hexagon grid, (5,3) sized, "offset-down" columns (odd columns sit half a row
lower). Edge length is 1 unit, hexagon height is sqrt(3):

        0  1  2  3  4
       __    __    __
      /  \__/  \__/  \
    0 \__/  \__/  \__/
      /  \__/  \__/  \
    1 \__/  \__/  \__/
      /  \__/  \__/  \
    2 \__/  \__/  \__/
         \__/  \__/
"""
import math
from enum import Enum
from typing import List, NamedTuple, Tuple

from loops.engine.errors import check
from loops.engine.tile import rotate_value

SQRT3 = math.sqrt(3)


class Shape(str, Enum):
    SQUARE = "square"
    HEXAGON = "hexagon"


# square directions
RIGHT = 1
DOWN = 2
LEFT = 4
UP = 8

# hexagon directions
DOWN_RIGHT = 1
HEX_DOWN = 2
DOWN_LEFT = 4
UP_LEFT = 8
HEX_UP = 16
UP_RIGHT = 32


class Coord(NamedTuple):
    x: int
    y: int


class Vector(NamedTuple):
    """One edge of the grid, named by a tile and the direction leaving it"""
    tile_index: int
    direction: int


class GridTopology:
    """Coordinate math for one grid. Immutable once built."""

    def __init__(self, shape: Shape, tiles_per_row: int, tiles_per_column: int, toroidal: bool = False):
        check(shape in (Shape.SQUARE, Shape.HEXAGON), f"unknown shape: {shape!r}")
        check(tiles_per_row > 0 and tiles_per_column > 0, "grid must have at least one tile")
        self.shape = Shape(shape)
        self.tiles_per_row = tiles_per_row
        self.tiles_per_column = tiles_per_column
        self.toroidal = toroidal

        # derived constants, also read by the renderer
        if self.shape == Shape.SQUARE:
            self.edges_per_tile = 4
            self.units_per_tile_x = 1.0
            self.units_per_tile_y = 1.0
            self.tile_animation_time = 150
            self.display_offset_x = 0.0
            self.display_offset_y = 0.0
            if toroidal:
                # show 1.5 extra tiles on the sides
                self.display_tiles_x = tiles_per_row + 3
                self.display_tiles_y = tiles_per_column + 3
            else:
                # cut off half of each border tile
                self.display_tiles_x = tiles_per_row - 1
                self.display_tiles_y = tiles_per_column - 1
        else:
            self.edges_per_tile = 6
            self.units_per_tile_x = 1.5
            self.units_per_tile_y = SQRT3
            self.tile_animation_time = 120
            if toroidal:
                self.display_offset_x = -0.5
                self.display_offset_y = 0.0
                self.display_tiles_x = tiles_per_row + 3
                self.display_tiles_y = tiles_per_column + 3
            else:
                # an extra half tile beyond the squiggling columns
                self.display_offset_x = 0.25
                self.display_offset_y = SQRT3 / 4
                self.display_tiles_x = tiles_per_row - 1
                self.display_tiles_y = tiles_per_column - 0.5

        # wrapping an odd number of offset columns would misalign the seam
        check(not (self.shape == Shape.HEXAGON and toroidal and tiles_per_row & 1),
              "toroidal hexagon grids need an even width")

    def __repr__(self):
        return (f"GridTopology({self.shape.value}, {self.tiles_per_row}x{self.tiles_per_column}, "
                f"toroidal={self.toroidal})")

    @property
    def tile_count(self) -> int:
        return self.tiles_per_row * self.tiles_per_column

    @property
    def directions(self) -> List[int]:
        return [1 << i for i in range(self.edges_per_tile)]

    def coord_to_index(self, x: int, y: int) -> int:
        return y * self.tiles_per_row + x

    def index_to_coord(self, tile_index: int) -> Coord:
        y, x = divmod(tile_index, self.tiles_per_row)
        return Coord(x, y)

    def all_tile_indexes(self) -> range:
        return range(self.tile_count)

    def all_edges(self) -> List[Vector]:
        """Every edge between two tiles, each listed once"""
        if self.shape == Shape.SQUARE:
            forward = (RIGHT, DOWN)
        else:
            forward = (DOWN_RIGHT, HEX_DOWN, DOWN_LEFT)
        return [
            Vector(tile_index, direction)
            for tile_index in self.all_tile_indexes()
            for direction in forward
        ]

    def neighbor_index(self, tile_index: int, direction: int) -> int:
        """
        Index of the tile one step away in `direction`.
        Coordinates always wrap around, so on a non-toroidal grid the caller
        must bounds-check border tiles first.
        """
        x, y = self.index_to_coord(tile_index)
        w, h = self.tiles_per_row, self.tiles_per_column

        if self.shape == Shape.SQUARE:
            if direction == RIGHT:
                x += 1
            elif direction == DOWN:
                y += 1
            elif direction == LEFT:
                x -= 1
            elif direction == UP:
                y -= 1
            else:
                check(False, f"bad square direction: {direction}")
            return self.coord_to_index(x % w, y % h)

        is_offset_down = bool(x & 1)
        if direction == DOWN_RIGHT:
            x += 1
            if is_offset_down:
                y += 1
        elif direction == HEX_DOWN:
            y += 1
        elif direction == DOWN_LEFT:
            x -= 1
            if is_offset_down:
                y += 1
        elif direction == UP_LEFT:
            x -= 1
            if not is_offset_down:
                y -= 1
        elif direction == HEX_UP:
            y -= 1
        elif direction == UP_RIGHT:
            x += 1
            if not is_offset_down:
                y -= 1
        else:
            check(False, f"bad hexagon direction: {direction}")
        return self.coord_to_index(x % w, y % h)

    def reverse_direction(self, direction: int) -> int:
        return rotate_value(direction, self.edges_per_tile // 2, self.edges_per_tile)

    def is_in_bounds(self, tile_index: int) -> bool:
        """False for the frame of border tiles around a non-toroidal grid"""
        if self.toroidal:
            return True
        x, y = self.index_to_coord(tile_index)
        return (1 <= x < self.tiles_per_row - 1 and
                1 <= y < self.tiles_per_column - 1)

    # display space

    @property
    def display_width(self) -> float:
        return self.tiles_per_row * self.units_per_tile_x

    @property
    def display_height(self) -> float:
        return self.tiles_per_column * self.units_per_tile_y

    def wrap_display_point(self, display_x: float, display_y: float) -> Tuple[float, float]:
        return display_x % self.display_width, display_y % self.display_height

    def tile_center(self, x: int, y: int) -> Tuple[float, float]:
        if self.shape == Shape.SQUARE:
            return x + 0.5, y + 0.5
        return 1.5 * x + 1, SQRT3 * (y + (1.0 if x & 1 else 0.5))

    def display_point_to_tile_index(self, display_x: float, display_y: float) -> int:
        if self.shape == Shape.SQUARE:
            x, y = math.floor(display_x), math.floor(display_y)
            if self.toroidal:
                x, y = x % self.tiles_per_row, y % self.tiles_per_column
            return self.coord_to_index(x, y)

        # a hexagon is not a box, so pick the nearest centre around the coarse cell
        neighborhood_x = math.floor(display_x / 1.5)
        neighborhood_y = math.floor(display_y / SQRT3)
        closest_distance_squared = math.inf
        closest_tile = None
        for x in (neighborhood_x - 1, neighborhood_x, neighborhood_x + 1):
            for y in (neighborhood_y - 1, neighborhood_y, neighborhood_y + 1):
                center_x, center_y = self.tile_center(x, y)
                distance_squared = (display_y - center_y) ** 2 + (display_x - center_x) ** 2
                if distance_squared < closest_distance_squared:
                    closest_distance_squared = distance_squared
                    closest_tile = self.coord_to_index(x % self.tiles_per_row, y % self.tiles_per_column)
        check(closest_tile is not None, "no hexagon centre found")
        return closest_tile
