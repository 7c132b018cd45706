from loops.engine.errors import InvariantViolation, SnapshotError
from loops.engine.tile import Tile, rotate_value, edge_value, one_color
from loops.engine.topology import GridTopology, Shape, Coord, Vector
from loops.engine.cement import RecentTouchQueue
from loops.engine.level import PuzzleState, ColorRule
from loops.engine.generator import LevelParameters, generate_level
