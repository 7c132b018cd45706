from pydantic import BaseModel, ConfigDict, StrictBool, StrictInt, ValidationError, field_validator, model_validator
from typing import List, Optional

from loops.core.config import settings
from loops.engine import PuzzleState, SnapshotError, Shape, ColorRule
from loops.engine.level import color_count_for
from loops.engine.tile import clamp_value

CEMENT_QUEUE_LIMIT = 3


class LevelSnapshot(BaseModel):
    """
    Serializable copy of a PuzzleState, as stored in a save slot.

    Validation only protects the engine's invariants; it says nothing about
    whether the level can be beaten. Color values are clamped into range
    instead of rejected; everything else is accept or reject.
    """
    model_config = ConfigDict(extra="ignore")

    # level parameters (perfectable is not needed once the level exists)
    size: List[StrictInt]
    shape: Shape
    color_rule: ColorRule
    cement_mode: StrictBool
    toroidal: StrictBool
    rough: StrictBool

    # game state
    tiles: List[List[StrictInt]]
    frozen_tiles: List[StrictInt]
    recent_touch_queue: List[StrictInt]
    original_tiles: Optional[List[List[StrictInt]]] = None
    perfect_so_far: Optional[StrictBool] = None

    @field_validator("size")
    @classmethod
    def check_size(cls, value):
        if len(value) != 2:
            raise ValueError("size must have exactly two entries")
        for extent in value:
            if not settings.MIN_SNAPSHOT_SIZE <= extent <= settings.MAX_SNAPSHOT_SIZE:
                raise ValueError(f"size entry {extent} out of range")
        return value

    @field_validator("recent_touch_queue")
    @classmethod
    def check_queue(cls, value):
        if len(value) > CEMENT_QUEUE_LIMIT:
            raise ValueError("recent_touch_queue is too long")
        return value

    @model_validator(mode="after")
    def check_grid(self):
        tile_count = self.size[0] * self.size[1]
        color_count = color_count_for(self.color_rule)
        edges_per_tile = 4 if self.shape == Shape.SQUARE else 6

        if self.shape == Shape.HEXAGON and self.toroidal and self.size[0] % 2:
            raise ValueError("toroidal hexagon levels need an even width")

        if len(self.tiles) != tile_count:
            raise ValueError(f"expected {tile_count} tiles, got {len(self.tiles)}")
        for tile in self.tiles:
            if len(tile) != color_count:
                raise ValueError(f"expected {color_count} colors per tile, got {len(tile)}")
        # rather than checking the values, just clamp them into validity
        self.tiles = [[clamp_value(c, edges_per_tile) for c in tile] for tile in self.tiles]

        for tile_index in list(self.frozen_tiles) + list(self.recent_touch_queue):
            if not 0 <= tile_index < tile_count:
                raise ValueError(f"tile index {tile_index} is outside the grid")

        if self.original_tiles is not None:
            if len(self.original_tiles) != tile_count:
                raise ValueError("original_tiles does not match the grid")
            if self.perfect_so_far is None:
                raise ValueError("perfect_so_far is required with original_tiles")
        return self

    @classmethod
    def parse(cls, data) -> "LevelSnapshot":
        """Validate raw save data, raising SnapshotError on any problem"""
        if not isinstance(data, dict):
            raise SnapshotError("level snapshot must be an object")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise SnapshotError(str(e)) from e

    @classmethod
    def from_level(cls, level: PuzzleState) -> "LevelSnapshot":
        return cls(
            size=list(level.size),
            shape=level.shape,
            color_rule=level.color_rule,
            cement_mode=level.cement_mode,
            toroidal=level.toroidal,
            rough=level.rough,
            tiles=[list(tile) for tile in level.tiles],
            frozen_tiles=sorted(level.frozen_tiles),
            recent_touch_queue=level.recent_touch_queue,
            original_tiles=level.original_tiles,
            perfect_so_far=level.perfect_so_far if level.original_tiles is not None else None,
        )

    def to_level(self) -> PuzzleState:
        level = PuzzleState(
            size=self.size,
            shape=self.shape,
            color_rule=self.color_rule,
            cement_mode=self.cement_mode,
            toroidal=self.toroidal,
            rough=self.rough,
        )
        level.restore(
            tiles=self.tiles,
            frozen_tiles=set(self.frozen_tiles),
            recent_touch_queue=self.recent_touch_queue,
            original_tiles=self.original_tiles,
            perfect_so_far=bool(self.perfect_so_far),
        )
        return level


class LevelParametersRead(BaseModel):
    """Level parameters plus the derived topology numbers a renderer needs"""
    size: List[int]
    shape: Shape
    color_rule: ColorRule
    toroidal: bool
    cement_mode: bool
    rough: bool
    edges_per_tile: int
    color_count: int
    units_per_tile_x: float
    units_per_tile_y: float
    display_offset_x: float
    display_offset_y: float
    display_tiles_x: float
    display_tiles_y: float
    tile_animation_time: int

    @classmethod
    def from_level(cls, level: PuzzleState) -> "LevelParametersRead":
        topology = level.topology
        return cls(
            size=list(level.size),
            shape=level.shape,
            color_rule=level.color_rule,
            toroidal=level.toroidal,
            cement_mode=level.cement_mode,
            rough=level.rough,
            edges_per_tile=level.edges_per_tile,
            color_count=level.color_count,
            units_per_tile_x=topology.units_per_tile_x,
            units_per_tile_y=topology.units_per_tile_y,
            display_offset_x=topology.display_offset_x,
            display_offset_y=topology.display_offset_y,
            display_tiles_x=topology.display_tiles_x,
            display_tiles_y=topology.display_tiles_y,
            tile_animation_time=topology.tile_animation_time,
        )
