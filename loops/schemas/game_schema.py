from enum import Enum
from pydantic import BaseModel, FiniteFloat, model_validator
from typing import Optional
from uuid import UUID

from loops.engine import Shape, ColorRule
from loops.schemas.level_schema import LevelSnapshot, LevelParametersRead


# Aesthetics, only stored for the renderer
class TileSet(str, Enum):
    TRYPO = "trypo"
    RIBBON = "ribbon"
    ISO = "iso"
    CHAOS = "chaos"


# Data sent by the input layer
class ClickRequest(BaseModel):
    """A click either as a display point or, for keyboard/touch layers, a tile index"""
    display_x: Optional[FiniteFloat] = None
    display_y: Optional[FiniteFloat] = None
    tile_index: Optional[int] = None

    @model_validator(mode="after")
    def point_or_index(self):
        has_point = self.display_x is not None and self.display_y is not None
        if has_point == (self.tile_index is not None):
            raise ValueError("send either display_x and display_y, or tile_index")
        return self


# Custom level settings, sizes as the player sees them (frame not included)
class CustomLevelRequest(BaseModel):
    width: int  # clamped by the service
    height: int
    shape: Shape = Shape.SQUARE
    color_rule: ColorRule = ColorRule.SINGLE
    toroidal: bool = False
    cement_mode: bool = False
    rough: bool = False


class TileSetUpdate(BaseModel):
    tile_set: TileSet


class RetryRequest(BaseModel):
    shuffle_tiles: bool = True  # False hands out the solved board


# Data sent back to the client
class GameRead(BaseModel):
    id: UUID
    level_number: int
    unlocked_level_number: int
    is_custom_level: bool
    tile_set: TileSet
    parameters: LevelParametersRead
    level: LevelSnapshot
    unsolved_count: int
    solved: bool
    perfect: bool


class ClickResponse(BaseModel):
    accepted: bool
    tile_index: Optional[int] = None
    frozen_tile: Optional[int] = None  # tile that hardened because of this click
    game: GameRead
