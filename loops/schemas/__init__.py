from loops.schemas.level_schema import LevelSnapshot, LevelParametersRead
from loops.schemas.game_schema import (
    TileSet, ClickRequest, CustomLevelRequest, TileSetUpdate, RetryRequest, GameRead, ClickResponse,
)
