import logging
import math
from dataclasses import dataclass
from typing import Optional
from uuid import uuid4

from fastapi import HTTPException
from pydantic import ValidationError

from loops import models
from loops.engine import PuzzleState, SnapshotError
from loops.schemas import CustomLevelRequest, GameRead, LevelParametersRead, LevelSnapshot, TileSet
from loops.services.level_services import LevelServices

logger = logging.getLogger(__name__)


@dataclass
class ClickResult:
    slot: models.SaveSlot
    level: PuzzleState
    accepted: bool
    tile_index: Optional[int] = None
    frozen_tile: Optional[int] = None


class GameServices:
    """ Input layer of the game: save slots, clicks and level progression"""

    def __init__(self, db, level_services: Optional[LevelServices] = None):
        self.db = db
        self.levels = level_services or LevelServices()

    # save slots

    def create_game(self) -> models.SaveSlot:
        """Start a new save slot at level 1"""
        slot = models.SaveSlot(
            id=uuid4(),
            level_number=1,
            unlocked_level_number=1,
            is_custom_level=False,
            tile_set=TileSet.TRYPO.value,
        )
        self.db.add(slot)
        self.save_level(slot, self.levels.get_level_for_number(1))
        self.db.commit()
        logger.info("Created save slot %s", slot.id)
        return slot

    def get_game(self, game_id) -> models.SaveSlot:
        slot = self.db.query(models.SaveSlot).filter(models.SaveSlot.id == game_id).first()
        if not slot:
            raise HTTPException(status_code=404, detail="Game not found")
        return slot

    def delete_game(self, game_id):
        slot = self.get_game(game_id)
        self.db.delete(slot)
        self.db.commit()
        logger.info("Deleted save slot %s", game_id)

    # level state

    def save_level(self, slot: models.SaveSlot, level: PuzzleState):
        slot.level = LevelSnapshot.from_level(level).model_dump(mode="json")

    def get_level(self, slot: models.SaveSlot) -> PuzzleState:
        """
        Rebuild the stored level. A snapshot that does not validate is thrown
        away and a fresh level is generated in its place.
        """
        try:
            return LevelSnapshot.parse(slot.level).to_level()
        except SnapshotError as e:
            logger.warning("Discarding saved level of slot %s: %s", slot.id, e)

        level = self.generate_current_level(slot)
        self.save_level(slot, level)
        self.db.commit()
        return level

    def generate_current_level(self, slot: models.SaveSlot, shuffle_tiles: bool = True) -> PuzzleState:
        if slot.is_custom_level:
            try:
                request = CustomLevelRequest.model_validate(slot.custom_parameters)
                return self.levels.get_custom_level(request, shuffle_tiles)
            except ValidationError as e:
                logger.warning("Dropping custom level settings of slot %s: %s", slot.id, e)
                slot.is_custom_level = False
                slot.custom_parameters = None
        slot.level_number = self.levels.clamp_level_number(slot.level_number)
        return self.levels.get_level_for_number(slot.level_number, shuffle_tiles)

    def set_current_level(self, slot: models.SaveSlot, level: PuzzleState) -> PuzzleState:
        self.save_level(slot, level)
        if slot.unlocked_level_number < slot.level_number:
            # jumping ahead unlocks everything up to here
            slot.unlocked_level_number = slot.level_number
        self.db.commit()
        return level

    def load_new_level(self, game_id, delta: Optional[int] = None, shuffle_tiles: bool = True):
        """Retry the current level, or move `delta` numbered levels (never past the unlocked one)"""
        slot = self.get_game(game_id)
        if delta is not None:
            target = min(slot.level_number + delta, slot.unlocked_level_number)
            slot.level_number = self.levels.clamp_level_number(target)
            slot.is_custom_level = False
        level = self.generate_current_level(slot, shuffle_tiles)
        return slot, self.set_current_level(slot, level)

    def go_to_level(self, game_id, level_number: int):
        slot = self.get_game(game_id)
        if level_number > slot.unlocked_level_number:
            raise HTTPException(status_code=403, detail="Level is still locked")
        return self.load_new_level(game_id, delta=level_number - slot.level_number)

    def advance(self, game_id):
        """Move on after a solved level: the next numbered level, or a new custom one"""
        slot = self.get_game(game_id)
        if slot.is_custom_level:
            return self.load_new_level(game_id)
        return self.load_new_level(game_id, delta=1)

    def set_custom_level(self, game_id, request: CustomLevelRequest):
        slot = self.get_game(game_id)
        slot.is_custom_level = True
        slot.custom_parameters = request.model_dump(mode="json")
        return self.load_new_level(game_id)

    def reset_progress(self, game_id):
        """Start back at level 1"""
        slot = self.get_game(game_id)
        slot.level_number = 1
        slot.unlocked_level_number = 1
        slot.is_custom_level = False
        return self.load_new_level(game_id)

    def set_tile_set(self, game_id, tile_set: TileSet) -> models.SaveSlot:
        slot = self.get_game(game_id)
        slot.tile_set = TileSet(tile_set).value
        self.db.commit()
        return slot

    # clicks

    def click_point(self, game_id, display_x: float, display_y: float) -> ClickResult:
        """Click at a point in display units (origin at the top left corner of tile 0)"""
        slot = self.get_game(game_id)
        level = self.get_level(slot)
        topology = level.topology
        if not (math.isfinite(display_x) and math.isfinite(display_y)):
            return ClickResult(slot, level, accepted=False)

        wrapped_x, wrapped_y = topology.wrap_display_point(display_x, display_y)
        if not level.toroidal and (wrapped_x != display_x or wrapped_y != display_y):
            # make sure the click is in bounds
            return ClickResult(slot, level, accepted=False)

        tile_index = topology.display_point_to_tile_index(wrapped_x, wrapped_y)
        return self._click_tile(slot, level, tile_index)

    def click_index(self, game_id, tile_index: int) -> ClickResult:
        slot = self.get_game(game_id)
        level = self.get_level(slot)
        if not 0 <= tile_index < level.topology.tile_count:
            return ClickResult(slot, level, accepted=False)
        return self._click_tile(slot, level, tile_index)

    def _click_tile(self, slot: models.SaveSlot, level: PuzzleState, tile_index: int) -> ClickResult:
        # frozen tiles (rough seeds, hardened cement) and the frame never turn
        if level.is_frozen(tile_index) or not level.topology.is_in_bounds(tile_index):
            return ClickResult(slot, level, accepted=False, tile_index=tile_index)

        frozen_tile = level.touch(tile_index)
        level.rotate(tile_index, 1)
        self.check_for_done(slot, level)
        self.save_level(slot, level)
        self.db.commit()
        return ClickResult(slot, level, accepted=True, tile_index=tile_index, frozen_tile=frozen_tile)

    def check_for_done(self, slot: models.SaveSlot, level: PuzzleState) -> bool:
        if not level.is_solved():
            return False
        if not slot.is_custom_level and slot.unlocked_level_number <= slot.level_number:
            # unlock the next level
            slot.unlocked_level_number = slot.level_number + 1
        logger.info("Slot %s solved level %s (perfect: %s)",
                    slot.id, "custom" if slot.is_custom_level else slot.level_number, level.perfect_so_far)
        return True

    # serialization

    def read_game(self, slot: models.SaveSlot, level: Optional[PuzzleState] = None) -> GameRead:
        level = level or self.get_level(slot)
        unsolved_count = level.unsolved_count()
        return GameRead(
            id=slot.id,
            level_number=slot.level_number,
            unlocked_level_number=slot.unlocked_level_number,
            is_custom_level=slot.is_custom_level,
            tile_set=slot.tile_set,
            parameters=LevelParametersRead.from_level(level),
            level=LevelSnapshot.from_level(level),
            unsolved_count=unsolved_count,
            solved=unsolved_count == 0,
            perfect=unsolved_count == 0 and level.original_tiles is not None and level.perfect_so_far,
        )
