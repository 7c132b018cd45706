from loops.services.level_services import LevelServices, LAST_LEVEL_NUMBER
from loops.services.game_services import GameServices, ClickResult
