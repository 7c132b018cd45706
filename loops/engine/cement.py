from typing import Iterable, List, Optional, Set

# how many tiles stay "wet" at once
CEMENT_QUEUE_LENGTH = 3


class RecentTouchQueue:
    """
    Cement aging: the last few touched tiles stay rotatable.

    Touching a tile moves it to the front of the queue. When a new tile pushes
    the queue past its length, the oldest tile hardens and is added to the
    frozen set for good.
    """

    def __init__(self, frozen_tiles: Set[int], items: Optional[Iterable[int]] = None,
                 max_length: int = CEMENT_QUEUE_LENGTH):
        self.frozen_tiles = frozen_tiles
        self.max_length = max_length
        self.items: List[int] = list(items or [])

    def __len__(self):
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __contains__(self, tile_index):
        return tile_index in self.items

    def age_of(self, tile_index: int) -> Optional[int]:
        """0 for the most recent touch, None when not in the queue"""
        if tile_index not in self.items:
            return None
        return self.items.index(tile_index)

    def touch(self, tile_index: int) -> Optional[int]:
        """Record a touch and return the tile that froze because of it, if any"""
        if tile_index in self.items:
            # bring it to the front
            self.items.remove(tile_index)
            self.items.insert(0, tile_index)
            return None

        self.items.insert(0, tile_index)
        if len(self.items) > self.max_length:
            freezing_tile = self.items.pop()
            self.frozen_tiles.add(freezing_tile)
            return freezing_tile
        return None
