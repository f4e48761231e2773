from __future__ import annotations

import random
from typing import List, Optional

from .board import Tile


class TilePool:
    """The face-down draw pile: one tile per board cell, shuffled once."""

    def __init__(self, width: int = 12, height: int = 9, seed: Optional[int] = None):
        rng = random.Random(seed)
        self.tiles: List[Tile] = [Tile(x, y) for y in range(height) for x in range(width)]
        rng.shuffle(self.tiles)

    def __len__(self) -> int:
        return len(self.tiles)

    def draw_tile(self) -> Optional[Tile]:
        return self.tiles.pop() if self.tiles else None

    def draw_tiles(self, count: int) -> List[Tile]:
        drawn: List[Tile] = []
        while len(drawn) < count and self.tiles:
            drawn.append(self.tiles.pop())
        return drawn
