from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Iterable, List

from .stock import Stock

if TYPE_CHECKING:
    from .board import Tile


@dataclass(eq=False)
class Player:
    """A seat at the table: cash, the tiles in hand and the shares owned."""
    name: str
    balance: int = 6000
    tiles: List["Tile"] = field(default_factory=list)
    stocks: List[Stock] = field(default_factory=list)

    def modify_balance(self, change: int) -> int:
        self.balance += change
        return self.balance

    def add_tiles(self, tiles: Iterable["Tile"]) -> None:
        self.tiles.extend(tiles)

    def remove_tile(self, tile: "Tile") -> None:
        self.tiles.remove(tile)

    def tile_names(self) -> List[str]:
        return [t.name for t in self.tiles]

    def shares_in(self, chain_name: str) -> int:
        return sum(1 for s in self.stocks if s.chain == chain_name)

    def holdings(self) -> Dict[str, int]:
        """Share count per chain name, in the order the chains were first bought."""
        out: Dict[str, int] = {}
        for s in self.stocks:
            out[s.chain] = out.get(s.chain, 0) + 1
        return out
