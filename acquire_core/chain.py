from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, List, Optional

from .config import MAJORITY_MULTIPLIER, MINORITY_MULTIPLIER, stock_price
from .errors import InsufficientFunds, InsufficientShares, StockUnavailable
from .stock import Stock

if TYPE_CHECKING:
    from .board import Tile
    from .player import Player

logger = logging.getLogger(__name__)


class Chain:
    """
    A hotel chain: the tiles it owns and its fixed pool of shares.

    The pool never changes size. Every share is either unsold (in the pool)
    or issued to a player, so ``len(issued) + unsold == pool_size`` always.
    Price, bonuses and safety are derived from the current tile count.
    """

    def __init__(self, name: str, tier: int, pool_size: int = 25, safe_size: int = 11):
        self.name = name
        self.tier = tier
        self.pool_size = pool_size
        self.safe_size = safe_size
        self.tiles: List["Tile"] = []
        self.issued: List[Stock] = []
        self.founded_seq: Optional[int] = None  # set while founded, drives ranking tie-breaks

    def __repr__(self) -> str:
        return f"Chain({self.name!r}, tier={self.tier}, size={self.size}, unsold={self.unsold})"

    @property
    def size(self) -> int:
        return len(self.tiles)

    @property
    def is_safe(self) -> bool:
        return self.size >= self.safe_size

    @property
    def unsold(self) -> int:
        return self.pool_size - len(self.issued)

    @property
    def stock_price(self) -> int:
        return stock_price(self.size, self.tier)

    @property
    def majority_bonus(self) -> int:
        return self.stock_price * MAJORITY_MULTIPLIER

    @property
    def minority_bonus(self) -> int:
        return self.stock_price * MINORITY_MULTIPLIER

    def add_tile(self, tile: "Tile") -> bool:
        """Adds a tile unless it is already owned. Returns True if it was added."""
        if any(t is tile for t in self.tiles):
            return False
        self.tiles.append(tile)
        return True

    def clear_tiles(self) -> None:
        self.tiles.clear()

    # ---- stock ----

    def shares_held(self, player: "Player") -> int:
        return sum(1 for s in self.issued if s.owner is player)

    def holders(self) -> List["Player"]:
        """Players owning at least one share, in order of their first share."""
        seen: List["Player"] = []
        for s in self.issued:
            if not any(p is s.owner for p in seen):
                seen.append(s.owner)
        return seen

    def profile(self) -> Dict["Player", int]:
        return {p: self.shares_held(p) for p in self.holders()}

    def issue_to(self, player: "Player") -> Stock:
        """Moves one share from the pool to ``player`` without payment."""
        if self.unsold <= 0:
            raise StockUnavailable(f"No unsold {self.name} stock left")
        stock = Stock(chain=self.name, price=self.stock_price, owner=player)
        self.issued.append(stock)
        player.stocks.append(stock)
        return stock

    def take_back(self, player: "Player") -> Stock:
        """Returns one of ``player``'s shares to the pool without payment."""
        for stock in reversed(self.issued):
            if stock.owner is player:
                self.issued.remove(stock)
                player.stocks.remove(stock)
                return stock
        raise InsufficientShares(f"{player.name} holds no {self.name} stock")

    def sell_to(self, player: "Player") -> Stock:
        """Sells one share to ``player`` at the current price."""
        price = self.stock_price
        if self.unsold <= 0:
            raise StockUnavailable(f"No unsold {self.name} stock left")
        if player.balance < price:
            raise InsufficientFunds(f"{player.name} cannot afford {self.name} at ${price}")
        player.modify_balance(-price)
        stock = self.issue_to(player)
        logger.debug("%s bought 1 %s for $%d", player.name, self.name, price)
        return stock

    def buy_back(self, player: "Player") -> int:
        """Buys one share back from ``player`` at the current price; returns the amount paid."""
        price = self.stock_price
        self.take_back(player)
        player.modify_balance(price)
        logger.debug("%s sold 1 %s for $%d", player.name, self.name, price)
        return price
