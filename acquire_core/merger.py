from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Tuple

from .errors import InsufficientShares, MergerStepError, StockUnavailable

if TYPE_CHECKING:
    from .board import Board
    from .chain import Chain
    from .player import Player

logger = logging.getLogger(__name__)


class MergerPhase(str, Enum):
    CREATED = "CREATED"
    BONUS_PAID = "BONUS_PAID"
    TILES_MERGED = "TILES_MERGED"


def _top_holders(profile: Dict["Player", int], exclude: Sequence["Player"] = ()) -> List["Player"]:
    """Players sharing the highest share count, skipping ``exclude``."""
    best: List["Player"] = []
    max_stock = 1
    for player, amount in profile.items():
        if any(player is p for p in exclude):
            continue
        if amount > max_stock:
            best = [player]
            max_stock = amount
        elif amount == max_stock:
            best.append(player)
    return best


def shareholder_bonuses(chain: "Chain") -> List[Tuple["Player", int]]:
    """
    Majority and minority bonuses owed by ``chain``, as (player, amount) pairs.

    Majority holders split the majority bonus evenly. Minority holders get
    the minority bonus rounded down to a multiple of 100 per head: the bonus
    is divided by 100, then by the group size, then multiplied by 100. With
    no minority holder the majority group takes the minority bonus under the
    same rule.
    """
    profile = chain.profile()
    majority = _top_holders(profile)
    if not majority:
        return []
    payouts: List[Tuple["Player", int]] = []
    majority_bonus = chain.majority_bonus
    for p in majority:
        payouts.append((p, majority_bonus // len(majority)))

    minority = _top_holders(profile, exclude=majority)
    minority_bonus = chain.minority_bonus
    receivers = minority if minority else majority
    for p in receivers:
        payouts.append((p, minority_bonus // 100 // len(receivers) * 100))
    return payouts


class Merger:
    """
    One chain being absorbed by another.

    Flow: ``give_shareholder_bonus()``, then each shareholder in turn may
    ``sell_stock()`` / ``trade_stock()`` before ``go_to_next_player()``;
    once everyone has decided, ``merge_chains()`` moves the tiles.
    """

    def __init__(
        self,
        acquiring_chain: "Chain",
        acquired_chain: "Chain",
        board: "Board",
        seat_order: Optional[Sequence["Player"]] = None,
    ):
        self.acquiring_chain = acquiring_chain
        self.acquired_chain = acquired_chain
        self.board = board
        self.phase = MergerPhase.CREATED
        self.shareholders: Tuple["Player", ...] = self._find_players(seat_order)
        self.payouts: List[Tuple["Player", int]] = []
        self._cursor = 0

    def __repr__(self) -> str:
        return f"Merger({self.acquiring_chain.name} <- {self.acquired_chain.name}, {self.phase.value})"

    def _find_players(self, seat_order: Optional[Sequence["Player"]]) -> Tuple["Player", ...]:
        holders = self.acquired_chain.holders()
        ordered: List["Player"] = []
        for p in seat_order or ():
            if any(p is h for h in holders):
                ordered.append(p)
        for h in holders:
            if not any(h is p for p in ordered):
                ordered.append(h)
        return tuple(ordered)

    # ---- queries ----

    @property
    def players_to_decide(self) -> Tuple["Player", ...]:
        return self.shareholders[self._cursor:]

    def more_players_to_handle(self) -> bool:
        return self._cursor < len(self.shareholders)

    @property
    def current_player(self) -> "Player":
        if self.phase is not MergerPhase.BONUS_PAID:
            raise MergerStepError("shareholder decisions start after the bonus is paid")
        if not self.more_players_to_handle():
            raise MergerStepError("every shareholder has already decided")
        return self.shareholders[self._cursor]

    def get_player_name(self) -> str:
        return self.current_player.name

    def get_player_stock_count(self) -> int:
        return self.acquired_chain.shares_held(self.current_player)

    def get_stock_price(self) -> int:
        return self.acquired_chain.stock_price

    # ---- steps ----

    def give_shareholder_bonus(self) -> List[Tuple["Player", int]]:
        if self.phase is not MergerPhase.CREATED:
            raise MergerStepError("the shareholder bonus has already been paid")
        self.payouts = shareholder_bonuses(self.acquired_chain)
        for player, amount in self.payouts:
            player.modify_balance(amount)
            logger.info("%s receives $%d bonus from %s", player.name, amount, self.acquired_chain.name)
        self.phase = MergerPhase.BONUS_PAID
        return self.payouts

    def sell_stock(self) -> int:
        """Current player sells one acquired share back to the pool."""
        player = self.current_player
        return self.acquired_chain.buy_back(player)

    def trade_stock(self) -> None:
        """Current player swaps two acquired shares for one acquiring share."""
        player = self.current_player
        if self.acquired_chain.shares_held(player) < 2:
            raise InsufficientShares(f"{player.name} needs two {self.acquired_chain.name} shares to trade")
        if self.acquiring_chain.unsold <= 0:
            raise StockUnavailable(f"No unsold {self.acquiring_chain.name} stock left")
        self.acquired_chain.take_back(player)
        self.acquired_chain.take_back(player)
        self.acquiring_chain.issue_to(player)
        logger.debug("%s traded 2 %s for 1 %s", player.name, self.acquired_chain.name, self.acquiring_chain.name)

    def go_to_next_player(self) -> None:
        player = self.current_player
        logger.debug("%s finished with %s", player.name, self.acquired_chain.name)
        self._cursor += 1

    def merge_chains(self) -> None:
        if self.phase is not MergerPhase.BONUS_PAID:
            raise MergerStepError("pay the shareholder bonus before merging")
        if self.more_players_to_handle():
            raise MergerStepError(f"{self.shareholders[self._cursor].name} has not decided yet")
        self.board.merge_chains(self)
        self.phase = MergerPhase.TILES_MERGED
