from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from .chain import Chain
from .merger import shareholder_bonuses
from .player import Player

logger = logging.getLogger(__name__)


def end_condition_met(founded_chains: Sequence[Chain], end_size: int = 41) -> bool:
    """A chain has reached ``end_size`` tiles, or every founded chain is safe."""
    if not founded_chains:
        return False
    if any(c.size >= end_size for c in founded_chains):
        return True
    return all(c.is_safe for c in founded_chains)


def final_scoring(players: Sequence[Player], founded_chains: Sequence[Chain]) -> List[Tuple[str, int]]:
    """
    Pays out every founded chain as if it were acquired, then cashes in all
    shares at their chain's current price. Returns (name, balance) standings,
    richest first; equal balances keep turn order.
    """
    for chain in sorted(founded_chains, key=lambda c: c.founded_seq or 0):
        for player, amount in shareholder_bonuses(chain):
            player.modify_balance(amount)
            logger.info("final bonus: %s receives $%d from %s", player.name, amount, chain.name)
        for holder in chain.holders():
            while chain.shares_held(holder):
                chain.buy_back(holder)
    standings = sorted(players, key=lambda p: -p.balance)
    return [(p.name, p.balance) for p in standings]
