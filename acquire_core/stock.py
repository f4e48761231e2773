from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .player import Player


@dataclass(eq=False)
class Stock:
    """One issued share. The price is fixed when the share is issued."""
    chain: str
    price: int
    owner: "Player"
