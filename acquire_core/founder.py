from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from .board import Tile
    from .chain import Chain


@dataclass
class Founder:
    """A clump of untagged tiles waiting for a player to name its chain."""
    chain_tiles: List["Tile"] = field(default_factory=list)

    def tile_names(self) -> List[str]:
        return [t.name for t in self.chain_tiles]

    def assign(self, chain: "Chain") -> None:
        for t in self.chain_tiles:
            t.chain_name = chain.name
            chain.add_tile(t)
