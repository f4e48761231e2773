from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .chain import Chain
from .errors import InvalidPlacement, NoPendingFounder, UnknownChainName
from .founder import Founder
from .merger import Merger
from .player import Player

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]  # (x, y): x is the column 0..11, y the row 0..8
PlacementOutcome = Union[None, Founder, List[Merger]]


@dataclass(eq=False)
class Tile:
    """A tile. Its coordinates never change; the chain tag does."""
    x: int
    y: int
    chain_name: Optional[str] = None

    @property
    def coordinates(self) -> Coord:
        return (self.x, self.y)

    @property
    def name(self) -> str:
        """Display name, column number then row letter: (0, 0) -> '1A'."""
        return f"{self.x + 1}{chr(ord('A') + self.y)}"

    def __repr__(self) -> str:
        return f"Tile({self.name}, chain={self.chain_name!r})"


class Board:
    """
    The grid plus the chains living on it.

    Placing a tile runs a breadth-first search for its clump and then
    classifies the placement: nothing happens, a founding becomes pending,
    the clump joins its single neighbouring chain, or one merger per
    non-leading chain is queued. At most one Founder is pending; mergers are
    handled strictly in queue order.
    """

    def __init__(
        self,
        unfounded_chains: Iterable[Chain],
        width: int = 12,
        height: int = 9,
    ):
        self.width = width
        self.height = height
        self.grid: List[List[Optional[Tile]]] = [[None] * height for _ in range(width)]
        self.played_tiles: List[Tile] = []
        self.unfounded_chains: List[Chain] = list(unfounded_chains)
        self.founded_chains: List[Chain] = []
        self.current_founder: Optional[Founder] = None
        self.mergers_to_handle: List[Merger] = []
        self._founding_counter = 0

    # ---- grid access ----

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def at(self, x: int, y: int) -> Optional[Tile]:
        return self.grid[x][y]

    def played_tile_names(self) -> List[str]:
        return [t.name for t in self.played_tiles]

    def pretty(self) -> str:
        """Text rendering: '.' empty, '#' unclaimed tile, otherwise the chain's initial."""
        header = "    " + " ".join(f"{x + 1:>2}" for x in range(self.width))
        lines: List[str] = [header]
        for y in range(self.height):
            row: List[str] = []
            for x in range(self.width):
                tile = self.grid[x][y]
                if tile is None:
                    row.append(" .")
                elif tile.chain_name is None:
                    row.append(" #")
                else:
                    row.append(f" {tile.chain_name[0]}")
            lines.append(f" {chr(ord('A') + y)}  " + " ".join(row))
        return "\n".join(lines)

    # ---- chains ----

    def _mark_founded(self, chain: Chain) -> None:
        self._founding_counter += 1
        chain.founded_seq = self._founding_counter
        self.founded_chains.append(chain)

    def chain_named(self, name: str) -> Optional[Chain]:
        for chain in self.founded_chains + self.unfounded_chains:
            if chain.name == name:
                return chain
        return None

    # ---- search ----

    def _search(self, start: Coord, pending: Optional[Tile] = None) -> List[Tile]:
        """BFS over occupied cells from ``start``. ``pending`` is treated as already placed."""
        queue: Deque[Coord] = deque([start])
        visited = set()
        found: List[Tile] = []
        while queue:
            x, y = queue.popleft()
            if not self.in_bounds(x, y) or (x, y) in visited:
                continue
            if pending is not None and (x, y) == pending.coordinates:
                occupant: Optional[Tile] = pending
            else:
                occupant = self.grid[x][y]
            if occupant is None:
                continue
            visited.add((x, y))
            found.append(occupant)
            queue.append((x + 1, y))
            queue.append((x - 1, y))
            queue.append((x, y - 1))
            queue.append((x, y + 1))
        return found

    def clump_of(self, tile: Tile) -> List[Tile]:
        """The clump containing ``tile``; for an unplaced tile, the clump it would form."""
        if not self.in_bounds(tile.x, tile.y):
            raise InvalidPlacement(f"{tile.name} is off the board")
        pending = None if self.grid[tile.x][tile.y] is tile else tile
        return self._search(tile.coordinates, pending)

    def rank_chains(self, clump: Sequence[Tile]) -> List[Chain]:
        """
        Founded chains present in ``clump``, most tiles first.
        Equal counts keep founding order, so the earlier-founded chain leads.
        """
        by_name: Dict[str, Chain] = {c.name: c for c in self.founded_chains}
        counts: Dict[str, int] = {}
        for t in clump:
            if t.chain_name in by_name:
                counts[t.chain_name] = counts.get(t.chain_name, 0) + 1
        ranked = [by_name[name] for name in counts]
        ranked.sort(key=lambda c: (-counts[c.name], c.founded_seq))
        logger.debug("ranking for clump of %d: %s", len(clump), [(c.name, counts[c.name]) for c in ranked])
        return ranked

    @staticmethod
    def merge_is_legal(ranking: Sequence[Chain]) -> bool:
        """Only the leading chain may be safe."""
        return not any(c.is_safe for c in ranking[1:])

    # ---- legality ----

    def _placement_problem(self, tile: Tile) -> Optional[str]:
        if not self.in_bounds(tile.x, tile.y):
            return f"{tile.name} is off the board"
        if self.grid[tile.x][tile.y] is not None:
            return f"{tile.name} has already been played"
        clump = self._search(tile.coordinates, pending=tile)
        ranking = self.rank_chains(clump)
        if not ranking and len(clump) > 1 and not self.unfounded_chains:
            return f"{tile.name} would found a chain but every chain is on the board"
        if len(ranking) > 1 and not self.merge_is_legal(ranking):
            return f"{tile.name} would merge a safe chain"
        return None

    def move_is_legal(self, tile: Tile) -> bool:
        return self._placement_problem(tile) is None

    def is_dead(self, tile: Tile) -> bool:
        """True when the tile would merge a safe chain away; such a tile can never be played."""
        if not self.in_bounds(tile.x, tile.y) or self.grid[tile.x][tile.y] is not None:
            return False
        ranking = self.rank_chains(self._search(tile.coordinates, pending=tile))
        return len(ranking) > 1 and not self.merge_is_legal(ranking)

    # ---- pending work ----

    def found_needed(self) -> Optional[Founder]:
        return self.current_founder

    def merge_needed(self) -> bool:
        return len(self.mergers_to_handle) > 0

    @property
    def current_merger(self) -> Optional[Merger]:
        return self.mergers_to_handle[0] if self.mergers_to_handle else None

    # ---- mutation ----

    def place_tile(self, tile: Tile, seat_order: Optional[Sequence[Player]] = None) -> PlacementOutcome:
        """
        Puts ``tile`` on the board and classifies the result.

        Returns the new Founder, the list of queued Mergers, or None. Raises
        InvalidPlacement, leaving the board untouched, when the tile is off
        the board, already played, illegal, or earlier work is still pending.
        """
        if self.current_founder is not None or self.mergers_to_handle:
            raise InvalidPlacement("a founding or merger must be resolved first")
        problem = self._placement_problem(tile)
        if problem is not None:
            raise InvalidPlacement(problem)
        assert not any(t is tile for t in self.played_tiles), f"{tile.name} played twice"

        self.grid[tile.x][tile.y] = tile
        self.played_tiles.append(tile)
        clump = self._search(tile.coordinates)
        ranking = self.rank_chains(clump)

        if not ranking and len(clump) > 1 and self.unfounded_chains:
            self.current_founder = Founder(list(clump))
            logger.info("%s placed: founding pending over %d tiles", tile.name, len(clump))
            return self.current_founder
        if len(ranking) == 1:
            chain = ranking[0]
            for t in clump:
                t.chain_name = chain.name
                chain.add_tile(t)
            logger.info("%s placed: %s grows to %d", tile.name, chain.name, chain.size)
            return None
        if len(ranking) > 1:
            acquiring = ranking[0]
            queued = [Merger(acquiring, acquired, self, seat_order) for acquired in ranking[1:]]
            self.mergers_to_handle.extend(queued)
            logger.info(
                "%s placed: %s acquires %s",
                tile.name,
                acquiring.name,
                ", ".join(m.acquired_chain.name for m in queued),
            )
            return queued
        logger.info("%s placed", tile.name)
        return None

    def found_chain(self, name: str, founder: Player) -> Chain:
        """Names the pending clump ``name`` and gives ``founder`` a free share if any remain."""
        if self.current_founder is None:
            raise NoPendingFounder("no founding is pending")
        chain = next((c for c in self.unfounded_chains if c.name == name), None)
        if chain is None:
            raise UnknownChainName(f"{name!r} is not an unfounded chain")

        self.current_founder.assign(chain)
        self.unfounded_chains.remove(chain)
        self._mark_founded(chain)
        self.current_founder = None
        if chain.unsold > 0:
            chain.issue_to(founder)
        logger.info("%s founded %s with %d tiles", founder.name, chain.name, chain.size)
        return chain

    def merge_chains(self, merger: Merger) -> None:
        """Folds the acquired chain's tiles into the acquirer and frees the acquired chain."""
        acquiring, acquired = merger.acquiring_chain, merger.acquired_chain
        for t in self._search(self.played_tiles[-1].coordinates):
            if t.chain_name is None or t.chain_name == acquired.name:
                t.chain_name = acquiring.name
                acquiring.add_tile(t)

        acquired.clear_tiles()
        acquired.founded_seq = None
        self.founded_chains.remove(acquired)
        self.unfounded_chains.append(acquired)
        self.mergers_to_handle.remove(merger)
        logger.info("%s absorbed %s, now %d tiles", acquiring.name, acquired.name, acquiring.size)
