from __future__ import annotations

import logging
from collections import deque
from enum import Enum
from typing import Deque, Dict, List, Optional, Tuple

from .board import Board, Tile
from .chain import Chain
from .config import GameConfig
from .deal import TilePool
from .errors import (
    GameAlreadyStarted,
    GameOver,
    InvalidPlacement,
    NoActivePlayer,
    NoPendingFounder,
    NoPendingMerger,
    StockUnavailable,
    TurnNotFinished,
    UnknownChainName,
)
from .founder import Founder
from .merger import Merger
from .player import Player
from .scoring import end_condition_met, final_scoring

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    ADDING_PLAYERS = "ADDING_PLAYERS"
    AWAITING_PLACEMENT = "AWAITING_PLACEMENT"
    AWAITING_FOUNDING = "AWAITING_FOUNDING"
    AWAITING_MERGE_DECISIONS = "AWAITING_MERGE_DECISIONS"
    AWAITING_STOCK_PURCHASE = "AWAITING_STOCK_PURCHASE"
    GAME_OVER = "GAME_OVER"


class Game:
    """
    Facade over the board, the players and the turn cycle.

    A turn runs: place a tile, resolve the founding or every queued merger,
    buy up to ``stock_budget`` shares, then ``go_to_next_player()``. Every
    command checks the current phase and its inputs before touching any
    state, so a rejected command changes nothing.
    """

    def __init__(self, config: Optional[GameConfig] = None, seed: Optional[int] = None):
        self.config = config or GameConfig()
        cfg = self.config
        self.players: Deque[Player] = deque()
        self.current_player: Optional[Player] = None
        self.stock_left_to_buy = cfg.stock_budget
        self.unplayed_tiles = TilePool(cfg.board_width, cfg.board_height, seed=seed)
        chains = [
            Chain(name, tier, pool_size=cfg.stock_pool_size, safe_size=cfg.safe_size)
            for name, tier in cfg.chains
        ]
        self.game_board = Board(chains, width=cfg.board_width, height=cfg.board_height)
        self.phase = Phase.ADDING_PLAYERS
        self.standings: List[Tuple[str, int]] = []

    # ---- phase helpers ----

    def _require_turn(self) -> Player:
        if self.phase is Phase.GAME_OVER:
            raise GameOver("the game has ended")
        if self.current_player is None:
            raise NoActivePlayer("no player has taken a turn yet")
        return self.current_player

    def _settle_phase(self) -> None:
        if self.game_board.found_needed() is not None:
            self.phase = Phase.AWAITING_FOUNDING
        elif self.game_board.merge_needed():
            self.phase = Phase.AWAITING_MERGE_DECISIONS
        else:
            self.phase = Phase.AWAITING_STOCK_PURCHASE

    def _require_no_pending_work(self) -> None:
        if self.phase is Phase.AWAITING_FOUNDING:
            raise TurnNotFinished("name the new chain first")
        if self.phase is Phase.AWAITING_MERGE_DECISIONS:
            raise TurnNotFinished("finish the merger first")

    def _seat_order(self) -> List[Player]:
        """Turn order starting from the current player."""
        return list(self.players)

    # ---- queries ----

    def get_player_names(self) -> List[str]:
        return [p.name for p in self.players]

    def get_player_balances(self) -> List[int]:
        return [p.balance for p in self.players]

    def get_current_player_balance(self) -> int:
        return self._require_turn().balance

    def get_player_stock_profiles(self) -> List[Dict[str, int]]:
        return [p.holdings() for p in self.players]

    def get_current_player_tiles(self) -> List[str]:
        if self.current_player is None:
            return []
        return self.current_player.tile_names()

    def get_played_tiles(self) -> List[Tile]:
        return list(self.game_board.played_tiles)

    def get_unfounded_chains(self) -> List[str]:
        return [c.name for c in self.game_board.unfounded_chains]

    def get_founded_chains(self) -> List[Chain]:
        return list(self.game_board.founded_chains)

    def get_available_stocks(self) -> List[Tuple[str, int]]:
        """(chain name, price) for every founded chain, in buy-index order."""
        return [(c.name, c.stock_price) for c in self.game_board.founded_chains]

    def get_number_of_stock_left_to_buy(self) -> int:
        return self.stock_left_to_buy

    def found_needed(self) -> Optional[Founder]:
        return self.game_board.found_needed()

    def merge_needed(self) -> bool:
        return self.game_board.merge_needed()

    def get_current_merger(self) -> Merger:
        merger = self.game_board.current_merger
        if merger is None:
            raise NoPendingMerger("no merger is pending")
        return merger

    def get_merging_player_name(self) -> Optional[str]:
        merger = self.get_current_merger()
        if not merger.more_players_to_handle():
            return None
        return merger.get_player_name()

    def get_merging_player_stock_amount(self) -> int:
        return self.get_current_merger().get_player_stock_count()

    def get_merging_stock_price(self) -> int:
        return self.get_current_merger().get_stock_price()

    def _hand_tile(self, tile_index: int) -> Tile:
        player = self._require_turn()
        if not 0 <= tile_index < len(player.tiles):
            raise InvalidPlacement(f"no tile at hand index {tile_index}")
        return player.tiles[tile_index]

    def move_is_legal(self, tile_index: int) -> bool:
        return self.game_board.move_is_legal(self._hand_tile(tile_index))

    def has_playable_tile(self) -> bool:
        player = self._require_turn()
        return any(self.game_board.move_is_legal(t) for t in player.tiles)

    def _founded_chain(self, chain_index: int) -> Chain:
        founded = self.game_board.founded_chains
        if not 0 <= chain_index < len(founded):
            raise UnknownChainName(f"no founded chain at index {chain_index}")
        return founded[chain_index]

    def player_can_buy_stock(self, chain_index: int) -> bool:
        if self.phase is not Phase.AWAITING_STOCK_PURCHASE or self.current_player is None:
            return False
        founded = self.game_board.founded_chains
        if not 0 <= chain_index < len(founded):
            return False
        chain = founded[chain_index]
        return (
            self.stock_left_to_buy > 0
            and chain.unsold > 0
            and self.current_player.balance >= chain.stock_price
        )

    @property
    def end_condition_met(self) -> bool:
        return end_condition_met(self.game_board.founded_chains, self.config.end_size)

    @property
    def winner(self) -> Optional[str]:
        return self.standings[0][0] if self.standings else None

    # ---- commands ----

    def add_player(self, name: str) -> Player:
        if self.phase is not Phase.ADDING_PLAYERS:
            raise GameAlreadyStarted("players can only join before the first turn")
        player = Player(
            name,
            balance=self.config.starting_balance,
            tiles=self.unplayed_tiles.draw_tiles(self.config.hand_size),
        )
        self.players.append(player)
        logger.info("%s joins with %s", name, player.tile_names())
        return player

    def go_to_next_player(self) -> Player:
        """Starts the game on first call; afterwards ends the current turn."""
        if self.phase is Phase.GAME_OVER:
            raise GameOver("the game has ended")
        if not self.players:
            raise NoActivePlayer("add a player first")
        if self.current_player is None:
            self.current_player = self.players[0]
        else:
            self._require_no_pending_work()
            if self.phase is Phase.AWAITING_PLACEMENT and self.has_playable_tile():
                raise InvalidPlacement(f"{self.current_player.name} must place a tile first")
            self._refill_hand(self.current_player)
            self.players.rotate(-1)
            self.current_player = self.players[0]
        self.stock_left_to_buy = self.config.stock_budget
        self.phase = Phase.AWAITING_PLACEMENT
        logger.info("turn: %s", self.current_player.name)
        return self.current_player

    def _refill_hand(self, player: Player) -> None:
        missing = self.config.hand_size - len(player.tiles)
        if missing > 0:
            player.add_tiles(self.unplayed_tiles.draw_tiles(missing))

    def place_tile(self, tile_index: int) -> None:
        """Plays the indexed tile from the current player's hand."""
        player = self._require_turn()
        if self.phase is not Phase.AWAITING_PLACEMENT:
            raise InvalidPlacement("a tile has already been placed this turn")
        tile = self._hand_tile(tile_index)
        self.game_board.place_tile(tile, seat_order=self._seat_order())
        player.remove_tile(tile)
        self._settle_phase()

    def exchange_dead_tiles(self) -> List[str]:
        """Discards the current player's dead tiles and draws replacements."""
        player = self._require_turn()
        if self.phase is not Phase.AWAITING_PLACEMENT:
            raise InvalidPlacement("dead tiles are exchanged before placing")
        dead = [t for t in player.tiles if self.game_board.is_dead(t)]
        for t in dead:
            player.remove_tile(t)
        player.add_tiles(self.unplayed_tiles.draw_tiles(len(dead)))
        if dead:
            logger.info("%s exchanged dead tiles %s", player.name, [t.name for t in dead])
        return [t.name for t in dead]

    def found_chain(self, chain: str) -> Chain:
        player = self._require_turn()
        if self.phase is not Phase.AWAITING_FOUNDING:
            raise NoPendingFounder("no founding is pending")
        founded = self.game_board.found_chain(chain, player)
        self._settle_phase()
        return founded

    def _require_merger(self) -> Merger:
        self._require_turn()
        if self.phase is not Phase.AWAITING_MERGE_DECISIONS:
            raise NoPendingMerger("no merger is pending")
        return self.get_current_merger()

    def pay_merger_bonus(self) -> List[Tuple[str, int]]:
        payouts = self._require_merger().give_shareholder_bonus()
        return [(p.name, amount) for p, amount in payouts]

    def sell_merger_stock(self) -> int:
        return self._require_merger().sell_stock()

    def trade_merger_stock(self) -> None:
        self._require_merger().trade_stock()

    def next_merger_player(self) -> None:
        self._require_merger().go_to_next_player()

    def finalize_merger(self) -> None:
        self._require_merger().merge_chains()
        self._settle_phase()

    def buy_stock(self, chain_index: int) -> None:
        player = self._require_turn()
        self._require_no_pending_work()
        if self.phase is not Phase.AWAITING_STOCK_PURCHASE:
            raise StockUnavailable("stock can only be bought after placing a tile")
        chain = self._founded_chain(chain_index)
        if self.stock_left_to_buy <= 0:
            raise StockUnavailable("no stock purchases left this turn")
        chain.sell_to(player)
        self.stock_left_to_buy -= 1

    def end_game(self) -> List[Tuple[str, int]]:
        """Final scoring. No further commands are accepted afterwards."""
        if self.phase is Phase.GAME_OVER:
            raise GameOver("the game has already ended")
        self._require_no_pending_work()
        self.standings = final_scoring(list(self.players), self.game_board.founded_chains)
        self.phase = Phase.GAME_OVER
        logger.info("game over: %s", self.standings)
        return self.standings
