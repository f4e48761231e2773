from __future__ import annotations

# Facade module that re-exports the Acquire core.
# The Flask app and tests import from here; single-responsibility modules
# live under acquire_core/*.

try:
    from .acquire_core.board import Board, Coord, Tile  # type: ignore
    from .acquire_core.chain import Chain  # type: ignore
    from .acquire_core.config import GameConfig, stock_price  # type: ignore
    from .acquire_core.deal import TilePool  # type: ignore
    from .acquire_core.errors import (  # type: ignore
        AcquireError,
        GameAlreadyStarted,
        GameOver,
        InsufficientFunds,
        InsufficientShares,
        InvalidPlacement,
        MergerStepError,
        NoActivePlayer,
        NoPendingFounder,
        NoPendingMerger,
        StockUnavailable,
        TurnNotFinished,
        UnknownChainName,
    )
    from .acquire_core.founder import Founder  # type: ignore
    from .acquire_core.game import Game, Phase  # type: ignore
    from .acquire_core.merger import Merger, MergerPhase, shareholder_bonuses  # type: ignore
    from .acquire_core.player import Player  # type: ignore
    from .acquire_core.scoring import end_condition_met, final_scoring  # type: ignore
    from .acquire_core.stock import Stock  # type: ignore
except ImportError:
    from acquire_core.board import Board, Coord, Tile  # type: ignore
    from acquire_core.chain import Chain  # type: ignore
    from acquire_core.config import GameConfig, stock_price  # type: ignore
    from acquire_core.deal import TilePool  # type: ignore
    from acquire_core.errors import (  # type: ignore
        AcquireError,
        GameAlreadyStarted,
        GameOver,
        InsufficientFunds,
        InsufficientShares,
        InvalidPlacement,
        MergerStepError,
        NoActivePlayer,
        NoPendingFounder,
        NoPendingMerger,
        StockUnavailable,
        TurnNotFinished,
        UnknownChainName,
    )
    from acquire_core.founder import Founder  # type: ignore
    from acquire_core.game import Game, Phase  # type: ignore
    from acquire_core.merger import Merger, MergerPhase, shareholder_bonuses  # type: ignore
    from acquire_core.player import Player  # type: ignore
    from acquire_core.scoring import end_condition_met, final_scoring  # type: ignore
    from acquire_core.stock import Stock  # type: ignore

__all__ = [
    "AcquireError",
    "Board",
    "Chain",
    "Coord",
    "Founder",
    "Game",
    "GameAlreadyStarted",
    "GameConfig",
    "GameOver",
    "InsufficientFunds",
    "InsufficientShares",
    "InvalidPlacement",
    "Merger",
    "MergerPhase",
    "MergerStepError",
    "NoActivePlayer",
    "NoPendingFounder",
    "NoPendingMerger",
    "Phase",
    "Player",
    "Stock",
    "StockUnavailable",
    "Tile",
    "TilePool",
    "TurnNotFinished",
    "UnknownChainName",
    "end_condition_met",
    "final_scoring",
    "shareholder_bonuses",
    "stock_price",
]
