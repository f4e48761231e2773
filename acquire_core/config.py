from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from typing import List, Tuple

# (minimum chain size, tier-0 price); sizes below the first bracket have no price
PRICE_BRACKETS: Tuple[Tuple[int, int], ...] = (
    (41, 1000),
    (31, 900),
    (21, 800),
    (11, 700),
    (6, 600),
    (5, 500),
    (4, 400),
    (3, 300),
    (2, 200),
)

TIER_STEP = 100
MAJORITY_MULTIPLIER = 10
MINORITY_MULTIPLIER = 5

DEFAULT_CHAINS: Tuple[Tuple[str, int], ...] = (
    ("Worldwide", 0),
    ("Sackson", 0),
    ("Festival", 1),
    ("Imperial", 1),
    ("American", 1),
    ("Continental", 2),
    ("Tower", 2),
)


@dataclass
class GameConfig:
    """Tunable rule constants. Defaults follow the published board game."""
    board_width: int = 12
    board_height: int = 9
    hand_size: int = 6
    starting_balance: int = 6000
    stock_pool_size: int = 25
    safe_size: int = 11
    end_size: int = 41
    stock_budget: int = 3
    chains: List[Tuple[str, int]] = field(default_factory=lambda: list(DEFAULT_CHAINS))

    @classmethod
    def from_env(cls, prefix: str = "ACQUIRE_") -> "GameConfig":
        """Builds a config, overriding integer fields from e.g. ACQUIRE_STARTING_BALANCE."""
        cfg = cls()
        for f in fields(cls):
            if f.name == "chains":
                continue
            raw = os.getenv(prefix + f.name.upper())
            if raw is None or raw.strip() == "":
                continue
            try:
                setattr(cfg, f.name, int(raw))
            except ValueError:
                raise ValueError(f"{prefix}{f.name.upper()} must be an integer, got {raw!r}")
        return cfg


def stock_price(size: int, tier: int) -> int:
    """Price of one share for a chain of the given size and tier (0 when unfounded)."""
    for min_size, price in PRICE_BRACKETS:
        if size >= min_size:
            return price + tier * TIER_STEP
    return 0


def env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")
