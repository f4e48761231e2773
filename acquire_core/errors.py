from __future__ import annotations


class AcquireError(Exception):
    """Base class for rejected game commands. State is left unchanged."""


class InvalidPlacement(AcquireError):
    pass


class NoActivePlayer(AcquireError):
    pass


class NoPendingFounder(AcquireError):
    pass


class NoPendingMerger(AcquireError):
    pass


class UnknownChainName(AcquireError):
    pass


class InsufficientShares(AcquireError):
    pass


class StockUnavailable(AcquireError):
    pass


class InsufficientFunds(AcquireError):
    pass


class MergerStepError(AcquireError):
    """A merger step was called out of order (e.g. trading before the bonus is paid)."""


class GameOver(AcquireError):
    pass


class GameAlreadyStarted(AcquireError):
    pass


class TurnNotFinished(AcquireError):
    """A founding or merger is still pending."""
