"""
Errors raised by the 2048 game-state engine.

Every failure is local and synchronous: the offending call raises and the board it was called on is left
untouched.
"""


class GameError(Exception):
    """Base class for every error raised by the game engine."""


class InvalidTileError(GameError, ValueError):
    """A tile value is negative, zero where a number was required, or not a power of two."""


class InvalidMergeError(GameError, ValueError):
    """Two tiles that are not equal were merged."""


class ShapeMismatchError(GameError, ValueError):
    """A grid is not square, or a flat sequence does not have a perfect square length."""


class OccupiedCellError(GameError, ValueError):
    """A tile was placed on a cell that already holds one."""


class WrongPhaseError(GameError, RuntimeError):
    """A slide was requested while a placement is expected, or the other way around."""


class NoOpError(GameError, RuntimeError):
    """A slide was requested in a direction where no tile moves or merges."""


class NoEmptyCellError(GameError, RuntimeError):
    """A random tile was requested on a full board."""
