# -*- coding: utf-8 -*-
"""
Game-state engine of the 2048 sliding-tile puzzle.

Boards are immutable: every slide or tile placement returns a new `Board`.
"""

from .config import GameConfig
from .core import (
    EMPTY,
    Board,
    GameError,
    Number,
    PlaceTile,
    Slide,
    SlideDirection,
    TurnPhase,
    apply_move,
    from_number,
    merge,
)

__all__ = [
    "GameConfig",
    "EMPTY",
    "Number",
    "from_number",
    "merge",
    "Board",
    "TurnPhase",
    "SlideDirection",
    "Slide",
    "PlaceTile",
    "apply_move",
    "GameError",
]
