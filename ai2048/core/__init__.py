# -*- coding: utf-8 -*-
"""
This module provides the immutable game state of a 2048-like game.

It includes tiles and their merge rule, slide directions and moves, and the `Board` with its slide and placement
transitions, plus the errors those transitions raise.
"""

from .errors import (
    GameError,
    InvalidMergeError,
    InvalidTileError,
    NoEmptyCellError,
    NoOpError,
    OccupiedCellError,
    ShapeMismatchError,
    WrongPhaseError,
)
from .gameboard import TILE_SPAWN_PROBS, Board, TurnPhase, apply_move
from .gamemove import ACTIONS, Move, PlaceTile, Slide, SlideDirection, illegal_directions, legal_directions, remap
from .tile import EMPTY, Empty, Number, Tile, from_number, merge

__all__ = [
    "ACTIONS",
    "TILE_SPAWN_PROBS",
    "EMPTY",
    "Empty",
    "Number",
    "Tile",
    "from_number",
    "merge",
    "SlideDirection",
    "Slide",
    "PlaceTile",
    "Move",
    "remap",
    "legal_directions",
    "illegal_directions",
    "Board",
    "TurnPhase",
    "apply_move",
    "GameError",
    "InvalidTileError",
    "InvalidMergeError",
    "ShapeMismatchError",
    "WrongPhaseError",
    "NoOpError",
    "OccupiedCellError",
    "NoEmptyCellError",
]
