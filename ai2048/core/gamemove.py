"""
Moves of the 2048 game: slide directions, the coordinate remap behind every slide, and the two kinds of turn.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ai2048.core.errors import InvalidTileError
from ai2048.core.tile import Number, from_number

if TYPE_CHECKING:
    from ai2048.core.gameboard import Board

# ##: Action indices, kept compatible with the usual 2048 environments.
ACTIONS = {'left': 0, 'up': 1, 'right': 2, 'down': 3}

# ##: Tiles that may be placed on the board.
PLACEABLE_VALUES = (2, 4)


class SlideDirection(Enum):
    """The four directions a board can be slid in."""

    UP = 'up'
    DOWN = 'down'
    LEFT = 'left'
    RIGHT = 'right'

    @property
    def action(self) -> int:
        return ACTIONS[self.value]

    @classmethod
    def from_action(cls, action: int) -> SlideDirection:
        """
        Get the direction of an action index.

        Parameters
        ----------
        action : int
            The action index (0: left, 1: up, 2: right, 3: down).

        Returns
        -------
        SlideDirection
            The matching direction.

        Raises
        ------
        ValueError
            If the action index is unknown.
        """
        for name, index in ACTIONS.items():
            if index == action:
                return cls(name)
        raise ValueError(f'unknown action {action!r}, expected one of {sorted(ACTIONS.values())}')


def remap(direction: SlideDirection, width: int, i: int, j: int) -> tuple[int, int]:
    """
    Translate direction-relative coordinates into board coordinates.

    In the relative frame every slide is a slide to the left: `i` picks the lane and `j` walks along it, starting
    from the edge tiles slide towards. UP and DOWN transpose the axes, RIGHT and DOWN reflect the lane.

    Parameters
    ----------
    direction : SlideDirection
        The slide direction defining the frame.
    width : int
        The board width.
    i : int
        Lane index.
    j : int
        Position along the lane.

    Returns
    -------
    tuple[int, int]
        The (row, col) position on the board.
    """
    if direction is SlideDirection.LEFT:
        return i, j
    if direction is SlideDirection.RIGHT:
        return i, width - 1 - j
    if direction is SlideDirection.UP:
        return j, i
    return width - 1 - j, i


def placeable_tile(tile: Number | int) -> Number:
    """Coerce a placement tile and check it is a 2 or a 4."""
    if not isinstance(tile, Number):
        tile = from_number(tile)
    if not isinstance(tile, Number) or tile.value not in PLACEABLE_VALUES:
        raise InvalidTileError(f'placed tile must be a 2 or a 4, got {tile!r}')
    return tile


@dataclass(frozen=True)
class Slide:
    """Slide every tile of the board in one direction."""

    direction: SlideDirection


@dataclass(frozen=True)
class PlaceTile:
    """
    Place a new tile on an empty cell.

    Parameters
    ----------
    row : int
        Row of the target cell.
    col : int
        Column of the target cell.
    tile : Number | int
        The tile to place, a 2 or a 4.

    Raises
    ------
    InvalidTileError
        If the tile is not a 2 or a 4.
    """

    row: int
    col: int
    tile: Number

    def __post_init__(self):
        # ##>: Frozen dataclass, so the coerced tile is written through object.__setattr__.
        object.__setattr__(self, 'tile', placeable_tile(self.tile))


Move = Slide | PlaceTile


def legal_directions(board: Board) -> list[SlideDirection]:
    """
    List the directions the board can be slid in.

    Parameters
    ----------
    board : Board
        The board to check.

    Returns
    -------
    list[SlideDirection]
        Directions in which at least one tile moves or merges, in declaration order.
    """
    return [direction for direction in SlideDirection if board.can_slide(direction)]


def illegal_directions(board: Board) -> list[SlideDirection]:
    """
    List the directions in which a slide would change nothing.

    Parameters
    ----------
    board : Board
        The board to check.

    Returns
    -------
    list[SlideDirection]
        Directions rejected by `Board.slide`, in declaration order.
    """
    return [direction for direction in SlideDirection if not board.can_slide(direction)]
