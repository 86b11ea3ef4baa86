"""
Immutable 2048 game state.

A `Board` is a square grid of tiles plus a turn phase. It is never modified: sliding and placing tiles return new
boards, so any board can be kept as a snapshot, shared between threads, or used as a dictionary key.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from enum import Enum
from math import isqrt

from numpy import array, int64, ndarray
from numpy.random import PCG64DXSM, Generator, default_rng

from ai2048.core.errors import NoEmptyCellError, NoOpError, OccupiedCellError, ShapeMismatchError, WrongPhaseError
from ai2048.core.gamemove import Move, PlaceTile, Slide, SlideDirection, placeable_tile, remap
from ai2048.core.tile import EMPTY, Empty, Number, Tile, from_number, merge

# ##>: Tile spawn probabilities for random placements (90% for 2, 10% for 4).
TILE_SPAWN_PROBS: dict[int, float] = {2: 0.9, 4: 0.1}

# ##>: A random placement is a 4 when a draw in [0, 10) comes out as zero.
_FOUR_ODDS = 10

# ##>: Module-level generator, used when the caller gives neither a generator nor a seed.
_GENERATOR = default_rng(PCG64DXSM())


class TurnPhase(Enum):
    """
    Which kind of move the board expects next.

    ANY puts no constraint on the next move. SLIDE and PLACE alternate: each accepted move flips one into the other.
    """

    ANY = 'any'
    SLIDE = 'slide'
    PLACE = 'place'

    @classmethod
    def from_flag(cls, next_turn_is_slide: bool | None) -> TurnPhase:
        """Build the phase from an optional "next turn is a slide" flag."""
        if next_turn_is_slide is None:
            return cls.ANY
        return cls.SLIDE if next_turn_is_slide else cls.PLACE

    @property
    def next_turn_is_slide(self) -> bool | None:
        if self is TurnPhase.ANY:
            return None
        return self is TurnPhase.SLIDE

    def flipped(self) -> TurnPhase:
        """Phase after one accepted move."""
        if self is TurnPhase.SLIDE:
            return TurnPhase.PLACE
        if self is TurnPhase.PLACE:
            return TurnPhase.SLIDE
        return TurnPhase.ANY


def _generator(rng: Generator | None, seed: int | None) -> Generator:
    if rng is not None:
        return rng
    return default_rng(seed) if seed is not None else _GENERATOR


@dataclass(frozen=True, repr=False)
class Board:
    """
    A square grid of tiles and the phase of the next turn.

    Parameters
    ----------
    tiles : Sequence[Sequence[Tile]]
        Rows of the grid. Raw integers are turned into tiles.
    phase : TurnPhase, optional
        The expected kind of next move (default is `TurnPhase.ANY`).

    Raises
    ------
    ShapeMismatchError
        If the grid is not square.
    InvalidTileError
        If a raw integer is not a valid cell value.
    """

    tiles: tuple[tuple[Tile, ...], ...]
    phase: TurnPhase = TurnPhase.ANY

    def __post_init__(self):
        rows = tuple(
            tuple(tile if isinstance(tile, (Empty, Number)) else from_number(tile) for tile in row)
            for row in self.tiles
        )
        width = len(rows)
        widths = [len(row) for row in rows]
        if any(row_width != width for row_width in widths):
            raise ShapeMismatchError(f'outer width {width} does not match inner widths {widths}')

        object.__setattr__(self, 'tiles', rows)
        object.__setattr__(self, 'phase', TurnPhase(self.phase))

    # ##: Constructors.

    @classmethod
    def empty(cls, width: int, phase: TurnPhase = TurnPhase.ANY) -> Board:
        """
        Build a board with no tiles.

        Parameters
        ----------
        width : int
            The side length of the grid.
        phase : TurnPhase, optional
            The expected kind of next move (default is `TurnPhase.ANY`).

        Returns
        -------
        Board
            A `width` x `width` board of empty cells.
        """
        if width < 0:
            raise ShapeMismatchError(f'width must be >= 0, got {width}')
        return cls(tiles=((EMPTY,) * width,) * width, phase=phase)

    @classmethod
    def from_grid(cls, grid: Iterable[Sequence[int]], phase: TurnPhase = TurnPhase.ANY) -> Board:
        """
        Build a board from rows of raw cell values.

        Parameters
        ----------
        grid : Iterable[Sequence[int]]
            Rows of cell values, 0 for an empty cell.
        phase : TurnPhase, optional
            The expected kind of next move (default is `TurnPhase.ANY`).

        Returns
        -------
        Board
            The board holding those values.

        Raises
        ------
        ShapeMismatchError
            If the number of rows differs from the length of any row.
        InvalidTileError
            If a value is negative, one, or not a power of two.
        """
        return cls(tiles=tuple(tuple(from_number(value) for value in row) for row in grid), phase=phase)

    @classmethod
    def from_flat(cls, numbers: Iterable[int], phase: TurnPhase = TurnPhase.ANY) -> Board:
        """
        Build a board from a flat sequence of raw cell values, filled left to right and then top to bottom.

        Parameters
        ----------
        numbers : Iterable[int]
            Cell values, 0 for an empty cell. The count must be a perfect square.
        phase : TurnPhase, optional
            The expected kind of next move (default is `TurnPhase.ANY`).

        Returns
        -------
        Board
            The board holding those values.

        Raises
        ------
        ShapeMismatchError
            If the number of values is not a perfect square.
        """
        numbers = list(numbers)
        width = isqrt(len(numbers))
        if width * width != len(numbers):
            raise ShapeMismatchError(f"{len(numbers)} elements isn't square")
        return cls.from_grid((numbers[row * width : (row + 1) * width] for row in range(width)), phase=phase)

    @classmethod
    def from_array(cls, board: ndarray, phase: TurnPhase = TurnPhase.ANY) -> Board:
        """Build a board from a 2D numpy array of raw cell values."""
        if board.ndim != 2:
            raise ShapeMismatchError(f'expected a 2D array, got shape {board.shape}')
        return cls.from_grid(board.tolist(), phase=phase)

    def with_phase(self, phase: TurnPhase) -> Board:
        """Copy of this board expecting another kind of move."""
        return replace(self, phase=phase)

    # ##: Accessors.

    @property
    def width(self) -> int:
        return len(self.tiles)

    @property
    def next_turn_is_slide(self) -> bool | None:
        return self.phase.next_turn_is_slide

    def at(self, row: int, col: int) -> Tile:
        """
        Get the tile at a board position.

        Raises
        ------
        IndexError
            If the position is outside the grid.
        """
        if not (0 <= row < self.width and 0 <= col < self.width):
            raise IndexError(f'({row}, {col}) is outside a board of width {self.width}')
        return self.tiles[row][col]

    def __getitem__(self, position: tuple[int, int]) -> Tile:
        row, col = position
        return self.at(row, col)

    def at_direction(self, direction: SlideDirection, i: int, j: int) -> Tile:
        """
        Get a tile through the frame of a slide direction.

        Parameters
        ----------
        direction : SlideDirection
            The slide direction defining the frame.
        i : int
            Lane index.
        j : int
            Position along the lane, 0 being the edge tiles slide towards.

        Returns
        -------
        Tile
            The tile at the remapped position.
        """
        return self.at(*remap(direction, self.width, i, j))

    def empty_cells(self) -> list[tuple[int, int]]:
        """Positions of the empty cells, in row-major order."""
        return [(row, col) for row, tiles in enumerate(self.tiles) for col, tile in enumerate(tiles) if tile == EMPTY]

    def max_tile(self) -> int:
        return max((tile.value for row in self.tiles for tile in row), default=0)

    def tile_sum(self) -> int:
        return sum(tile.value for row in self.tiles for tile in row)

    def to_grid(self) -> list[list[int]]:
        """Rows of raw cell values, 0 for an empty cell."""
        return [[tile.value for tile in row] for row in self.tiles]

    def to_array(self) -> ndarray:
        """The board as a 2D numpy array of raw cell values."""
        return array(self.to_grid(), dtype=int64).reshape(self.width, self.width)

    # ##: Slides.

    def can_slide(self, direction: SlideDirection) -> bool:
        """
        Check if a slide in a direction would move or merge at least one tile.

        Parameters
        ----------
        direction : SlideDirection
            The direction to check.

        Returns
        -------
        bool
            True if some tile has an empty or an equal tile right in front of it.
        """
        for i in range(self.width):
            for j in range(1, self.width):
                previous = self.at_direction(direction, i, j - 1)
                square = self.at_direction(direction, i, j)

                # ##>: Tiles slide into empty cells and into tiles equal to themselves.
                if square != EMPTY and (previous == EMPTY or previous == square):
                    return True
        return False

    def can_slide_at_all(self) -> bool:
        return any(self.can_slide(direction) for direction in SlideDirection)

    def slide(self, direction: SlideDirection) -> Board:
        """
        Slide every tile in a direction, merging equal neighbours.

        Parameters
        ----------
        direction : SlideDirection
            The direction to slide in.

        Returns
        -------
        Board
            The new board, with its phase flipped.

        Raises
        ------
        WrongPhaseError
            If the board expects a placement.
        NoOpError
            If no tile would move or merge.

        Notes
        -----
        - Tiles are compacted towards the edge of the direction.
        - A tile merges at most once per slide: three equal tiles in a lane give a merged tile followed by
          the third one, untouched.
        """
        board, _ = self.slide_with_score(direction)
        return board

    def slide_with_score(self, direction: SlideDirection) -> tuple[Board, int]:
        """
        Slide every tile in a direction and report the merge score.

        Same as `slide`, also returning the sum of the values of every tile created by a merge.
        """
        if self.phase is TurnPhase.PLACE:
            raise WrongPhaseError(f'next turn must be a placement, cannot slide {direction.value}')
        if not self.can_slide(direction):
            raise NoOpError(f'the board cannot slide {direction.value}')

        width = self.width
        new_tiles = [[EMPTY] * width for _ in range(width)]
        score = 0

        def put(i: int, j: int, tile: Tile):
            row, col = remap(direction, width, i, j)
            new_tiles[row][col] = tile

        # ##: Every lane is handled as a slide to the left.
        for i in range(width):
            j = 0
            new_j = 0

            while True:
                # ##>: j is the first tile left to place.
                while j < width and self.at_direction(direction, i, j) == EMPTY:
                    j += 1
                if j == width:
                    break

                # ##>: k is the next tile after j.
                k = j + 1
                while k < width and self.at_direction(direction, i, k) == EMPTY:
                    k += 1

                first = self.at_direction(direction, i, j)
                if k == width:
                    put(i, new_j, first)
                    break

                second = self.at_direction(direction, i, k)
                if first == second:
                    merged = merge(first, second)
                    score += merged.value
                    put(i, new_j, merged)
                    j = k + 1
                else:
                    put(i, new_j, first)
                    j = k
                new_j += 1

        board = Board(tiles=tuple(tuple(row) for row in new_tiles), phase=self.phase.flipped())
        return board, score

    # ##: Placements.

    def place_tile(self, row: int, col: int, tile: Number | int) -> Board:
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

        Returns
        -------
        Board
            The new board, with its phase flipped.

        Raises
        ------
        WrongPhaseError
            If the board expects a slide.
        OccupiedCellError
            If the cell already holds a tile.
        InvalidTileError
            If the tile is not a 2 or a 4.
        """
        if self.phase is TurnPhase.SLIDE:
            raise WrongPhaseError(f'next turn must be a slide, cannot place at ({row}, {col})')
        if self.at(row, col) != EMPTY:
            raise OccupiedCellError(f'({row}, {col}) already holds {self.at(row, col)}')
        tile = placeable_tile(tile)

        # ##>: Only the touched row is rebuilt; the other rows are shared with this board.
        rows = list(self.tiles)
        cells = list(rows[row])
        cells[col] = tile
        rows[row] = tuple(cells)
        return Board(tiles=tuple(rows), phase=self.phase.flipped())

    def place_random_tile(self, rng: Generator | None = None, seed: int | None = None) -> Board:
        """
        Place a 2 or a 4 on an empty cell chosen uniformly at random.

        Parameters
        ----------
        rng : Generator, optional
            Random generator to draw from. Not thread-safe: do not share it between concurrent calls.
        seed : int, optional
            Seed of a fresh generator, used when `rng` is not given.

        Returns
        -------
        Board
            The new board, with its phase flipped.

        Raises
        ------
        WrongPhaseError
            If the board expects a slide.
        NoEmptyCellError
            If the board is full.

        Notes
        -----
        - The cell is picked by reservoir sampling over a single row-major pass: the k-th empty cell seen replaces
          the current choice with probability 1/k.
        - The new tile is a 4 with probability 1/10, a 2 otherwise.
        """
        if self.phase is TurnPhase.SLIDE:
            raise WrongPhaseError('next turn must be a slide, cannot place a random tile')
        rng = _generator(rng, seed)

        chosen = None
        seen = 0
        for row, tiles in enumerate(self.tiles):
            for col, tile in enumerate(tiles):
                if tile == EMPTY:
                    seen += 1
                    if rng.integers(seen) == 0:
                        chosen = (row, col)

        if chosen is None:
            raise NoEmptyCellError(f'no empty cell left on a board of width {self.width}')

        value = 4 if rng.integers(_FOUR_ODDS) == 0 else 2
        return self.place_tile(chosen[0], chosen[1], value)

    def apply_move(self, move: Move) -> Board:
        return apply_move(self, move)

    # ##: Rendering.

    def __str__(self) -> str:
        lines = [' \t'.join(str(tile) for tile in row) for row in self.tiles]
        lines.append(f'phase={self.phase.value}')
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return f'Board(width={self.width}, tiles={self.to_grid()}, phase={self.phase})'


def apply_move(board: Board, move: Move) -> Board:
    """
    Apply a move to a board.

    Parameters
    ----------
    board : Board
        The board to play on.
    move : Move
        A `Slide` or a `PlaceTile`.

    Returns
    -------
    Board
        The new board.

    Raises
    ------
    GameError
        Whatever the slide or the placement raises.
    TypeError
        If `move` is not a move.
    """
    if isinstance(move, Slide):
        return board.slide(move.direction)
    if isinstance(move, PlaceTile):
        return board.place_tile(move.row, move.col, move.tile)
    raise TypeError(f'expected a Slide or a PlaceTile, got {move!r}')
