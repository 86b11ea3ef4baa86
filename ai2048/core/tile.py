"""
Tiles of the 2048 grid.

A cell holds either the `EMPTY` tile or a `Number` whose value is a power of two greater or equal to two.
Tiles are plain values: equality and hashing are structural.
"""

from dataclasses import dataclass

from ai2048.core.errors import InvalidMergeError, InvalidTileError


def is_power_of_two(value: int) -> bool:
    """
    Check whether an integer is a positive power of two.

    Parameters
    ----------
    value : int
        The integer to check.

    Returns
    -------
    bool
        True if `value` is 1, 2, 4, 8, ...

    Notes
    -----
    A power of two is a single one bit, so ``value & (value - 1)`` clears it to zero. Zero also passes that
    test, hence the positivity check.
    """
    return value > 0 and value & (value - 1) == 0


class _Ordered:
    """Tiles order by value, so `EMPTY` comes before every number."""

    def __lt__(self, other):
        if not isinstance(other, _Ordered):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other):
        if not isinstance(other, _Ordered):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other):
        if not isinstance(other, _Ordered):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other):
        if not isinstance(other, _Ordered):
            return NotImplemented
        return self.value >= other.value


@dataclass(frozen=True)
class Empty(_Ordered):
    """An empty cell."""

    @property
    def value(self) -> int:
        return 0

    def __str__(self) -> str:
        return '.'

    def __repr__(self) -> str:
        return 'EMPTY'


EMPTY = Empty()


@dataclass(frozen=True)
class Number(_Ordered):
    """
    A numbered tile.

    Parameters
    ----------
    value : int
        The tile value, a power of two greater or equal to two.

    Raises
    ------
    InvalidTileError
        If `value` is lower than two or not a power of two.
    """

    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidTileError(f'{self.value!r} is not an integer')
        if self.value < 2:
            raise InvalidTileError(f'{self.value} is not greater or equal to two')
        if not is_power_of_two(self.value):
            raise InvalidTileError(f'{self.value} is not a power of two')

    def __str__(self) -> str:
        return str(self.value)


Tile = Empty | Number


def from_number(number: int) -> Tile:
    """
    Build the tile for a raw cell value.

    Parameters
    ----------
    number : int
        Zero for an empty cell, a power of two greater or equal to two otherwise.

    Returns
    -------
    Tile
        `EMPTY` for zero, `Number(number)` otherwise.

    Raises
    ------
    InvalidTileError
        If `number` is negative, one, or not a power of two.
    """
    # ##>: numpy integers are accepted and stored as plain ints.
    if not isinstance(number, bool) and hasattr(number, '__index__'):
        number = int(number)
    if number == 0:
        return EMPTY
    return Number(number)


def merge(first: Tile, second: Tile) -> Number:
    """
    Merge two equal numbered tiles into one of twice the value.

    Parameters
    ----------
    first : Tile
        The tile merged into.
    second : Tile
        The tile merged from, must equal `first`.

    Returns
    -------
    Number
        A tile holding the sum of both values.

    Raises
    ------
    InvalidMergeError
        If the tiles differ or are empty.
    """
    if not isinstance(first, Number) or first != second:
        raise InvalidMergeError(f'cannot merge {first!r} with {second!r}')
    return Number(first.value + second.value)
