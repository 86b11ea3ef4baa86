"""
Configuration of a 2048 game session.
"""

from dataclasses import dataclass


@dataclass
class GameConfig:
    """
    Game session configuration.

    Attributes
    ----------
    size : int
        Width of the square board.
    initial_tiles : int
        Number of random tiles placed on reset.
    strict_phase : bool
        Whether the session board enforces alternating slides and placements.
    seed : int, optional
        Seed of the session random generator.
    max_moves : int, optional
        Maximum number of slides per game, None to play until no slide is left.
    """

    size: int = 4
    initial_tiles: int = 2
    strict_phase: bool = True
    seed: int | None = None
    max_moves: int | None = None

    def __post_init__(self):
        if self.size < 2:
            raise ValueError(f'size must be >= 2, got {self.size}')
        if not 0 <= self.initial_tiles <= self.size**2:
            raise ValueError(f'initial_tiles must be in [0, {self.size ** 2}], got {self.initial_tiles}')
        if self.max_moves is not None and self.max_moves <= 0:
            raise ValueError(f'max_moves must be > 0, got {self.max_moves}')
