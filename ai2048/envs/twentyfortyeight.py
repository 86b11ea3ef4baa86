"""2048 game session on top of the immutable board."""

import logging

from numpy.random import default_rng

from ai2048.config import GameConfig
from ai2048.core.errors import NoOpError
from ai2048.core.gameboard import Board, TurnPhase
from ai2048.core.gamemove import ACTIONS, SlideDirection

# ##>: Module logger.
_logger = logging.getLogger(__name__)


class TwentyFortyEight:
    """
    2048 game session.

    This class holds the current board of a game and applies the two halves of a turn: the player's slide and the
    random placement of a new tile.
    """

    # ##: All Actions.
    ACTIONS = ACTIONS

    def __init__(self, config: GameConfig | None = None):
        """
        Initialize the game session.

        Parameters
        ----------
        config : GameConfig, optional
            The session configuration (default is a 4x4 board with two initial tiles).
        """
        self.config = config if config is not None else GameConfig()
        self.size = self.config.size
        self._rng = default_rng(self.config.seed)
        self._board = Board.empty(self.size)
        self._score = 0
        self._moves = 0

        self.reset()

    @property
    def board(self) -> Board:
        return self._board

    @property
    def score(self) -> int:
        """Sum of the values of every tile created by a merge since the last reset."""
        return self._score

    @property
    def moves(self) -> int:
        return self._moves

    @property
    def is_finished(self) -> bool:
        """
        Check if the game is finished.

        Returns
        -------
        bool
            True if no slide is possible anymore, False otherwise.
        """
        return not self._board.can_slide_at_all()

    def reset(self, seed: int | None = None) -> Board:
        """
        Start a new game on an empty board with the configured number of random tiles.

        Parameters
        ----------
        seed : int, optional
            Reseed the session random generator.

        Returns
        -------
        Board
            The new board.

        Notes
        -----
        With a strict phase the board expects a slide once the initial tiles are placed.
        """
        if seed is not None:
            self._rng = default_rng(seed)

        strict = self.config.strict_phase
        board = Board.empty(self.size)
        for _ in range(self.config.initial_tiles):
            board = board.place_random_tile(rng=self._rng)
        board = board.with_phase(TurnPhase.SLIDE if strict else TurnPhase.ANY)

        self._board = board
        self._score = 0
        self._moves = 0
        _logger.info('New %dx%d game with %d tiles', self.size, self.size, self.config.initial_tiles)
        return self._board

    def step(self, direction: SlideDirection | int) -> tuple[Board, int, bool]:
        """
        Slide the board and place a random tile.

        Parameters
        ----------
        direction : SlideDirection | int
            The slide direction, or its action index (0: left, 1: up, 2: right, 3: down).

        Returns
        -------
        tuple[Board, int, bool]
            A tuple containing:
            - The updated board
            - The reward of this slide, the sum of merged values
            - Whether the game has finished after this step

        Notes
        -----
        - A slide that would change nothing is not played: the board is kept and the reward is 0.
        - Any other error of the board propagates.
        """
        if not isinstance(direction, SlideDirection):
            direction = SlideDirection.from_action(direction)

        try:
            board, reward = self._board.slide_with_score(direction)
        except NoOpError:
            _logger.debug('Slide %s changes nothing, ignored', direction.value)
            return self._board, 0, self.is_finished

        # ##>: A slide always frees or leaves at least one cell.
        board = board.place_random_tile(rng=self._rng)
        self._board = board
        self._score += reward
        self._moves += 1
        _logger.debug('Slide %s, reward=%d, score=%d', direction.value, reward, self._score)

        done = self.is_finished
        if done:
            _logger.info('Game over after %d moves, score=%d, max tile=%d', self._moves, self._score, board.max_tile())
        return self._board, reward, done

    def render(self) -> None:
        """
        Render the game board. This method prints the current state of the game board to the console.
        """
        print(self._board)
