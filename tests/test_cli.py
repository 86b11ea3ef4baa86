"""
Tests for the command line entry point.
"""

from contextlib import redirect_stderr, redirect_stdout
from io import StringIO
from unittest import TestCase, main

from numpy.random import default_rng

from ai2048.cli import build_parser, main as cli_main, play_game
from ai2048.config import GameConfig
from ai2048.envs import TwentyFortyEight


class TestPlayGame(TestCase):
    """Test the random game driver."""

    def test_plays_until_the_end(self):
        env = TwentyFortyEight(GameConfig(size=2, seed=3))
        score = play_game(env, default_rng(3))
        self.assertTrue(env.is_finished)
        self.assertEqual(score, env.score)

    def test_max_moves(self):
        env = TwentyFortyEight(GameConfig(size=4, seed=3))
        play_game(env, default_rng(3), max_moves=5)
        self.assertEqual(env.moves, 5)


class TestCommandLine(TestCase):
    """Test the sub-commands."""

    def run_cli(self, *argv: str) -> tuple[int, str]:
        output = StringIO()
        with redirect_stdout(output), redirect_stderr(StringIO()):
            status = cli_main(list(argv))
        return status, output.getvalue()

    def test_play(self):
        status, output = self.run_cli('play', '--size', '2', '--seed', '1')
        self.assertEqual(status, 0)
        self.assertIn('New game:', output)
        self.assertIn('Total Moves:', output)

    def test_play_quiet(self):
        status, output = self.run_cli('play', '--seed', '1', '--max-moves', '3', '--quiet')
        self.assertEqual(status, 0)
        self.assertNotIn('New game:', output)
        self.assertIn('Total Moves: 3', output)

    def test_simulate(self):
        status, output = self.run_cli('simulate', '--games', '3', '--size', '2', '--seed', '5')
        self.assertEqual(status, 0)
        self.assertIn('Max tile frequency over 3 games', output)

    def test_invalid_size(self):
        status, _ = self.run_cli('play', '--size', '1')
        self.assertEqual(status, 1)

    def test_log_level_after_the_command(self):
        """The logging level is read after the sub-command name, in any case."""
        args = build_parser().parse_args(['play', '--quiet', '--log-level', 'debug'])
        self.assertEqual(args.log_level, 'DEBUG')
        self.assertEqual(build_parser().parse_args(['simulate', '--log-level', 'ERROR']).log_level, 'ERROR')

        with self.assertLogs('ai2048.envs.twentyfortyeight', 'INFO') as logs:
            status, output = self.run_cli('play', '--quiet', '--seed', '1', '--size', '2', '--log-level', 'INFO')
        self.assertEqual(status, 0)
        self.assertIn('Total Moves:', output)
        self.assertTrue(any('Game over' in line for line in logs.output))

    def test_unknown_log_level(self):
        with redirect_stderr(StringIO()), self.assertRaises(SystemExit) as context:
            build_parser().parse_args(['play', '--log-level', 'LOUD'])
        self.assertEqual(context.exception.code, 2)

    def test_command_required(self):
        with redirect_stderr(StringIO()), self.assertRaises(SystemExit):
            build_parser().parse_args([])


if __name__ == "__main__":
    main()
