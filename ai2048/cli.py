# -*- coding: utf-8 -*-
"""
Command line entry point: play random 2048 games.
"""
import logging
from argparse import ArgumentParser, Namespace
from collections import Counter

from numpy.random import Generator, default_rng
from tqdm import trange

from ai2048.config import GameConfig
from ai2048.core.errors import GameError
from ai2048.core.gamemove import legal_directions
from ai2048.envs import TwentyFortyEight

# ##>: Module logger.
_logger = logging.getLogger(__name__)

# ##>: Levels accepted by --log-level.
LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


def play_game(env: TwentyFortyEight, rng: Generator, max_moves: int | None = None, verbose: bool = False) -> int:
    """
    Play one game with uniformly random legal slides.

    Parameters
    ----------
    env : TwentyFortyEight
        The game session, already reset.
    rng : Generator
        Random generator picking the slides.
    max_moves : int, optional
        Stop after that many slides (default is to play until no slide is left).
    verbose : bool, optional
        Print the board after every slide (default is False).

    Returns
    -------
    int
        The final score.
    """
    done = env.is_finished
    while not done and (max_moves is None or env.moves < max_moves):
        directions = legal_directions(env.board)
        direction = directions[rng.integers(len(directions))]
        _, reward, done = env.step(direction)

        if verbose:
            print(f'Next Action: "{direction.value}"\n\nReward: {reward}')
            env.render()
    return env.score


def play(args: Namespace) -> int:
    config = GameConfig(size=args.size, seed=args.seed, max_moves=args.max_moves)
    env = TwentyFortyEight(config)

    if not args.quiet:
        print('New game:')
        env.render()
        print('Start ...')

    score = play_game(env, default_rng(args.seed), max_moves=config.max_moves, verbose=not args.quiet)
    print(f'\nTotal Moves: {env.moves}')
    print(f'Score: {score}, max tile: {env.board.max_tile()}')
    return 0


def simulate(args: Namespace) -> int:
    config = GameConfig(size=args.size, seed=args.seed)
    env = TwentyFortyEight(config)
    rng = default_rng(args.seed)
    max_tiles = []

    with trange(args.games) as period:
        for num in period:
            env.reset()
            play_game(env, rng)

            # ##: Log.
            period.set_description(f'Game: {num + 1}')
            period.set_postfix(score=env.score, max=env.board.max_tile())
            max_tiles.append(env.board.max_tile())

    frequency = dict(sorted(Counter(max_tiles).items()))
    print(f'Max tile frequency over {args.games} games: {frequency}')
    return 0


def build_parser() -> ArgumentParser:
    # ##>: Options shared by every sub-command.
    common = ArgumentParser(add_help=False)
    common.add_argument(
        '--log-level', type=str.upper, choices=LOG_LEVELS, default='WARNING', help='logging level (default: WARNING)'
    )

    parser = ArgumentParser(prog='ai2048', description='Play 2048 games with random slides.')
    commands = parser.add_subparsers(dest='command', required=True)

    play_parser = commands.add_parser('play', parents=[common], help='play a single game and print every board')
    play_parser.add_argument('--size', type=int, default=4)
    play_parser.add_argument('--seed', type=int, default=None)
    play_parser.add_argument('--max-moves', type=int, default=None)
    play_parser.add_argument('--quiet', action='store_true', help='only print the final result')
    play_parser.set_defaults(handler=play)

    simulate_parser = commands.add_parser(
        'simulate', parents=[common], help='play many games and report the max tiles reached'
    )
    simulate_parser.add_argument('--games', type=int, default=10)
    simulate_parser.add_argument('--size', type=int, default=4)
    simulate_parser.add_argument('--seed', type=int, default=None)
    simulate_parser.set_defaults(handler=simulate)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    try:
        return args.handler(args)
    except (GameError, ValueError) as error:
        _logger.error('%s failed: %s', args.command, error)
        return 1


if __name__ == '__main__':
    raise SystemExit(main())
