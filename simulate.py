"""Headless AI vs AI simulation for testing and benchmarking.

Games run on a virtual clock advanced in fixed ticks, so the chess clock,
AI thinking delay and time losses behave exactly as in the windowed game,
only much faster.

Usage:
    python simulate.py                     # Run 1 greedy vs greedy game
    python simulate.py -n 100              # Run 100 games
    python simulate.py -p1 random -p2 greedy
    python simulate.py -n 100 --verbose    # Show each game result
    python simulate.py --random-draft      # Skip the pick-by-pick draft
"""

import argparse
import logging
import random
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

from draftchess.ai import AI_TYPES
from draftchess.clock import ManualTimeSource
from draftchess.commands import cmd_random_draft
from draftchess.constants import TICK_MS, GamePhase
from draftchess.game import Game
from draftchess.match import LocalMatch

logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    """Result of a single game."""
    winner: int  # 1 or 2, 0 if unfinished
    reason: str
    actions: int
    virtual_ms: float
    duration: float  # wall-clock seconds
    p1_pieces_remaining: int
    p2_pieces_remaining: int


def run_game(p1_type: str = 'greedy', p2_type: str = 'greedy',
             seed: Optional[int] = None, random_draft: bool = False,
             max_actions: int = 2000, debug: bool = False) -> GameResult:
    """Run a single AI vs AI game.

    Args:
        p1_type: AI type for player 1 ('greedy' or 'random')
        p2_type: AI type for player 2 ('greedy' or 'random')
        seed: Random seed for reproducibility
        random_draft: Start with a random draft instead of picking
        max_actions: Accepted commands before the game is abandoned

    Returns:
        GameResult with winner, reason, action count, etc.
    """
    start_time = time.time()
    now = ManualTimeSource()

    game = Game(time_source=now, rng=random.Random(seed))
    match = LocalMatch(
        game=game,
        time_source=now,
        ai_classes={1: AI_TYPES[p1_type], 2: AI_TYPES[p2_type]},
        seed=seed,
    )

    if random_draft:
        match.submit(cmd_random_draft(1))
    match.set_ai(1, True)
    match.set_ai(2, True)

    last_count = game.action_count
    while game.phase != GamePhase.GAME_OVER and game.action_count < max_actions:
        match.update()
        if debug and game.action_count != last_count:
            logger.debug("t=%.1fs #%d %s | %s", now() / 1000, game.action_count,
                         game.phase.name, game.messages[-1] if game.messages else "")
            last_count = game.action_count
        now.advance(TICK_MS)

    duration = time.time() - start_time

    if debug:
        logger.debug("Final board:\n%s", game.board.pretty())

    return GameResult(
        winner=game.winner or 0,
        reason=game.win_reason.value if game.win_reason else "unfinished",
        actions=game.action_count,
        virtual_ms=now(),
        duration=duration,
        p1_pieces_remaining=len(game.board.get_all_pieces(1)),
        p2_pieces_remaining=len(game.board.get_all_pieces(2)),
    )


def run_simulation(n_games: int = 1, p1_type: str = 'greedy',
                   p2_type: str = 'greedy', seed: Optional[int] = None,
                   random_draft: bool = False, max_actions: int = 2000,
                   verbose: bool = False, debug: bool = False) -> Dict[str, Any]:
    """Run multiple games and collect statistics.

    Returns:
        Dictionary with statistics
    """
    p1_wins = 0
    p2_wins = 0
    unfinished = 0
    time_wins = 0
    total_actions = 0
    total_duration = 0.0

    mode_str = "random draft" if random_draft else "AI draft"
    print(f"Running {n_games} game(s): {p1_type} (P1) vs {p2_type} (P2) [{mode_str}]")
    print("-" * 50)

    for i in range(n_games):
        game_seed = None if seed is None else seed + i
        result = run_game(p1_type, p2_type, seed=game_seed, random_draft=random_draft,
                          max_actions=max_actions, debug=debug)

        if result.winner == 1:
            p1_wins += 1
        elif result.winner == 2:
            p2_wins += 1
        else:
            unfinished += 1
        if result.reason == "time expiration":
            time_wins += 1

        total_actions += result.actions
        total_duration += result.duration

        if verbose:
            winner_str = f"P{result.winner}" if result.winner else "Unfinished"
            print(f"Game {i+1}: {winner_str} by {result.reason} after {result.actions} actions "
                  f"({result.virtual_ms / 1000:.1f}s game time, {result.duration:.3f}s) - "
                  f"Pieces: P1={result.p1_pieces_remaining}, P2={result.p2_pieces_remaining}")

    stats = {
        'games': n_games,
        'p1_type': p1_type,
        'p2_type': p2_type,
        'p1_wins': p1_wins,
        'p2_wins': p2_wins,
        'unfinished': unfinished,
        'time_wins': time_wins,
        'p1_win_rate': p1_wins / n_games * 100,
        'p2_win_rate': p2_wins / n_games * 100,
        'avg_actions': total_actions / n_games,
        'avg_duration': total_duration / n_games,
        'total_duration': total_duration,
    }

    print("-" * 50)
    print(f"Results after {n_games} game(s):")
    print(f"  P1 ({p1_type}): {p1_wins} wins ({stats['p1_win_rate']:.1f}%)")
    print(f"  P2 ({p2_type}): {p2_wins} wins ({stats['p2_win_rate']:.1f}%)")
    print(f"  Won on time: {time_wins}")
    print(f"  Unfinished: {unfinished}")
    print(f"  Avg actions: {stats['avg_actions']:.1f}")
    print(f"  Avg duration: {stats['avg_duration']*1000:.1f}ms per game")

    return stats


def main():
    parser = argparse.ArgumentParser(description='Run AI vs AI simulations')
    parser.add_argument('-n', '--games', type=int, default=1,
                        help='Number of games to run (default: 1)')
    parser.add_argument('-p1', '--player1', type=str, default='greedy',
                        choices=sorted(AI_TYPES),
                        help='AI type for player 1 (default: greedy)')
    parser.add_argument('-p2', '--player2', type=str, default='greedy',
                        choices=sorted(AI_TYPES),
                        help='AI type for player 2 (default: greedy)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Base random seed (game i uses seed + i)')
    parser.add_argument('--random-draft', action='store_true',
                        help='Use a random draft instead of AI picks')
    parser.add_argument('--max-actions', type=int, default=2000,
                        help='Abandon a game after this many actions (default: 2000)')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Show each game result')
    parser.add_argument('-d', '--debug', action='store_true',
                        help='Show detailed debug info')

    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    run_simulation(
        n_games=args.games,
        p1_type=args.player1,
        p2_type=args.player2,
        seed=args.seed,
        random_draft=args.random_draft,
        max_actions=args.max_actions,
        verbose=args.verbose,
        debug=args.debug,
    )


if __name__ == '__main__':
    main()
