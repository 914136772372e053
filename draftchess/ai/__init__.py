"""AI module for computer opponents.

Usage:
    from draftchess.ai import GreedyAI
    from draftchess.game import Game

    game = Game()
    ai = GreedyAI(game, player=2)

    # In game loop:
    if ai.is_my_turn():
        ai.take_turn()
"""

from .base import AIPlayer, AIAction
from .greedy_ai import GreedyAI
from .random_ai import RandomAI

AI_TYPES = {
    'greedy': GreedyAI,
    'random': RandomAI,
}

__all__ = ['AIPlayer', 'AIAction', 'GreedyAI', 'RandomAI', 'AI_TYPES']
