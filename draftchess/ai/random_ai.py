"""Random AI - picks random valid actions.

Baseline opponent for simulations.
"""
import random
from typing import Optional

from .base import AIPlayer, AIAction


class RandomAI(AIPlayer):
    """AI that picks a uniformly random valid action."""

    name = "Random"

    def __init__(self, game, player: int, seed: int = None):
        """Initialize random AI.

        Args:
            game: The game to act in
            player: Player number (1 or 2)
            seed: Optional random seed for reproducibility
        """
        super().__init__(game, player)
        self.rng = random.Random(seed)

    def choose_action(self) -> Optional[AIAction]:
        actions = self.get_valid_actions()
        if not actions:
            return None
        return self.rng.choice(actions)
