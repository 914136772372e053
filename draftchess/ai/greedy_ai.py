"""Greedy AI - single-ply, capture-first policy.

Draft: random un-picked type. Captain: first drafted type.
Placement: first bench piece on the first free home-row column.
Play:
1. Capture the enemy captain (special or move)
2. Any special capture
3. Any capturing move
4. One time in four, the first available special
5. Otherwise the first legal move
"""
import random
from typing import Optional, List

from .base import AIPlayer, AIAction
from ..constants import GamePhase

SPECIAL_CHANCE = 0.25


class GreedyAI(AIPlayer):
    """Naive AI that grabs material whenever it can."""

    name = "Greedy"

    def __init__(self, game, player: int, seed: int = None):
        super().__init__(game, player)
        self.rng = random.Random(seed)

    def choose_action(self) -> Optional[AIAction]:
        actions = self.get_valid_actions()
        if not actions:
            return None

        phase = self.game.phase
        if phase == GamePhase.DRAFT:
            return self.rng.choice(actions)
        if phase == GamePhase.PLAY:
            return self._choose_play_action(actions)
        # Captain and placement actions come in preference order
        return actions[0]

    def _choose_play_action(self, actions: List[AIAction]) -> AIAction:
        moves = [a for a in actions if not a.is_special]
        specials = [a for a in actions if a.is_special]

        for action in actions:
            if action.captures_captain:
                return action
        for action in specials:
            if action.captures:
                return action
        for action in moves:
            if action.captures:
                return action
        if specials and self.rng.random() < SPECIAL_CHANCE:
            return specials[0]
        if moves:
            return moves[0]
        return specials[0]
