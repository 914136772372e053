"""
Game package - game state management and logic.

The Game class is split into mixins:
- base.py: Core state, log, events, queries, end of game
- rules.py: Move generation, special targets, board mutations
- draft.py: Draft, captain nomination, random draft
- placement.py: Home-row placement
- play.py: Selection, moves, specials, turn hand-over, clock
- commands.py: Command processing and session control

The Game class inherits from all mixins and GameBase.
"""
import random
from typing import Callable, Optional

from .base import GameBase
from .rules import RulesMixin
from .draft import DraftMixin
from .placement import PlacementMixin
from .play import PlayMixin
from .commands import CommandsMixin

__all__ = ['Game']


class Game(
    GameBase,
    RulesMixin,
    DraftMixin,
    PlacementMixin,
    PlayMixin,
    CommandsMixin,
):
    """Main game state and logic - combines all functionality via mixins."""

    def __init__(self, time_source: Optional[Callable[[], float]] = None,
                 rng: Optional[random.Random] = None):
        super().__init__(time_source=time_source, rng=rng)
        self.log("Draft phase: P1 picks first.", emit_event=False)
