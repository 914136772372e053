"""Local match driver: one Game, its clock, and latency-delayed AI players.

Usage:
    match = LocalMatch(time_source=pygame.time.get_ticks)
    match.set_ai(2, True)

    # Every frame:
    match.update()

    # On input:
    result = match.submit(cmd_click_square(player, row, col))
"""
import logging
from typing import Callable, Dict, List, Optional, Type

from .ai import AIPlayer, GreedyAI
from .clock import monotonic_ms
from .commands import Command, CommandType, CommandResult, Event, cmd_set_ai
from .constants import AI_DELAY_MS
from .game import Game
from .scheduler import Scheduler

logger = logging.getLogger(__name__)


class LocalMatch:
    """Owns the game and drives everything that happens without direct input.

    Human commands go through submit(). update() charges the clock and runs
    AI decisions that were scheduled ai_delay_ms earlier; a decision whose
    state token no longer matches (restart, toggle, game over) is dropped.
    """

    def __init__(self, game: Optional[Game] = None,
                 time_source: Optional[Callable[[], float]] = None,
                 ai_delay_ms: float = AI_DELAY_MS,
                 ai_classes: Optional[Dict[int, Type[AIPlayer]]] = None,
                 seed: Optional[int] = None):
        self.time_source = time_source or monotonic_ms
        self.game = game or Game(time_source=self.time_source)
        self.scheduler = Scheduler(current_token=self.game.state_token)
        self.ai_delay_ms = ai_delay_ms
        self.ai_classes: Dict[int, Type[AIPlayer]] = {1: GreedyAI, 2: GreedyAI}
        if ai_classes:
            self.ai_classes.update(ai_classes)
        self.seed = seed
        self.ai_players: Dict[int, AIPlayer] = {}
        self.command_log: List[Command] = []  # Accepted human commands
        self._ai_events: List[Event] = []  # From AI commands, handed out by update()
        self._sync_ai_players()

    def now(self) -> float:
        return float(self.time_source())

    # =========================================================================
    # INPUT
    # =========================================================================

    def submit(self, cmd: Command) -> CommandResult:
        """Apply a human command."""
        if cmd.type == CommandType.RESTART:
            self.scheduler.cancel_all()
        result = self.game.process_command(cmd)
        if result.accepted:
            self.command_log.append(cmd)
            if cmd.type in (CommandType.SET_AI, CommandType.RESTART):
                self._sync_ai_players()
        else:
            logger.debug("Command %s from P%d rejected: %s", cmd.type.name, cmd.player, result.error)
        return result

    def set_ai(self, player: int, enabled: bool) -> CommandResult:
        return self.submit(cmd_set_ai(player, enabled))

    def _sync_ai_players(self):
        for player in (1, 2):
            if self.game.ai_enabled.get(player):
                if player not in self.ai_players:
                    seed = None if self.seed is None else self.seed + player
                    self.ai_players[player] = self.ai_classes[player](self.game, player, seed=seed)
            else:
                self.ai_players.pop(player, None)

    # =========================================================================
    # FRAME UPDATE
    # =========================================================================

    def update(self, now: Optional[float] = None) -> List[Event]:
        """Advance the clock, run due AI steps and schedule the next one.

        Returns the events produced since the last call by clock ticks and
        AI commands, in order.
        """
        if now is None:
            now = self.now()
        self.game.tick()
        self.scheduler.run_due(now)
        self._maybe_schedule_ai(now)
        events = self._ai_events + self.game.pop_events()
        self._ai_events = []
        return events

    def _maybe_schedule_ai(self, now: float):
        game = self.game
        if game.is_over or game.ai_busy:
            return
        for player, ai in sorted(self.ai_players.items()):
            if ai.is_my_turn():
                game.ai_busy = True
                self.scheduler.schedule(
                    now, self.ai_delay_ms,
                    lambda ai=ai: self._run_ai(ai),
                    description=f"P{player} {game.phase.name}",
                    on_drop=self._release_ai,
                )
                return

    def _run_ai(self, ai: AIPlayer):
        try:
            if not ai.is_my_turn():
                return
            if not ai.take_turn():
                logger.debug("P%d AI had no action: %s", ai.player, self.game.last_error)
            for result in ai.last_results:
                self._ai_events.extend(result.events)
        finally:
            self._release_ai()

    def _release_ai(self):
        # Another decision may already be queued for a newer state
        if not self.scheduler.pending:
            self.game.ai_busy = False

    @property
    def ai_pending(self) -> bool:
        return bool(self.scheduler.pending)
