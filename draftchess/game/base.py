"""Core game state and base class for mixins."""
import logging
import random
from typing import Callable, Dict, List, Optional, Tuple, Any

from ..board import Board
from ..clock import ChessClock
from ..constants import (
    GamePhase, WinReason, PLAYER_NAMES, MAX_LOG_MESSAGES, other_player,
)
from ..piece import Piece
from ..player_state import PlayerState
from ..selection import Selection, OwnSelection, PreviewSelection
from ..commands import (
    Event, evt_log_message, evt_phase_changed, evt_game_over,
)

logger = logging.getLogger(__name__)


class GameBase:
    """Base game state - the single aggregate every operation works on.

    Args:
        time_source: Millisecond clock for the chess clock (defaults to time.monotonic).
        rng: Random source for the random draft.
    """

    def __init__(self, time_source: Optional[Callable[[], float]] = None,
                 rng: Optional[random.Random] = None):
        self.time_source = time_source
        self.rng = rng or random.Random()

        # Restart counter; part of the state token so stale callbacks can be detected
        self.generation = 0

        # AI control per player (survives restart only if the front-end re-applies it)
        self.ai_enabled: Dict[int, bool] = {1: False, 2: False}

        self._reset_state()

    def _reset_state(self):
        """Fresh session state (used by __init__ and restart)."""
        self.phase = GamePhase.DRAFT
        self.board = Board()
        self.players: Dict[int, PlayerState] = {
            1: PlayerState(player=1, name=PLAYER_NAMES[1]),
            2: PlayerState(player=2, name=PLAYER_NAMES[2]),
        }

        # Turn pointers per phase
        self.draft_player = 1
        self.placement_player = 1
        self.active_player: Optional[int] = None

        self.selection: Selection = None
        self.winner: Optional[int] = None
        self.win_reason: Optional[WinReason] = None
        self.captains_assigned = False

        # True while a scheduled AI decision is pending
        self.ai_busy = False

        # Incremented on every accepted command
        self.action_count = 0

        self.clock = ChessClock(time_source=self.time_source)

        # Piece registry (every piece ever created this session)
        self.pieces: Dict[int, Piece] = {}
        self._next_piece_id = 1

        self.messages: List[str] = []
        self.events: List[Event] = []
        self.last_error: Optional[str] = None

    # =========================================================================
    # LOG / EVENTS
    # =========================================================================

    def log(self, msg: str, emit_event: bool = True):
        """Add a message to the game log."""
        self.messages.append(msg)
        if len(self.messages) > MAX_LOG_MESSAGES:
            self.messages.pop(0)
        logger.debug("log: %s", msg)
        if emit_event:
            self.emit_event(evt_log_message(msg))

    def emit_event(self, event: Event):
        self.events.append(event)

    def pop_events(self) -> List[Event]:
        events = self.events
        self.events = []
        return events

    def _reject(self, reason: str) -> bool:
        """Record why an action was refused. Always returns False."""
        self.last_error = reason
        logger.debug("rejected: %s", reason)
        return False

    # =========================================================================
    # QUERIES
    # =========================================================================

    @property
    def current_player(self) -> Optional[int]:
        """Player holding the turn in the current phase (None in captain/game over)."""
        if self.phase == GamePhase.DRAFT:
            return self.draft_player
        if self.phase == GamePhase.PLACEMENT:
            return self.placement_player
        if self.phase == GamePhase.PLAY:
            return self.active_player
        return None

    @property
    def is_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    def state_token(self) -> Tuple[Any, ...]:
        """Snapshot identity used to detect stale scheduled callbacks."""
        return (self.generation, self.phase, self.current_player, self.action_count)

    def get_piece_at(self, row: int, col: int) -> Optional[Piece]:
        return self.board.get_piece(row, col)

    def get_piece_by_id(self, piece_id: int) -> Optional[Piece]:
        return self.pieces.get(piece_id)

    def get_captain(self, player: int) -> Optional[Piece]:
        for piece in self.pieces.values():
            if piece.player == player and piece.is_captain:
                return piece
        return None

    def time_left(self, player: int) -> float:
        return self.clock.time_left(player)

    @property
    def selected_piece(self) -> Optional[Piece]:
        return self.selection.piece if self.selection is not None else None

    @property
    def special_mode(self) -> bool:
        return isinstance(self.selection, OwnSelection) and self.selection.special_mode

    @property
    def is_preview(self) -> bool:
        return isinstance(self.selection, PreviewSelection)

    @property
    def result_message(self) -> Optional[str]:
        if self.winner is None:
            return None
        label = f"P{self.winner}"
        if self.win_reason == WinReason.TIME_EXPIRED:
            return f"{label} wins on time!"
        return f"{label} wins by capturing the captain!"

    # =========================================================================
    # PHASES
    # =========================================================================

    def set_phase(self, phase: GamePhase):
        self.phase = phase
        self.selection = None
        logger.info("Phase -> %s", phase.name)
        self.emit_event(evt_phase_changed(phase.name))

    def end_game(self, winner: int, reason: WinReason):
        """Terminal transition. Stops the clock; no further turn processing."""
        if self.phase == GamePhase.GAME_OVER:
            return
        self.winner = winner
        self.win_reason = reason
        self.clock.stop()
        self.set_phase(GamePhase.GAME_OVER)
        self.log(self.result_message)
        logger.info("Game over: P%d wins (%s), loser P%d", winner, reason.value, other_player(winner))
        self.emit_event(evt_game_over(winner, reason.value))

    # =========================================================================
    # SERIALIZATION
    # =========================================================================

    def to_dict(self) -> dict:
        """Snapshot of the public state (for debugging and front-ends)."""
        selection = None
        if self.selection is not None:
            selection = {
                'piece_id': self.selection.piece.id,
                'special_mode': self.special_mode,
                'preview': self.is_preview,
            }
        return {
            'phase': self.phase.name,
            'current_player': self.current_player,
            'draft_player': self.draft_player,
            'placement_player': self.placement_player,
            'active_player': self.active_player,
            'players': {p: state.to_dict() for p, state in self.players.items()},
            'pieces': [piece.to_dict() for piece in self.pieces.values()],
            'selection': selection,
            'time_ms': {1: self.time_left(1), 2: self.time_left(2)},
            'winner': self.winner,
            'win_reason': self.win_reason.value if self.win_reason else None,
            'ai_enabled': dict(self.ai_enabled),
            'captains_assigned': self.captains_assigned,
        }
