"""
Commands and Events for game state management.

Commands represent player intents (inputs to the game engine).
Events represent state changes (outputs from the game engine).

Human clicks, AI decisions and simulations all submit the same Command
values, so every input goes through one validation path.
"""
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, List, Dict, Any


# =============================================================================
# COMMANDS - Player Intents
# =============================================================================

class CommandType(Enum):
    """Types of commands players can issue."""
    # Draft and captains
    PICK = auto()
    NOMINATE_CAPTAIN = auto()
    CONFIRM_CAPTAINS = auto()
    RANDOM_DRAFT = auto()

    # Placement
    SELECT_BENCH_PIECE = auto()
    PLACE_AT = auto()

    # Selection
    SELECT_BOARD_PIECE = auto()
    DESELECT = auto()
    TOGGLE_SPECIAL = auto()

    # Board interaction (high-level click that engine routes)
    CLICK_SQUARE = auto()
    ACT_AT = auto()
    ACTIVATE_SELF_SPECIAL = auto()

    # Self-contained actions (AI, replays)
    MOVE = auto()
    USE_SPECIAL = auto()

    # Session
    SET_AI = auto()
    RESTART = auto()


# Commands that are only valid for the player holding the turn
TURN_COMMANDS = frozenset([
    CommandType.PICK,
    CommandType.NOMINATE_CAPTAIN,
    CommandType.SELECT_BENCH_PIECE,
    CommandType.PLACE_AT,
    CommandType.SELECT_BOARD_PIECE,
    CommandType.DESELECT,
    CommandType.TOGGLE_SPECIAL,
    CommandType.CLICK_SQUARE,
    CommandType.ACT_AT,
    CommandType.ACTIVATE_SELF_SPECIAL,
    CommandType.MOVE,
    CommandType.USE_SPECIAL,
])

# Commands accepted at any time, even after the game is over
SESSION_COMMANDS = frozenset([CommandType.SET_AI, CommandType.RESTART])


@dataclass(frozen=True)
class Command:
    """A player command - immutable and serializable."""
    type: CommandType
    player: int  # Which player issued this command

    # Optional parameters (depending on command type)
    type_id: Optional[str] = None
    piece_id: Optional[int] = None
    row: Optional[int] = None
    col: Optional[int] = None
    p1_type_id: Optional[str] = None
    p2_type_id: Optional[str] = None
    enabled: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary for logging/replays."""
        return {
            'type': self.type.name,
            'player': self.player,
            'type_id': self.type_id,
            'piece_id': self.piece_id,
            'row': self.row,
            'col': self.col,
            'p1_type_id': self.p1_type_id,
            'p2_type_id': self.p2_type_id,
            'enabled': self.enabled,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Command':
        return cls(
            type=CommandType[data['type']],
            player=data['player'],
            type_id=data.get('type_id'),
            piece_id=data.get('piece_id'),
            row=data.get('row'),
            col=data.get('col'),
            p1_type_id=data.get('p1_type_id'),
            p2_type_id=data.get('p2_type_id'),
            enabled=data.get('enabled'),
        )


# Command factory functions for cleaner API
def cmd_pick(player: int, type_id: str) -> Command:
    return Command(CommandType.PICK, player, type_id=type_id)

def cmd_nominate_captain(player: int, type_id: str) -> Command:
    return Command(CommandType.NOMINATE_CAPTAIN, player, type_id=type_id)

def cmd_confirm_captains(player: int, p1_type_id: str, p2_type_id: str) -> Command:
    return Command(CommandType.CONFIRM_CAPTAINS, player, p1_type_id=p1_type_id, p2_type_id=p2_type_id)

def cmd_random_draft(player: int) -> Command:
    return Command(CommandType.RANDOM_DRAFT, player)

def cmd_select_bench_piece(player: int, piece_id: int) -> Command:
    return Command(CommandType.SELECT_BENCH_PIECE, player, piece_id=piece_id)

def cmd_place_at(player: int, row: int, col: int) -> Command:
    return Command(CommandType.PLACE_AT, player, row=row, col=col)

def cmd_select_board_piece(player: int, row: int, col: int) -> Command:
    """Select own piece or preview an opponent piece."""
    return Command(CommandType.SELECT_BOARD_PIECE, player, row=row, col=col)

def cmd_deselect(player: int) -> Command:
    return Command(CommandType.DESELECT, player)

def cmd_toggle_special(player: int) -> Command:
    return Command(CommandType.TOGGLE_SPECIAL, player)

def cmd_click_square(player: int, row: int, col: int) -> Command:
    """Click on a board square - engine determines appropriate action."""
    return Command(CommandType.CLICK_SQUARE, player, row=row, col=col)

def cmd_act_at(player: int, row: int, col: int) -> Command:
    return Command(CommandType.ACT_AT, player, row=row, col=col)

def cmd_activate_self_special(player: int) -> Command:
    return Command(CommandType.ACTIVATE_SELF_SPECIAL, player)

def cmd_move(player: int, piece_id: int, row: int, col: int) -> Command:
    """Move a piece. piece_id makes the command self-contained."""
    return Command(CommandType.MOVE, player, piece_id=piece_id, row=row, col=col)

def cmd_use_special(player: int, piece_id: int, row: int, col: int) -> Command:
    """Use a piece's special on a square (its own square for self-targeted specials)."""
    return Command(CommandType.USE_SPECIAL, player, piece_id=piece_id, row=row, col=col)

def cmd_set_ai(player: int, enabled: bool) -> Command:
    return Command(CommandType.SET_AI, player, enabled=enabled)

def cmd_restart(player: int = 1) -> Command:
    return Command(CommandType.RESTART, player)


# =============================================================================
# EVENTS - State Changes
# =============================================================================

class EventType(Enum):
    """Types of events the game can emit."""
    # Game flow
    PHASE_CHANGED = auto()
    TURN_STARTED = auto()
    CLOCK_EXPIRED = auto()
    GAME_OVER = auto()

    # Setup
    PIECE_DRAFTED = auto()
    CAPTAINS_ASSIGNED = auto()
    PIECE_PLACED = auto()

    # Play
    SELECTION_CHANGED = auto()
    PIECE_MOVED = auto()
    PIECE_CAPTURED = auto()
    SPECIAL_USED = auto()
    PIECE_FORTIFIED = auto()

    # UI hints
    LOG_MESSAGE = auto()


@dataclass
class Event:
    """A game event - represents a state change."""
    type: EventType

    player: Optional[int] = None
    piece_id: Optional[int] = None
    type_id: Optional[str] = None

    # Movement
    from_position: Optional[tuple] = None
    to_position: Optional[tuple] = None

    # Game state
    phase: Optional[str] = None
    winner: Optional[int] = None
    reason: Optional[str] = None

    message: Optional[str] = None

    # Generic context for complex events
    context: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        result = {'type': self.type.name}
        for key, value in self.__dict__.items():
            if key != 'type' and value is not None:
                if isinstance(value, Enum):
                    result[key] = value.name
                else:
                    result[key] = value
        return result


# Event factory functions for cleaner API
def evt_phase_changed(phase: str) -> Event:
    return Event(EventType.PHASE_CHANGED, phase=phase)

def evt_turn_started(player: int) -> Event:
    return Event(EventType.TURN_STARTED, player=player)

def evt_clock_expired(player: int) -> Event:
    return Event(EventType.CLOCK_EXPIRED, player=player)

def evt_game_over(winner: int, reason: str) -> Event:
    return Event(EventType.GAME_OVER, winner=winner, reason=reason)

def evt_piece_drafted(player: int, type_id: str) -> Event:
    return Event(EventType.PIECE_DRAFTED, player=player, type_id=type_id)

def evt_captains_assigned(p1_type_id: str, p2_type_id: str) -> Event:
    return Event(EventType.CAPTAINS_ASSIGNED, context={1: p1_type_id, 2: p2_type_id})

def evt_piece_placed(piece_id: int, player: int, position: tuple) -> Event:
    return Event(EventType.PIECE_PLACED, piece_id=piece_id, player=player, to_position=position)

def evt_selection_changed(piece_id: Optional[int], preview: bool = False,
                          special_mode: bool = False) -> Event:
    return Event(EventType.SELECTION_CHANGED, piece_id=piece_id,
                 context={'preview': preview, 'special_mode': special_mode})

def evt_piece_moved(piece_id: int, from_pos: tuple, to_pos: tuple) -> Event:
    return Event(EventType.PIECE_MOVED, piece_id=piece_id, from_position=from_pos, to_position=to_pos)

def evt_piece_captured(piece_id: int, player: int, position: tuple) -> Event:
    return Event(EventType.PIECE_CAPTURED, piece_id=piece_id, player=player, from_position=position)

def evt_special_used(piece_id: int, type_id: str, target: tuple) -> Event:
    return Event(EventType.SPECIAL_USED, piece_id=piece_id, type_id=type_id, to_position=target)

def evt_piece_fortified(piece_id: int) -> Event:
    return Event(EventType.PIECE_FORTIFIED, piece_id=piece_id)

def evt_log_message(message: str) -> Event:
    return Event(EventType.LOG_MESSAGE, message=message)


# =============================================================================
# RESULTS
# =============================================================================

@dataclass
class CommandResult:
    """Result of processing a command."""
    accepted: bool
    events: List[Event] = field(default_factory=list)
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'accepted': self.accepted,
            'events': [e.to_dict() for e in self.events],
            'error': self.error,
        }
