"""Piece catalog: the five piece types and their movement rules.

Each type is a bundle of three functions:
- get_moves(game, piece) -> raw ordinary destinations
- get_special_targets(game, piece) -> SpecialTarget list
- apply_special(game, piece, target) -> True if the special took effect

Move generators only read game.board. Special appliers go through the
game's capture/teleport primitives, which re-validate everything.
"""
from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple, TYPE_CHECKING

from .piece import Piece, Coord

if TYPE_CHECKING:
    from .game import Game


ORTHOGONAL: Tuple[Coord, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))
DIAGONAL: Tuple[Coord, ...] = ((1, 1), (1, -1), (-1, 1), (-1, -1))
ALL_DIRECTIONS: Tuple[Coord, ...] = ORTHOGONAL + DIAGONAL
KNIGHT_OFFSETS: Tuple[Coord, ...] = (
    (2, 1), (1, 2), (-1, 2), (-2, 1), (-2, -1), (-1, -2), (1, -2), (2, -1),
)

BLINK_RANGE = 3
LEAP_DISTANCE = 2


@dataclass(frozen=True)
class SpecialTarget:
    """A square a special can be aimed at."""
    row: int
    col: int
    kind: str  # 'capture', 'move' or 'status'
    is_self: bool = False

    @property
    def coord(self) -> Coord:
        return (self.row, self.col)


MoveFn = Callable[['Game', Piece], List[Coord]]
TargetFn = Callable[['Game', Piece], List[SpecialTarget]]
ApplyFn = Callable[['Game', Piece, SpecialTarget], bool]


@dataclass(frozen=True)
class PieceType:
    """Immutable catalog entry."""
    id: str
    abbr: str
    name: str
    special_name: str
    description: str
    get_moves: MoveFn
    get_special_targets: TargetFn
    apply_special: ApplyFn
    self_targeted: bool = False  # Special aims at the piece itself


# =============================================================================
# MOVEMENT HELPERS
# =============================================================================

def step_moves(game: 'Game', piece: Piece, deltas, max_steps: int) -> List[Coord]:
    """Walk each direction up to max_steps, stopping on the first occupied cell.

    The occupied cell is included only when it holds an enemy.
    """
    moves = []
    if piece.position is None:
        return moves
    row, col = piece.position
    board = game.board
    for dr, dc in deltas:
        for k in range(1, max_steps + 1):
            r, c = row + dr * k, col + dc * k
            if not board.in_bounds(r, c):
                break
            target = board.get_piece(r, c)
            if target is None:
                moves.append((r, c))
                continue
            if target.player != piece.player:
                moves.append((r, c))
            break
    return moves


def ray_moves(game: 'Game', piece: Piece, rays) -> List[Coord]:
    """Unbounded sliding along each ray."""
    return step_moves(game, piece, rays, max(game.board.rows, game.board.cols))


def adjacent_enemies(game: 'Game', piece: Piece, deltas) -> List[SpecialTarget]:
    targets = []
    if piece.position is None:
        return targets
    row, col = piece.position
    for dr, dc in deltas:
        other = game.board.get_piece(row + dr, col + dc)
        if other is not None and other.player != piece.player:
            targets.append(SpecialTarget(row + dr, col + dc, 'capture'))
    return targets


# =============================================================================
# WARRIOR
# =============================================================================

def _warrior_moves(game, piece):
    return step_moves(game, piece, ORTHOGONAL, 1)


def _warrior_targets(game, piece):
    return adjacent_enemies(game, piece, ORTHOGONAL)


def _capture_special(game, piece, target):
    return game.special_capture(piece, target)


def _teleport_special(game, piece, target):
    return game.special_teleport(piece, target)


# =============================================================================
# RANGER
# =============================================================================

def _ranger_moves(game, piece):
    return step_moves(game, piece, ALL_DIRECTIONS, 1)


def _ranger_targets(game, piece):
    """Shoot: an enemy two squares away in a straight orthogonal line over an empty square."""
    targets = []
    if piece.position is None:
        return targets
    row, col = piece.position
    board = game.board
    for dr, dc in ORTHOGONAL:
        r1, c1 = row + dr, col + dc
        r2, c2 = row + 2 * dr, col + 2 * dc
        if not board.in_bounds(r1, c1) or not board.in_bounds(r2, c2):
            continue
        if board.get_piece(r1, c1) is not None:
            continue
        other = board.get_piece(r2, c2)
        if other is not None and other.player != piece.player:
            targets.append(SpecialTarget(r2, c2, 'capture'))
    return targets


# =============================================================================
# MAGE
# =============================================================================

def _mage_moves(game, piece):
    return ray_moves(game, piece, DIAGONAL)


def _mage_targets(game, piece):
    """Blink: up to 3 diagonal steps onto empty squares, never through a piece."""
    targets = []
    if piece.position is None:
        return targets
    row, col = piece.position
    for dr, dc in DIAGONAL:
        for k in range(1, BLINK_RANGE + 1):
            r, c = row + dr * k, col + dc * k
            if not game.board.is_empty(r, c):
                break
            targets.append(SpecialTarget(r, c, 'move'))
    return targets


# =============================================================================
# ROGUE
# =============================================================================

def _rogue_moves(game, piece):
    moves = []
    if piece.position is None:
        return moves
    row, col = piece.position
    for dr, dc in KNIGHT_OFFSETS:
        r, c = row + dr, col + dc
        if not game.board.in_bounds(r, c):
            continue
        other = game.board.get_piece(r, c)
        if other is None or other.player != piece.player:
            moves.append((r, c))
    return moves


def _rogue_targets(game, piece):
    """Leap: any empty square on the Chebyshev-distance-2 ring."""
    targets = []
    if piece.position is None:
        return targets
    row, col = piece.position
    for dr in range(-LEAP_DISTANCE, LEAP_DISTANCE + 1):
        for dc in range(-LEAP_DISTANCE, LEAP_DISTANCE + 1):
            if max(abs(dr), abs(dc)) != LEAP_DISTANCE:
                continue
            if game.board.is_empty(row + dr, col + dc):
                targets.append(SpecialTarget(row + dr, col + dc, 'move'))
    return targets


# =============================================================================
# SENTINEL
# =============================================================================

def _sentinel_moves(game, piece):
    return ray_moves(game, piece, ORTHOGONAL)


def _sentinel_targets(game, piece):
    if piece.position is None:
        return []
    return [SpecialTarget(piece.row, piece.col, 'status', is_self=True)]


def _fortify(game, piece, target):
    # Lasts through the next enemy turn
    piece.fortified_turns_left = 1
    return True


WARRIOR = PieceType(
    id='warrior', abbr='Wa', name='Warrior', special_name='Bash',
    description='Moves 1 orthogonally. Special: Bash - capture adjacent orthogonal without moving.',
    get_moves=_warrior_moves,
    get_special_targets=_warrior_targets,
    apply_special=_capture_special,
)

RANGER = PieceType(
    id='ranger', abbr='Ra', name='Ranger', special_name='Shoot',
    description='Moves 1 any direction. Special: Shoot - capture at distance 2 straight if path clear.',
    get_moves=_ranger_moves,
    get_special_targets=_ranger_targets,
    apply_special=_capture_special,
)

MAGE = PieceType(
    id='mage', abbr='Mg', name='Mage', special_name='Blink',
    description='Diagonals any distance. Special: Blink up to 3 diagonally to empty.',
    get_moves=_mage_moves,
    get_special_targets=_mage_targets,
    apply_special=_teleport_special,
)

ROGUE = PieceType(
    id='rogue', abbr='Ro', name='Rogue', special_name='Leap',
    description='Knight-like jumps. Special: Leap to any empty square at Chebyshev distance 2.',
    get_moves=_rogue_moves,
    get_special_targets=_rogue_targets,
    apply_special=_teleport_special,
)

SENTINEL = PieceType(
    id='sentinel', abbr='Se', name='Sentinel', special_name='Fortify',
    description='Orthogonals any distance. Special: Fortify - cannot be captured during next enemy turn.',
    get_moves=_sentinel_moves,
    get_special_targets=_sentinel_targets,
    apply_special=_fortify,
    self_targeted=True,
)


# Registry of all piece types (draft order)
PIECE_TYPES: Dict[str, PieceType] = {
    t.id: t for t in (WARRIOR, RANGER, MAGE, ROGUE, SENTINEL)
}

PIECE_TYPE_IDS: List[str] = list(PIECE_TYPES)


def get_piece_type(type_id: str) -> PieceType:
    """Get piece type by ID. Raises KeyError for unknown IDs."""
    return PIECE_TYPES[type_id]
