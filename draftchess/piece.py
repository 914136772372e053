"""Piece instance dataclass."""
from dataclasses import dataclass, field
from typing import Optional, Tuple, Dict, Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .piece_types import PieceType

Coord = Tuple[int, int]


@dataclass
class Piece:
    """A drafted piece instance.

    Uses type_id to reference the PieceType in the catalog. A captured piece
    keeps existing (for log lines and win detection) but has no position and
    is never placed on the board again.
    """
    type_id: str
    player: int  # 1 or 2

    # Unique ID for this game instance (monotonic, never reused)
    id: int = field(default=0)

    position: Optional[Coord] = None  # (row, col), None if unplaced or captured
    is_captain: bool = False
    special_used: bool = False
    fortified_turns_left: int = 0
    captured: bool = False

    @property
    def piece_type(self) -> 'PieceType':
        from .piece_types import get_piece_type
        return get_piece_type(self.type_id)

    @property
    def name(self) -> str:
        return self.piece_type.name

    @property
    def abbr(self) -> str:
        return self.piece_type.abbr

    @property
    def row(self) -> Optional[int]:
        return self.position[0] if self.position is not None else None

    @property
    def col(self) -> Optional[int]:
        return self.position[1] if self.position is not None else None

    @property
    def is_placed(self) -> bool:
        return self.position is not None

    @property
    def is_fortified(self) -> bool:
        """Fortified pieces cannot be captured."""
        return self.fortified_turns_left > 0

    @property
    def display_name(self) -> str:
        """Name used in log lines, e.g. 'P2 Mage (Captain)'."""
        suffix = " (Captain)" if self.is_captain else ""
        return f"P{self.player} {self.name}{suffix}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'type_id': self.type_id,
            'player': self.player,
            'position': list(self.position) if self.position is not None else None,
            'is_captain': self.is_captain,
            'special_used': self.special_used,
            'fortified_turns_left': self.fortified_turns_left,
            'captured': self.captured,
        }

    def __repr__(self):
        return f"Piece({self.id}, {self.display_name}, pos={self.position})"
