"""Per-player state: draft picks and bench. Clock time lives in ChessClock."""
from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any

from .constants import DRAFT_SIZE
from .piece import Piece


@dataclass
class PlayerState:
    """Per-player state container."""
    player: int  # 1 or 2
    name: str = ""

    # Unique piece type ids picked during the draft
    drafted: List[str] = field(default_factory=list)

    # Pieces created at captain assignment and not yet placed
    bench: List[Piece] = field(default_factory=list)

    # Captain nomination made during the captain phase
    captain_choice: Optional[str] = None

    @property
    def draft_complete(self) -> bool:
        return len(self.drafted) >= DRAFT_SIZE

    def bench_piece(self, piece_id: int) -> Optional[Piece]:
        for piece in self.bench:
            if piece.id == piece_id:
                return piece
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'player': self.player,
            'name': self.name,
            'drafted': list(self.drafted),
            'bench_ids': [p.id for p in self.bench],
            'captain_choice': self.captain_choice,
        }
