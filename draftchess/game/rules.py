"""Rules engine: legal moves, special targets and the mutating primitives.

Every primitive re-validates bounds, occupancy, ownership and fortification
itself; callers (UI routing, AI, specials) are never trusted to have checked.
"""
from typing import List, Optional

from ..constants import WinReason, other_player
from ..piece import Piece, Coord
from ..piece_types import SpecialTarget, get_piece_type
from ..commands import evt_piece_placed, evt_piece_moved, evt_piece_captured


class RulesMixin:
    """Mixin for piece creation, move generation and board mutations."""

    def create_piece(self, type_id: str, player: int) -> Piece:
        """Create a piece with a fresh id and register it."""
        get_piece_type(type_id)  # Unknown ids raise KeyError
        piece = Piece(type_id=type_id, player=player, id=self._next_piece_id)
        self._next_piece_id += 1
        self.pieces[piece.id] = piece
        return piece

    # =========================================================================
    # GENERATION
    # =========================================================================

    def get_legal_moves(self, piece: Piece) -> List[Coord]:
        """Ordinary moves, minus captures of fortified enemies."""
        if piece.position is None:
            return []
        raw = piece.piece_type.get_moves(self, piece)
        legal = []
        for row, col in raw:
            target = self.board.get_piece(row, col)
            if target is not None and target.player != piece.player and target.is_fortified:
                continue
            legal.append((row, col))
        return legal

    def get_special_targets(self, piece: Piece) -> List[SpecialTarget]:
        """Special targets for an unused special, minus fortified capture targets."""
        if piece.position is None or piece.special_used:
            return []
        targets = []
        for target in piece.piece_type.get_special_targets(self, piece):
            if target.kind == 'capture':
                enemy = self.board.get_piece(target.row, target.col)
                if enemy is not None and enemy.is_fortified:
                    continue
            targets.append(target)
        return targets

    def find_special_target(self, piece: Piece, row: int, col: int) -> Optional[SpecialTarget]:
        for target in self.get_special_targets(piece):
            if target.coord == (row, col):
                return target
        return None

    # =========================================================================
    # PRIMITIVES
    # =========================================================================

    def place_piece(self, piece: Piece, row: int, col: int) -> bool:
        """Bind an unplaced piece to an empty in-bounds cell."""
        if piece.captured or piece.position is not None:
            return False
        if not self.board.place_piece(piece, row, col):
            return False
        self.emit_event(evt_piece_placed(piece.id, piece.player, (row, col)))
        return True

    def move_piece_to(self, piece: Piece, row: int, col: int) -> bool:
        """Relocate a piece, capturing an enemy on the destination.

        Fails without side effects if the destination is out of bounds, holds a
        friendly piece, or holds a fortified enemy.
        """
        if not self.board.in_bounds(row, col) or piece.position is None:
            return False
        target = self.board.get_piece(row, col)
        if target is piece:
            return False
        if target is not None:
            if target.player == piece.player or target.is_fortified:
                return False
            self.capture_piece(target)
        from_pos = piece.position
        if not self.board.relocate(piece, row, col):
            return False
        self.emit_event(evt_piece_moved(piece.id, from_pos, (row, col)))
        return True

    def capture_piece(self, piece: Piece) -> bool:
        """Remove a piece from the board for good.

        Capturing a captain ends the game immediately.
        """
        if piece.captured:
            return False
        position = piece.position
        self.board.remove_piece(piece)
        piece.captured = True
        piece.fortified_turns_left = 0
        self.log(f"{piece.display_name} was captured!")
        self.emit_event(evt_piece_captured(piece.id, piece.player, position))
        if piece.is_captain:
            self.end_game(other_player(piece.player), WinReason.CAPTAIN_CAPTURED)
        return True

    def special_capture(self, piece: Piece, target: Optional[SpecialTarget]) -> bool:
        """Capture the enemy on target without moving piece."""
        if target is None or piece.position is None:
            return False
        enemy = self.board.get_piece(target.row, target.col)
        if enemy is None or enemy.player == piece.player or enemy.is_fortified:
            return False
        return self.capture_piece(enemy)

    def special_teleport(self, piece: Piece, target: Optional[SpecialTarget]) -> bool:
        """Move piece to an empty square, ignoring anything in between."""
        if target is None or piece.position is None:
            return False
        if not self.board.is_empty(target.row, target.col):
            return False
        from_pos = piece.position
        if not self.board.relocate(piece, target.row, target.col):
            return False
        self.emit_event(evt_piece_moved(piece.id, from_pos, target.coord))
        return True

    def decay_fortification(self, player: int):
        """Tick down fortification on player's pieces by one."""
        for piece in self.board.get_all_pieces(player):
            if piece.fortified_turns_left > 0:
                piece.fortified_turns_left -= 1
