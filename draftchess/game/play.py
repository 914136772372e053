"""Play phase: selection, moves, specials, turn hand-over and the clock."""
from typing import Optional

from ..constants import GamePhase, WinReason, other_player
from ..piece import Piece
from ..selection import OwnSelection, PreviewSelection
from ..commands import (
    evt_selection_changed, evt_special_used, evt_piece_fortified,
    evt_turn_started, evt_clock_expired,
)


class PlayMixin:
    """Mixin for the timed play phase."""

    # =========================================================================
    # SELECTION
    # =========================================================================

    def select_board_piece(self, row: int, col: int) -> bool:
        """Select an own piece, or preview an opponent piece when nothing of ours is selected."""
        if self.phase != GamePhase.PLAY:
            return self._reject("Not in play phase.")
        if not self.board.in_bounds(row, col):
            return self._reject("Square is off the board.")

        piece = self.board.get_piece(row, col)
        if piece is None:
            if self.is_preview:
                return self.deselect()
            return self._reject("No piece on that square.")

        if piece.player == self.active_player:
            self.selection = OwnSelection(piece)
        else:
            if isinstance(self.selection, OwnSelection):
                return self._reject("Deselect your piece before previewing an opponent piece.")
            self.selection = PreviewSelection(piece)
        self.emit_event(evt_selection_changed(piece.id, preview=self.is_preview))
        return True

    def deselect(self) -> bool:
        self.selection = None
        self.emit_event(evt_selection_changed(None))
        return True

    def _own_selection(self) -> Optional[OwnSelection]:
        sel = self.selection
        if isinstance(sel, OwnSelection) and sel.piece.player == self.active_player \
                and sel.piece.position is not None:
            return sel
        return None

    def toggle_special_mode(self) -> bool:
        if self.phase != GamePhase.PLAY:
            return self._reject("Not in play phase.")
        sel = self._own_selection()
        if sel is None:
            return self._reject("Select one of your pieces first.")
        if sel.piece.special_used:
            return self._reject("Special already used.")
        sel.special_mode = not sel.special_mode
        self.emit_event(evt_selection_changed(sel.piece.id, special_mode=sel.special_mode))
        return True

    # =========================================================================
    # ACTIONS
    # =========================================================================

    def act_at(self, row: int, col: int) -> bool:
        """Commit the selected piece: a special if special mode is on, else a move."""
        if self.phase != GamePhase.PLAY:
            return self._reject("Not in play phase.")
        sel = self._own_selection()
        if sel is None:
            return self._reject("Select one of your pieces first.")
        if sel.special_mode:
            return self._execute_special(sel.piece, row, col)
        return self._execute_move(sel.piece, row, col)

    def activate_self_special(self) -> bool:
        """Fire a self-targeted special (Fortify) on the selected piece."""
        if self.phase != GamePhase.PLAY:
            return self._reject("Not in play phase.")
        sel = self._own_selection()
        if sel is None:
            return self._reject("Select one of your pieces first.")
        if not sel.piece.piece_type.self_targeted:
            return self._reject("This piece has no self-targeted special.")
        return self._execute_special(sel.piece, sel.piece.row, sel.piece.col)

    def move(self, piece_id: int, row: int, col: int) -> bool:
        """Self-contained ordinary move (no prior selection needed)."""
        piece = self._actionable_piece(piece_id)
        if piece is None:
            return False
        return self._execute_move(piece, row, col)

    def use_special(self, piece_id: int, row: int, col: int) -> bool:
        """Self-contained special on a square."""
        piece = self._actionable_piece(piece_id)
        if piece is None:
            return False
        return self._execute_special(piece, row, col)

    def click_square(self, row: int, col: int) -> bool:
        """Route a board click the way the board UI expects.

        Placement clicks place; in play an own selection tries to act first,
        then clicks reselect own pieces, preview opponent pieces, or clear a preview.
        """
        if self.phase == GamePhase.PLACEMENT:
            return self.place_at(row, col)
        if self.phase != GamePhase.PLAY:
            return self._reject("Board is not clickable now.")
        if not self.board.in_bounds(row, col):
            return self._reject("Square is off the board.")

        turn = self.active_player
        piece = self.board.get_piece(row, col)
        sel = self._own_selection()

        if sel is not None:
            if sel.special_mode:
                return self.act_at(row, col)
            if (row, col) in self.get_legal_moves(sel.piece):
                return self.act_at(row, col)
            if piece is None or piece.player != turn:
                return self._execute_move(sel.piece, row, col)  # rejects with the reason
            return self.select_board_piece(row, col)

        if piece is not None and (piece.player == turn or self.selection is None):
            return self.select_board_piece(row, col)
        if self.selection is None:
            return self._reject("Nothing selected.")
        # Previewing: any other click clears the preview
        return self.deselect()

    def _actionable_piece(self, piece_id: int) -> Optional[Piece]:
        if self.phase != GamePhase.PLAY:
            self._reject("Not in play phase.")
            return None
        piece = self.get_piece_by_id(piece_id)
        if piece is None or piece.position is None:
            self._reject("No such piece on the board.")
            return None
        if piece.player != self.active_player:
            self._reject("Not your piece.")
            return None
        return piece

    def _execute_move(self, piece: Piece, row: int, col: int) -> bool:
        if (row, col) not in self.get_legal_moves(piece):
            target = self.board.get_piece(row, col)
            if target is not None and target.player != piece.player and target.is_fortified:
                return self._reject("Target is fortified.")
            return self._reject("Not a legal move.")
        from_pos = piece.position
        acted_by = piece.player
        if not self.move_piece_to(piece, row, col):
            return self._reject("Move failed.")
        self.log(f"{piece.display_name} moved {from_pos} -> {(row, col)}.", emit_event=False)
        self._after_action(acted_by)
        return True

    def _execute_special(self, piece: Piece, row: int, col: int) -> bool:
        if piece.special_used:
            return self._reject("Special already used.")
        target = self.find_special_target(piece, row, col)
        if target is None:
            enemy = self.board.get_piece(row, col)
            if enemy is not None and enemy.player != piece.player and enemy.is_fortified:
                return self._reject("Target is fortified.")
            return self._reject("Not a valid special target.")

        piece_type = piece.piece_type
        acted_by = piece.player
        if not piece_type.apply_special(self, piece, target):
            return self._reject("Special had no effect.")

        # Only a successful application consumes the special
        piece.special_used = True
        self.log(f"{piece.display_name} used {piece_type.special_name}.")
        self.emit_event(evt_special_used(piece.id, piece.type_id, target.coord))
        if piece.is_fortified:
            self.emit_event(evt_piece_fortified(piece.id))
        self._after_action(acted_by)
        return True

    def _after_action(self, acted_by: int):
        """Hand the turn over after a committed action.

        Skipped entirely if the action ended the game.
        """
        self.selection = None
        if self.phase == GamePhase.GAME_OVER:
            return
        opponent = other_player(acted_by)
        self.decay_fortification(opponent)
        self.active_player = opponent
        self.clock.start(opponent)
        self.emit_event(evt_turn_started(opponent))

    # =========================================================================
    # CLOCK
    # =========================================================================

    def tick(self) -> Optional[int]:
        """Charge elapsed time to the player on move.

        Returns the player whose time ran out (the game is then over), else None.
        """
        if self.phase != GamePhase.PLAY:
            return None
        expired = self.clock.tick()
        if expired is not None:
            self.emit_event(evt_clock_expired(expired))
            self.end_game(other_player(expired), WinReason.TIME_EXPIRED)
        return expired
