"""Alternating placement on home rows."""
from ..constants import GamePhase, other_player
from ..selection import OwnSelection
from ..commands import evt_selection_changed, evt_turn_started


class PlacementMixin:
    """Mixin for the placement phase."""

    def _begin_placement(self):
        self.set_phase(GamePhase.PLACEMENT)
        self.placement_player = 1
        self.log("Placement: alternate placing pieces. P1 starts on the bottom row.")

    def select_bench_piece(self, piece_id: int) -> bool:
        """Pick which bench piece the placing player will put down next."""
        if self.phase != GamePhase.PLACEMENT:
            return self._reject("Not in placement phase.")
        piece = self.players[self.placement_player].bench_piece(piece_id)
        if piece is None:
            return self._reject("Selected piece is not yours to place this turn.")
        self.selection = OwnSelection(piece)
        self.emit_event(evt_selection_changed(piece.id))
        return True

    def place_at(self, row: int, col: int) -> bool:
        """Place the selected bench piece on the placing player's home row."""
        if self.phase != GamePhase.PLACEMENT:
            return self._reject("Not in placement phase.")
        placer = self.placement_player
        if not self.board.in_bounds(row, col):
            return self._reject("Square is off the board.")
        if row != self.board.home_row(placer):
            return self._reject("Place on your home row.")

        piece = self.selected_piece
        if piece is None:
            return self._reject("Select a bench piece to place.")
        state = self.players[placer]
        if piece.player != placer or piece not in state.bench:
            return self._reject("Selected piece is not yours to place this turn.")
        if self.board.get_piece(row, col) is not None:
            return self._reject("Square occupied.")

        if not self.place_piece(piece, row, col):
            return self._reject("Square occupied.")
        state.bench.remove(piece)
        self.selection = None
        self.log(f"{state.name} placed {piece.name} at ({row}, {col}).")

        if not self.players[1].bench and not self.players[2].bench:
            self._begin_play()
            return True

        # The turn passes only if the other side still has something to place
        opponent = other_player(placer)
        if self.players[opponent].bench:
            self.placement_player = opponent
        return True

    def _begin_play(self):
        self.set_phase(GamePhase.PLAY)
        self.active_player = 1
        self.clock.start(1)
        self.log("Game start! P1 to move.")
        self.emit_event(evt_turn_started(1))
