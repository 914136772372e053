"""Draft and captain assignment."""
import logging
from typing import Optional

from ..constants import GamePhase, DRAFT_SIZE, other_player, player_label
from ..piece_types import PIECE_TYPE_IDS, get_piece_type
from ..commands import evt_piece_drafted, evt_captains_assigned

logger = logging.getLogger(__name__)


class DraftMixin:
    """Mixin for the draft and captain phases."""

    def pick(self, type_id: str) -> bool:
        """Current draft player picks one unique piece type."""
        if self.phase != GamePhase.DRAFT:
            return self._reject("Not in draft phase.")
        if type_id not in PIECE_TYPE_IDS:
            return self._reject(f"Unknown piece type: {type_id}")

        state = self.players[self.draft_player]
        if len(state.drafted) >= DRAFT_SIZE:
            return self._reject(f"Already picked {DRAFT_SIZE} pieces.")
        if type_id in state.drafted:
            return self._reject("Piece type already picked.")

        state.drafted.append(type_id)
        self.log(f"{state.name} picked {get_piece_type(type_id).name}.")
        self.emit_event(evt_piece_drafted(self.draft_player, type_id))

        if all(p.draft_complete for p in self.players.values()):
            self.set_phase(GamePhase.CAPTAIN)
            self.log("Draft complete. Assign captains.")
        else:
            # Skip a player who already has a full draft
            next_player = other_player(self.draft_player)
            if not self.players[next_player].draft_complete:
                self.draft_player = next_player
        return True

    def nominate_captain(self, player: int, type_id: str) -> bool:
        """Record one side's captain choice; confirms once both sides have chosen."""
        if self.phase != GamePhase.CAPTAIN:
            return self._reject("Not in captain phase.")
        if player not in self.players:
            return self._reject(f"Invalid player: {player}")
        state = self.players[player]
        if type_id not in state.drafted:
            return self._reject("Captain must be one of your drafted pieces.")
        state.captain_choice = type_id
        logger.debug("P%d nominated %s as captain", player, type_id)

        p1_choice = self.players[1].captain_choice
        p2_choice = self.players[2].captain_choice
        if p1_choice and p2_choice:
            return self.confirm_captains(p1_choice, p2_choice)
        return True

    def confirm_captains(self, p1_type_id: str, p2_type_id: str) -> bool:
        """Create both benches and flag the captains, then start placement."""
        if self.phase != GamePhase.CAPTAIN or self.captains_assigned:
            return self._reject("Captains cannot be assigned now.")
        if p1_type_id not in self.players[1].drafted or p2_type_id not in self.players[2].drafted:
            return self._reject("Captain selection invalid.")

        self._assign_captains(p1_type_id, p2_type_id)
        self._begin_placement()
        return True

    def random_draft(self) -> bool:
        """Draft 4 random types per side (sides may overlap) with random captains."""
        if self.phase != GamePhase.DRAFT:
            return self._reject("Not in draft phase.")
        if any(p.drafted for p in self.players.values()):
            return self._reject("Random draft is only available before the first pick.")

        for state in self.players.values():
            state.drafted = self.rng.sample(PIECE_TYPE_IDS, DRAFT_SIZE)
            self.log(f"{state.name} drafted {', '.join(get_piece_type(t).name for t in state.drafted)}.")

        p1_captain = self.rng.choice(self.players[1].drafted)
        p2_captain = self.rng.choice(self.players[2].drafted)
        self.set_phase(GamePhase.CAPTAIN)
        self._assign_captains(p1_captain, p2_captain)
        self._begin_placement()
        return True

    def _assign_captains(self, p1_type_id: str, p2_type_id: str):
        for player, captain_type in ((1, p1_type_id), (2, p2_type_id)):
            state = self.players[player]
            state.bench = [self.create_piece(type_id, player) for type_id in state.drafted]
            state.captain_choice = captain_type
            for piece in state.bench:
                if piece.type_id == captain_type:
                    piece.is_captain = True
                    break
        self.captains_assigned = True
        self.log(
            f"Captains assigned: {player_label(1)} - {get_piece_type(p1_type_id).name}, "
            f"{player_label(2)} - {get_piece_type(p2_type_id).name}."
        )
        self.emit_event(evt_captains_assigned(p1_type_id, p2_type_id))

    def captain_candidates(self, player: int) -> Optional[list]:
        """Drafted types a player may nominate (None outside the captain phase)."""
        if self.phase != GamePhase.CAPTAIN:
            return None
        return list(self.players[player].drafted)
