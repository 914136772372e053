"""Command processing - central entry point for all player commands."""
import logging

from ..constants import GamePhase
from ..commands import (
    Command, CommandType, CommandResult, TURN_COMMANDS, SESSION_COMMANDS,
)

logger = logging.getLogger(__name__)


class CommandsMixin:
    """Mixin for command processing and session control."""

    def process_command(self, cmd: Command, from_ai: bool = False) -> CommandResult:
        """Validate and apply a player command.

        Human input, AI decisions and simulations all come through here.
        A rejected command leaves the state unchanged and carries the reason.
        """
        self.last_error = None

        if cmd.type not in SESSION_COMMANDS:
            if self.phase == GamePhase.GAME_OVER:
                return self._result(self._reject("Game is over."))
            if not from_ai:
                if self.ai_enabled.get(cmd.player):
                    return self._result(
                        self._reject(f"Player {cmd.player} is controlled by the AI."))
                # Captain nominations are simultaneous; a pending AI choice does not block them
                if self.ai_busy and cmd.type != CommandType.NOMINATE_CAPTAIN:
                    return self._result(self._reject("AI is thinking."))

        # Captain nominations happen simultaneously; no turn holder
        if cmd.type in TURN_COMMANDS and cmd.type != CommandType.NOMINATE_CAPTAIN:
            if cmd.player != self.current_player:
                return self._result(self._reject("Not your turn."))

        accepted = self._route(cmd)
        if accepted:
            self.action_count += 1
        else:
            logger.debug("P%d %s rejected: %s", cmd.player, cmd.type.name, self.last_error)
        return self._result(accepted)

    def _result(self, accepted: bool) -> CommandResult:
        return CommandResult(
            accepted=accepted,
            events=self.pop_events(),
            error=None if accepted else self.last_error,
        )

    def _route(self, cmd: Command) -> bool:
        t = cmd.type

        if t == CommandType.PICK:
            return self.pick(cmd.type_id)
        elif t == CommandType.NOMINATE_CAPTAIN:
            return self.nominate_captain(cmd.player, cmd.type_id)
        elif t == CommandType.CONFIRM_CAPTAINS:
            return self.confirm_captains(cmd.p1_type_id, cmd.p2_type_id)
        elif t == CommandType.RANDOM_DRAFT:
            return self.random_draft()

        elif t == CommandType.SELECT_BENCH_PIECE:
            if cmd.piece_id is None:
                return self._reject("No piece given.")
            return self.select_bench_piece(cmd.piece_id)
        elif t == CommandType.PLACE_AT:
            return self._with_square(cmd, self.place_at)

        elif t == CommandType.SELECT_BOARD_PIECE:
            return self._with_square(cmd, self.select_board_piece)
        elif t == CommandType.DESELECT:
            return self.deselect()
        elif t == CommandType.TOGGLE_SPECIAL:
            return self.toggle_special_mode()

        elif t == CommandType.CLICK_SQUARE:
            return self._with_square(cmd, self.click_square)
        elif t == CommandType.ACT_AT:
            return self._with_square(cmd, self.act_at)
        elif t == CommandType.ACTIVATE_SELF_SPECIAL:
            return self.activate_self_special()

        elif t == CommandType.MOVE:
            if cmd.piece_id is None or cmd.row is None or cmd.col is None:
                return self._reject("Incomplete move.")
            return self.move(cmd.piece_id, cmd.row, cmd.col)
        elif t == CommandType.USE_SPECIAL:
            if cmd.piece_id is None or cmd.row is None or cmd.col is None:
                return self._reject("Incomplete special.")
            return self.use_special(cmd.piece_id, cmd.row, cmd.col)

        elif t == CommandType.SET_AI:
            return self.set_ai_enabled(cmd.player, bool(cmd.enabled))
        elif t == CommandType.RESTART:
            return self.restart()

        return self._reject(f"Unknown command: {t}")

    def _with_square(self, cmd: Command, handler) -> bool:
        if cmd.row is None or cmd.col is None:
            return self._reject("No square given.")
        return handler(cmd.row, cmd.col)

    # =========================================================================
    # SESSION
    # =========================================================================

    def set_ai_enabled(self, player: int, enabled: bool) -> bool:
        if player not in self.ai_enabled:
            return self._reject(f"Invalid player: {player}")
        self.ai_enabled[player] = enabled
        logger.info("AI %s for P%d", "enabled" if enabled else "disabled", player)
        return True

    def restart(self) -> bool:
        """Reset everything to a fresh draft.

        Bumps the generation so callbacks scheduled before the restart go stale.
        """
        self.generation += 1
        self.ai_enabled = {1: False, 2: False}
        self._reset_state()
        self.log("New game. Draft phase: P1 picks first.")
        logger.info("Game restarted (generation %d)", self.generation)
        return True
