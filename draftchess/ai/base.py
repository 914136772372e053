"""Base class for AI players.

AI players see the same public queries a front-end sees and act only by
submitting commands through Game.process_command, so they can never do
anything a human could not.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, TYPE_CHECKING

from ..constants import GamePhase, other_player
from ..commands import (
    Command, CommandResult, cmd_pick, cmd_nominate_captain, cmd_select_bench_piece,
    cmd_place_at, cmd_move, cmd_use_special,
)
from ..piece_types import PIECE_TYPE_IDS

if TYPE_CHECKING:
    from ..game import Game


@dataclass
class AIAction:
    """Represents a possible action the AI can take."""
    command: Command
    description: str = ""
    # Sent first when the action needs a selection (placement)
    prelude: Optional[Command] = None
    is_special: bool = False
    captures: bool = False
    captures_captain: bool = False

    def __repr__(self):
        return f"AIAction({self.command.type.name}, {self.description})"


class AIPlayer(ABC):
    """Base class for AI opponents.

    Subclasses implement choose_action() to decide what to do.
    """

    name = "AI"

    def __init__(self, game: 'Game', player: int):
        """Initialize AI player.

        Args:
            game: The game to act in
            player: Player number (1 or 2)
        """
        self.game = game
        self.player = player
        self.last_results: List[CommandResult] = []

    @property
    def opponent(self) -> int:
        return other_player(self.player)

    def is_my_turn(self) -> bool:
        """Check if this AI has something to decide right now."""
        game = self.game
        if game.phase == GamePhase.GAME_OVER:
            return False
        if game.phase == GamePhase.CAPTAIN:
            return not game.captains_assigned and game.players[self.player].captain_choice is None
        if game.phase == GamePhase.PLACEMENT and not game.players[self.player].bench:
            return False
        return game.current_player == self.player

    def get_valid_actions(self) -> List[AIAction]:
        """Get all valid actions the AI can take right now."""
        if not self.is_my_turn():
            return []
        phase = self.game.phase
        if phase == GamePhase.DRAFT:
            return self._get_draft_actions()
        if phase == GamePhase.CAPTAIN:
            return self._get_captain_actions()
        if phase == GamePhase.PLACEMENT:
            return self._get_placement_actions()
        if phase == GamePhase.PLAY:
            return self._get_move_actions() + self._get_special_actions()
        return []

    def _get_draft_actions(self) -> List[AIAction]:
        drafted = self.game.players[self.player].drafted
        return [
            AIAction(cmd_pick(self.player, type_id), f"pick {type_id}")
            for type_id in PIECE_TYPE_IDS if type_id not in drafted
        ]

    def _get_captain_actions(self) -> List[AIAction]:
        return [
            AIAction(cmd_nominate_captain(self.player, type_id), f"captain {type_id}")
            for type_id in self.game.players[self.player].drafted
        ]

    def _get_placement_actions(self) -> List[AIAction]:
        """Every bench piece on every free home-row square, bench order first."""
        game = self.game
        row = game.board.home_row(self.player)
        actions = []
        for piece in game.players[self.player].bench:
            for col in range(game.board.cols):
                if game.board.is_empty(row, col):
                    actions.append(AIAction(
                        cmd_place_at(self.player, row, col),
                        f"place {piece.name} at {(row, col)}",
                        prelude=cmd_select_bench_piece(self.player, piece.id),
                    ))
        return actions

    def _get_move_actions(self) -> List[AIAction]:
        game = self.game
        actions = []
        for piece in game.board.get_all_pieces(self.player):
            for row, col in game.get_legal_moves(piece):
                target = game.board.get_piece(row, col)
                captures = target is not None and target.player != self.player
                actions.append(AIAction(
                    cmd_move(self.player, piece.id, row, col),
                    f"move {piece.name} to {(row, col)}",
                    captures=captures and not target.is_captain,
                    captures_captain=captures and target.is_captain,
                ))
        return actions

    def _get_special_actions(self) -> List[AIAction]:
        game = self.game
        actions = []
        for piece in game.board.get_all_pieces(self.player):
            for target in game.get_special_targets(piece):
                enemy = None
                if target.kind == 'capture':
                    enemy = game.board.get_piece(target.row, target.col)
                captures = enemy is not None and enemy.player != self.player
                actions.append(AIAction(
                    cmd_use_special(self.player, piece.id, target.row, target.col),
                    f"{piece.name} {piece.piece_type.special_name} at {target.coord}",
                    is_special=True,
                    captures=captures and not enemy.is_captain,
                    captures_captain=captures and enemy.is_captain,
                ))
        return actions

    def execute_action(self, action: AIAction) -> List[CommandResult]:
        """Submit an action (prelude first), stopping at the first rejection."""
        results = []
        for cmd in (action.prelude, action.command):
            if cmd is None:
                continue
            result = self.game.process_command(cmd, from_ai=True)
            results.append(result)
            if not result.accepted:
                break
        return results

    @abstractmethod
    def choose_action(self) -> Optional[AIAction]:
        """Choose an action to take. Subclasses must implement this.

        Returns:
            AIAction to execute, or None if no action should be taken
        """
        pass

    def take_turn(self) -> bool:
        """Take one action if it's our turn.

        Returns:
            True if an action was taken, False otherwise.
            The command results are kept in last_results.
        """
        self.last_results = []
        if not self.is_my_turn():
            return False

        action = self.choose_action()
        if action is None:
            return False
        self.last_results = self.execute_action(action)
        return all(r.accepted for r in self.last_results)
