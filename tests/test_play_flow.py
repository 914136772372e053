"""Tests for the play phase: selection, click routing, turn hand-over and the command router."""
from draftchess.commands import (
    Command, CommandType, EventType,
    cmd_move, cmd_use_special, cmd_click_square, cmd_select_bench_piece,
    cmd_nominate_captain, cmd_set_ai, cmd_restart, cmd_deselect, cmd_pick,
)
from draftchess.constants import GamePhase, WinReason
from draftchess.selection import OwnSelection, PreviewSelection


def event_types(result):
    return [e.type for e in result.events]


class TestSelection:
    """Test own selection, opponent preview and special mode."""

    def test_select_own_piece(self, game, place):
        """Clicking an own piece selects it."""
        warrior = place('warrior', 1, 2, 2)
        assert game.select_board_piece(2, 2)
        assert isinstance(game.selection, OwnSelection)
        assert game.selected_piece is warrior
        assert not game.special_mode

    def test_preview_enemy_when_nothing_selected(self, game, place):
        """An enemy piece can be previewed but not controlled."""
        enemy = place('mage', 2, 0, 0)
        assert game.select_board_piece(0, 0)
        assert isinstance(game.selection, PreviewSelection)
        assert game.selected_piece is enemy
        assert game.is_preview

    def test_no_preview_while_own_selected(self, game, place):
        """Previewing requires deselecting the own piece first."""
        warrior = place('warrior', 1, 2, 2)
        place('mage', 2, 0, 0)
        game.select_board_piece(2, 2)

        assert not game.select_board_piece(0, 0)

        assert game.last_error == "Deselect your piece before previewing an opponent piece."
        assert game.selected_piece is warrior

    def test_empty_square_clears_preview(self, game, place):
        """Selecting an empty square while previewing clears the preview."""
        place('mage', 2, 0, 0)
        game.select_board_piece(0, 0)
        assert game.select_board_piece(3, 3)
        assert game.selection is None

    def test_empty_square_without_preview_rejected(self, game):
        """Nothing to select on an empty square."""
        assert not game.select_board_piece(3, 3)
        assert game.last_error == "No piece on that square."

    def test_deselect(self, game, place):
        """Deselect always succeeds."""
        place('warrior', 1, 2, 2)
        game.select_board_piece(2, 2)
        assert game.deselect()
        assert game.selection is None
        assert game.deselect()

    def test_toggle_special_needs_own_selection(self, game, place):
        """Special mode needs an own piece selected."""
        place('mage', 2, 0, 0)
        assert not game.toggle_special_mode()
        game.select_board_piece(0, 0)
        assert not game.toggle_special_mode()
        assert game.last_error == "Select one of your pieces first."

    def test_toggle_special_on_and_off(self, game, place):
        """Toggling flips special mode."""
        place('mage', 1, 2, 2)
        game.select_board_piece(2, 2)
        assert game.toggle_special_mode()
        assert game.special_mode
        assert game.toggle_special_mode()
        assert not game.special_mode

    def test_toggle_special_after_use_rejected(self, game, place):
        """A used special cannot be armed again."""
        mage = place('mage', 1, 2, 2)
        mage.special_used = True
        game.select_board_piece(2, 2)
        assert not game.toggle_special_mode()
        assert game.last_error == "Special already used."


class TestActions:
    """Test act_at, self-targeted specials and click routing."""

    def test_illegal_act_keeps_selection_and_turn(self, game, place):
        """A rejected action changes nothing."""
        warrior = place('warrior', 1, 2, 2)
        game.select_board_piece(2, 2)

        assert not game.act_at(0, 0)

        assert game.last_error == "Not a legal move."
        assert game.selected_piece is warrior
        assert warrior.position == (2, 2)
        assert game.active_player == 1

    def test_move_passes_turn(self, game, place):
        """A move clears the selection and hands the turn over."""
        warrior = place('warrior', 1, 2, 2)
        game.select_board_piece(2, 2)

        assert game.act_at(1, 2)

        assert warrior.position == (1, 2)
        assert game.selection is None
        assert game.active_player == 2
        assert game.clock.active_player == 2
        assert game.messages[-1] == "P1 Warrior moved (2, 2) -> (1, 2)."

    def test_special_mode_act(self, game, place):
        """With special mode on, act_at applies the special."""
        mage = place('mage', 1, 2, 2)
        game.select_board_piece(2, 2)
        game.toggle_special_mode()

        assert game.act_at(0, 0)

        assert mage.position == (0, 0)
        assert mage.special_used
        assert game.messages[-1] == "P1 Mage used Blink."

    def test_failed_special_not_consumed(self, game, place):
        """A special aimed at an invalid square stays available."""
        warrior = place('warrior', 1, 2, 2)
        assert not game.use_special(warrior.id, 0, 0)
        assert game.last_error == "Not a valid special target."
        assert not warrior.special_used
        assert game.active_player == 1

    def test_activate_self_special(self, game, place):
        """Fortify fires on the selected Sentinel."""
        sentinel = place('sentinel', 1, 4, 4)
        game.select_board_piece(4, 4)
        assert game.activate_self_special()
        assert sentinel.is_fortified
        assert game.active_player == 2

    def test_activate_self_special_wrong_piece(self, game, place):
        """Only self-targeted specials can be activated this way."""
        place('warrior', 1, 2, 2)
        game.select_board_piece(2, 2)
        assert not game.activate_self_special()
        assert game.last_error == "This piece has no self-targeted special."

    def test_move_other_players_piece_rejected(self, game, place):
        """Self-contained moves check ownership."""
        enemy = place('warrior', 2, 0, 0)
        assert not game.move(enemy.id, 1, 0)
        assert game.last_error == "Not your piece."

    def test_click_selects_then_moves(self, game, place):
        """Two clicks: select, then move."""
        warrior = place('warrior', 1, 2, 2)
        assert game.click_square(2, 2)
        assert game.click_square(3, 2)
        assert warrior.position == (3, 2)
        assert game.active_player == 2

    def test_click_own_piece_reselects(self, game, place):
        """Clicking another own piece switches the selection."""
        place('warrior', 1, 2, 2)
        mage = place('mage', 1, 4, 4)
        game.click_square(2, 2)
        assert game.click_square(4, 4)
        assert game.selected_piece is mage

    def test_click_illegal_square_keeps_selection(self, game, place):
        """An unreachable empty square is rejected and the selection stays."""
        warrior = place('warrior', 1, 2, 2)
        game.click_square(2, 2)
        assert not game.click_square(0, 0)
        assert game.last_error == "Not a legal move."
        assert game.selected_piece is warrior

    def test_click_clears_preview(self, game, place):
        """Any click that does not select clears a preview."""
        place('mage', 2, 0, 0)
        place('rogue', 2, 0, 4)
        game.click_square(0, 0)
        assert game.click_square(0, 4)
        assert game.selection is None

    def test_click_nothing_selected(self, game):
        """Clicking empty board with no selection is rejected."""
        assert not game.click_square(2, 2)
        assert game.last_error == "Nothing selected."

    def test_click_in_placement_places(self, placement_game):
        """During placement a click puts the selected bench piece down."""
        piece = placement_game.players[1].bench[0]
        placement_game.select_bench_piece(piece.id)
        assert placement_game.click_square(4, 1)
        assert piece.position == (4, 1)


class TestCaptainCapture:
    """Capturing a captain ends the game on the spot."""

    def test_move_capture_of_captain(self, game, place):
        """Winner set, clock stopped, no turn hand-over or decay."""
        warrior = place('warrior', 1, 2, 2)
        place('rogue', 2, 2, 3, captain=True)
        p2_sentinel = place('sentinel', 2, 0, 0, fortified=1)

        result = game.process_command(cmd_move(1, warrior.id, 2, 3))

        assert result.accepted
        assert game.phase == GamePhase.GAME_OVER
        assert game.winner == 1
        assert game.win_reason == WinReason.CAPTAIN_CAPTURED
        assert game.active_player == 1
        assert game.clock.active_player is None
        assert p2_sentinel.fortified_turns_left == 1
        types = event_types(result)
        assert EventType.PIECE_CAPTURED in types
        assert EventType.GAME_OVER in types
        assert EventType.TURN_STARTED not in types
        assert game.result_message == "P1 wins by capturing the captain!"

    def test_special_capture_of_captain(self, game, place):
        """Shoot on the captain also ends the game."""
        ranger = place('ranger', 1, 2, 2)
        place('warrior', 2, 0, 2, captain=True)

        result = game.process_command(cmd_use_special(1, ranger.id, 0, 2))

        assert result.accepted
        assert game.winner == 1
        assert ranger.position == (2, 2)
        assert EventType.TURN_STARTED not in event_types(result)

    def test_non_captain_capture_continues(self, game, place):
        """Ordinary captures keep the game going."""
        warrior = place('warrior', 1, 2, 2)
        enemy = place('rogue', 2, 2, 3)
        place('mage', 2, 0, 0, captain=True)

        result = game.process_command(cmd_move(1, warrior.id, 2, 3))

        assert enemy.captured
        assert game.phase == GamePhase.PLAY
        assert game.active_player == 2
        assert EventType.TURN_STARTED in event_types(result)


class TestCommandRouter:
    """Test process_command validation."""

    def test_not_your_turn(self, game, place):
        """Commands from the player not on move are refused."""
        enemy = place('warrior', 2, 0, 0)
        result = game.process_command(cmd_move(2, enemy.id, 1, 0))
        assert not result.accepted
        assert result.error == "Not your turn."
        assert enemy.position == (0, 0)

    def test_ai_controlled_player_rejects_human_input(self, game, place):
        """Human commands for an AI side are refused, AI commands pass."""
        warrior = place('warrior', 1, 2, 2)
        game.ai_enabled[1] = True

        result = game.process_command(cmd_move(1, warrior.id, 1, 2))
        assert result.error == "Player 1 is controlled by the AI."

        assert game.process_command(cmd_move(1, warrior.id, 1, 2), from_ai=True).accepted

    def test_ai_busy_rejects_human_input(self, game, place):
        """While the AI is thinking no human input is processed."""
        warrior = place('warrior', 1, 2, 2)
        game.ai_busy = True
        result = game.process_command(cmd_click_square(1, 2, 2))
        assert result.error == "AI is thinking."
        assert game.selection is None

    def test_game_over_only_session_commands(self, game, place):
        """After the game ends only SET_AI and RESTART are accepted."""
        warrior = place('warrior', 1, 2, 2)
        game.end_game(2, WinReason.TIME_EXPIRED)

        assert game.process_command(cmd_move(1, warrior.id, 1, 2)).error == "Game is over."
        assert game.process_command(cmd_deselect(1)).error == "Game is over."
        assert game.process_command(cmd_set_ai(2, True)).accepted
        assert game.process_command(cmd_restart()).accepted
        assert game.phase == GamePhase.DRAFT

    def test_action_count_only_on_accept(self, new_game):
        """Rejected commands do not advance the action counter."""
        assert new_game.process_command(cmd_pick(1, 'warrior')).accepted
        assert new_game.action_count == 1
        assert not new_game.process_command(cmd_pick(2, 'dragon')).accepted
        assert new_game.action_count == 1

    def test_nomination_ignores_turn(self, captain_game):
        """Both sides can nominate in any order."""
        assert captain_game.process_command(cmd_nominate_captain(2, 'rogue')).accepted
        assert captain_game.process_command(cmd_nominate_captain(1, 'mage')).accepted
        assert captain_game.phase == GamePhase.PLACEMENT

    def test_nomination_from_unknown_player(self, captain_game):
        """Only players 1 and 2 can nominate."""
        result = captain_game.process_command(Command(CommandType.NOMINATE_CAPTAIN, 3, type_id='warrior'))
        assert not result.accepted
        assert result.error == "Invalid player: 3"
        assert captain_game.phase == GamePhase.CAPTAIN

    def test_nomination_while_ai_busy(self, captain_game):
        """A pending AI decision does not block a human nomination."""
        captain_game.ai_enabled[2] = True
        captain_game.ai_busy = True
        assert captain_game.process_command(cmd_nominate_captain(1, 'warrior')).accepted
        assert captain_game.players[1].captain_choice == 'warrior'
        assert captain_game.process_command(cmd_deselect(1)).error == "AI is thinking."

    def test_placement_through_commands(self, placement_game):
        """Bench selection and a board click place a piece."""
        piece = placement_game.players[1].bench[0]
        assert placement_game.process_command(cmd_select_bench_piece(1, piece.id)).accepted
        result = placement_game.process_command(cmd_click_square(1, 4, 2))
        assert result.accepted
        assert EventType.PIECE_PLACED in event_types(result)

    def test_missing_square(self, game):
        """Square commands need a square."""
        result = game.process_command(Command(CommandType.ACT_AT, 1))
        assert result.error == "No square given."

    def test_rejection_carries_no_events(self, game):
        """A rejected command changes nothing and emits nothing."""
        result = game.process_command(cmd_click_square(1, 2, 2))
        assert not result.accepted
        assert result.events == []


class TestSession:
    """Test log bounds, restart and snapshots."""

    def test_log_is_bounded(self, new_game):
        """Only the last 100 messages are kept."""
        for i in range(150):
            new_game.log(f"line {i}")
        assert len(new_game.messages) == 100
        assert new_game.messages[0] == "line 50"
        assert new_game.messages[-1] == "line 149"

    def test_restart_resets_everything(self, started_game, fake_time):
        """Restart returns to a fresh draft and bumps the generation."""
        g = started_game
        g.ai_enabled[2] = True
        fake_time.advance(3000)
        g.tick()
        token = g.state_token()

        assert g.restart()

        assert g.phase == GamePhase.DRAFT
        assert g.generation == 1
        assert g.ai_enabled == {1: False, 2: False}
        assert g.time_left(1) == 90_000
        assert g.board.get_all_pieces() == []
        assert g.messages == ["New game. Draft phase: P1 picks first."]
        assert g.state_token() != token

    def test_to_dict(self, started_game):
        """Snapshot exposes phase, turn and clocks."""
        data = started_game.to_dict()
        assert data['phase'] == 'PLAY'
        assert data['current_player'] == 1
        assert data['time_ms'] == {1: 90_000, 2: 90_000}
        assert len(data['pieces']) == 8
