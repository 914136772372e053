"""Tests for the scheduler and the local match driver."""
import random

from draftchess.commands import (
    Command, EventType, cmd_move, cmd_restart, cmd_click_square, cmd_pick,
    cmd_random_draft, cmd_select_bench_piece, cmd_place_at, cmd_nominate_captain,
)
from draftchess.constants import AI_DELAY_MS, TICK_MS, GamePhase, WinReason
from draftchess.game import Game
from draftchess.match import LocalMatch
from draftchess.scheduler import Scheduler


class TestScheduler:
    """Test delayed callbacks and staleness."""

    def setup_method(self):
        self.token = 0
        self.calls = []
        self.drops = []
        self.scheduler = Scheduler(current_token=lambda: self.token)

    def schedule(self, now=0, delay=100):
        return self.scheduler.schedule(
            now, delay, lambda: self.calls.append(now),
            on_drop=lambda: self.drops.append(now),
        )

    def test_runs_when_due(self):
        """Nothing runs early; the task runs once when due."""
        self.schedule()
        assert self.scheduler.run_due(50) == 0
        assert self.scheduler.run_due(100) == 1
        assert self.calls == [0]
        assert self.scheduler.run_due(200) == 0

    def test_stale_task_dropped(self):
        """A changed token drops the task and calls on_drop."""
        self.schedule()
        self.token = 1
        assert self.scheduler.run_due(100) == 0
        assert self.calls == []
        assert self.drops == [0]

    def test_cancel_all(self):
        """Cancelling drops every pending task."""
        self.schedule(0)
        self.schedule(10)
        self.scheduler.cancel_all()
        assert self.scheduler.pending == []
        assert sorted(self.drops) == [0, 10]
        assert self.scheduler.run_due(1000) == 0


class TestLocalMatch:
    """Test AI scheduling around human input."""

    def make_match(self, game, fake_time):
        match = LocalMatch(game=game, time_source=fake_time, seed=0)
        match.set_ai(2, True)
        return match

    def p1_move(self, game):
        warrior = next(p for p in game.board.get_all_pieces(1) if p.type_id == 'warrior')
        return cmd_move(1, warrior.id, 3, warrior.col)

    def test_ai_replies_after_delay(self, started_game, fake_time):
        """The AI's move lands only after the thinking delay."""
        match = self.make_match(started_game, fake_time)
        assert match.submit(self.p1_move(started_game)).accepted

        match.update()
        assert started_game.ai_busy
        assert match.ai_pending
        assert started_game.active_player == 2

        fake_time.advance(AI_DELAY_MS)
        match.update()
        assert not started_game.ai_busy
        assert started_game.active_player == 1 or started_game.is_over

    def test_human_blocked_while_ai_thinks(self, started_game, fake_time):
        """Human input is refused while a decision is pending."""
        match = self.make_match(started_game, fake_time)
        match.submit(self.p1_move(started_game))
        match.update()

        result = match.submit(cmd_click_square(1, 4, 1))

        assert not result.accepted
        assert result.error == "AI is thinking."

    def test_restart_drops_pending_decision(self, started_game, fake_time):
        """Restart cancels the queued AI step and clears AI control."""
        match = self.make_match(started_game, fake_time)
        match.submit(self.p1_move(started_game))
        match.update()

        assert match.submit(cmd_restart()).accepted

        assert not match.ai_pending
        assert not started_game.ai_busy
        assert match.ai_players == {}
        fake_time.advance(AI_DELAY_MS)
        match.update()
        assert started_game.phase == GamePhase.DRAFT
        assert started_game.players[1].drafted == []

    def test_disabling_ai_drops_decision(self, started_game, fake_time):
        """Toggling the AI off makes its queued step stale."""
        match = self.make_match(started_game, fake_time)
        match.submit(self.p1_move(started_game))
        match.update()
        count = started_game.action_count

        match.set_ai(2, False)
        fake_time.advance(AI_DELAY_MS)
        match.update()

        assert started_game.action_count == count + 1
        assert started_game.active_player == 2
        assert not started_game.ai_busy

    def test_game_over_drops_decision(self, started_game, fake_time):
        """A decision queued before the game ended never runs."""
        match = self.make_match(started_game, fake_time)
        match.submit(self.p1_move(started_game))
        match.update()
        count = started_game.action_count

        started_game.end_game(1, WinReason.CAPTAIN_CAPTURED)
        fake_time.advance(AI_DELAY_MS)
        match.update()

        assert started_game.action_count == count
        assert not started_game.ai_busy
        assert not match.ai_pending

    def test_update_reports_time_loss(self, started_game, fake_time):
        """Clock expiry shows up in the events returned by update."""
        match = LocalMatch(game=started_game, time_source=fake_time)
        fake_time.advance(90_000)
        events = match.update()
        assert EventType.GAME_OVER in [e.type for e in events]
        assert started_game.winner == 2

    def test_command_log(self, started_game, fake_time):
        """Accepted human commands are recorded."""
        match = LocalMatch(game=started_game, time_source=fake_time)
        cmd = self.p1_move(started_game)
        match.submit(cmd)
        match.submit(cmd_click_square(1, 2, 2))
        assert match.command_log == [cmd]


    def test_update_returns_ai_events(self, started_game, fake_time):
        """The AI's move is reported by the update that ran it."""
        match = self.make_match(started_game, fake_time)
        match.submit(self.p1_move(started_game))
        match.update()

        fake_time.advance(AI_DELAY_MS)
        types = [e.type for e in match.update()]

        assert EventType.PIECE_MOVED in types or EventType.PIECE_CAPTURED in types
        assert match.update() == []

    def test_ai_nomination_does_not_block_human(self, captain_game, fake_time):
        """A human can nominate while the AI's captain choice is pending."""
        match = self.make_match(captain_game, fake_time)
        match.update()
        assert match.ai_pending

        assert match.submit(cmd_nominate_captain(1, 'warrior')).accepted
        fake_time.advance(AI_DELAY_MS)
        for _ in range(3):
            match.update()
            fake_time.advance(AI_DELAY_MS)

        assert captain_game.phase == GamePhase.PLACEMENT
        captain = next(p for p in captain_game.players[1].bench if p.is_captain)
        assert captain.type_id == 'warrior'


class TestAIvsAI:
    """Full games driven only by update()."""

    def test_game_reaches_game_over(self, fake_time):
        """Two greedy AIs play from draft to a result."""
        game = Game(time_source=fake_time, rng=random.Random(1))
        match = LocalMatch(game=game, time_source=fake_time, seed=1)
        match.set_ai(1, True)
        match.set_ai(2, True)

        for _ in range(5000):
            if game.is_over:
                break
            match.update()
            fake_time.advance(TICK_MS)

        assert game.phase == GamePhase.GAME_OVER
        assert game.winner in (1, 2)
        assert game.clock.active_player is None
        assert not game.ai_busy or match.ai_pending


class TestReplay:
    """Accepted commands are enough to rebuild a game."""

    def test_command_log_replays(self, fake_time):
        """Serialized commands replayed on a fresh game reach the same board."""
        game = Game(time_source=fake_time, rng=random.Random(3))
        match = LocalMatch(game=game, time_source=fake_time)
        match.submit(cmd_random_draft(1))
        while game.phase == GamePhase.PLACEMENT:
            player = game.placement_player
            piece = game.players[player].bench[0]
            row = game.board.home_row(player)
            col = next(c for c in range(5) if game.board.is_empty(row, c))
            match.submit(cmd_select_bench_piece(player, piece.id))
            match.submit(cmd_place_at(player, row, col))

        copy = Game(time_source=fake_time, rng=random.Random(3))
        for data in [cmd.to_dict() for cmd in match.command_log]:
            assert copy.process_command(Command.from_dict(data)).accepted

        assert copy.board.pretty() == game.board.pretty()
        assert copy.phase == GamePhase.PLAY

    def test_result_to_dict(self, new_game):
        """Results serialize with their events."""
        data = new_game.process_command(cmd_pick(1, 'rogue')).to_dict()
        assert data['accepted']
        assert data['error'] is None
        assert {'type': 'PIECE_DRAFTED', 'player': 1, 'type_id': 'rogue', 'context': {}} in data['events']
