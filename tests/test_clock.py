"""Tests for the chess clock and time expiration."""
from draftchess.clock import ChessClock, ManualTimeSource, format_time
from draftchess.commands import EventType
from draftchess.constants import GamePhase, WinReason


class TestFormatTime:
    """Test MM:SS.d formatting."""

    def test_full_time(self):
        assert format_time(90_000) == "01:30.0"

    def test_tenths_truncate(self):
        assert format_time(61_299) == "01:01.2"

    def test_negative_clamps_to_zero(self):
        assert format_time(-250) == "00:00.0"


class TestChessClock:
    """Test the countdown in isolation."""

    def test_only_active_player_is_charged(self):
        """Elapsed time goes to the running side."""
        now = ManualTimeSource()
        clock = ChessClock(time_source=now)
        clock.start(1)
        now.advance(1500)
        assert clock.tick() is None
        assert clock.time_left(1) == 88_500
        assert clock.time_left(2) == 90_000

    def test_idle_clock_charges_nothing(self):
        """A clock that was never started does not move."""
        now = ManualTimeSource()
        clock = ChessClock(time_source=now)
        now.advance(10_000)
        assert clock.tick() is None
        assert clock.time_left(1) == 90_000

    def test_start_reanchors(self):
        """Unticked time before a switch is not charged to anyone."""
        now = ManualTimeSource()
        clock = ChessClock(time_source=now)
        clock.start(1)
        now.advance(700)
        clock.start(2)
        now.advance(300)
        clock.tick()
        assert clock.time_left(1) == 90_000
        assert clock.time_left(2) == 89_700

    def test_expiry_clamps_and_stops(self):
        """Running out returns the player and stops the clock."""
        now = ManualTimeSource()
        clock = ChessClock(start_ms=1000, time_source=now)
        clock.start(2)
        now.advance(1200)
        assert clock.tick() == 2
        assert clock.remaining[2] == 0
        assert not clock.running


class TestGameClock:
    """Test the clock as driven by the game."""

    def test_tick_outside_play_is_noop(self, new_game, fake_time):
        """Draft time is free."""
        fake_time.advance(5000)
        assert new_game.tick() is None
        assert new_game.time_left(1) == 90_000

    def test_turn_switch_moves_the_clock(self, game, place, fake_time):
        """After a move the opponent's time runs."""
        warrior = place('warrior', 1, 2, 2)
        fake_time.advance(2000)
        game.tick()
        assert game.move(warrior.id, 1, 2)
        fake_time.advance(1000)
        game.tick()
        assert game.time_left(1) == 88_000
        assert game.time_left(2) == 89_000

    def test_time_expiration_ends_game(self, game, fake_time):
        """P1 running out of time makes P2 the winner."""
        fake_time.advance(90_100)
        assert game.tick() == 1

        assert game.phase == GamePhase.GAME_OVER
        assert game.winner == 2
        assert game.win_reason == WinReason.TIME_EXPIRED
        assert game.time_left(1) == 0
        assert game.result_message == "P2 wins on time!"
        types = [e.type for e in game.pop_events()]
        assert EventType.CLOCK_EXPIRED in types
        assert EventType.GAME_OVER in types

    def test_no_ticks_after_game_over(self, game, fake_time):
        """The clock is stopped once the game ends."""
        game.end_game(1, WinReason.CAPTAIN_CAPTURED)
        fake_time.advance(5000)
        assert game.tick() is None
        assert game.time_left(1) == 90_000
