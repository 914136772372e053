"""Chess clock: per-player countdown, one side running at a time."""
import time
from typing import Callable, Dict, Optional

from .constants import START_MS


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


def format_time(ms: float) -> str:
    """Format remaining time as MM:SS.d, clamped at zero."""
    clamped = max(0, int(ms))
    seconds = clamped // 1000
    minutes = seconds // 60
    tenths = (clamped % 1000) // 100
    return f"{minutes:02d}:{seconds % 60:02d}.{tenths}"


class ChessClock:
    """Countdown timers for both players.

    Elapsed wall time is attributed to the active player only. Each start()
    re-anchors the baseline so processing delay before a turn switch is not
    charged to the next player.

    Usage:
        clock = ChessClock(time_source=pygame.time.get_ticks)
        clock.start(1)
        expired = clock.tick()  # call every ~100ms; returns player whose time ran out
    """

    def __init__(self, start_ms: float = START_MS,
                 time_source: Optional[Callable[[], float]] = None):
        self.time_source = time_source or monotonic_ms
        self.remaining: Dict[int, float] = {1: float(start_ms), 2: float(start_ms)}
        self.active_player: Optional[int] = None
        self._last_tick: Optional[float] = None

    @property
    def running(self) -> bool:
        return self.active_player is not None

    def now(self) -> float:
        return float(self.time_source())

    def start(self, player: int):
        """Stop whoever is running and start player's countdown from now."""
        self.stop()
        self.active_player = player
        self._last_tick = self.now()

    def stop(self):
        self.active_player = None
        self._last_tick = None

    def tick(self) -> Optional[int]:
        """Deduct elapsed time from the active player.

        Returns the player whose time expired (remaining clamped to 0), else None.
        """
        if self.active_player is None:
            return None
        now = self.now()
        elapsed = max(0.0, now - self._last_tick)
        self._last_tick = now
        player = self.active_player
        self.remaining[player] -= elapsed
        if self.remaining[player] <= 0:
            self.remaining[player] = 0.0
            self.stop()
            return player
        return None

    def time_left(self, player: int) -> float:
        return max(0.0, self.remaining[player])


class ManualTimeSource:
    """Millisecond source advanced by hand (simulations and tests)."""

    def __init__(self, start_ms: float = 0.0):
        self.now = float(start_ms)

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float):
        self.now += ms
