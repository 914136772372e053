"""Delayed callbacks checked for staleness before they run.

Each task carries the state token of the moment it was scheduled. When the
task comes due, the current token is compared; if the game has moved on
(restart, phase change, turn change, another action) the task is dropped.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Hashable, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class ScheduledTask:
    """A callback due at a given time, valid only for the token it was issued for."""
    due_at: float
    token: Hashable
    callback: Callable[[], None]
    description: str = ""
    on_drop: Optional[Callable[[], None]] = None  # Runs instead of callback when dropped
    cancelled: bool = False

    def drop(self):
        if self.cancelled:
            return
        self.cancelled = True
        if self.on_drop is not None:
            self.on_drop()


class Scheduler:
    """Minimal timer queue driven by an external clock.

    Usage:
        scheduler = Scheduler(current_token=game.state_token)
        scheduler.schedule(now, 400, ai_step, "P2 move")
        scheduler.run_due(now)  # from the frame loop
    """

    def __init__(self, current_token: Callable[[], Hashable]):
        self.current_token = current_token
        self._tasks: List[ScheduledTask] = []

    @property
    def pending(self) -> List[ScheduledTask]:
        return [t for t in self._tasks if not t.cancelled]

    def schedule(self, now: float, delay_ms: float, callback: Callable[[], None],
                 description: str = "",
                 on_drop: Optional[Callable[[], None]] = None) -> ScheduledTask:
        task = ScheduledTask(
            due_at=now + delay_ms,
            token=self.current_token(),
            callback=callback,
            description=description,
            on_drop=on_drop,
        )
        self._tasks.append(task)
        return task

    def cancel_all(self):
        for task in self._tasks:
            task.drop()
        self._tasks = []

    def run_due(self, now: float) -> int:
        """Run every task whose time has come. Returns the number actually executed."""
        due = [t for t in self._tasks if t.due_at <= now]
        if not due:
            return 0
        self._tasks = [t for t in self._tasks if t.due_at > now]

        executed = 0
        for task in sorted(due, key=lambda t: t.due_at):
            if task.cancelled:
                continue
            if task.token != self.current_token():
                logger.debug("Dropping stale task: %s", task.description)
                task.drop()
                continue
            task.callback()
            executed += 1
        return executed
