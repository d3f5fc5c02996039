# scheduler.py
from __future__ import annotations
from typing import Callable, Optional


class TickScheduler:
    """
    Fixed-rate timer driven by an external millisecond clock.

    The owner calls poll(now_ms) from its frame loop; the callback runs at
    most once per poll, when a period has elapsed. set_period() re-arms the
    timer so the new rate applies from the next tick on. A stopped
    scheduler never fires.
    """

    def __init__(self, callback: Callable[[], object], period_ms: float):
        if period_ms <= 0:
            raise ValueError(f"period_ms must be positive, got {period_ms}")
        self.callback = callback
        self.period_ms = period_ms
        self.next_due: Optional[float] = None

    @property
    def running(self) -> bool:
        return self.next_due is not None

    def start(self, now_ms: float) -> None:
        self.next_due = now_ms + self.period_ms

    def stop(self) -> None:
        self.next_due = None

    def set_period(self, period_ms: float, now_ms: float) -> None:
        if period_ms <= 0:
            raise ValueError(f"period_ms must be positive, got {period_ms}")
        self.period_ms = period_ms
        if self.running:
            self.start(now_ms)

    def poll(self, now_ms: float) -> bool:
        """Run the callback if a tick is due. Returns True if it ran."""
        if self.next_due is None or now_ms < self.next_due:
            return False
        # Missed periods are dropped instead of replayed in a burst
        due = self.next_due + self.period_ms
        if due <= now_ms:
            due = now_ms + self.period_ms
        self.next_due = due
        self.callback()
        return True
