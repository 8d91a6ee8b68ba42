"""
TimeController: simulated UTC clock driving the sky recompute.

The render loop calls step(dt) every frame. The clock advances
continuously, but step() only reports True once per refresh interval
(wall seconds), so the catalog transform runs at ~1 Hz while projection
and drawing run every frame.

Speed steps (simulated seconds per real second):
    SPEEDS = [0, 1, 10, 60, 300, 3600, 86400]
    (paused, real time, 10x, 1min/s, 5min/s, 1h/s, 1d/s)

Controls:
    tc.speed_up() / tc.speed_down()
    tc.reverse()        # run time backwards
    tc.realtime()       # back to real time, resync with the system clock
    tc.toggle_pause()
    tc.jump(seconds)
    tc.step(dt_wall)    # once per frame, True when a recompute is due
"""

from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

SPEEDS = [0, 1, 10, 60, 300, 3600, 86400]
SPEED_LABELS = ["PAUSED", "1×", "10×", "1min/s", "5min/s", "1h/s", "1d/s"]

DEFAULT_REFRESH_INTERVAL = 1.0


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimeController:
    """
    Parameters
    ----------
    start_utc : starting UTC datetime (default: now)
    refresh_interval : wall seconds between sky recomputes
    clock : source of "now" for realtime(); injectable for tests
    """

    def __init__(self,
                 start_utc: Optional[datetime] = None,
                 refresh_interval: float = DEFAULT_REFRESH_INTERVAL,
                 clock: Callable[[], datetime] = _utcnow):
        self._clock = clock
        if start_utc is None:
            start_utc = clock()
        elif start_utc.tzinfo is None:
            start_utc = start_utc.replace(tzinfo=timezone.utc)
        self._utc = start_utc
        self._speed_idx = 1
        self._direction = +1
        self._paused = False
        self.refresh_interval = refresh_interval
        self._since_refresh = 0.0
        self._dirty = True

    # ── Properties ───────────────────────────────────────────────────────────

    @property
    def utc(self) -> datetime:
        return self._utc

    @property
    def speed(self) -> float:
        if self._paused:
            return 0.0
        return SPEEDS[self._speed_idx] * self._direction

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def speed_label(self) -> str:
        if self._paused:
            return "PAUSED"
        lbl = SPEED_LABELS[self._speed_idx]
        return ("◀◀ " if self._direction < 0 else "") + lbl

    # ── Controls ─────────────────────────────────────────────────────────────

    def speed_up(self):
        if self._paused:
            self._paused = False
            self._speed_idx = max(self._speed_idx, 1)
        elif self._speed_idx < len(SPEEDS) - 1:
            self._speed_idx += 1

    def speed_down(self):
        if self._speed_idx > 0:
            self._speed_idx -= 1
        if self._speed_idx == 0:
            self._paused = True

    def toggle_pause(self):
        self._paused = not self._paused
        if not self._paused and self._speed_idx == 0:
            self._speed_idx = 1

    def reverse(self):
        self._direction *= -1

    def realtime(self):
        """Back to real time, synchronised with the system clock."""
        self._utc = self._clock()
        self._speed_idx = 1
        self._direction = +1
        self._paused = False
        self._dirty = True

    def jump(self, delta_seconds: float):
        self._utc += timedelta(seconds=delta_seconds)
        self._dirty = True

    def set_time(self, utc: datetime):
        if utc.tzinfo is None:
            utc = utc.replace(tzinfo=timezone.utc)
        self._utc = utc
        self._dirty = True

    # ── Frame update ─────────────────────────────────────────────────────────

    def step(self, dt_wall: float) -> bool:
        """
        Advance by dt_wall real seconds.

        Returns True when the sky should be recomputed: after a jump or
        resync, or once refresh_interval wall seconds have accumulated.
        """
        if not self._paused:
            self._utc += timedelta(seconds=dt_wall * SPEEDS[self._speed_idx] * self._direction)

        self._since_refresh += dt_wall
        if self._dirty or self._since_refresh >= self.refresh_interval:
            self._since_refresh = 0.0
            self._dirty = False
            return True
        return False
