# =========  timing.py  =========
"""
Fixed-cadence helpers driven from the main loop.
No threads: the host polls once per frame and the callback fires on the
same thread, so nothing the callback touches needs locking.
"""

from __future__ import annotations

import time
from typing import Callable, Optional

import config

CAPTION_TICK_SEC = getattr(config, "CAPTION_TICK_SEC", 1.0)


class CadenceTimer:
    """Calls `callback` once per elapsed `interval` seconds."""

    def __init__(self, interval: float, callback: Callable[[], None],
                 clock: Callable[[], float] = time.monotonic) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.interval = interval
        self.callback = callback
        self.clock    = clock
        self._next    = clock() + interval

    def restart(self, now: Optional[float] = None) -> None:
        now = self.clock() if now is None else now
        self._next = now + self.interval

    def poll(self, now: Optional[float] = None) -> int:
        """
        Fire for every deadline that has passed and return how many fired.
        A stalled frame therefore catches up instead of stretching the window.
        """
        now   = self.clock() if now is None else now
        fired = 0
        while now >= self._next:
            self.callback()
            self._next += self.interval
            fired += 1
        return fired
