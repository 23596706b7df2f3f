"""
lane_scheduler.py

Lane allocation for floating captions.

Every caption that scrolls across the picture lives in one of
`LANE_COUNT` horizontal lanes.  The scheduler hands lanes out in a
shuffled round-robin order so consecutive captions land far apart, and
widens the pool from `NORMAL_LANES` to all lanes when recent submission
load is high.

Public API
----------
reset()          – fresh shuffle, zero history, cursor 0, Normal mode
submit() → lane  – record one caption, return its lane
tick()           – roll the frequency window (call on a fixed cadence)

The scheduler is not thread-safe; the host serializes calls.
"""

from __future__ import annotations

import random
from enum import Enum
from typing import Optional

import config

LANE_COUNT          = getattr(config, "LANE_COUNT", 24)
NORMAL_LANES        = getattr(config, "NORMAL_LANES", 12)
HIGH_FREQ_THRESHOLD = getattr(config, "HIGH_FREQ_THRESHOLD", 4)

# FrequencyHistory slots
_PREV2, _PREV1, _CURRENT, _AVERAGE = range(4)


class Mode(Enum):
    NORMAL    = "normal"
    HIGH_FREQ = "high_freq"


# ── Scheduler ───────────────────────────────────────────────────────────────
class LaneScheduler:
    """Shuffled round-robin lane picker with a load-sensitive lane pool."""

    # ---------------------------------------------------------------- init
    def __init__(self, rng: Optional[random.Random] = None,
                 seed: Optional[int] = None) -> None:
        if rng is None:
            rng = random.Random(seed)
        self._rng = rng
        self._perm: list[int] = list(range(LANE_COUNT))
        self._freq: list[int] = [0, 0, 0, 0]
        self._cursor = 0
        self._mode = Mode.NORMAL
        self.reset()

    # ---------------------------------------------------------- read-only views
    @property
    def permutation(self) -> tuple[int, ...]:
        return tuple(self._perm)

    @property
    def history(self) -> tuple[int, ...]:
        return tuple(self._freq)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def active_lanes(self) -> int:
        return LANE_COUNT if self._mode is Mode.HIGH_FREQ else NORMAL_LANES

    def snapshot(self) -> dict:
        """Plain-dict state for diagnostics pages."""
        return {
            "mode":         self._mode.value,
            "active_lanes": self.active_lanes,
            "cursor":       self._cursor,
            "history":      list(self._freq),
            "permutation":  list(self._perm),
        }

    # ---------------------------------------------------------------- reset
    def reset(self) -> None:
        self._perm = list(range(LANE_COUNT))
        half = LANE_COUNT // 2
        self.shuffle_range(LANE_COUNT - 1, half)     # upper lanes
        self.shuffle_range(half - 1, half)           # lower lanes
        self._freq = [0, 0, 0, 0]
        self._cursor = 0
        self._mode = Mode.NORMAL

    def shuffle_range(self, base: int, length: int) -> None:
        """
        Shuffle the `length` slots ending at index `base`, walking down.

        Step i swaps slot `base - i` with slot `base - r`, r drawn from
        [0, length).  A length reaching past index 0 is clamped to
        `base + 1`.
        """
        if not 0 <= base < LANE_COUNT:
            raise ValueError(f"base index {base} outside 0..{LANE_COUNT - 1}")
        if length < 0:
            raise ValueError(f"negative shuffle length {length}")

        if base - length < -1:
            length = base + 1

        perm = self._perm
        for i in range(length):
            r = self._rng.randrange(length)
            perm[base - i], perm[base - r] = perm[base - r], perm[base - i]

    # ---------------------------------------------------------------- submit
    def submit(self) -> int:
        """Count one caption against the current window and return its lane."""
        self._freq[_CURRENT] += 1

        if self._freq[_AVERAGE] >= HIGH_FREQ_THRESHOLD:
            self._mode = Mode.HIGH_FREQ
        else:
            self._mode = Mode.NORMAL

        # After HIGH_FREQ → NORMAL the cursor may still sit above
        # NORMAL_LANES; it is only folded back by the modulo below.
        lane = self._perm[self._cursor]
        self._cursor = (self._cursor + 1) % self.active_lanes
        return lane

    # ---------------------------------------------------------------- tick
    def tick(self) -> None:
        f = self._freq
        f[_AVERAGE] = (f[_PREV2] + f[_PREV1] + f[_CURRENT]) // 3
        f[_PREV2], f[_PREV1], f[_CURRENT] = f[_PREV1], f[_CURRENT], 0
