from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    """Monotonic time source used for frame pacing.

    The game loop asks this for the start of each frame instead of reading
    real time directly, so tests can drive it with a fake.
    """

    def now(self) -> float:
        """Return monotonic seconds."""


class RealClock:
    """Production clock backed by time.monotonic()."""

    def now(self) -> float:
        return time.monotonic()


def frame_budget_s(target_fps: float | None) -> float:
    """Seconds available per frame, or 0.0 when the loop is uncapped."""

    if target_fps is None or target_fps <= 0:
        return 0.0
    return 1.0 / float(target_fps)
