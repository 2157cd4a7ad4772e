from __future__ import annotations

import logging
from collections.abc import Callable

from .game_core import Rect, Rng, SeededRng
from .sprite import BubbleSprite, HideOnTouch, TouchPolicy

logger = logging.getLogger(__name__)

PLACEMENT_RETRIES = 10


def default_label(index: int) -> str:
    return str(index + 1)


class RoundBuilder:
    """Places a fixed number of bubbles in the sprite zone without overlap.

    Each bubble gets up to ``1 + retries`` sampled centres.  A candidate that
    collides with an already placed bubble is resampled; once the retry cap is
    spent the last candidate is kept anyway, so a crowded zone still yields the
    full count instead of stalling the round.
    """

    def __init__(
        self,
        *,
        sprite_count: int,
        radius: float,
        rng: Rng | None = None,
        retries: int = PLACEMENT_RETRIES,
        max_speed: float = 0.0,
        labeler: Callable[[int], str] = default_label,
        touch_policy_factory: Callable[[], TouchPolicy] = HideOnTouch,
    ) -> None:
        if sprite_count < 0:
            raise ValueError("sprite_count must be >= 0")
        if radius <= 0:
            raise ValueError("radius must be > 0")
        if retries < 0:
            raise ValueError("retries must be >= 0")
        self._sprite_count = int(sprite_count)
        self._radius = float(radius)
        self._rng: Rng = rng if rng is not None else SeededRng()
        self._retries = int(retries)
        self._max_speed = float(max_speed)
        self._labeler = labeler
        self._touch_policy_factory = touch_policy_factory

    @property
    def sprite_count(self) -> int:
        return self._sprite_count

    @property
    def max_attempts(self) -> int:
        return self._retries + 1

    def build(self, zone: Rect) -> list[BubbleSprite]:
        sprites: list[BubbleSprite] = []
        overlapped = 0
        for i in range(self._sprite_count):
            x, y, clear = self._place(zone, sprites)
            if not clear:
                overlapped += 1
            x_speed, y_speed = self._velocity()
            sprites.append(
                BubbleSprite(
                    x,
                    y,
                    self._radius,
                    self._labeler(i),
                    x_speed=x_speed,
                    y_speed=y_speed,
                    bounds=zone,
                    touch_policy=self._touch_policy_factory(),
                )
            )
        if overlapped:
            logger.debug(
                "Placed %d bubbles, %d overlapping after %d attempts each",
                len(sprites),
                overlapped,
                self.max_attempts,
            )
        return sprites

    def _place(self, zone: Rect, placed: list[BubbleSprite]) -> tuple[float, float, bool]:
        x = y = 0.0
        for _ in range(self.max_attempts):
            x = self._sample(zone.x, zone.right)
            y = self._sample(zone.y, zone.bottom)
            candidate = BubbleSprite(x, y, self._radius)
            if not any(candidate.is_collision(other) for other in placed):
                return x, y, True
        return x, y, False

    def _sample(self, lo: float, hi: float) -> float:
        r = self._radius
        if hi - lo <= 2 * r:
            # Zone narrower than a bubble: centre it on this axis.
            return (lo + hi) / 2.0
        return self._rng.uniform(lo + r, hi - r)

    def _velocity(self) -> tuple[float, float]:
        if self._max_speed <= 0:
            return 0.0, 0.0
        s = self._max_speed
        return self._rng.uniform(-s, s), self._rng.uniform(-s, s)

