from __future__ import annotations

import logging
import queue
from collections.abc import Iterable

from .sprite import Sprite

logger = logging.getLogger(__name__)


class InputHandler:
    """Turns pointer-down coordinates into ``touched()`` calls.

    The UI thread only enqueues points; the game loop worker applies them at
    the start of its next update pass, so sprites have a single writer.  Every
    visible sprite under the point is touched, not just the first one.
    """

    def __init__(self) -> None:
        self._pending: queue.SimpleQueue[tuple[float, float]] = queue.SimpleQueue()

    def on_pointer_down(self, x: float, y: float) -> None:
        self._pending.put((float(x), float(y)))

    @property
    def pending(self) -> bool:
        return not self._pending.empty()

    def clear(self) -> None:
        while True:
            try:
                self._pending.get_nowait()
            except queue.Empty:
                return

    def drain(self, sprites: Iterable[Sprite]) -> int:
        """Apply every queued touch to ``sprites``; returns how many sprites were touched."""

        targets = list(sprites)
        touched = 0
        while True:
            try:
                x, y = self._pending.get_nowait()
            except queue.Empty:
                return touched
            touched += self.touch(targets, x, y)

    def touch(self, sprites: Iterable[Sprite], x: float, y: float) -> int:
        hits = 0
        for sprite in sprites:
            # Hidden bubbles are already popped and cannot be hit again.
            if not sprite.visible:
                continue
            if sprite.contains_point(x, y):
                sprite.touched()
                hits += 1
        if hits:
            logger.debug("Touch at (%.1f, %.1f) hit %d sprite(s)", x, y, hits)
        return hits
