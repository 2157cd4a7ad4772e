"""Worker-thread game loop: round setup, then update/draw until paused.

``resume`` and ``pause`` are called from the host's UI thread.  ``resume``
rebuilds the round from scratch and starts one worker thread; ``pause`` sets
the stop token and joins that worker, so once it returns nothing draws on the
surface anymore.  Between frames the worker waits on the same stop token,
which lets a pause interrupt the frame-pacing sleep immediately.

Touches are queued by the ``InputHandler`` and applied by the worker at the
start of each update pass, so only the worker ever mutates sprites.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from enum import Enum

from .clock import Clock, RealClock, frame_budget_s
from .config import GameConfig
from .game_core import GameEngine, PlayArea, Rng, RoundState, SeededRng
from .input_handler import InputHandler
from .render import Canvas, Paints, RenderSurface, SurfaceUnavailableError
from .round_builder import RoundBuilder
from .sprite import BubbleSprite, HideOnTouch, TouchPolicy

logger = logging.getLogger(__name__)


class LoopState(str, Enum):
    STOPPED = "stopped"
    RUNNING = "running"


TouchPolicyFactory = Callable[[RoundState], Callable[[], TouchPolicy]]


def hide_on_touch(round_state: RoundState) -> Callable[[], TouchPolicy]:
    del round_state
    return HideOnTouch


class GameLoop:
    def __init__(
        self,
        *,
        surface: RenderSurface,
        engine: GameEngine,
        config: GameConfig | None = None,
        rng: Rng | None = None,
        paints: Paints | None = None,
        clock: Clock | None = None,
        input_handler: InputHandler | None = None,
        touch_policy_factory: TouchPolicyFactory = hide_on_touch,
    ) -> None:
        self._surface = surface
        self._engine = engine
        self._config = config if config is not None else GameConfig()
        self._rng: Rng = rng if rng is not None else SeededRng(self._config.seed)
        self._paints = paints if paints is not None else Paints()
        self._clock: Clock = clock if clock is not None else RealClock()
        self._input = input_handler if input_handler is not None else InputHandler()
        self._touch_policy_factory = touch_policy_factory

        self._state = LoopState.STOPPED
        self._thread: threading.Thread | None = None
        self._stop = threading.Event()

        self._round_count = 0
        self._round: RoundState | None = None
        self._play_area: PlayArea | None = None
        self._sprites: list[BubbleSprite] = []
        self._frame_count = 0
        self._skipped_frames = 0

    @property
    def state(self) -> LoopState:
        return self._state

    @property
    def input_handler(self) -> InputHandler:
        return self._input

    @property
    def round(self) -> RoundState | None:
        return self._round

    @property
    def round_count(self) -> int:
        return self._round_count

    @property
    def play_area(self) -> PlayArea | None:
        return self._play_area

    @property
    def sprites(self) -> tuple[BubbleSprite, ...]:
        return tuple(self._sprites)

    @property
    def frame_count(self) -> int:
        return self._frame_count

    @property
    def skipped_frames(self) -> int:
        return self._skipped_frames

    @property
    def worker_alive(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive()

    def resume(self) -> None:
        """Build a fresh round and start the worker thread."""

        if self._state is LoopState.RUNNING:
            raise RuntimeError("Game loop already running; call pause() first")
        if self.worker_alive:
            raise RuntimeError("Previous game loop thread has not exited yet")

        width, height = self._surface.size()
        self._play_area = PlayArea.from_surface(width, height, ratio=self._config.vertical_divide_ratio)
        self.prepare_round()

        self._stop = threading.Event()
        self._thread = threading.Thread(
            target=self._run,
            args=(self._stop,),
            name=f"bubble-count-round-{self._round_count}",
            daemon=True,
        )
        self._state = LoopState.RUNNING
        self._thread.start()
        logger.info("Round %d started on %dx%d surface", self._round_count, width, height)

    def pause(self) -> None:
        """Stop the worker and wait for it to exit."""

        if self._state is LoopState.STOPPED:
            return
        self._stop.set()
        thread = self._thread
        if thread is not None:
            try:
                thread.join(timeout=self._config.join_timeout_s)
            except RuntimeError as exc:
                logger.warning("Could not join game loop thread: %s", exc)
            else:
                if thread.is_alive():
                    logger.warning(
                        "Game loop thread still running after %.1fs; continuing shutdown",
                        self._config.join_timeout_s,
                    )
        if thread is not None and not thread.is_alive():
            self._thread = None
        self._state = LoopState.STOPPED
        logger.info("Round %d paused after %d frames", self._round_count, self._frame_count)

    def prepare_round(self) -> None:
        """Snapshot the question and lay out a new set of bubbles."""

        if self._play_area is None:
            width, height = self._surface.size()
            self._play_area = PlayArea.from_surface(width, height, ratio=self._config.vertical_divide_ratio)
        self._round_count += 1
        self._round = RoundState.from_engine(self._round_count, self._engine)
        self._input.clear()
        builder = RoundBuilder(
            sprite_count=self._config.sprite_count,
            radius=self._config.bubble_radius,
            rng=self._rng,
            retries=self._config.placement_retries,
            max_speed=self._config.max_speed,
            touch_policy_factory=self._touch_policy_factory(self._round),
        )
        self._sprites = builder.build(self._play_area.sprite_zone)
        self._frame_count = 0

    def update(self) -> None:
        self._input.drain(self._sprites)
        for sprite in self._sprites:
            # Sprites are never removed mid-round; the expired flag is advisory.
            sprite.update()

    def draw(self) -> bool:
        """Render one frame. Returns False when the frame was skipped."""

        area = self._play_area
        if area is None or not self._surface.is_valid():
            self._skipped_frames += 1
            return False
        try:
            canvas = self._surface.lock_canvas()
        except SurfaceUnavailableError as exc:
            logger.debug("Skipping frame, surface unavailable: %s", exc)
            self._skipped_frames += 1
            return False

        try:
            self._render(canvas, area)
        except SurfaceUnavailableError as exc:
            logger.debug("Frame aborted mid-draw: %s", exc)
            self._skipped_frames += 1
            return False
        finally:
            self._surface.unlock_canvas_and_post(canvas)
        return True

    def _render(self, canvas: Canvas, area: PlayArea) -> None:
        paints = self._paints
        canvas.fill(self._config.background_color)
        canvas.draw_line(0.0, area.divider_y, area.width, area.divider_y, paints.shape)
        if self._round is not None:
            tx, ty = area.text_center
            canvas.draw_text(self._round.question, tx, ty, paints.text)
        for sprite in self._sprites:
            sprite.draw(canvas, paints.shape, paints.text)

    def _run(self, stop: threading.Event) -> None:
        budget = frame_budget_s(self._config.target_fps)
        while not stop.is_set():
            started = self._clock.now()
            try:
                self.update()
                self.draw()
            except Exception:
                # A failing frame (for example a host touch callback) must not end the round.
                logger.exception("Game loop frame %d failed", self._frame_count)
            self._frame_count += 1
            remaining = budget - (self._clock.now() - started)
            if remaining > 0:
                stop.wait(remaining)
