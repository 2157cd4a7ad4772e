"""Pygame host for Bubble Count.

The main thread owns the window and the event pump; the ``GameLoop`` worker
draws into an offscreen buffer that this module presents every frame.
``GameView`` is the glue: it forwards lifecycle changes and pointer presses to
the loop the same way a platform view would.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import replace

import pygame

from .config import GameConfig
from .game_core import AbstractEngine, GameEngine, SeededRng
from .game_loop import GameLoop, LoopState
from .render import Paints, PygameSurfaceHolder, ShapePaint, TextPaint

logger = logging.getLogger(__name__)

WINDOW_SIZE = (960, 540)
TARGET_FPS = 60
PLACEHOLDER_QUESTION = "Placeholder"

DEFAULT_PAINTS = Paints(
    shape=ShapePaint(color=(60, 140, 230), line_width=2),
    text=TextPaint(color=(235, 235, 245), size=48),
)


class GameView:
    """Connects the window to a ``GameLoop``."""

    def __init__(
        self,
        size: tuple[int, int],
        *,
        engine: GameEngine,
        config: GameConfig,
        paints: Paints = DEFAULT_PAINTS,
    ) -> None:
        self._holder = PygameSurfaceHolder(size)
        self._loop = GameLoop(
            surface=self._holder,
            engine=engine,
            config=config,
            rng=SeededRng(config.seed),
            paints=paints,
        )

    @property
    def loop(self) -> GameLoop:
        return self._loop

    @property
    def surface(self) -> PygameSurfaceHolder:
        return self._holder

    def on_resume(self) -> None:
        if self._loop.state is LoopState.RUNNING:
            return
        if self._loop.worker_alive:
            logger.warning("Previous round is still shutting down; not resuming yet")
            return
        self._loop.resume()

    def on_pause(self) -> None:
        self._loop.pause()

    def new_round(self) -> None:
        self.on_pause()
        self.on_resume()

    def resize(self, size: tuple[int, int]) -> None:
        was_running = self._loop.state is LoopState.RUNNING
        self.on_pause()
        self._holder.resize(size)
        if was_running:
            self.on_resume()

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.MOUSEBUTTONDOWN and getattr(event, "button", 0) == 1:
            if getattr(event, "touch", False):
                # SDL synthesises this from a FINGERDOWN that is handled below.
                return
            pos = getattr(event, "pos", None)
            if pos is not None:
                self._loop.input_handler.on_pointer_down(pos[0], pos[1])
            return

        if event.type == pygame.FINGERDOWN:
            # Finger coordinates are normalised to [0, 1].
            w, h = self._holder.size()
            self._loop.input_handler.on_pointer_down(event.x * w, event.y * h)
            return

        if event.type == pygame.VIDEORESIZE:
            self.resize((event.w, event.h))
            return

        if event.type == pygame.WINDOWMINIMIZED:
            self.on_pause()
        elif event.type == pygame.WINDOWRESTORED:
            self.on_resume()

    def present(self, display: pygame.Surface) -> None:
        self._holder.present(display)

    def close(self) -> None:
        self.on_pause()
        self._holder.invalidate()


def _new_seed() -> int:
    return random.SystemRandom().randint(1, 2**31 - 1)


def run(
    *,
    max_frames: int | None = None,
    event_injector: Callable[[int], None] | None = None,
    config: GameConfig | None = None,
    engine: GameEngine | None = None,
) -> int:
    cfg = config if config is not None else GameConfig.from_env()
    if cfg.seed is None:
        cfg = replace(cfg, seed=_new_seed())
    if cfg.target_fps is None:
        cfg = replace(cfg, target_fps=float(TARGET_FPS))
    logger.info("Starting Bubble Count (seed=%s, sprites=%d)", cfg.seed, cfg.sprite_count)

    pygame.init()
    pygame.display.set_caption("Bubble Count")
    display = pygame.display.set_mode(WINDOW_SIZE, pygame.RESIZABLE)
    clock = pygame.time.Clock()

    game_engine = engine if engine is not None else AbstractEngine(question=PLACEHOLDER_QUESTION)
    view = GameView(display.get_size(), engine=game_engine, config=cfg)

    running = True
    frame = 0
    try:
        view.on_resume()
        while running:
            if event_injector is not None:
                event_injector(frame)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_r:
                    view.new_round()
                else:
                    if event.type == pygame.VIDEORESIZE:
                        display = pygame.display.get_surface()
                    view.handle_event(event)

            view.present(display)
            pygame.display.flip()

            frame += 1
            if max_frames is not None and frame >= max_frames:
                break

            clock.tick(TARGET_FPS)
    finally:
        view.close()
        pygame.quit()

    return 0
