"""Render surface abstraction and the pygame implementation behind it.

The game loop draws through two small protocols, ``RenderSurface`` and
``Canvas``, so it never touches pygame directly and can be exercised headlessly
with recording doubles.  ``PygameSurfaceHolder`` is the production surface: it
is double buffered so the worker thread only ever draws into an offscreen back
buffer, while the UI thread presents the last posted frame onto the display.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Protocol

import pygame

Color = tuple[int, int, int]


class SurfaceUnavailableError(RuntimeError):
    """The surface cannot be drawn on this frame (invalid, torn down or lost)."""


@dataclass(frozen=True, slots=True)
class ShapePaint:
    color: Color = (60, 140, 230)
    line_width: int = 2


@dataclass(frozen=True, slots=True)
class TextPaint:
    color: Color = (235, 235, 245)
    size: int = 48
    font_name: str | None = None


@dataclass(frozen=True, slots=True)
class Paints:
    shape: ShapePaint = field(default_factory=ShapePaint)
    text: TextPaint = field(default_factory=TextPaint)


class Canvas(Protocol):
    def fill(self, color: Color) -> None: ...
    def draw_line(self, x0: float, y0: float, x1: float, y1: float, paint: ShapePaint) -> None: ...
    def draw_circle(self, x: float, y: float, radius: float, paint: ShapePaint) -> None: ...
    def draw_text(self, text: str, x: float, y: float, paint: TextPaint) -> None: ...


class RenderSurface(Protocol):
    def size(self) -> tuple[int, int]: ...
    def is_valid(self) -> bool: ...
    def lock_canvas(self) -> Canvas: ...
    def unlock_canvas_and_post(self, canvas: Canvas) -> None: ...


@contextmanager
def _surface_errors() -> Iterator[None]:
    try:
        yield
    except pygame.error as exc:
        raise SurfaceUnavailableError(str(exc)) from exc


class FontCache:
    """Fonts keyed by (name, size); pygame fonts are expensive to build per frame."""

    def __init__(self) -> None:
        self._fonts: dict[tuple[str | None, int], pygame.font.Font] = {}
        self._lock = threading.Lock()

    def get(self, paint: TextPaint) -> pygame.font.Font:
        key = (paint.font_name, int(paint.size))
        with self._lock:
            font = self._fonts.get(key)
            if font is None:
                if not pygame.font.get_init():
                    pygame.font.init()
                font = pygame.font.Font(paint.font_name, int(paint.size))
                self._fonts[key] = font
            return font


class PygameCanvas:
    def __init__(self, surface: pygame.Surface, fonts: FontCache) -> None:
        self._surface = surface
        self._fonts = fonts

    @property
    def surface(self) -> pygame.Surface:
        return self._surface

    def fill(self, color: Color) -> None:
        with _surface_errors():
            self._surface.fill(color)

    def draw_line(self, x0: float, y0: float, x1: float, y1: float, paint: ShapePaint) -> None:
        with _surface_errors():
            pygame.draw.line(
                self._surface,
                paint.color,
                (int(round(x0)), int(round(y0))),
                (int(round(x1)), int(round(y1))),
                max(1, int(paint.line_width)),
            )

    def draw_circle(self, x: float, y: float, radius: float, paint: ShapePaint) -> None:
        with _surface_errors():
            pygame.draw.circle(self._surface, paint.color, (int(round(x)), int(round(y))), int(round(radius)))

    def draw_text(self, text: str, x: float, y: float, paint: TextPaint) -> None:
        if not text:
            return
        with _surface_errors():
            img = self._fonts.get(paint).render(text, True, paint.color)
            self._surface.blit(img, img.get_rect(center=(int(round(x)), int(round(y)))))


class PygameSurfaceHolder:
    """Double-buffered surface shared by the worker (drawing) and UI thread (presenting)."""

    def __init__(self, size: tuple[int, int]) -> None:
        self._lock = threading.Lock()
        self._fonts = FontCache()
        self._size = (max(1, int(size[0])), max(1, int(size[1])))
        self._back = pygame.Surface(self._size)
        self._front = pygame.Surface(self._size)
        self._valid = True
        self._posted_frames = 0

    @property
    def posted_frames(self) -> int:
        return self._posted_frames

    def size(self) -> tuple[int, int]:
        return self._size

    def is_valid(self) -> bool:
        return self._valid

    def invalidate(self) -> None:
        self._valid = False

    def resize(self, size: tuple[int, int]) -> None:
        """Recreate the buffers; only call while the game loop is paused."""

        new_size = (max(1, int(size[0])), max(1, int(size[1])))
        with self._lock:
            self._size = new_size
            self._back = pygame.Surface(new_size)
            self._front = pygame.Surface(new_size)
            self._valid = True

    def lock_canvas(self) -> Canvas:
        if not self._valid:
            raise SurfaceUnavailableError("surface is not valid")
        return PygameCanvas(self._back, self._fonts)

    def unlock_canvas_and_post(self, canvas: Canvas) -> None:
        if not isinstance(canvas, PygameCanvas) or canvas.surface is not self._back:
            # Buffers were recreated mid-frame; drop the stale canvas.
            return
        with self._lock:
            self._back, self._front = self._front, self._back
            self._posted_frames += 1

    def present(self, display: pygame.Surface) -> None:
        """Blit the most recently posted frame; called on the UI thread."""

        with self._lock:
            display.blit(self._front, (0, 0))
