"""Sprites: circular, labelled, movable game objects.

``Sprite`` is the contract the loop, the round builder and the input handler
depend on.  ``BubbleSprite`` is the one concrete implementation.  What happens
when a bubble is tapped is a ``TouchPolicy`` strategy attached to the sprite,
so answer-bearing bubbles and decoys differ by policy rather than by subclass.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from .game_core import Rect, clamp
from .render import Canvas, ShapePaint, TextPaint


class Sprite(Protocol):
    x: float
    y: float
    x_speed: float
    y_speed: float
    text: str | None
    visible: bool

    @property
    def radius(self) -> float: ...

    def is_collision(self, other: "Sprite") -> bool: ...
    def contains_point(self, x: float, y: float) -> bool: ...
    def update(self) -> bool: ...
    def draw(self, canvas: Canvas, shape_paint: ShapePaint, text_paint: TextPaint) -> None: ...
    def touched(self) -> None: ...


class TouchPolicy(Protocol):
    def on_touch(self, sprite: "BubbleSprite") -> None: ...


class HideOnTouch:
    """Default reaction: the bubble pops (becomes invisible)."""

    def on_touch(self, sprite: "BubbleSprite") -> None:
        sprite.visible = False


@dataclass(frozen=True, slots=True)
class TouchResult:
    label: str | None
    expected: int
    correct: bool


class AnswerCheckTouch:
    """Pop the bubble only when its label matches the round's answer.

    Every touch is reported through ``on_result``; a wrong bubble stays on
    screen.
    """

    def __init__(self, expected: int, on_result: Callable[[TouchResult], None] | None = None) -> None:
        self._expected = int(expected)
        self._on_result = on_result

    @property
    def expected(self) -> int:
        return self._expected

    def on_touch(self, sprite: "BubbleSprite") -> None:
        correct = _label_value(sprite.text) == self._expected
        if correct:
            sprite.visible = False
        if self._on_result is not None:
            self._on_result(TouchResult(label=sprite.text, expected=self._expected, correct=correct))


class BubbleSprite:
    """A filled circle with a centred text label."""

    def __init__(
        self,
        x: float,
        y: float,
        radius: float,
        text: str | None = None,
        *,
        x_speed: float = 0.0,
        y_speed: float = 0.0,
        bounds: Rect | None = None,
        touch_policy: TouchPolicy | None = None,
        image: object | None = None,
    ) -> None:
        if radius <= 0:
            raise ValueError("radius must be > 0")
        self.x = float(x)
        self.y = float(y)
        self.x_speed = float(x_speed)
        self.y_speed = float(y_speed)
        self._radius = float(radius)
        self.text = text
        self.visible = True
        self.bounds = bounds
        self.touch_policy: TouchPolicy = touch_policy if touch_policy is not None else HideOnTouch()
        # Owned by whatever cache loaded it; the sprite only holds a reference.
        self.image = image
        self._age_frames = 0

    def __repr__(self) -> str:
        return (
            f"BubbleSprite(x={self.x:.1f}, y={self.y:.1f}, radius={self._radius:.1f}, "
            f"text={self.text!r}, visible={self.visible})"
        )

    @property
    def radius(self) -> float:
        return self._radius

    @property
    def age_frames(self) -> int:
        return self._age_frames

    def is_collision(self, other: Sprite) -> bool:
        distance = math.hypot(self.x - other.x, self.y - other.y)
        return distance < self._radius + other.radius

    def contains_point(self, x: float, y: float) -> bool:
        return math.hypot(self.x - x, self.y - y) < self._radius

    def update(self) -> bool:
        self.x += self.x_speed
        self.y += self.y_speed
        if self.bounds is not None:
            self._bounce(self.bounds)
        self._age_frames += 1
        # Bubbles only leave play by being touched, never by age.
        return False

    def draw(self, canvas: Canvas, shape_paint: ShapePaint, text_paint: TextPaint) -> None:
        if not self.visible:
            return
        canvas.draw_circle(self.x, self.y, self._radius, shape_paint)
        if self.text:
            canvas.draw_text(self.text, self.x, self.y, text_paint)

    def touched(self) -> None:
        if not self.visible:
            return
        self.touch_policy.on_touch(self)

    def _bounce(self, bounds: Rect) -> None:
        r = self._radius
        lo_x, hi_x = bounds.x + r, bounds.right - r
        lo_y, hi_y = bounds.y + r, bounds.bottom - r
        if self.x < lo_x:
            self.x_speed = abs(self.x_speed)
        elif self.x > hi_x:
            self.x_speed = -abs(self.x_speed)
        if self.y < lo_y:
            self.y_speed = abs(self.y_speed)
        elif self.y > hi_y:
            self.y_speed = -abs(self.y_speed)
        self.x = clamp(self.x, lo_x, hi_x)
        self.y = clamp(self.y, lo_y, hi_y)


def _label_value(text: str | None) -> int | None:
    if text is None:
        return None
    try:
        return int(text.strip())
    except ValueError:
        return None
