from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Protocol


class Rng(Protocol):
    """Random source consumed by round setup."""

    def uniform(self, a: float, b: float) -> float: ...


class GameEngine(Protocol):
    """Question/answer provider.

    The loop reads one pair at the start of every round; scoring and answer
    checking stay with the provider and the host.
    """

    @property
    def question(self) -> str: ...

    @property
    def answer(self) -> int: ...


class AbstractEngine:
    """Minimal mutable question holder.

    Concrete games set ``question`` and ``answer`` before a round starts.
    """

    def __init__(self, *, question: str = "", answer: int = 0) -> None:
        self._question = str(question)
        self._answer = int(answer)

    @property
    def question(self) -> str:
        return self._question

    @question.setter
    def question(self, value: str) -> None:
        self._question = str(value)

    @property
    def answer(self) -> int:
        return self._answer

    @answer.setter
    def answer(self, value: int) -> None:
        self._answer = int(value)


@dataclass(frozen=True, slots=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2.0, self.y + self.height / 2.0)


@dataclass(frozen=True, slots=True)
class PlayArea:
    """Drawing area split into a sprite zone (top) and a text zone (bottom)."""

    width: float
    height: float
    sprite_zone: Rect
    text_zone: Rect

    @classmethod
    def from_surface(cls, width: float, height: float, *, ratio: float) -> "PlayArea":
        if not (0.0 < ratio < 1.0):
            raise ValueError("ratio must be in (0.0, 1.0)")
        w = float(width)
        h = float(height)
        game_h = h * ratio
        return cls(
            width=w,
            height=h,
            sprite_zone=Rect(0.0, 0.0, w, game_h),
            text_zone=Rect(0.0, game_h, w, h - game_h),
        )

    @property
    def divider_y(self) -> float:
        return self.sprite_zone.bottom

    @property
    def text_center(self) -> tuple[float, float]:
        return self.text_zone.center


@dataclass(frozen=True, slots=True)
class RoundState:
    number: int
    question: str
    answer: int

    @classmethod
    def from_engine(cls, number: int, engine: GameEngine) -> "RoundState":
        return cls(number=int(number), question=str(engine.question), answer=int(engine.answer))


class SeededRng:
    """Simple seeded RNG wrapper to keep deterministic streams explicit."""

    def __init__(self, seed: int | None = None) -> None:
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def seed(self) -> int | None:
        return self._seed

    def uniform(self, a: float, b: float) -> float:
        return self._rng.uniform(a, b)

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)


def clamp(x: float, lo: float, hi: float) -> float:
    if hi < lo:
        # Degenerate range: collapse to the midpoint.
        return (lo + hi) / 2.0
    return lo if x <= lo else hi if x >= hi else float(x)
