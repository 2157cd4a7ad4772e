from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

logger = logging.getLogger(__name__)

SEED_ENV = "BUBBLE_COUNT_SEED"
SPRITES_ENV = "BUBBLE_COUNT_SPRITES"
RADIUS_ENV = "BUBBLE_COUNT_RADIUS"
MAX_SPEED_ENV = "BUBBLE_COUNT_MAX_SPEED"
TARGET_FPS_ENV = "BUBBLE_COUNT_TARGET_FPS"
LOG_LEVEL_ENV = "BUBBLE_COUNT_LOG_LEVEL"


@dataclass(frozen=True, slots=True)
class GameConfig:
    sprite_count: int = 10
    bubble_radius: float = 100.0
    # Share of the surface height given to the sprite zone.
    vertical_divide_ratio: float = 0.8
    background_color: tuple[int, int, int] = (0, 0, 0)
    placement_retries: int = 10
    max_speed: float = 0.0
    target_fps: float | None = None
    join_timeout_s: float = 5.0
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.sprite_count < 0:
            raise ValueError("sprite_count must be >= 0")
        if self.bubble_radius <= 0:
            raise ValueError("bubble_radius must be > 0")
        if not (0.0 < self.vertical_divide_ratio < 1.0):
            raise ValueError("vertical_divide_ratio must be in (0.0, 1.0)")
        if self.placement_retries < 0:
            raise ValueError("placement_retries must be >= 0")
        if self.max_speed < 0:
            raise ValueError("max_speed must be >= 0")
        if self.join_timeout_s <= 0:
            raise ValueError("join_timeout_s must be > 0")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "GameConfig":
        """Build a config from ``BUBBLE_COUNT_*`` variables, keeping defaults for unset keys."""

        env = os.environ if environ is None else environ
        base = cls()
        radius = _as_float(env.get(RADIUS_ENV), base.bubble_radius, key=RADIUS_ENV)
        if radius is None or radius <= 0:
            radius = base.bubble_radius
        speed = _as_float(env.get(MAX_SPEED_ENV), base.max_speed, key=MAX_SPEED_ENV)
        fps = _as_float(env.get(TARGET_FPS_ENV), base.target_fps, key=TARGET_FPS_ENV)
        return cls(
            sprite_count=max(0, _as_int(env.get(SPRITES_ENV), base.sprite_count, key=SPRITES_ENV)),
            bubble_radius=radius,
            max_speed=max(0.0, speed or 0.0),
            target_fps=fps if fps is None or fps > 0 else None,
            seed=_as_optional_int(env.get(SEED_ENV), key=SEED_ENV),
        )


def log_level_from_env(environ: Mapping[str, str] | None = None) -> int:
    env = os.environ if environ is None else environ
    name = env.get(LOG_LEVEL_ENV, "INFO").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def _as_float(value: str | None, fallback: float | None, *, key: str) -> float | None:
    if value is None or value.strip() == "":
        return fallback
    try:
        return float(value)
    except ValueError:
        logger.warning("Ignoring %s=%r (not a number)", key, value)
        return fallback


def _as_int(value: str | None, fallback: int, *, key: str) -> int:
    if value is None or value.strip() == "":
        return fallback
    try:
        return int(value)
    except ValueError:
        logger.warning("Ignoring %s=%r (not an integer)", key, value)
        return fallback


def _as_optional_int(value: str | None, *, key: str) -> int | None:
    if value is None or value.strip() == "":
        return None
    try:
        return int(value)
    except ValueError:
        logger.warning("Ignoring %s=%r (not an integer)", key, value)
        return None
