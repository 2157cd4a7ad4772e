"""Geometry, motion and touch behaviour of ``BubbleSprite``."""

from __future__ import annotations

import pytest

from bubble_count.game_core import Rect
from bubble_count.render import ShapePaint, TextPaint
from bubble_count.sprite import AnswerCheckTouch, BubbleSprite, TouchResult


class RecordingCanvas:
    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[object, ...]]] = []

    def fill(self, color: tuple[int, int, int]) -> None:
        self.calls.append(("fill", (color,)))

    def draw_line(self, x0: float, y0: float, x1: float, y1: float, paint: ShapePaint) -> None:
        self.calls.append(("line", (x0, y0, x1, y1)))

    def draw_circle(self, x: float, y: float, radius: float, paint: ShapePaint) -> None:
        self.calls.append(("circle", (x, y, radius)))

    def draw_text(self, text: str, x: float, y: float, paint: TextPaint) -> None:
        self.calls.append(("text", (text, x, y)))


@pytest.mark.parametrize(
    ("a", "b"),
    [
        ((0.0, 0.0, 10.0), (15.0, 0.0, 10.0)),
        ((0.0, 0.0, 10.0), (20.0, 0.0, 10.0)),
        ((0.0, 0.0, 5.0), (30.0, 40.0, 44.0)),
        ((100.0, 100.0, 100.0), (250.0, 260.0, 100.0)),
        ((3.0, 4.0, 1.0), (3.0, 4.0, 1.0)),
    ],
)
def test_collision_is_symmetric(a: tuple[float, float, float], b: tuple[float, float, float]) -> None:
    sa = BubbleSprite(*a)
    sb = BubbleSprite(*b)
    assert sa.is_collision(sb) == sb.is_collision(sa)


def test_collision_requires_strict_overlap() -> None:
    a = BubbleSprite(0.0, 0.0, 10.0)
    assert a.is_collision(BubbleSprite(19.9, 0.0, 10.0))
    # Touching circles do not overlap.
    assert not a.is_collision(BubbleSprite(20.0, 0.0, 10.0))
    assert not a.is_collision(BubbleSprite(30.0, 0.0, 10.0))


@pytest.mark.parametrize("d", [0.0, 1.0, 9.99, 10.0, 10.01, 25.0, -9.0, -10.0])
def test_point_containment(d: float) -> None:
    sprite = BubbleSprite(50.0, 50.0, 10.0)
    assert sprite.contains_point(50.0 + d, 50.0) is (abs(d) < 10.0)


def test_radius_must_be_positive_and_is_read_only() -> None:
    with pytest.raises(ValueError):
        BubbleSprite(0.0, 0.0, 0.0)
    sprite = BubbleSprite(0.0, 0.0, 5.0)
    with pytest.raises(AttributeError):
        sprite.radius = 7.0  # type: ignore[misc]


def test_update_moves_by_velocity_and_never_expires() -> None:
    sprite = BubbleSprite(10.0, 20.0, 5.0, x_speed=1.5, y_speed=-2.0)
    assert sprite.update() is False
    assert (sprite.x, sprite.y) == pytest.approx((11.5, 18.0))
    sprite.visible = False
    sprite.update()
    # Hidden sprites keep moving.
    assert (sprite.x, sprite.y) == pytest.approx((13.0, 16.0))
    assert sprite.age_frames == 2


def test_update_bounces_off_zone_edges() -> None:
    zone = Rect(0.0, 0.0, 100.0, 50.0)
    sprite = BubbleSprite(92.0, 8.0, 5.0, x_speed=5.0, y_speed=-5.0, bounds=zone)
    sprite.update()
    assert sprite.x == pytest.approx(95.0)
    assert sprite.y == pytest.approx(5.0)
    assert sprite.x_speed < 0
    assert sprite.y_speed > 0
    sprite.update()
    assert sprite.x == pytest.approx(90.0)
    assert sprite.y == pytest.approx(10.0)


def test_out_of_bounds_sprite_is_pulled_back_into_zone() -> None:
    zone = Rect(0.0, 0.0, 100.0, 50.0)
    sprite = BubbleSprite(500.0, -30.0, 5.0, bounds=zone)
    sprite.update()
    assert 5.0 <= sprite.x <= 95.0
    assert 5.0 <= sprite.y <= 45.0


def test_draw_renders_circle_and_label_only_when_visible() -> None:
    canvas = RecordingCanvas()
    sprite = BubbleSprite(40.0, 60.0, 12.0, "7")
    sprite.draw(canvas, ShapePaint(), TextPaint())
    assert canvas.calls == [("circle", (40.0, 60.0, 12.0)), ("text", ("7", 40.0, 60.0))]

    canvas.calls.clear()
    sprite.visible = False
    sprite.draw(canvas, ShapePaint(), TextPaint())
    assert canvas.calls == []


def test_default_touch_hides_sprite() -> None:
    sprite = BubbleSprite(0.0, 0.0, 10.0, "1")
    sprite.touched()
    assert sprite.visible is False


def test_answer_check_touch_only_pops_the_correct_bubble() -> None:
    results: list[TouchResult] = []
    policy = AnswerCheckTouch(4, on_result=results.append)
    wrong = BubbleSprite(0.0, 0.0, 10.0, "3", touch_policy=policy)
    right = BubbleSprite(50.0, 0.0, 10.0, "4", touch_policy=policy)
    unlabelled = BubbleSprite(100.0, 0.0, 10.0, None, touch_policy=policy)

    wrong.touched()
    right.touched()
    unlabelled.touched()

    assert wrong.visible is True
    assert right.visible is False
    assert unlabelled.visible is True
    assert [r.correct for r in results] == [False, True, False]
    assert results[1] == TouchResult(label="4", expected=4, correct=True)


def test_touching_hidden_sprite_is_a_no_op() -> None:
    results: list[TouchResult] = []
    sprite = BubbleSprite(0.0, 0.0, 10.0, "4", touch_policy=AnswerCheckTouch(4, on_result=results.append))
    sprite.visible = False
    sprite.touched()
    assert results == []
