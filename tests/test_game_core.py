from __future__ import annotations

import pytest

from bubble_count.game_core import AbstractEngine, PlayArea, Rect, RoundState, SeededRng, clamp


def test_play_area_split() -> None:
    area = PlayArea.from_surface(800, 480, ratio=0.8)
    assert area.sprite_zone == Rect(0.0, 0.0, 800.0, 384.0)
    assert area.text_zone.y == pytest.approx(384.0)
    assert area.text_zone.height == pytest.approx(96.0)
    assert area.divider_y == pytest.approx(384.0)
    assert area.text_center == pytest.approx((400.0, 432.0))


@pytest.mark.parametrize("ratio", [0.0, 1.0, -0.2, 1.5])
def test_play_area_rejects_bad_ratio(ratio: float) -> None:
    with pytest.raises(ValueError):
        PlayArea.from_surface(800, 480, ratio=ratio)


def test_engine_holds_one_question_answer_pair() -> None:
    engine = AbstractEngine(question="3 + 4 = ?", answer=7)
    state = RoundState.from_engine(1, engine)
    engine.question = "1, 2, 3, ?"
    engine.answer = 4
    # The snapshot does not follow later changes.
    assert state == RoundState(number=1, question="3 + 4 = ?", answer=7)
    assert RoundState.from_engine(2, engine).answer == 4


def test_seeded_rng_is_reproducible() -> None:
    a = SeededRng(42)
    b = SeededRng(42)
    assert [a.uniform(0, 10) for _ in range(5)] == [b.uniform(0, 10) for _ in range(5)]
    assert a.seed == 42


def test_clamp() -> None:
    assert clamp(5.0, 0.0, 10.0) == 5.0
    assert clamp(-1.0, 0.0, 10.0) == 0.0
    assert clamp(11.0, 0.0, 10.0) == 10.0
    assert clamp(3.0, 10.0, 0.0) == 5.0
