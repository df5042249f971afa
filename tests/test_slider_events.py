from __future__ import annotations

import pytest

from osu_difficulty.engine.slider_events import generate_slider_checkpoints
from osu_difficulty.types import CheckpointKind


def _times(checkpoints):
    return [c.time for c in checkpoints]


def _kinds(checkpoints):
    return [c.kind for c in checkpoints]


def test_head_and_legacy_tail_only() -> None:
    cps = generate_slider_checkpoints(1000, 400, 1, 1.0, 0.0, 400)
    assert _kinds(cps) == [CheckpointKind.HEAD, CheckpointKind.TAIL]
    assert _times(cps) == pytest.approx([1000.0, 1364.0])


def test_short_slider_tail_is_at_half_duration() -> None:
    cps = generate_slider_checkpoints(0, 50, 1, 1.0, 0.0, 50)
    assert _times(cps) == pytest.approx([0.0, 25.0])


def test_ticks_stop_short_of_the_end() -> None:
    cps = generate_slider_checkpoints(0, 400, 1, 1.0, 100.0, 400)
    assert _kinds(cps) == [
        CheckpointKind.HEAD,
        CheckpointKind.TICK,
        CheckpointKind.TICK,
        CheckpointKind.TICK,
        CheckpointKind.TAIL,
    ]
    assert _times(cps) == pytest.approx([0.0, 100.0, 200.0, 300.0, 364.0])


def test_repeat_span_ticks_are_time_ordered() -> None:
    cps = generate_slider_checkpoints(0, 400, 2, 1.0, 100.0, 400)
    assert _times(cps) == pytest.approx([0, 100, 200, 300, 400, 500, 600, 700, 764])
    repeat = [c for c in cps if c.kind is CheckpointKind.REPEAT]
    assert len(repeat) == 1
    assert repeat[0].path_progress == 1.0
    tail = cps[-1]
    assert tail.kind is CheckpointKind.TAIL
    assert tail.span_index == 1
    assert tail.path_progress == 0.0


def test_repeats_without_ticks() -> None:
    cps = generate_slider_checkpoints(0, 100, 3, 1.0, 0.0, 100)
    assert _kinds(cps) == [
        CheckpointKind.HEAD,
        CheckpointKind.REPEAT,
        CheckpointKind.REPEAT,
        CheckpointKind.TAIL,
    ]
    assert _times(cps) == pytest.approx([0.0, 100.0, 200.0, 264.0])


def test_zero_duration_slider() -> None:
    cps = generate_slider_checkpoints(500, 0.0, 1, 0.0, 0.0, 100)
    assert _times(cps) == [500.0, 500.0]
