from __future__ import annotations

import pytest

from osu_difficulty.engine.beatmap_processor import prepare_beatmap
from osu_difficulty.engine.stacking import resolve_stacking
from osu_difficulty.math.vector import Vector2
from osu_difficulty.types import BeatmapDifficulty

from tests.helpers import build_beatmap, build_circle, build_slider, build_spinner

AR9 = BeatmapDifficulty(approach_rate=9.0)


@pytest.mark.parametrize("format_version", [14, 5])
def test_circles_on_one_spot_stack_up(format_version: int) -> None:
    objs = [build_circle(100, 100, t) for t in (0, 100, 200)]
    b = build_beatmap(objs, format_version=format_version, difficulty=AR9)
    resolve_stacking(b)
    assert [ob.stack_height for ob in objs] == [2, 1, 0]


def test_stacked_position_offsets_up_left() -> None:
    objs = [build_circle(100, 100, t, scale=0.5) for t in (0, 100)]
    resolve_stacking(build_beatmap(objs, difficulty=AR9))
    assert objs[0].stacked_position == Vector2(100.0 - 3.2, 100.0 - 3.2)
    assert objs[1].stacked_position == Vector2(100.0, 100.0)


def test_objects_outside_threshold_do_not_stack() -> None:
    # AR9 preempt 600ms * leniency 0.7 = 420ms
    objs = [build_circle(100, 100, 0), build_circle(100, 100, 500)]
    resolve_stacking(build_beatmap(objs, difficulty=AR9))
    assert [ob.stack_height for ob in objs] == [0, 0]


def test_distant_objects_do_not_stack() -> None:
    objs = [build_circle(100, 100, 0), build_circle(104, 100, 100)]
    resolve_stacking(build_beatmap(objs, difficulty=AR9))
    assert [ob.stack_height for ob in objs] == [0, 0]


def test_spinners_are_skipped() -> None:
    objs = [build_circle(256, 192, 0), build_spinner(100, 50), build_circle(256, 192, 200)]
    resolve_stacking(build_beatmap(objs, difficulty=AR9))
    assert [ob.stack_height for ob in objs] == [1, 0, 0]


def test_circle_on_slider_tail_is_pushed_down_right() -> None:
    slider = build_slider(100, 100, 0, [(100, 0)], length=100)
    circle = build_circle(200, 100, 1000)
    b = build_beatmap([slider, circle], difficulty=AR9)
    prepare_beatmap(b)

    assert slider.end_time == pytest.approx(100 / 0.14)
    assert circle.stack_height == -1
    assert circle.stacked_position.x > circle.position.x


def test_old_format_slider_tail_stack() -> None:
    slider = build_slider(100, 100, 0, [(100, 0)], length=100)
    circles = [build_circle(200, 100, 800), build_circle(200, 100, 900)]
    b = build_beatmap([slider] + circles, format_version=5, difficulty=AR9)
    prepare_beatmap(b)
    assert [c.stack_height for c in circles] == [-1, -2]


def test_resolve_resets_previous_heights() -> None:
    objs = [build_circle(100, 100, 0), build_circle(300, 300, 5000)]
    objs[1].stack_height = 4
    resolve_stacking(build_beatmap(objs, difficulty=AR9))
    assert objs[1].stack_height == 0


def test_old_format_skips_spinners() -> None:
    spinner = build_spinner(0, 100)
    circle = build_circle(256, 192, 200)
    resolve_stacking(build_beatmap([spinner, circle], format_version=5, difficulty=AR9))
    assert spinner.stack_height == 0
    assert circle.stack_height == 0


def test_old_format_circle_before_spinner_keeps_position() -> None:
    circle = build_circle(256, 192, 0)
    spinner = build_spinner(100, 50)
    resolve_stacking(build_beatmap([circle, spinner], format_version=5, difficulty=AR9))
    assert circle.stack_height == 0
    assert circle.stacked_position == circle.position


def test_old_format_repeat_slider_stacks_against_path_end() -> None:
    slider = build_slider(100, 100, 0, [(100, 0)], length=100, span_count=2)
    circle = build_circle(200, 100, 1600)
    b = build_beatmap([slider, circle], format_version=5, difficulty=AR9)
    prepare_beatmap(b)

    # two spans end back on the head, but the far end of the path still counts
    assert slider.end_position == slider.position
    assert circle.stack_height == -1
