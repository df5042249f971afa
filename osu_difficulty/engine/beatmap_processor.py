from __future__ import annotations

import logging

from ..types import Beatmap, Slider, SliderSimulationState
from .slider_events import generate_slider_checkpoints
from .stacking import resolve_stacking

logger = logging.getLogger(__name__)

BASE_SCORING_DISTANCE = 100.0


def apply_slider_defaults(beatmap: Beatmap, slider: Slider) -> None:
    d = beatmap.difficulty
    speed = beatmap.speed_multiplier_at(slider.start_time)
    beat_length = beatmap.beat_length_at(slider.start_time)

    scoring_distance = BASE_SCORING_DISTANCE * d.slider_multiplier * speed
    slider.velocity = scoring_distance / beat_length if beat_length > 0 else 0.0

    tick_distance = scoring_distance / d.slider_tick_rate if d.slider_tick_rate > 0 else 0.0
    if beatmap.format_version < 8:
        tick_distance /= speed
    slider.tick_distance = tick_distance

    slider.nested = generate_slider_checkpoints(
        start_time=slider.start_time,
        span_duration=slider.span_duration,
        span_count=slider.span_count,
        velocity=slider.velocity,
        tick_distance=slider.tick_distance,
        total_distance=slider.path.distance,
    )
    slider.simulation = SliderSimulationState()


def prepare_beatmap(beatmap: Beatmap, *, stacking: bool = True) -> Beatmap:
    """Fill in the derived state the difficulty pass reads.

    Sorts objects by start time, sets their scale from the circle size, builds
    slider timing and nested checkpoints, then resolves stack heights.
    """
    beatmap.hit_objects.sort(key=lambda ob: ob.start_time)
    scale = beatmap.difficulty.scale()

    n_sliders = 0
    for ob in beatmap.hit_objects:
        ob.scale = scale
        if isinstance(ob, Slider):
            apply_slider_defaults(beatmap, ob)
            n_sliders += 1

    if stacking:
        resolve_stacking(beatmap)
    else:
        for ob in beatmap.hit_objects:
            ob.stack_height = 0

    logger.debug(
        "prepared %d objects (%d sliders), scale=%.4f, stacking=%s",
        len(beatmap.hit_objects),
        n_sliders,
        scale,
        stacking,
    )
    return beatmap
