"""Lazy follow-cursor simulation along a slider.

The cursor is modelled as trailing the slider ball inside the follow circle
(three times the object radius): it only moves when the ball leaves that
circle, and then only by the distance it is outside. The accumulated movement
is the slider's travel distance.
"""

from __future__ import annotations

import math

from ...math.util import fold_ping_pong
from ...types import Slider, SliderSimulationState

FOLLOW_CIRCLE_RADIUS_MULTIPLIER = 3.0


def checkpoint_progress(slider: Slider, time: float) -> float:
    """Position along the path (0..1) of the slider ball at ``time``."""
    span_duration = slider.span_duration
    if span_duration <= 0:
        return 0.0
    progress = (time - slider.start_time) / span_duration
    if not math.isfinite(progress) or progress < 0:
        return 0.0
    return fold_ping_pong(progress)


def compute_slider_cursor_position(slider: Slider) -> SliderSimulationState:
    state = slider.simulation
    if state.lazy_end_position is not None:
        return state

    head = slider.stacked_position
    end_position = head
    travel_distance = 0.0
    follow_radius = slider.radius * FOLLOW_CIRCLE_RADIUS_MULTIPLIER

    # first checkpoint is the head, where the cursor already is
    for time in slider.nested_checkpoint_times[1:]:
        target = head + slider.path.position_at(checkpoint_progress(slider, time))
        diff = target - end_position
        dist = diff.length()

        if dist > follow_radius and dist > 0:
            excess = dist - follow_radius
            end_position = end_position + diff * (excess / dist)
            travel_distance += excess

    state.lazy_end_position = end_position
    state.lazy_travel_distance = travel_distance
    return state
