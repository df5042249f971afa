from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ...math.vector import Vector2
from ...types import HitObject, Slider, Spinner
from .slider_cursor import compute_slider_cursor_position

NORMALIZED_RADIUS = 52.0
MIN_DELTA_TIME = 25.0
SMALL_CIRCLE_RADIUS = 30.0


@dataclass(frozen=True)
class DifficultyHitObject:
    """Per-object geometry and timing features for the difficulty pass.

    Attributes:
        delta_time: ms since the previous object's start, rate-adjusted
        strain_time: delta_time floored at 25ms so simultaneous objects stay finite
        jump_distance: normalized distance from the previous cursor end position
        travel_distance: normalized distance the cursor follows the previous slider
        angle: turn (radians, 0..pi) through (last-last, last, current), if defined
    """

    base_object: HitObject
    last_object: Optional[HitObject]
    last_last_object: Optional[HitObject]
    clock_rate: float
    delta_time: float
    strain_time: float
    jump_distance: float = 0.0
    travel_distance: float = 0.0
    angle: Optional[float] = None

    @property
    def start_time(self) -> float:
        return self.base_object.start_time / self.clock_rate

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.base_object.kind,
            "start_time": self.start_time,
            "delta_time": self.delta_time,
            "strain_time": self.strain_time,
            "jump_distance": self.jump_distance,
            "travel_distance": self.travel_distance,
            "angle": self.angle,
        }


def scaling_factor(radius: float) -> float:
    """Factor that maps distances to a 52px reference radius, with a small-circle bonus."""
    factor = NORMALIZED_RADIUS / radius
    if radius < SMALL_CIRCLE_RADIUS:
        small_circle_bonus = min(SMALL_CIRCLE_RADIUS - radius, 5.0) / 50.0
        factor *= 1.0 + small_circle_bonus
    return factor


def end_cursor_position(hit_object: HitObject, *, simulate: bool = True) -> Vector2:
    pos = hit_object.stacked_position
    if isinstance(hit_object, Slider):
        if simulate:
            compute_slider_cursor_position(hit_object)
        pos = hit_object.lazy_end_position or pos
    return pos


def compute_difficulty_hit_object(
    current: HitObject,
    previous: Optional[HitObject],
    prev_previous: Optional[HitObject],
    clock_rate: float = 1.0,
) -> DifficultyHitObject:
    delta_time = 0.0
    if previous is not None:
        delta_time = (current.start_time - previous.start_time) / clock_rate

    jump_distance = 0.0
    travel_distance = 0.0
    angle: Optional[float] = None

    # spinners have no meaningful position for jumps or turns
    if previous is not None and not isinstance(current, Spinner) and not isinstance(previous, Spinner):
        s = scaling_factor(current.radius)

        if isinstance(previous, Slider):
            compute_slider_cursor_position(previous)
            travel_distance = previous.lazy_travel_distance * s

        last_cursor_position = end_cursor_position(previous)
        jump_distance = (current.stacked_position * s - last_cursor_position * s).length()

        if prev_previous is not None and not isinstance(prev_previous, Spinner):
            last_last_cursor_position = end_cursor_position(prev_previous, simulate=False)

            v1 = last_last_cursor_position - previous.stacked_position
            v2 = current.stacked_position - last_cursor_position
            angle = abs(math.atan2(v1.cross(v2), v1.dot(v2)))

    return DifficultyHitObject(
        base_object=current,
        last_object=previous,
        last_last_object=prev_previous,
        clock_rate=clock_rate,
        delta_time=delta_time,
        strain_time=max(delta_time, MIN_DELTA_TIME),
        jump_distance=jump_distance,
        travel_distance=travel_distance,
        angle=angle,
    )
