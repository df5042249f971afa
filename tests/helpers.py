"""Builders shared by the test-suite."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence, Tuple

from osu_difficulty.engine.slider_events import generate_slider_checkpoints
from osu_difficulty.math.curves import PathType, SliderPath
from osu_difficulty.math.vector import Vector2
from osu_difficulty.types import OBJECT_RADIUS, Beatmap, HitCircle, Slider, Spinner

# scale at which the object radius equals the 52px reference radius
REFERENCE_SCALE = 52.0 / OBJECT_RADIUS


def scale_for_radius(radius: float) -> float:
    return radius / OBJECT_RADIUS


def build_circle(x: float, y: float, t: float, *, scale: float = REFERENCE_SCALE) -> HitCircle:
    return HitCircle(start_time=t, position=Vector2(x, y), scale=scale)


def build_spinner(t: float, duration: float = 1000.0) -> Spinner:
    return Spinner(start_time=t, position=Vector2(256.0, 192.0), new_combo=True, duration=duration)


def build_slider(
    x: float,
    y: float,
    t: float,
    points: Sequence[Tuple[float, float]],
    *,
    path_type: PathType = PathType.LINEAR,
    length: Optional[float] = None,
    span_count: int = 1,
    velocity: float = 1.0,
    tick_distance: float = 0.0,
    scale: float = REFERENCE_SCALE,
) -> Slider:
    """Slider whose control points are given relative to its head."""
    path = SliderPath(path_type, [Vector2(0.0, 0.0)] + [Vector2(px, py) for px, py in points], length)
    slider = Slider(
        start_time=t,
        position=Vector2(x, y),
        scale=scale,
        path=path,
        span_count=span_count,
        velocity=velocity,
        tick_distance=tick_distance,
    )
    slider.nested = generate_slider_checkpoints(
        start_time=t,
        span_duration=slider.span_duration,
        span_count=span_count,
        velocity=velocity,
        tick_distance=tick_distance,
        total_distance=path.distance,
    )
    return slider


def build_beatmap(objects: Iterable, **kwargs) -> Beatmap:
    return Beatmap(hit_objects=list(objects), **kwargs)


SAMPLE_OSU = """\
osu file format v14

[General]
AudioFilename: audio.mp3
StackLeniency: 0.7
Mode: 0

[Metadata]
Title:Sample Song
Artist:Someone
Version:Normal

[Difficulty]
HPDrainRate:5
CircleSize:4
OverallDifficulty:8
ApproachRate:9
SliderMultiplier:1.4
SliderTickRate:1

[Events]
//Background and Video events
0,0,"bg.jpg",0,0

[TimingPoints]
0,500,4,2,0,100,1,0
2000,-50,4,2,0,100,0,0

[HitObjects]
100,100,0,5,0,0:0:0:0:
200,100,500,2,0,L|300:100,1,100
256,192,1500,12,0,2500,0:0:0:0:
300,300,3000,1,0,0:0:0:0:
"""


def sample_osu_text(version: str = "Normal", title: str = "Sample Song") -> str:
    return SAMPLE_OSU.replace("Version:Normal", f"Version:{version}").replace(
        "Title:Sample Song", f"Title:{title}"
    )
