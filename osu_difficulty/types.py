from __future__ import annotations

import bisect
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from .math.curves import SliderPath
from .math.util import clamp
from .math.vector import Vector2

OBJECT_RADIUS = 64.0
PLAYFIELD_WIDTH = 512.0
PLAYFIELD_HEIGHT = 384.0
PLAYFIELD_CENTRE = Vector2(PLAYFIELD_WIDTH * 0.5, PLAYFIELD_HEIGHT * 0.5)
DEFAULT_BEAT_LENGTH = 1000.0


@dataclass(eq=False)
class HitObject:
    start_time: float     # ms
    position: Vector2     # osu!pixels, before stacking
    new_combo: bool = False
    combo_offset: int = 0

    # filled in by engine.beatmap_processor
    stack_height: int = 0
    scale: float = 1.0

    @property
    def kind(self) -> str:
        return "hit"

    @property
    def radius(self) -> float:
        return OBJECT_RADIUS * self.scale

    @property
    def stack_offset(self) -> Vector2:
        v = self.stack_height * self.scale * -6.4
        return Vector2(v, v)

    @property
    def stacked_position(self) -> Vector2:
        return self.position + self.stack_offset

    @property
    def end_time(self) -> float:
        return self.start_time

    @property
    def end_position(self) -> Vector2:
        return self.position


@dataclass(eq=False)
class HitCircle(HitObject):
    @property
    def kind(self) -> str:
        return "circle"


class CheckpointKind(str, Enum):
    HEAD = "head"
    TICK = "tick"
    REPEAT = "repeat"
    TAIL = "tail"


@dataclass(frozen=True)
class SliderCheckpoint:
    kind: CheckpointKind
    time: float
    span_index: int
    path_progress: float


@dataclass
class SliderSimulationState:
    """Follow-cursor result for one slider; written once, then read-only."""
    lazy_end_position: Optional[Vector2] = None
    lazy_travel_distance: float = 0.0

    @property
    def is_computed(self) -> bool:
        return self.lazy_end_position is not None


@dataclass(eq=False)
class Slider(HitObject):
    path: SliderPath = field(default_factory=SliderPath)
    span_count: int = 1
    velocity: float = 0.0        # osu!pixels / ms
    tick_distance: float = 0.0   # osu!pixels
    nested: List[SliderCheckpoint] = field(default_factory=list)
    simulation: SliderSimulationState = field(default_factory=SliderSimulationState)

    @property
    def kind(self) -> str:
        return "slider"

    @property
    def repeat_count(self) -> int:
        return self.span_count - 1

    @property
    def span_duration(self) -> float:
        if self.velocity <= 0:
            return 0.0
        return self.path.distance / self.velocity

    @property
    def duration(self) -> float:
        return self.span_duration * self.span_count

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration

    @property
    def end_position(self) -> Vector2:
        return self.position + self.path.position_at(self.span_count % 2)

    @property
    def nested_checkpoint_times(self) -> List[float]:
        return [c.time for c in self.nested]

    @property
    def lazy_end_position(self) -> Optional[Vector2]:
        return self.simulation.lazy_end_position

    @property
    def lazy_travel_distance(self) -> float:
        return self.simulation.lazy_travel_distance


@dataclass(eq=False)
class Spinner(HitObject):
    duration: float = 0.0

    @property
    def kind(self) -> str:
        return "spinner"

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration


@dataclass
class TimingPoint:
    time: float
    beat_length: float
    meter: int = 4
    uninherited: bool = True

    @property
    def speed_multiplier(self) -> float:
        if self.uninherited or self.beat_length >= 0:
            return 1.0
        return clamp(100.0 / -self.beat_length, 0.1, 10.0)


@dataclass
class BeatmapDifficulty:
    circle_size: float = 5.0
    overall_difficulty: float = 5.0
    approach_rate: float = 5.0
    drain_rate: float = 5.0
    slider_multiplier: float = 1.4
    slider_tick_rate: float = 1.0

    def preempt(self) -> float:
        """Time (ms) an object is visible before its start time."""
        ar = self.approach_rate
        if ar < 5:
            return 1200.0 + 600.0 * (5 - ar) / 5
        return 1200.0 - 750.0 * (ar - 5) / 5

    def scale(self) -> float:
        return (1.0 - 0.7 * (self.circle_size - 5) / 5) / 2


@dataclass
class Beatmap:
    format_version: int = 14
    mode: int = 0
    stack_leniency: float = 0.7
    metadata: Dict[str, str] = field(default_factory=dict)
    difficulty: BeatmapDifficulty = field(default_factory=BeatmapDifficulty)
    timing_points: List[TimingPoint] = field(default_factory=list)
    hit_objects: List[HitObject] = field(default_factory=list)

    @property
    def version(self) -> str:
        return self.metadata.get("Version", "")

    @property
    def title(self) -> str:
        return self.metadata.get("Title", "")

    def _point_before(self, points: List[TimingPoint], time: float) -> Optional[TimingPoint]:
        i = bisect.bisect_right([p.time for p in points], time)
        return points[i - 1] if i > 0 else None

    def beat_length_at(self, time: float) -> float:
        red = [p for p in self.timing_points if p.uninherited]
        if not red:
            return DEFAULT_BEAT_LENGTH
        tp = self._point_before(red, time) or red[0]
        return tp.beat_length

    def speed_multiplier_at(self, time: float) -> float:
        tp = self._point_before(self.timing_points, time)
        return tp.speed_multiplier if tp is not None else 1.0
