"""Difficulty preprocessing for osu!standard beatmaps.

Parses beatmaps, applies mods, resolves slider timing and stacking, and
computes the per-object features (strain time, jump distance, travel distance,
angle) that strain-based difficulty calculation consumes.
"""

from .engine.beatmap_processor import prepare_beatmap
from .engine.difficulty_objects import DifficultyResult, calculate, create_difficulty_hit_objects
from .engine.preprocessing import (
    DifficultyHitObject,
    compute_difficulty_hit_object,
    compute_slider_cursor_position,
)
from .formats.osu_impl import OsuFormatError, UnsupportedModeError, parse_osu
from .io.beatmap_loader_impl import load_beatmap
from .math.curves import PathType, SliderPath
from .math.vector import Vector2
from .types import Beatmap, BeatmapDifficulty, HitCircle, HitObject, Slider, Spinner, TimingPoint

__version__ = "0.1.0"

__all__ = [
    "Beatmap",
    "BeatmapDifficulty",
    "DifficultyHitObject",
    "DifficultyResult",
    "HitCircle",
    "HitObject",
    "OsuFormatError",
    "PathType",
    "Slider",
    "SliderPath",
    "Spinner",
    "TimingPoint",
    "UnsupportedModeError",
    "Vector2",
    "calculate",
    "compute_difficulty_hit_object",
    "compute_slider_cursor_position",
    "create_difficulty_hit_objects",
    "load_beatmap",
    "parse_osu",
    "prepare_beatmap",
    "__version__",
]
