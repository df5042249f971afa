"""Per-object difficulty features (feature extractor + slider cursor simulation)."""

from .difficulty_hit_object import DifficultyHitObject, compute_difficulty_hit_object
from .slider_cursor import compute_slider_cursor_position

__all__ = ["DifficultyHitObject", "compute_difficulty_hit_object", "compute_slider_cursor_position"]
