"""Difficulty engine module.

Beatmap preparation (slider timing, nested checkpoints, stacking) and the
per-object feature pass consumed by the strain calculation.
"""

from .beatmap_processor import prepare_beatmap
from .difficulty_objects import DifficultyResult, calculate, create_difficulty_hit_objects

__all__ = ["DifficultyResult", "calculate", "create_difficulty_hit_objects", "prepare_beatmap"]
