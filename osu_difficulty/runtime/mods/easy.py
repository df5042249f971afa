from __future__ import annotations

from typing import Any, Dict

from ...types import Beatmap
from .base import mod_enabled

EASY_MULTIPLIER = 0.5


def apply_easy(mods_cfg: Dict[str, Any], beatmap: Beatmap) -> Beatmap:
    """Easy: halves CS, AR, OD and HP.

    Config:
        easy: true
    """
    if not mod_enabled(mods_cfg, "easy"):
        return beatmap

    d = beatmap.difficulty
    d.circle_size *= EASY_MULTIPLIER
    d.approach_rate *= EASY_MULTIPLIER
    d.overall_difficulty *= EASY_MULTIPLIER
    d.drain_rate *= EASY_MULTIPLIER
    return beatmap
