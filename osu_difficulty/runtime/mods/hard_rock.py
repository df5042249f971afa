from __future__ import annotations

from typing import Any, Dict

from ...math.vector import Vector2
from ...types import PLAYFIELD_HEIGHT, Beatmap, Slider
from .base import mod_enabled

HARD_ROCK_CS_MULTIPLIER = 1.3
HARD_ROCK_MULTIPLIER = 1.4


def apply_hard_rock(mods_cfg: Dict[str, Any], beatmap: Beatmap) -> Beatmap:
    """Hard Rock: harder stats and the map flipped vertically.

    Config:
        hard_rock: true
    """
    if not mod_enabled(mods_cfg, "hard_rock"):
        return beatmap

    d = beatmap.difficulty
    d.circle_size = min(d.circle_size * HARD_ROCK_CS_MULTIPLIER, 10.0)
    d.approach_rate = min(d.approach_rate * HARD_ROCK_MULTIPLIER, 10.0)
    d.overall_difficulty = min(d.overall_difficulty * HARD_ROCK_MULTIPLIER, 10.0)
    d.drain_rate = min(d.drain_rate * HARD_ROCK_MULTIPLIER, 10.0)

    for ob in beatmap.hit_objects:
        ob.position = Vector2(ob.position.x, PLAYFIELD_HEIGHT - ob.position.y)
        if isinstance(ob, Slider):
            ob.path.control_points = [Vector2(p.x, -p.y) for p in ob.path.control_points]
            ob.path.invalidate()

    return beatmap
