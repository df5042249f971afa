from __future__ import annotations

from typing import Any, Dict, Optional

from ...types import Beatmap
from .base import mod_enabled, parse_mod_string
from .easy import apply_easy
from .hard_rock import apply_hard_rock
from .rate import clock_rate_for_mods

__all__ = ["apply_mods", "clock_rate_for_mods", "mod_enabled", "parse_mod_string"]


def apply_mods(mods_cfg: Optional[Dict[str, Any]], beatmap: Beatmap) -> Beatmap:
    """Apply the difficulty-adjusting mods in place.

    Mod execution order:
    1. easy - halve CS/AR/OD/HP
    2. hard_rock - raise CS/AR/OD/HP, flip vertically

    Rate mods (double_time, half_time, ...) do not touch the beatmap; see
    ``clock_rate_for_mods``. Must run before ``prepare_beatmap`` so scale,
    stacking and slider paths see the adjusted values.
    """
    if not isinstance(mods_cfg, dict) or not mods_cfg:
        return beatmap

    if mod_enabled(mods_cfg, "easy") and mod_enabled(mods_cfg, "hard_rock"):
        raise ValueError("easy and hard_rock are mutually exclusive")

    beatmap = apply_easy(mods_cfg, beatmap)
    beatmap = apply_hard_rock(mods_cfg, beatmap)
    return beatmap
