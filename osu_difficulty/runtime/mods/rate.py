from __future__ import annotations

from typing import Any, Dict, Optional

from .base import get_mod_cfg, mod_enabled, parse_float

DOUBLE_TIME_RATE = 1.5
HALF_TIME_RATE = 0.75


def clock_rate_for_mods(mods_cfg: Optional[Dict[str, Any]]) -> float:
    """Playback rate implied by the rate-changing mods.

    Config:
        double_time: true       # or nightcore
        half_time: true         # or daycore
        rate:
            enable: true
            speed: 1.2          # multiplies whatever DT/HT set
    """
    if not isinstance(mods_cfg, dict) or not mods_cfg:
        return 1.0

    faster = mod_enabled(mods_cfg, "double_time") or mod_enabled(mods_cfg, "nightcore")
    slower = mod_enabled(mods_cfg, "half_time") or mod_enabled(mods_cfg, "daycore")
    if faster and slower:
        raise ValueError("double_time/nightcore and half_time/daycore are mutually exclusive")

    rate = 1.0
    if faster:
        rate = DOUBLE_TIME_RATE
    elif slower:
        rate = HALF_TIME_RATE

    if mod_enabled(mods_cfg, "rate"):
        cfg = get_mod_cfg(mods_cfg, "rate")
        speed = parse_float(cfg.get("speed", cfg.get("rate")) if isinstance(cfg, dict) else cfg)
        if speed is None or speed <= 0:
            raise ValueError(f"rate.speed must be a positive number, got {cfg!r}")
        rate *= speed

    return rate
