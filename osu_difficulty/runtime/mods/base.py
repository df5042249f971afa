from __future__ import annotations

import math
from typing import Any, Dict, Iterable, Optional

# acronym -> canonical config key
MOD_ACRONYMS: Dict[str, str] = {
    "EZ": "easy",
    "HR": "hard_rock",
    "DT": "double_time",
    "NC": "nightcore",
    "HT": "half_time",
    "DC": "daycore",
}

MOD_ALIASES: Dict[str, Iterable[str]] = {
    "easy": ("easy", "ez"),
    "hard_rock": ("hard_rock", "hardrock", "hr"),
    "double_time": ("double_time", "doubletime", "dt"),
    "nightcore": ("nightcore", "nc"),
    "half_time": ("half_time", "halftime", "ht"),
    "daycore": ("daycore", "dc"),
    "rate": ("rate", "speed", "rate_adjust"),
}


def get_mod_cfg(mods_cfg: Dict[str, Any], name: str) -> Any:
    for k in MOD_ALIASES.get(name, (name,)):
        if k in mods_cfg:
            return mods_cfg.get(k)
    return None


def mod_enabled(mods_cfg: Optional[Dict[str, Any]], name: str) -> bool:
    """A mod is on when configured as ``true`` or as a dict without ``enable: false``."""
    if not isinstance(mods_cfg, dict):
        return False
    cfg = get_mod_cfg(mods_cfg, name)
    if isinstance(cfg, dict):
        return bool(cfg.get("enable", True))
    return bool(cfg)


def parse_float(v: Any) -> Optional[float]:
    if v is None:
        return None
    try:
        fv = float(v)
    except (TypeError, ValueError):
        return None
    return fv if math.isfinite(fv) else None


def parse_mod_string(s: str) -> Dict[str, Any]:
    """``"DTHR"``, ``"DT,HR"`` or ``"+dt hr"`` -> ``{"double_time": True, "hard_rock": True}``."""
    cleaned = "".join(ch for ch in str(s or "").upper() if ch.isalpha())
    if len(cleaned) % 2:
        raise ValueError(f"invalid mod string {s!r}")
    out: Dict[str, Any] = {}
    for i in range(0, len(cleaned), 2):
        acr = cleaned[i:i + 2]
        if acr == "NM":
            continue
        key = MOD_ACRONYMS.get(acr)
        if key is None:
            raise ValueError(f"unknown mod {acr!r} (supported: {', '.join(MOD_ACRONYMS)})")
        out[key] = True
    return out
