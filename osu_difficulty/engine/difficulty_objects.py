from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from ..runtime.mods import apply_mods, clock_rate_for_mods
from ..types import Beatmap, HitObject
from .beatmap_processor import prepare_beatmap
from .preprocessing import DifficultyHitObject, compute_difficulty_hit_object

logger = logging.getLogger(__name__)


@dataclass
class DifficultyResult:
    beatmap: Beatmap
    clock_rate: float
    objects: List[DifficultyHitObject]


def create_difficulty_hit_objects(
    hit_objects: Sequence[HitObject],
    clock_rate: float = 1.0,
) -> List[DifficultyHitObject]:
    """One forward pass; object i sees i-1 and i-2. The first object has no record."""
    if not math.isfinite(clock_rate) or clock_rate <= 0:
        raise ValueError(f"clock_rate must be a positive number, got {clock_rate!r}")

    out: List[DifficultyHitObject] = []
    for i in range(1, len(hit_objects)):
        last_last = hit_objects[i - 2] if i > 1 else None
        out.append(compute_difficulty_hit_object(hit_objects[i], hit_objects[i - 1], last_last, clock_rate))

    logger.debug("created %d difficulty objects (clock_rate=%.3f)", len(out), clock_rate)
    return out


def calculate(
    beatmap: Beatmap,
    mods: Optional[Dict[str, Any]] = None,
    *,
    clock_rate: Optional[float] = None,
    stacking: bool = True,
) -> DifficultyResult:
    """Apply mods, prepare the beatmap and extract per-object features.

    An explicit ``clock_rate`` overrides the rate implied by ``mods``.
    """
    mods = mods or {}
    beatmap = apply_mods(mods, beatmap)
    prepare_beatmap(beatmap, stacking=stacking)

    rate = float(clock_rate) if clock_rate is not None else clock_rate_for_mods(mods)
    objects = create_difficulty_hit_objects(beatmap.hit_objects, rate)
    return DifficultyResult(beatmap=beatmap, clock_rate=rate, objects=objects)
