from __future__ import annotations

import csv
import io
import json
import math
from typing import Any, Dict, List, Optional, Sequence

from ..engine.difficulty_objects import DifficultyResult
from ..engine.preprocessing import DifficultyHitObject

COLUMNS = [
    "index",
    "kind",
    "start_time",
    "delta_time",
    "strain_time",
    "jump_distance",
    "travel_distance",
    "angle",
    "angle_deg",
]


def _round(v: Optional[float], precision: int) -> Optional[float]:
    if v is None:
        return None
    return round(float(v), precision)


def features_to_rows(objects: Sequence[DifficultyHitObject], precision: int = 3) -> List[Dict[str, Any]]:
    # index refers to the hit object, so the first record is index 1
    rows: List[Dict[str, Any]] = []
    for i, ob in enumerate(objects, start=1):
        rows.append({
            "index": i,
            "kind": ob.base_object.kind,
            "start_time": _round(ob.start_time, precision),
            "delta_time": _round(ob.delta_time, precision),
            "strain_time": _round(ob.strain_time, precision),
            "jump_distance": _round(ob.jump_distance, precision),
            "travel_distance": _round(ob.travel_distance, precision),
            "angle": _round(ob.angle, precision),
            "angle_deg": _round(math.degrees(ob.angle), precision) if ob.angle is not None else None,
        })
    return rows


def _cell(v: Any) -> str:
    return "" if v is None else str(v)


def format_table(rows: Sequence[Dict[str, Any]]) -> str:
    cells = [COLUMNS] + [[_cell(r.get(c)) for c in COLUMNS] for r in rows]
    widths = [max(len(line[i]) for line in cells) for i in range(len(COLUMNS))]
    out = []
    for n, line in enumerate(cells):
        out.append("  ".join(v.rjust(w) for v, w in zip(line, widths)))
        if n == 0:
            out.append("  ".join("-" * w for w in widths))
    return "\n".join(out) + "\n"


def dump_csv(rows: Sequence[Dict[str, Any]]) -> str:
    buf = io.StringIO()
    w = csv.DictWriter(buf, fieldnames=COLUMNS, lineterminator="\n")
    w.writeheader()
    for r in rows:
        w.writerow({k: _cell(r.get(k)) for k in COLUMNS})
    return buf.getvalue()


def dump_json(result: DifficultyResult, precision: int = 3) -> str:
    b = result.beatmap
    payload = {
        "beatmap": {
            "title": b.title,
            "version": b.version,
            "format_version": b.format_version,
            "circle_size": b.difficulty.circle_size,
            "approach_rate": b.difficulty.approach_rate,
            "hit_objects": len(b.hit_objects),
        },
        "clock_rate": result.clock_rate,
        "objects": features_to_rows(result.objects, precision),
    }
    return json.dumps(payload, ensure_ascii=False, indent=2) + "\n"


def render_report(result: DifficultyResult, fmt: str, precision: int = 3) -> str:
    if fmt == "json":
        return dump_json(result, precision)
    rows = features_to_rows(result.objects, precision)
    if fmt == "csv":
        return dump_csv(rows)
    if fmt == "table":
        return format_table(rows)
    raise ValueError(f"unknown output format {fmt!r}")
