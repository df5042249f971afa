from __future__ import annotations

import logging
import re
from typing import Callable, Dict, List, Optional

from ..math.curves import PathType, SliderPath
from ..math.vector import Vector2
from ..types import (
    Beatmap,
    BeatmapDifficulty,
    HitCircle,
    HitObject,
    PLAYFIELD_CENTRE,
    Slider,
    Spinner,
    TimingPoint,
)

logger = logging.getLogger(__name__)

TYPE_CIRCLE = 1
TYPE_SLIDER = 2
TYPE_NEW_COMBO = 4
TYPE_SPINNER = 8
TYPE_COMBO_OFFSET = 16 | 32 | 64
TYPE_HOLD = 128

_HEADER_RE = re.compile(r"osu file format v(\d+)")


class OsuFormatError(ValueError):
    def __init__(self, message: str, *, line_no: Optional[int] = None, line: Optional[str] = None):
        self.line_no = line_no
        self.line = line
        if line_no is not None:
            message = f"line {line_no}: {message} ({line!r})"
        super().__init__(message)


class UnsupportedModeError(OsuFormatError):
    pass


def _split_property(line: str):
    if ":" not in line:
        raise ValueError("expected 'Key: Value'")
    k, v = line.split(":", 1)
    return k.strip(), v.strip()


def parse_general(b: Beatmap, line: str) -> None:
    k, v = _split_property(line)
    if k == "Mode":
        b.mode = int(v)
    elif k == "StackLeniency":
        b.stack_leniency = float(v)


def parse_metadata(b: Beatmap, line: str) -> None:
    k, v = _split_property(line)
    b.metadata[k] = v


def parse_difficulty(d: BeatmapDifficulty, line: str, seen: Dict[str, bool]) -> None:
    k, v = _split_property(line)
    fields = {
        "CircleSize": "circle_size",
        "OverallDifficulty": "overall_difficulty",
        "ApproachRate": "approach_rate",
        "HPDrainRate": "drain_rate",
        "SliderMultiplier": "slider_multiplier",
        "SliderTickRate": "slider_tick_rate",
    }
    attr = fields.get(k)
    if attr is None:
        return
    setattr(d, attr, float(v))
    seen[k] = True


def parse_timing_point(line: str) -> TimingPoint:
    s = [p.strip() for p in line.split(",")]
    if len(s) < 2:
        raise ValueError("timing point must have at least two fields")
    time = float(s[0])
    beat_length = float(s[1])
    meter = int(s[2]) if len(s) > 2 and s[2] else 4
    if len(s) > 6 and s[6]:
        uninherited = s[6] != "0"
    else:
        uninherited = beat_length > 0
    return TimingPoint(time=time, beat_length=beat_length, meter=meter, uninherited=uninherited)


def _parse_control_points(head: Vector2, raw: List[str]) -> List[Vector2]:
    pts = [Vector2(0.0, 0.0)]
    for token in raw:
        try:
            x_str, y_str = token.split(":")
        except ValueError:
            raise ValueError(f"expected slider point as x:y, got {token!r}") from None
        pts.append(Vector2(float(x_str), float(y_str)) - head)
    return pts


def parse_hit_object(line: str) -> HitObject:
    s = [p.strip() for p in line.split(",")]
    if len(s) < 4:
        raise ValueError("hit object must have at least 4 fields")

    pos = Vector2(float(s[0]), float(s[1]))
    time = float(s[2])
    type_bits = int(s[3])
    new_combo = bool(type_bits & TYPE_NEW_COMBO)
    combo_offset = (type_bits & TYPE_COMBO_OFFSET) >> 4

    if type_bits & TYPE_CIRCLE:
        return HitCircle(start_time=time, position=pos, new_combo=new_combo, combo_offset=combo_offset)

    if type_bits & TYPE_SLIDER:
        if len(s) < 8:
            raise ValueError("slider must have at least 8 fields")
        kind, *raw_points = s[5].split("|")
        span_count = max(1, int(s[6]))
        length = float(s[7])
        path = SliderPath(
            PathType.parse(kind),
            _parse_control_points(pos, raw_points),
            expected_distance=length if length > 0 else None,
        )
        return Slider(
            start_time=time,
            position=pos,
            new_combo=new_combo,
            combo_offset=combo_offset,
            path=path,
            span_count=span_count,
        )

    if type_bits & TYPE_SPINNER:
        if len(s) < 6:
            raise ValueError("spinner must have an end time")
        end_time = float(s[5])
        return Spinner(
            start_time=time,
            position=PLAYFIELD_CENTRE,
            new_combo=True,
            combo_offset=combo_offset,
            duration=max(0.0, end_time - time),
        )

    if type_bits & TYPE_HOLD:
        raise ValueError("hold notes only exist in osu!mania beatmaps")
    raise ValueError(f"unknown hit object type {type_bits}")


def parse_osu(text: str) -> Beatmap:
    b = Beatmap(format_version=0)
    seen_difficulty: Dict[str, bool] = {}
    section = ""

    handlers: Dict[str, Callable[[str], None]] = {
        "General": lambda ln: parse_general(b, ln),
        "Metadata": lambda ln: parse_metadata(b, ln),
        "Difficulty": lambda ln: parse_difficulty(b.difficulty, ln, seen_difficulty),
        "TimingPoints": lambda ln: b.timing_points.append(parse_timing_point(ln)),
        "HitObjects": lambda ln: b.hit_objects.append(parse_hit_object(ln)),
    }

    for line_no, raw in enumerate(text.lstrip("\ufeff").splitlines(), start=1):
        if raw.startswith((" ", "_")):
            continue
        line = raw.strip()
        if not line or line.startswith("//"):
            continue

        if b.format_version == 0 and not section:
            m = _HEADER_RE.search(line)
            if m:
                b.format_version = int(m.group(1))
                continue

        if line.startswith("[") and line.endswith("]"):
            section = line[1:-1]
            continue

        handler = handlers.get(section)
        if handler is None:
            continue
        try:
            handler(line)
        except ValueError as e:
            raise OsuFormatError(str(e), line_no=line_no, line=raw) from e

        if section == "General" and b.mode != 0:
            raise UnsupportedModeError(
                f"only osu!standard (mode 0) is supported, got mode {b.mode}", line_no=line_no, line=raw
            )

    if b.format_version == 0:
        logger.warning("missing 'osu file format' header, assuming v14")
        b.format_version = 14

    if "ApproachRate" not in seen_difficulty:
        b.difficulty.approach_rate = b.difficulty.overall_difficulty

    b.timing_points.sort(key=lambda tp: tp.time)
    logger.debug(
        "parsed beatmap v%d %r: %d timing points, %d hit objects",
        b.format_version,
        b.version,
        len(b.timing_points),
        len(b.hit_objects),
    )
    return b


def load_osu(path: str) -> Beatmap:
    with open(path, "r", encoding="utf-8-sig") as f:
        return parse_osu(f.read())
