from __future__ import annotations

from typing import Iterator, List

from ..math.util import clamp
from ..types import CheckpointKind, SliderCheckpoint

LEGACY_LAST_TICK_OFFSET = 36.0
MAX_PATH_LENGTH = 100000.0


def _generate_ticks(
    span_index: int,
    span_start_time: float,
    span_duration: float,
    reversed_: bool,
    length: float,
    tick_distance: float,
    min_distance_from_end: float,
) -> Iterator[SliderCheckpoint]:
    d = tick_distance
    while d <= length:
        if d >= length - min_distance_from_end:
            break
        path_progress = d / length
        time_progress = 1 - path_progress if reversed_ else path_progress
        yield SliderCheckpoint(
            kind=CheckpointKind.TICK,
            time=span_start_time + time_progress * span_duration,
            span_index=span_index,
            path_progress=path_progress,
        )
        d += tick_distance


def generate_slider_checkpoints(
    start_time: float,
    span_duration: float,
    span_count: int,
    velocity: float,
    tick_distance: float,
    total_distance: float,
) -> List[SliderCheckpoint]:
    """Head, ticks, repeats and the legacy-offset tail of a slider, by time."""
    span_count = max(1, int(span_count))
    length = min(MAX_PATH_LENGTH, total_distance)
    tick_distance = clamp(tick_distance, 0.0, length)
    min_distance_from_end = velocity * 10

    out: List[SliderCheckpoint] = [
        SliderCheckpoint(CheckpointKind.HEAD, start_time, 0, 0.0)
    ]

    if tick_distance > 0:
        for span in range(span_count):
            span_start_time = start_time + span * span_duration
            reversed_ = span % 2 == 1
            ticks = list(
                _generate_ticks(
                    span, span_start_time, span_duration, reversed_, length, tick_distance, min_distance_from_end
                )
            )
            if reversed_:
                ticks.reverse()
            out.extend(ticks)

            if span < span_count - 1:
                out.append(
                    SliderCheckpoint(
                        CheckpointKind.REPEAT,
                        span_start_time + span_duration,
                        span,
                        float((span + 1) % 2),
                    )
                )
    else:
        for span in range(span_count - 1):
            out.append(
                SliderCheckpoint(
                    CheckpointKind.REPEAT,
                    start_time + (span + 1) * span_duration,
                    span,
                    float((span + 1) % 2),
                )
            )

    total_duration = span_count * span_duration
    final_span_index = span_count - 1
    final_span_start_time = start_time + final_span_index * span_duration
    final_span_end_time = max(
        start_time + total_duration / 2,
        final_span_start_time + span_duration - LEGACY_LAST_TICK_OFFSET,
    )
    out.append(
        SliderCheckpoint(CheckpointKind.TAIL, final_span_end_time, final_span_index, float(span_count % 2))
    )

    out.sort(key=lambda c: c.time)
    return out
