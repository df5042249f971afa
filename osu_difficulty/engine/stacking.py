"""Stack height resolution for overlapping hit objects.

Objects that appear on (almost) the same spot within a short time window are
drawn offset up-left so they remain distinguishable; the offset is expressed as
an integer ``stack_height`` per object and applied through
``HitObject.stacked_position``.
"""

from __future__ import annotations

import logging
from typing import List

from ..types import Beatmap, HitObject, Slider, Spinner

logger = logging.getLogger(__name__)

STACK_DISTANCE = 3.0


def _close(a, b) -> bool:
    return a.distance_to(b) < STACK_DISTANCE


def resolve_stacking(beatmap: Beatmap) -> None:
    objs = beatmap.hit_objects
    for ob in objs:
        ob.stack_height = 0
    if len(objs) < 2:
        return

    threshold = beatmap.difficulty.preempt() * beatmap.stack_leniency
    if beatmap.format_version >= 6:
        _resolve_stacking(objs, threshold)
    else:
        _resolve_stacking_old(objs, threshold)

    logger.debug(
        "stacking resolved: %d/%d objects stacked (threshold %.1fms)",
        sum(1 for ob in objs if ob.stack_height != 0),
        len(objs),
        threshold,
    )


def _resolve_stacking(objs: List[HitObject], threshold: float) -> None:
    # walk backwards so each object stacks onto the ones after it
    for i in range(len(objs) - 1, 0, -1):
        n = i
        ob_i = objs[i]
        if ob_i.stack_height != 0 or isinstance(ob_i, Spinner):
            continue

        if isinstance(ob_i, Slider):
            # first slider in a possible stack; stack positive from here on
            while n - 1 >= 0:
                n -= 1
                ob_n = objs[n]
                if isinstance(ob_n, Spinner):
                    continue
                if ob_i.start_time - ob_n.start_time > threshold:
                    break
                if _close(ob_n.end_position, ob_i.position):
                    ob_n.stack_height = ob_i.stack_height + 1
                    ob_i = ob_n
            continue

        # circle
        while n - 1 >= 0:
            n -= 1
            ob_n = objs[n]
            if isinstance(ob_n, Spinner):
                continue
            if ob_i.start_time - ob_n.end_time > threshold:
                break

            if isinstance(ob_n, Slider) and _close(ob_n.end_position, ob_i.position):
                offset = ob_i.stack_height - ob_n.stack_height + 1
                for j in range(n + 1, i + 1):
                    # objects stacked under the slider tail go down-right
                    ob_j = objs[j]
                    if _close(ob_n.end_position, ob_j.position):
                        ob_j.stack_height -= offset
                # restart from the slider as the new base
                break

            if _close(ob_n.position, ob_i.position):
                ob_n.stack_height = ob_i.stack_height + 1
                ob_i = ob_n


def _resolve_stacking_old(objs: List[HitObject], threshold: float) -> None:
    for i, ob_i in enumerate(objs):
        if isinstance(ob_i, Spinner):
            continue
        if ob_i.stack_height != 0 and not isinstance(ob_i, Slider):
            continue

        start_time = ob_i.end_time
        slider_stack = 0
        # old maps stack against the far end of the path, whatever the span count
        path_end = ob_i.position + ob_i.path.position_at(1) if isinstance(ob_i, Slider) else None

        for ob_j in objs[i + 1:]:
            if ob_j.start_time - threshold > start_time:
                break
            if isinstance(ob_j, Spinner):
                continue

            if _close(ob_j.position, ob_i.position):
                ob_i.stack_height += 1
                start_time = ob_j.end_time
            elif path_end is not None and _close(ob_j.position, path_end):
                # bump down-right, below the slider tail
                slider_stack += 1
                ob_j.stack_height -= slider_stack
                start_time = ob_j.end_time
