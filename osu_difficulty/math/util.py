from __future__ import annotations

import math

FLOAT_EPSILON = 1e-3


def clamp(x, a, b):
    return a if x < a else b if x > b else x

def lerp(a, b, t):
    return a + (b - a) * t

def almost_equal(a: float, b: float, eps: float = FLOAT_EPSILON) -> bool:
    return abs(a - b) <= eps

def finite_or(x: float, default: float) -> float:
    # NaN / +-inf collapse to default
    return x if math.isfinite(x) else default

def fold_ping_pong(progress: float) -> float:
    """Fold a span count into [0, 1], bouncing back on every odd span."""
    if progress % 2 >= 1:
        return 1 - progress % 1
    return progress % 1
