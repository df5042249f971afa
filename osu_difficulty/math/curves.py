from __future__ import annotations

import math
from enum import Enum
from typing import Iterable, List, Optional, Sequence

import numpy as np

from .util import FLOAT_EPSILON, almost_equal, clamp, finite_or
from .vector import Vector2, ZERO

CIRCULAR_ARC_TOLERANCE = 0.1
CATMULL_DETAIL = 50
# osu!pixels between Bezier samples
BEZIER_STEP = 2.0
BEZIER_MAX_SAMPLES = 4096


class PathType(str, Enum):
    LINEAR = "L"
    PERFECT_CURVE = "P"
    BEZIER = "B"
    CATMULL = "C"

    @classmethod
    def parse(cls, s: str) -> "PathType":
        try:
            return cls(str(s).strip().upper())
        except ValueError:
            raise ValueError(f"unknown slider path type {s!r}") from None


def _as_array(points: Sequence[Vector2]) -> np.ndarray:
    if not points:
        return np.zeros((0, 2), dtype=np.float64)
    return np.array([[p.x, p.y] for p in points], dtype=np.float64)


def approximate_linear(pts: np.ndarray) -> np.ndarray:
    return pts.copy()


def approximate_bezier(pts: np.ndarray) -> np.ndarray:
    n = len(pts) - 1
    if n <= 1:
        return pts.copy()
    polygon_len = float(np.linalg.norm(np.diff(pts, axis=0), axis=1).sum())
    samples = int(clamp(math.ceil(polygon_len / BEZIER_STEP) + 1, 2, BEZIER_MAX_SAMPLES))
    t = np.linspace(0.0, 1.0, samples)[:, None]
    k = np.arange(n + 1)[None, :]
    coeff = np.array([math.comb(n, i) for i in range(n + 1)], dtype=np.float64)[None, :]
    basis = coeff * (t ** k) * ((1.0 - t) ** (n - k))
    return basis @ pts


def approximate_circular_arc(pts: np.ndarray) -> Optional[np.ndarray]:
    """Sample the circle through three points; None when they are degenerate."""
    a, b, c = (Vector2(float(p[0]), float(p[1])) for p in pts)

    a_sq = (b - c).length_squared()
    b_sq = (a - c).length_squared()
    c_sq = (a - b).length_squared()
    if almost_equal(a_sq, 0) or almost_equal(b_sq, 0) or almost_equal(c_sq, 0):
        return None

    s = a_sq * (b_sq + c_sq - a_sq)
    t = b_sq * (a_sq + c_sq - b_sq)
    u = c_sq * (a_sq + b_sq - c_sq)
    total = s + t + u
    if almost_equal(total, 0):
        return None

    centre = (a * s + b * t + c * u) / total
    d_a = a - centre
    d_c = c - centre
    r = d_a.length()

    theta_start = math.atan2(d_a.y, d_a.x)
    theta_end = math.atan2(d_c.y, d_c.x)
    while theta_end < theta_start:
        theta_end += 2 * math.pi

    direction = 1.0
    theta_range = theta_end - theta_start

    # b decides which way round the circle we go
    ortho = c - a
    ortho = Vector2(ortho.y, -ortho.x)
    if ortho.dot(b - a) < 0:
        direction = -direction
        theta_range = 2 * math.pi - theta_range

    if 2 * r <= CIRCULAR_ARC_TOLERANCE:
        amount = 2
    else:
        amount = max(2, int(math.ceil(theta_range / (2 * math.acos(1 - CIRCULAR_ARC_TOLERANCE / r)))))

    theta = theta_start + direction * np.linspace(0.0, 1.0, amount) * theta_range
    out = np.empty((amount, 2), dtype=np.float64)
    out[:, 0] = centre.x + np.cos(theta) * r
    out[:, 1] = centre.y + np.sin(theta) * r
    return out


def approximate_catmull(pts: np.ndarray) -> np.ndarray:
    n = len(pts)
    if n < 2:
        return pts.copy()
    t = np.arange(CATMULL_DETAIL + 1, dtype=np.float64)[:, None] / CATMULL_DETAIL
    t2 = t * t
    t3 = t2 * t
    chunks: List[np.ndarray] = []
    for i in range(n - 1):
        v1 = pts[i - 1] if i > 0 else pts[i]
        v2 = pts[i]
        v3 = pts[i + 1] if i < n - 1 else v2 + v2 - v1
        v4 = pts[i + 2] if i < n - 2 else v3 + v3 - v2
        chunks.append(
            0.5 * (
                2 * v2
                + (-v1 + v3) * t
                + (2 * v1 - 5 * v2 + 4 * v3 - v4) * t2
                + (-v1 + 3 * v2 - 3 * v3 + v4) * t3
            )
        )
    return np.concatenate(chunks, axis=0)


class SliderPath:
    """Curve of a slider, relative to its head, parametrised by arc length.

    The polyline approximation and its cumulative lengths are computed on first
    use. Call ``invalidate`` after mutating ``control_points``.
    """

    def __init__(
        self,
        path_type: PathType = PathType.BEZIER,
        control_points: Optional[Iterable[Vector2]] = None,
        expected_distance: Optional[float] = None,
    ):
        self.path_type = PathType(path_type)
        self.control_points: List[Vector2] = list(control_points or [])
        self.expected_distance = None if expected_distance is None else max(0.0, float(expected_distance))
        self._path: Optional[np.ndarray] = None
        self._cumulative: Optional[np.ndarray] = None

    def __repr__(self) -> str:
        return (
            f"SliderPath({self.path_type.value}, {len(self.control_points)} points, "
            f"expected={self.expected_distance})"
        )

    def invalidate(self) -> None:
        self._path = None
        self._cumulative = None

    @property
    def distance(self) -> float:
        self._ensure_valid()
        assert self._cumulative is not None
        return float(self._cumulative[-1]) if len(self._cumulative) else 0.0

    def position_at(self, progress: float) -> Vector2:
        self._ensure_valid()
        path, cum = self._path, self._cumulative
        assert path is not None and cum is not None
        if len(path) == 0:
            return ZERO

        d = clamp(finite_or(float(progress), 0.0), 0.0, 1.0) * self.distance
        i = int(np.searchsorted(cum, d, side="left"))
        if i <= 0:
            return Vector2(float(path[0, 0]), float(path[0, 1]))
        if i >= len(path):
            return Vector2(float(path[-1, 0]), float(path[-1, 1]))

        d0, d1 = float(cum[i - 1]), float(cum[i])
        p0, p1 = path[i - 1], path[i]
        if almost_equal(d0, d1):
            return Vector2(float(p0[0]), float(p0[1]))
        w = (d - d0) / (d1 - d0)
        p = p0 + (p1 - p0) * w
        return Vector2(float(p[0]), float(p[1]))

    def _ensure_valid(self) -> None:
        if self._path is not None:
            return
        self._path = self._calculate_path()
        self._calculate_cumulative_length()

    def _calculate_subpath(self, pts: np.ndarray) -> np.ndarray:
        if self.path_type == PathType.LINEAR:
            return approximate_linear(pts)
        if self.path_type == PathType.PERFECT_CURVE and len(pts) == 3:
            arc = approximate_circular_arc(pts)
            if arc is not None:
                return arc
        if self.path_type == PathType.CATMULL:
            return approximate_catmull(pts)
        return approximate_bezier(pts)

    def _calculate_path(self) -> np.ndarray:
        cps = _as_array(self.control_points)
        if len(cps) == 0:
            return cps

        out: List[np.ndarray] = []
        last: Optional[np.ndarray] = None
        start = 0
        # a repeated point ends the current segment (red anchor)
        for i in range(len(cps)):
            if i == len(cps) - 1 or np.array_equal(cps[i], cps[i + 1]):
                sub = self._calculate_subpath(cps[start:i + 1])
                for v in sub:
                    if last is None or not np.array_equal(last, v):
                        out.append(v)
                        last = v
                start = i + 1
        return np.array(out, dtype=np.float64).reshape(-1, 2)

    def _calculate_cumulative_length(self) -> None:
        path = self._path
        assert path is not None
        if len(path) == 0:
            self._cumulative = np.zeros(0, dtype=np.float64)
            return

        seg = np.linalg.norm(np.diff(path, axis=0), axis=1)
        cum = np.concatenate(([0.0], np.cumsum(seg)))
        expected = self.expected_distance

        if expected is not None and len(path) > 1:
            expected = float(expected)
            cut = int(np.searchsorted(cum, expected, side="right"))
            if cut < len(cum):
                # too long: shorten the segment that crosses the expected length
                i = cut - 1
                path = path[:cut + 1].copy()
                path[cut] = path[i] + (path[cut] - path[i]) * ((expected - cum[i]) / seg[i])
                cum = cum[:cut + 1].copy()
                cum[cut] = expected
            elif cum[-1] < expected:
                # too short: extend the last segment
                diff = path[-1] - path[-2]
                d = float(np.linalg.norm(diff))
                if d > FLOAT_EPSILON:
                    path = path.copy()
                    path[-1] = path[-1] + diff * ((expected - cum[-1]) / d)
                    cum[-1] = expected

        self._path = path
        self._cumulative = cum
