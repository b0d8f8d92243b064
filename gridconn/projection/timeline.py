"""
Timeline projector — screen geometry for the line + dot chart.

Coordinates are in the chart's inner area: x grows right over
``[0, width]``, y grows down over ``[0, height]`` (value 0 sits on the
bottom edge).

Category axis
    Point scale: one evenly spaced position per label, input order kept.
    A single label sits in the middle.

Value axis
    Linear over ``[0, max * 1.1]``; the headroom keeps the top point and its
    dot off the chart border.

Line
    Monotone cubic in x.  Tangents are limited (Steffen) so the curve never
    overshoots between two points; with only two points it is a straight
    segment.

Usage
-----
    geom = project_timeline(["Q1", "Q2", "Q3"], [100, 200, 150], 300, 120)
    geom.value_domain          # (0.0, 220.0)
    [p.x for p in geom.points] # [0.0, 150.0, 300.0]
    xs, ys = geom.sample_line(per_segment=16)
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from ..config import CONFIG

Point = Tuple[float, float]


@dataclass(frozen=True)
class ChartPoint:
    label: str
    value: float
    x: float
    y: float
    radius: float


@dataclass(frozen=True)
class CubicSegment:
    """Bezier segment from ``start`` to ``end``."""
    start: Point
    control1: Point
    control2: Point
    end: Point

    def sample(self, n: int) -> np.ndarray:
        """*n* + 1 points along the segment, both ends included."""
        t = np.linspace(0.0, 1.0, n + 1)[:, None]
        p0, p1, p2, p3 = (np.asarray(p, dtype=float) for p in
                          (self.start, self.control1, self.control2, self.end))
        mt = 1.0 - t
        return mt ** 3 * p0 + 3 * mt ** 2 * t * p1 + 3 * mt * t ** 2 * p2 + t ** 3 * p3


@dataclass(frozen=True)
class AxisTick:
    position: float
    label: str


@dataclass(frozen=True)
class TimelineGeometry:
    width: float
    height: float
    value_domain: Tuple[float, float]
    points: Tuple[ChartPoint, ...] = ()
    segments: Tuple[CubicSegment, ...] = ()
    x_ticks: Tuple[AxisTick, ...] = ()
    y_ticks: Tuple[AxisTick, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.points

    def sample_line(self, per_segment: int = 24) -> Tuple[np.ndarray, np.ndarray]:
        """Dense polyline along the curve, for substrates without Bezier paths."""
        if not self.points:
            return np.empty(0), np.empty(0)
        if not self.segments:
            p = self.points[0]
            return np.array([p.x]), np.array([p.y])
        chunks = [seg.sample(per_segment)[:-1] for seg in self.segments]
        last = self.segments[-1].end
        xy = np.vstack(chunks + [np.asarray([last], dtype=float)])
        return xy[:, 0], xy[:, 1]


# ── Scales ────────────────────────────────────────────────────────────

def point_positions(count: int, width: float) -> List[float]:
    """Evenly spaced category positions over ``[0, width]``."""
    if count <= 0:
        return []
    if count == 1:
        return [width / 2.0]
    step = width / (count - 1)
    return [i * step for i in range(count)]


def value_domain_max(values: Sequence[float], headroom: float = CONFIG.timeline.headroom) -> float:
    if not values:
        return 0.0
    return max(values) * headroom


def linear_y(value: float, domain_max: float, height: float) -> float:
    """Value → y pixel; a degenerate domain maps everything to the baseline."""
    if domain_max <= 0:
        return height
    return height - (value / domain_max) * height


def _tick_step(start: float, stop: float, count: int) -> float:
    """A 1/2/5 × 10^n step giving roughly *count* ticks over the span."""
    span = stop - start
    if span <= 0 or count <= 0:
        return 0.0
    raw = span / count
    power = math.floor(math.log10(raw))
    base = 10.0 ** power
    error = raw / base
    if error >= math.sqrt(50):
        factor = 10.0
    elif error >= math.sqrt(10):
        factor = 5.0
    elif error >= math.sqrt(2):
        factor = 2.0
    else:
        factor = 1.0
    return factor * base


def nice_ticks(stop: float, count: int = CONFIG.timeline.tick_count) -> List[float]:
    """Tick values within ``[0, stop]``."""
    step = _tick_step(0.0, stop, count)
    if step <= 0:
        return [0.0]
    n = int(math.floor(stop / step + 1e-9))
    return [round(i * step, 10) for i in range(n + 1)]


def format_thousands(value: float) -> str:
    """``20000 -> "20k"``, ``2500 -> "2.5k"``."""
    return f"{value / 1000:g}k"


# ── Monotone cubic interpolation ──────────────────────────────────────

def _sign(v: float) -> float:
    return -1.0 if v < 0 else 1.0


def _interior_tangent(p0: Point, p1: Point, p2: Point) -> float:
    h0 = p1[0] - p0[0]
    h1 = p2[0] - p1[0]
    if h0 == 0 or h1 == 0:
        return 0.0
    s0 = (p1[1] - p0[1]) / h0
    s1 = (p2[1] - p1[1]) / h1
    p = (s0 * h1 + s1 * h0) / (h0 + h1)
    return (_sign(s0) + _sign(s1)) * min(abs(s0), abs(s1), 0.5 * abs(p))


def _end_tangent(p0: Point, p1: Point, t: float) -> float:
    h = p1[0] - p0[0]
    if h == 0:
        return t
    return (3.0 * (p1[1] - p0[1]) / h - t) / 2.0


def monotone_segments(points: Sequence[Point]) -> Tuple[CubicSegment, ...]:
    """Bezier segments of a monotone-in-x cubic through *points*."""
    n = len(points)
    if n < 2:
        return ()
    if n == 2:
        (x0, y0), (x1, y1) = points
        dx = (x1 - x0) / 3.0
        dy = (y1 - y0) / 3.0
        return (CubicSegment(points[0], (x0 + dx, y0 + dy), (x1 - dx, y1 - dy), points[1]),)

    tangents = [0.0] * n
    for i in range(1, n - 1):
        tangents[i] = _interior_tangent(points[i - 1], points[i], points[i + 1])
    tangents[0] = _end_tangent(points[0], points[1], tangents[1])
    tangents[-1] = _end_tangent(points[-2], points[-1], tangents[-2])

    segments = []
    for i in range(n - 1):
        (x0, y0), (x1, y1) = points[i], points[i + 1]
        dx = (x1 - x0) / 3.0
        segments.append(CubicSegment(
            start=(x0, y0),
            control1=(x0 + dx, y0 + dx * tangents[i]),
            control2=(x1 - dx, y1 - dx * tangents[i + 1]),
            end=(x1, y1),
        ))
    return tuple(segments)


# ── Public API ────────────────────────────────────────────────────────

def project_timeline(
    labels: Sequence[str],
    values: Sequence[float],
    width: float,
    height: float,
) -> TimelineGeometry:
    """Chart geometry for *values* over the inner area ``width × height``."""
    if len(labels) != len(values):
        raise ValueError("labels and values must have the same length")
    width = max(width, 0.0)
    height = max(height, 0.0)

    if not labels:
        return TimelineGeometry(width=width, height=height, value_domain=(0.0, 0.0))

    top = value_domain_max(values)
    xs = point_positions(len(labels), width)
    radius = CONFIG.timeline.dot_radius
    points = tuple(
        ChartPoint(label=label, value=float(v), x=x, y=linear_y(float(v), top, height), radius=radius)
        for label, v, x in zip(labels, values, xs)
    )
    segments = monotone_segments([(p.x, p.y) for p in points])

    x_ticks = tuple(AxisTick(position=p.x, label=p.label) for p in points)
    y_ticks = tuple(
        AxisTick(position=linear_y(v, top, height), label=format_thousands(v))
        for v in nice_ticks(top)
    ) if top > 0 else ()

    return TimelineGeometry(
        width=width,
        height=height,
        value_domain=(0.0, top),
        points=points,
        segments=segments,
        x_ticks=x_ticks,
        y_ticks=y_ticks,
    )
