# pathcalc/bezier.py
"""
Bezier curve math for segments of any degree.

A curve is given by its control points P0..Pn (anything with .x and .y):
    B(t) = sum_i C(n, i) * t^i * (1 - t)^(n - i) * P_i
"""

from __future__ import annotations

import math
from typing import Sequence

from .geom import Vector


def binomial(n: int, k: int) -> float:
    """Binomial coefficient C(n, k) as an iterative product (no factorials)."""
    if k < 0 or k > n:
        return 0.0
    coeff = 1.0
    for i in range(n - k + 1, n + 1):
        coeff *= i
    for i in range(1, k + 1):
        coeff /= i
    return coeff


def bernstein(n: int, i: int, t: float) -> float:
    return binomial(n, i) * math.pow(t, i) * math.pow(1 - t, n - i)


def evaluate(controls: Sequence[Vector], t: float) -> Vector:
    """Point on the curve at parameter t in [0, 1]."""
    n = len(controls) - 1
    # Ends are returned exactly; the Bernstein sum can be off by an ulp.
    if t <= 0.0:
        return Vector(controls[0].x, controls[0].y)
    if t >= 1.0:
        return Vector(controls[n].x, controls[n].y)
    x = y = 0.0
    for i, cp in enumerate(controls):
        b = bernstein(n, i, t)
        x += cp.x * b
        y += cp.y * b
    return Vector(x, y)


def derivative_controls(controls: Sequence[Vector]) -> list:
    """Control points of the hodograph: n * (P[i+1] - P[i])."""
    n = len(controls) - 1
    return [Vector(n * (controls[i + 1].x - controls[i].x), n * (controls[i + 1].y - controls[i].y))
            for i in range(n)]


def first_derivative(controls: Sequence[Vector], t: float) -> Vector:
    d1 = derivative_controls(controls)
    if not d1:
        return Vector(0.0, 0.0)
    return evaluate(d1, t)


def second_derivative(controls: Sequence[Vector], t: float) -> Vector:
    d1 = derivative_controls(controls)
    if len(d1) < 2:
        return Vector(0.0, 0.0)
    return evaluate(derivative_controls(d1), t)


def curvature(controls: Sequence[Vector], t: float) -> float:
    """Signed curvature at t; 0 where the tangent vanishes."""
    d1 = first_derivative(controls, t)
    d2 = second_derivative(controls, t)
    speed = math.hypot(d1.x, d1.y)
    if speed == 0.0:
        return 0.0
    return (d1.x * d2.y - d1.y * d2.x) / speed ** 3


def arc_length(controls: Sequence[Vector], interval: float = 0.05) -> float:
    """Chord-sum estimate of the curve length using a fixed parameter step."""
    count = int(math.floor(1.0 / interval + 1e-9))
    total = 0.0
    prev = evaluate(controls, 0.0)
    for i in range(1, count + 1):
        point = evaluate(controls, i * interval)
        total += point.distance(prev)
        prev = point
    end = evaluate(controls, 1.0)
    return total + end.distance(prev)
