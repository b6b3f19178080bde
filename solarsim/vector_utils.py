#!/usr/bin/env python3
"""
Vector helper functions for 2D operations.

These are small, fast functions for vector math used throughout the app.
Vectors are plain (x, y) tuples.
"""
import math
from typing import Tuple

Vec2 = Tuple[float, float]

ZERO: Vec2 = (0.0, 0.0)


def clamp(x: float, a: float, b: float) -> float:
    """Clamp x to the inclusive range [a, b]."""
    return max(a, min(b, x))


def vec_add(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] + b[0], a[1] + b[1])


def vec_sub(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] - b[0], a[1] - b[1])


def vec_scale(a: Vec2, s: float) -> Vec2:
    return (a[0] * s, a[1] * s)


def vec_len(a: Vec2) -> float:
    return math.hypot(a[0], a[1])


def vec_len_sq(a: Vec2) -> float:
    return a[0] * a[0] + a[1] * a[1]


def vec_norm(a: Vec2) -> Vec2:
    l = vec_len(a)
    if l == 0:
        return ZERO
    return (a[0] / l, a[1] / l)


def vec_dot(a: Vec2, b: Vec2) -> float:
    return a[0] * b[0] + a[1] * b[1]


def rotate(a: Vec2, angle: float) -> Vec2:
    """Rotate a by angle radians (positive is clockwise on a y-down screen)."""
    cos = math.cos(angle)
    sin = math.sin(angle)
    return (a[0] * cos - a[1] * sin, a[0] * sin + a[1] * cos)


def clockwise_perpendicular(a: Vec2) -> Vec2:
    return rotate(a, math.pi / 2.0)


def counter_clockwise_perpendicular(a: Vec2) -> Vec2:
    return rotate(a, -math.pi / 2.0)


def unit(a: Vec2) -> Vec2:
    """Unit vector along a; the zero vector stays zero."""
    return vec_norm(a)
