#!/usr/bin/env python3
"""
Pairwise gravity and whole-system force accumulation.

The force on body A from body B is

    F = G * m_A * m_B / |r|^2 * r_hat,    r = p_B - p_A

summed by direct O(N^2) summation over every ordered pair. Both directions of a
pair are evaluated independently; the law is antisymmetric, so the result on B
is the negation of the result on A.

Close encounters: |r|^2 is clamped from below to MIN_DISTANCE^2, and r_hat is
the zero vector when the two positions coincide exactly, so coincident bodies
exert no force on each other instead of producing NaN.
"""
from typing import List, Sequence

from .constants import G, MIN_DISTANCE
from .data_models import Body
from .vector_utils import Vec2, ZERO, vec_len_sq, vec_norm, vec_scale, vec_sub


def two_body_force(body_from: Body, body_to: Body, g: float = G,
                   min_distance: float = MIN_DISTANCE) -> Vec2:
    """Force on body_from exerted by body_to."""
    r = vec_sub(body_to.position, body_from.position)
    r_squared = max(vec_len_sq(r), min_distance * min_distance)
    magnitude = g * body_from.mass * body_to.mass / r_squared
    return vec_scale(vec_norm(r), magnitude)


def net_force(bodies: Sequence[Body], index: int, g: float = G,
              min_distance: float = MIN_DISTANCE) -> Vec2:
    """Net gravitational force on bodies[index] from every other body."""
    fx, fy = ZERO
    body = bodies[index]
    for j, other in enumerate(bodies):
        if j == index:
            continue
        f = two_body_force(body, other, g, min_distance)
        fx += f[0]
        fy += f[1]
    return (fx, fy)


def compute_net_forces(bodies: Sequence[Body], out: List[Vec2], g: float = G,
                       min_distance: float = MIN_DISTANCE) -> List[Vec2]:
    """
    Fill out[i] with the net force on bodies[i] and return out.

    out must already hold one slot per body; it is overwritten in place.
    """
    for i in range(len(bodies)):
        out[i] = net_force(bodies, i, g, min_distance)
    return out
