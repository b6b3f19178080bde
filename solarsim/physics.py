#!/usr/bin/env python3
"""
Core Physics Engine for the Solar System simulator

Responsibilities
- Clamp the raw frame time to a bounded integration step.
- Advance every body with a single constant-acceleration update per frame.
- Provide small diagnostics (momentum, center of mass, kinetic energy).

Integration
Each frame, with T the clamped step and a_i = F_i / m_i:

    v_i' = v_i + T * a_i
    p_i' = p_i + T * v_i + T^2 / 2 * a_i

All forces are read from the pre-update state before any body is written
(a synchronous update), so the result does not depend on iteration order.
There is no sub-stepping: when a frame is longer than MAX_TIME_STEP the
simulation simply runs slower than wall-clock time.

Buffers
Force, next-position and next-velocity slots are kept between frames and only
resized when the body count changes.
"""

import logging
from typing import List, Sequence

from .constants import G, MAX_TIME_STEP, MIN_DISTANCE
from .data_models import Body
from .gravity import compute_net_forces
from .vector_utils import Vec2, ZERO, clamp

logger = logging.getLogger(__name__)


def clamp_time_step(dt: float, max_step: float = MAX_TIME_STEP) -> float:
    """Clamp a raw frame delta into [0, max_step]."""
    return clamp(dt, 0.0, max_step)


class NBodyPhysics:
    """
    Direct-summation gravity with a constant-acceleration integrator.

    The engine is stateless apart from its reusable buffers and the forces of
    the most recent step, which the renderer reads for the force overlay.
    """

    def __init__(self, g: float = G, max_step: float = MAX_TIME_STEP,
                 min_distance: float = MIN_DISTANCE):
        self.g = g
        self.max_step = max_step
        self.min_distance = min_distance
        self._forces: List[Vec2] = []
        self._next_positions: List[Vec2] = []
        self._next_velocities: List[Vec2] = []

    @property
    def forces(self) -> List[Vec2]:
        """Net forces computed by the most recent step, one per body slot."""
        return self._forces

    def _ensure_capacity(self, n: int) -> None:
        if len(self._forces) != n:
            logger.debug(f"Resizing integration buffers from {len(self._forces)} to {n} slots")
            self._forces = [ZERO] * n
            self._next_positions = [ZERO] * n
            self._next_velocities = [ZERO] * n

    def reset(self) -> None:
        """Drop buffers and cached forces (used when a scene is replaced)."""
        self._forces = []
        self._next_positions = []
        self._next_velocities = []

    def step(self, bodies: Sequence[Body], dt_raw: float) -> float:
        """
        Advance all bodies by one frame and return the step actually used.

        Args:
            bodies: Bodies to integrate (positions and velocities modified in place).
            dt_raw: Raw elapsed wall-clock time since the previous frame, seconds.
        """
        t = clamp_time_step(dt_raw, self.max_step)
        if dt_raw > 2.0 * self.max_step:
            logger.debug(f"Frame delta {dt_raw:.3f}s clamped to {t:.3f}s")

        n = len(bodies)
        self._ensure_capacity(n)
        forces = compute_net_forces(bodies, self._forces, self.g, self.min_distance)

        half_t_sq = t * t / 2.0
        for i, body in enumerate(bodies):
            inv_mass = 1.0 / body.mass
            ax = forces[i][0] * inv_mass
            ay = forces[i][1] * inv_mass
            vx, vy = body.velocity
            px, py = body.position
            self._next_velocities[i] = (vx + t * ax, vy + t * ay)
            self._next_positions[i] = (px + t * vx + half_t_sq * ax, py + t * vy + half_t_sq * ay)

        # Write back only after every force has been read from the old state
        for i, body in enumerate(bodies):
            body.position = self._next_positions[i]
            body.velocity = self._next_velocities[i]

        return t


def total_momentum(bodies: Sequence[Body]) -> Vec2:
    """Sum of m * v over all bodies."""
    px, py = ZERO
    for b in bodies:
        px += b.mass * b.velocity[0]
        py += b.mass * b.velocity[1]
    return (px, py)


def center_of_mass(bodies: Sequence[Body]) -> Vec2:
    """Mass-weighted mean position; the origin for an empty scene."""
    total = sum(b.mass for b in bodies)
    if total <= 0:
        return ZERO
    cx = sum(b.mass * b.position[0] for b in bodies) / total
    cy = sum(b.mass * b.position[1] for b in bodies) / total
    return (cx, cy)


def kinetic_energy(bodies: Sequence[Body]) -> float:
    """K = 0.5 * sum(m * v^2)."""
    return 0.5 * sum(b.mass * (b.velocity[0] ** 2 + b.velocity[1] ** 2) for b in bodies)
