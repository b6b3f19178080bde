#!/usr/bin/env python3
"""
Preset scenes: initial body configurations for the simulator.

Every builder takes only the render surface size (used for centering) and
returns a freshly built Scene; the same size always gives the same bodies.

Orbit sweep
Four scenes share one formula: a sun at the surface center plus count - 1
bodies spread along a rotation sweep. For body i in [1, count - 1]:

    step     = (i - 1) / (count - 1)
    angle    = step * angle_range
    scale    = start_scale + step * (end_scale - start_scale)
    offset   = rotate((EARTH_ORBIT_RADIUS, 0), angle)
    position = sun + scale * offset
    velocity = speed / scale * unit(clockwise_perpendicular(offset))

The velocity is a tangential kick that seeds orbit-like motion; it does not
enforce a closed orbit. angle_range beyond a full turn yields multi-turn spirals
and differing start/end scales turn the circle into a spiral.

The other two scenes are hand placed: SunDance (a light sun between two heavy
partners with opposite velocities) and SquareGrid (stationary bodies on a
regular grid, no sun).
"""
import enum
import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple

from .constants import (
    BODY_PALETTE,
    EARTH_ORBIT_RADIUS,
    EARTH_RADIUS,
    FULL_TURN,
    GRID_BODY_MASS,
    GRID_COLUMNS,
    GRID_ROWS,
    SUN_COLOR,
    SUN_DANCE_BODY_MASS,
    SUN_DANCE_SEPARATION,
    SUN_DANCE_SPEED,
    SUN_MASS,
    SUN_RADIUS,
)
from .data_models import Body, Scene, SceneConfigurationError
from .vector_utils import Vec2, ZERO, clockwise_perpendicular, rotate, unit, vec_add, vec_scale

logger = logging.getLogger(__name__)

SUN = 0  # anchor slot in every scene that has a sun


class SceneKind(enum.Enum):
    SIMPLE_ORBIT = "Simple Orbit"
    BODY_ORBIT_SPIRAL = "Body Orbit Spiral"
    PARTY_OVER_SPIRAL = "Party Over Spiral"
    SUN_DANCE = "Sun Dance"
    SQUARE_GRID = "Square Grid"
    BODY_CIRCLE = "Body Circle"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class OrbitSweep:
    """Parameters of an orbit-sweep scene."""
    count: int
    initial_speed: float
    start_scale: float
    end_scale: float
    angle_range: float
    body_mass: float
    sun_velocity: Vec2 = ZERO


ORBIT_SWEEPS: Dict[SceneKind, OrbitSweep] = {
    SceneKind.SIMPLE_ORBIT: OrbitSweep(
        count=3, initial_speed=120.0, start_scale=1.0, end_scale=1.0,
        angle_range=-FULL_TURN, body_mass=1.0,
    ),
    SceneKind.BODY_ORBIT_SPIRAL: OrbitSweep(
        count=129, initial_speed=105.0, start_scale=0.75, end_scale=1.25,
        angle_range=-3 * FULL_TURN, body_mass=1.0, sun_velocity=(-0.001, 0.0),
    ),
    SceneKind.PARTY_OVER_SPIRAL: OrbitSweep(
        count=129, initial_speed=30.0, start_scale=0.125, end_scale=1.5,
        angle_range=-6 * FULL_TURN, body_mass=0.25,
    ),
    SceneKind.BODY_CIRCLE: OrbitSweep(
        count=129, initial_speed=125.0, start_scale=1.0, end_scale=1.0,
        angle_range=-3 * FULL_TURN, body_mass=10.0,
    ),
}

# Order in which the user cycles through scenes
SCENE_ORDER: Tuple[SceneKind, ...] = (
    SceneKind.SIMPLE_ORBIT,
    SceneKind.BODY_ORBIT_SPIRAL,
    SceneKind.PARTY_OVER_SPIRAL,
    SceneKind.SUN_DANCE,
    SceneKind.SQUARE_GRID,
    SceneKind.BODY_CIRCLE,
)

DEFAULT_SCENE_INDEX = 1


def palette_color(index: int) -> Tuple[int, int, int]:
    return BODY_PALETTE[index % len(BODY_PALETTE)]


def surface_center(width: float, height: float) -> Vec2:
    return (width / 2.0, height / 2.0)


def _make_sun(position: Vec2, velocity: Vec2 = ZERO) -> Body:
    return Body(
        name="Sun",
        mass=SUN_MASS,
        radius=SUN_RADIUS,
        position=position,
        velocity=velocity,
        color=SUN_COLOR,
    )


def orbit_sweep_scene(name: str, sweep: OrbitSweep, width: float, height: float) -> Scene:
    """Sun at the surface center plus count - 1 bodies along the sweep."""
    if sweep.count < 2:
        raise SceneConfigurationError(f"{name}: an orbit sweep needs at least 2 bodies, got {sweep.count}")
    if sweep.start_scale <= 0 or sweep.end_scale <= 0:
        raise SceneConfigurationError(f"{name}: orbit scales must be positive")

    sun = _make_sun(surface_center(width, height), sweep.sun_velocity)
    bodies: List[Body] = [sun]
    base_offset = (EARTH_ORBIT_RADIUS, 0.0)
    scale_range = sweep.end_scale - sweep.start_scale
    for i in range(1, sweep.count):
        step = (i - 1) / (sweep.count - 1)
        angle = step * sweep.angle_range
        scale = sweep.start_scale + step * scale_range
        offset = rotate(base_offset, angle)
        tangent = unit(clockwise_perpendicular(offset))
        bodies.append(Body(
            name=f"Body {i}",
            mass=sweep.body_mass,
            radius=EARTH_RADIUS,
            position=vec_add(sun.position, vec_scale(offset, scale)),
            velocity=vec_scale(tangent, sweep.initial_speed / scale),
            color=palette_color(i),
        ))
    return Scene(name=name, bodies=bodies, anchor_index=SUN)


def simple_orbit(width: float, height: float) -> Scene:
    return orbit_sweep_scene(SceneKind.SIMPLE_ORBIT.label, ORBIT_SWEEPS[SceneKind.SIMPLE_ORBIT], width, height)


def body_orbit_spiral(width: float, height: float) -> Scene:
    return orbit_sweep_scene(SceneKind.BODY_ORBIT_SPIRAL.label, ORBIT_SWEEPS[SceneKind.BODY_ORBIT_SPIRAL], width, height)


def party_over_spiral(width: float, height: float) -> Scene:
    return orbit_sweep_scene(SceneKind.PARTY_OVER_SPIRAL.label, ORBIT_SWEEPS[SceneKind.PARTY_OVER_SPIRAL], width, height)


def body_circle(width: float, height: float) -> Scene:
    return orbit_sweep_scene(SceneKind.BODY_CIRCLE.label, ORBIT_SWEEPS[SceneKind.BODY_CIRCLE], width, height)


def sun_dance(width: float, height: float) -> Scene:
    """
    A light sun with two heavy partners moving in opposite directions.

    The partners sit SUN_DANCE_SEPARATION apart on the sun's right, with equal
    and opposite tangential velocities, so the system's momentum starts at
    (almost) zero.
    """
    center = surface_center(width, height)
    sun = Body(
        name="Sun",
        mass=1.0,
        radius=EARTH_RADIUS,
        position=center,
        velocity=ZERO,
        color=SUN_COLOR,
    )
    offset = (EARTH_ORBIT_RADIUS, 0.0)
    velocity = vec_scale(unit(clockwise_perpendicular(offset)), SUN_DANCE_SPEED)
    first = Body(
        name="Partner A",
        mass=SUN_DANCE_BODY_MASS,
        radius=EARTH_RADIUS,
        position=vec_add(center, offset),
        velocity=velocity,
        color=BODY_PALETTE[1],
    )
    second = Body(
        name="Partner B",
        mass=SUN_DANCE_BODY_MASS,
        radius=EARTH_RADIUS,
        position=vec_add(vec_add(center, offset), (SUN_DANCE_SEPARATION, 0.0)),
        velocity=vec_scale(velocity, -1.0),
        color=BODY_PALETTE[2],
    )
    return Scene(name=SceneKind.SUN_DANCE.label, bodies=[sun, first, second], anchor_index=SUN)


def _grid_fraction(index: int, size: int) -> float:
    # A single row or column sits on the top/left edge
    if size == 1:
        return 0.0
    return index / (size - 1)


def square_grid(width: float, height: float, rows: int = GRID_ROWS, columns: int = GRID_COLUMNS) -> Scene:
    """
    rows x columns stationary bodies spanning the whole surface.

    Row fractions run along the surface width and column fractions along its
    height: (row 0, col 0) lands on the top-left corner and
    (rows - 1, columns - 1) on the bottom-right corner.
    """
    if rows < 1 or columns < 1:
        raise SceneConfigurationError(f"Square grid needs at least one row and column, got {rows}x{columns}")

    bodies: List[Body] = []
    for row in range(rows):
        fx = _grid_fraction(row, rows)
        for col in range(columns):
            fy = _grid_fraction(col, columns)
            index = len(bodies)
            bodies.append(Body(
                name=f"Body {row},{col}",
                mass=GRID_BODY_MASS,
                radius=EARTH_RADIUS,
                position=(fx * width, fy * height),
                velocity=ZERO,
                color=palette_color(index),
            ))
    return Scene(name=SceneKind.SQUARE_GRID.label, bodies=bodies, anchor_index=None)


SCENE_BUILDERS: Dict[SceneKind, Callable[[float, float], Scene]] = {
    SceneKind.SIMPLE_ORBIT: simple_orbit,
    SceneKind.BODY_ORBIT_SPIRAL: body_orbit_spiral,
    SceneKind.PARTY_OVER_SPIRAL: party_over_spiral,
    SceneKind.SUN_DANCE: sun_dance,
    SceneKind.SQUARE_GRID: square_grid,
    SceneKind.BODY_CIRCLE: body_circle,
}


def build_scene(kind: SceneKind, width: float, height: float) -> Scene:
    """Build the scene of the given kind for a surface of width x height."""
    if width <= 0 or height <= 0 or not math.isfinite(width) or not math.isfinite(height):
        raise SceneConfigurationError(f"Surface size must be positive, got {width}x{height}")
    scene = SCENE_BUILDERS[kind](width, height)
    logger.info(f"Built scene '{scene.name}' with {len(scene.bodies)} bodies")
    return scene
