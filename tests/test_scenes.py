import math

import pytest

from solarsim.constants import BODY_PALETTE, EARTH_ORBIT_RADIUS, SUN_MASS, SUN_RADIUS
from solarsim.data_models import Body, Scene, SceneConfigurationError
from solarsim.physics import total_momentum
from solarsim.scenes import (
    ORBIT_SWEEPS,
    SCENE_ORDER,
    OrbitSweep,
    SceneKind,
    body_circle,
    build_scene,
    orbit_sweep_scene,
    simple_orbit,
    square_grid,
    sun_dance,
)
from solarsim.vector_utils import vec_dot, vec_len, vec_sub

WIDTH, HEIGHT = 1920, 1080
CENTER = (WIDTH / 2, HEIGHT / 2)


def test_scene_order():
    assert SCENE_ORDER == (
        SceneKind.SIMPLE_ORBIT,
        SceneKind.BODY_ORBIT_SPIRAL,
        SceneKind.PARTY_OVER_SPIRAL,
        SceneKind.SUN_DANCE,
        SceneKind.SQUARE_GRID,
        SceneKind.BODY_CIRCLE,
    )


@pytest.mark.parametrize("kind, count, speed, start, end, turns, mass", [
    (SceneKind.SIMPLE_ORBIT, 3, 120.0, 1.0, 1.0, -2.0, 1.0),
    (SceneKind.BODY_ORBIT_SPIRAL, 129, 105.0, 0.75, 1.25, -6.0, 1.0),
    (SceneKind.PARTY_OVER_SPIRAL, 129, 30.0, 0.125, 1.5, -12.0, 0.25),
    (SceneKind.BODY_CIRCLE, 129, 125.0, 1.0, 1.0, -6.0, 10.0),
])
def test_orbit_sweep_parameters(kind, count, speed, start, end, turns, mass):
    sweep = ORBIT_SWEEPS[kind]
    assert sweep.count == count
    assert sweep.initial_speed == speed
    assert sweep.start_scale == start
    assert sweep.end_scale == end
    assert sweep.angle_range == pytest.approx(turns * math.pi)
    assert sweep.body_mass == mass

    scene = build_scene(kind, WIDTH, HEIGHT)
    assert len(scene.bodies) == count
    assert all(b.mass == mass for b in scene.bodies[1:])


@pytest.mark.parametrize("kind", list(ORBIT_SWEEPS))
def test_sun_is_the_anchor(kind):
    scene = build_scene(kind, WIDTH, HEIGHT)
    assert scene.anchor_index == 0
    sun = scene.anchor
    assert sun is scene.bodies[0]
    assert sun.position == CENTER
    assert sun.mass == SUN_MASS
    assert sun.radius == SUN_RADIUS
    assert vec_len(sun.velocity) <= 0.001


def test_only_body_orbit_spiral_moves_its_sun():
    assert build_scene(SceneKind.BODY_ORBIT_SPIRAL, WIDTH, HEIGHT).anchor.velocity == (-0.001, 0.0)
    assert build_scene(SceneKind.BODY_CIRCLE, WIDTH, HEIGHT).anchor.velocity == (0.0, 0.0)


@pytest.mark.parametrize("kind", list(ORBIT_SWEEPS))
def test_orbiting_bodies_get_tangential_kicks(kind):
    sweep = ORBIT_SWEEPS[kind]
    scene = build_scene(kind, WIDTH, HEIGHT)
    sun = scene.anchor
    for i, body in enumerate(scene.bodies[1:], start=1):
        step = (i - 1) / (sweep.count - 1)
        scale = sweep.start_scale + step * (sweep.end_scale - sweep.start_scale)
        radial = vec_sub(body.position, sun.position)
        assert vec_len(radial) == pytest.approx(scale * EARTH_ORBIT_RADIUS)
        assert vec_len(body.velocity) == pytest.approx(sweep.initial_speed / scale)
        assert vec_dot(radial, body.velocity) == pytest.approx(0.0, abs=1e-6)


def test_simple_orbit_layout():
    scene = simple_orbit(WIDTH, HEIGHT)
    _, first, second = scene.bodies
    assert first.position == pytest.approx((CENTER[0] + 500.0, CENTER[1]))
    assert first.velocity == pytest.approx((0.0, 120.0), abs=1e-9)
    # half-way round the sweep: opposite side of the sun, moving the other way
    assert second.position == pytest.approx((CENTER[0] - 500.0, CENTER[1]))
    assert second.velocity == pytest.approx((0.0, -120.0), abs=1e-9)


def test_no_two_orbiting_bodies_coincide():
    for kind in ORBIT_SWEEPS:
        positions = [b.position for b in build_scene(kind, WIDTH, HEIGHT).bodies]
        assert len(set(positions)) == len(positions)


def test_colors_cycle_through_palette():
    scene = body_circle(WIDTH, HEIGHT)
    for i, body in enumerate(scene.bodies[1:], start=1):
        assert body.color == BODY_PALETTE[i % len(BODY_PALETTE)]


@pytest.mark.parametrize("kind", SCENE_ORDER)
def test_builders_are_deterministic(kind):
    first = build_scene(kind, WIDTH, HEIGHT)
    second = build_scene(kind, WIDTH, HEIGHT)
    assert first == second
    assert first.bodies is not second.bodies


def test_scenes_center_on_the_surface():
    scene = build_scene(SceneKind.BODY_CIRCLE, 800, 600)
    assert scene.anchor.position == (400.0, 300.0)


def test_sun_dance():
    scene = sun_dance(WIDTH, HEIGHT)
    sun, first, second = scene.bodies
    assert scene.anchor is sun
    assert sun.mass == 1.0
    assert first.mass == second.mass == 700000.0
    assert sun.position == CENTER
    assert first.position == pytest.approx((CENTER[0] + 500.0, CENTER[1]))
    assert second.position == pytest.approx((CENTER[0] + 600.0, CENTER[1]))
    assert first.velocity == pytest.approx((0.0, 350.0), abs=1e-9)
    assert second.velocity == (-first.velocity[0], -first.velocity[1])
    px, py = total_momentum(scene.bodies)
    assert px == pytest.approx(0.0, abs=1e-6)
    assert py == pytest.approx(0.0, abs=1e-6)


def test_square_grid_default_layout():
    scene = square_grid(WIDTH, HEIGHT)
    assert len(scene.bodies) == 150
    assert scene.anchor_index is None
    assert scene.anchor is None
    assert scene.bodies[0].position == (0.0, 0.0)
    assert scene.bodies[14 * 10 + 9].position == (WIDTH, HEIGHT)
    assert scene.bodies[9].position == (0.0, HEIGHT)
    assert scene.bodies[14 * 10].position == (WIDTH, 0.0)
    assert all(b.velocity == (0.0, 0.0) for b in scene.bodies)
    assert all(b.mass == 1000.0 for b in scene.bodies)
    assert [b.color for b in scene.bodies[:8]] == list(BODY_PALETTE) + [BODY_PALETTE[0]]


def test_square_grid_single_row_sits_on_the_edge():
    scene = square_grid(800, 600, rows=1, columns=3)
    assert [b.position for b in scene.bodies] == [(0.0, 0.0), (0.0, 300.0), (0.0, 600.0)]


@pytest.mark.parametrize("rows, columns", [(0, 10), (15, 0), (-1, 3)])
def test_square_grid_rejects_empty_dimensions(rows, columns):
    with pytest.raises(SceneConfigurationError):
        square_grid(WIDTH, HEIGHT, rows=rows, columns=columns)


def test_orbit_sweep_needs_an_orbiting_body():
    sweep = OrbitSweep(count=1, initial_speed=1.0, start_scale=1.0, end_scale=1.0, angle_range=1.0, body_mass=1.0)
    with pytest.raises(SceneConfigurationError):
        orbit_sweep_scene("tiny", sweep, WIDTH, HEIGHT)


def test_orbit_sweep_rejects_non_positive_mass():
    sweep = OrbitSweep(count=4, initial_speed=1.0, start_scale=1.0, end_scale=1.0, angle_range=1.0, body_mass=0.0)
    with pytest.raises(SceneConfigurationError):
        orbit_sweep_scene("massless", sweep, WIDTH, HEIGHT)


@pytest.mark.parametrize("width, height", [(0, 600), (800, -1), (float("nan"), 600)])
def test_build_scene_rejects_bad_surface(width, height):
    with pytest.raises(SceneConfigurationError):
        build_scene(SceneKind.SIMPLE_ORBIT, width, height)


@pytest.mark.parametrize("mass", [0.0, -1.0, float("nan"), float("inf")])
def test_body_rejects_invalid_mass(mass):
    with pytest.raises(SceneConfigurationError):
        Body(name="bad", mass=mass, radius=1.0, position=(0.0, 0.0), velocity=(0.0, 0.0))


def test_body_rejects_negative_radius():
    with pytest.raises(ValueError):
        Body(name="bad", mass=1.0, radius=-1.0, position=(0.0, 0.0), velocity=(0.0, 0.0))


def test_scene_rejects_out_of_range_anchor():
    body = Body(name="b", mass=1.0, radius=0.0, position=(0.0, 0.0), velocity=(0.0, 0.0))
    with pytest.raises(SceneConfigurationError):
        Scene(name="broken", bodies=[body], anchor_index=1)
