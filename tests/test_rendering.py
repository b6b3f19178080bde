import os

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
pygame = pytest.importorskip("pygame")

from solarsim.controller import SimulationController  # noqa: E402
from solarsim.rendering import (  # noqa: E402
    PygameRenderer,
    TextureCache,
    _safe_point,
    create_circle_texture,
    ring_thickness,
)


def test_ring_thickness():
    assert ring_thickness(6.0) == 1
    assert ring_thickness(66.833) == 13
    assert ring_thickness(0.0) == 1


def test_circle_texture_is_a_transparent_ring():
    texture = create_circle_texture(6.0)
    assert texture.get_size() == (14, 14)
    center = texture.get_width() // 2
    assert texture.get_at((center, center)).a == 0
    assert texture.get_at((0, 0)).a == 0
    drawn = [texture.get_at((x, y)).a for x in range(14) for y in range(14)]
    assert any(alpha > 0 for alpha in drawn)


def test_zero_radius_texture():
    texture = create_circle_texture(0.0)
    assert texture.get_size() == (2, 2)


def test_texture_cache_shares_and_counts_references():
    cache = TextureCache()
    first = cache.acquire(6.0)
    second = cache.acquire(6.4)
    sun = cache.acquire(66.833)
    assert first is second
    assert len(cache) == 2

    cache.release(first)
    assert second in cache
    cache.release(second)
    assert second not in cache
    assert sun in cache
    assert len(cache) == 1


def test_controller_textures_come_from_the_cache():
    cache = TextureCache()
    sim = SimulationController(800, 600, texture_factory=cache.acquire, texture_release=cache.release)
    assert len(cache) == 2  # sun and planet radii
    sim.select_scene(4)  # grid: planets only
    assert len(cache) == 1


def test_safe_point():
    assert _safe_point((10.6, -3.2)) == (10, -3)
    assert _safe_point((float("nan"), 0.0)) is None
    assert _safe_point((1e9, 0.0)) is None


@pytest.fixture
def renderer():
    view = PygameRenderer(320, 240, 60)
    view.open()
    yield view
    view.close()


@pytest.fixture
def live_sim(renderer):
    return SimulationController(
        320, 240,
        texture_factory=renderer.create_texture,
        texture_release=renderer.release_texture,
        scene_index=0,
    )


def test_draw_with_force_overlay(renderer, live_sim):
    live_sim.show_forces = True
    renderer.tick()
    live_sim.step(0.01)
    renderer.draw(live_sim)
    # Rebuilding clears the forces; the overlay must cope with that too
    live_sim.rebuild_scene()
    renderer.draw(live_sim)


def test_draw_skips_non_finite_bodies(renderer, live_sim):
    live_sim.show_forces = True
    live_sim.step(0.01)
    live_sim.bodies[1].position = (float("nan"), float("inf"))
    live_sim.bodies[2].position = (1e12, -1e12)
    renderer.draw(live_sim)


def test_poll_input_reports_window_close(renderer, live_sim):
    pygame.event.post(pygame.event.Event(pygame.QUIT))
    signals = renderer.poll_input(live_sim)
    assert signals.exit
    assert not signals.restart and not signals.next_scene


def test_poll_input_ignores_empty_resize(renderer, live_sim):
    pygame.event.post(pygame.event.Event(pygame.VIDEORESIZE, w=0, h=240, size=(0, 240)))
    renderer.poll_input(live_sim)
    assert renderer.size == (320, 240)
    assert (live_sim.width, live_sim.height) == (320, 240)


def test_scene_switch_returns_sprites_to_the_cache(renderer, live_sim):
    assert len(renderer.textures) == 2
    live_sim.select_scene(4)
    assert len(renderer.textures) == 1
