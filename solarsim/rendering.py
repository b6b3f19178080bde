#!/usr/bin/env python3
"""
Pygame renderer: window, body sprites, force overlay, HUD and key polling.

This is the collaborator the controller calls into for sprite textures. A
texture is a white ring sprite keyed by its integer radius; sprites are shared
between bodies of the same size and reference counted, so releasing the last
user of a radius drops it from the cache. Bodies are tinted with their own
color at draw time (tinted copies are cached too).

World coordinates are screen pixels, so no camera transform is applied.
"""
import logging
import math
from typing import Dict, List, Optional, Tuple

import pygame
from pygame import gfxdraw

from .constants import (
    ARROW_HEAD_SIZE,
    BACKGROUND_COLOR,
    CONTROLS_TEXT,
    FORCE_LINE_WIDTH,
    FORCE_SCALE,
    FORCE_VECTOR_COLOR,
    HUD_TEXT_COLOR,
    MIN_DRAWN_FORCE,
    RING_THICKNESS,
    SAFE_COORD_LIMIT,
    WINDOW_TITLE,
)
from .controller import InputSignals, SimulationController
from .vector_utils import vec_len

logger = logging.getLogger(__name__)

WHITE = (255, 255, 255, 255)


def ring_thickness(radius: float) -> int:
    """Number of one-pixel rings drawn for a sprite of the given radius."""
    return max(1, int(RING_THICKNESS * radius))


def create_circle_texture(radius: float) -> pygame.Surface:
    """
    Rasterize a white ring sprite of side 2r + 2.

    The ring is ring_thickness(radius) concentric circles shrinking inward
    from radius r; everything else is transparent.
    """
    r = max(0, int(radius))
    size = 2 * r + 2
    surface = pygame.Surface((size, size), pygame.SRCALPHA)
    surface.fill((0, 0, 0, 0))
    center = size // 2
    for d in range(ring_thickness(radius)):
        rr = r - d
        if rr <= 0:
            break
        gfxdraw.aacircle(surface, center, center, rr, WHITE)
    return surface


class TextureCache:
    """Reference-counted ring sprites keyed by integer radius."""

    def __init__(self):
        self._entries: Dict[int, List] = {}  # radius -> [surface, refcount]
        self._radius_of: Dict[int, int] = {}  # id(surface) -> radius

    def acquire(self, radius: float) -> pygame.Surface:
        key = max(0, int(radius))
        entry = self._entries.get(key)
        if entry is None:
            entry = [create_circle_texture(key), 0]
            self._entries[key] = entry
            self._radius_of[id(entry[0])] = key
        entry[1] += 1
        return entry[0]

    def release(self, texture: pygame.Surface) -> None:
        key = self._radius_of.get(id(texture))
        if key is None:
            return
        entry = self._entries[key]
        entry[1] -= 1
        if entry[1] <= 0:
            del self._entries[key]
            del self._radius_of[id(texture)]

    def __contains__(self, texture) -> bool:
        return id(texture) in self._radius_of

    def __len__(self) -> int:
        return len(self._entries)


class PygameRenderer:
    """
    Pygame window: draws bodies and the force overlay, polls the keyboard.
    """

    def __init__(self, width: int, height: int, fps: int):
        self.size = (width, height)
        self.fps = fps
        self.surface = None
        self.clock = None
        self.textures = TextureCache()
        self._tinted: Dict[Tuple[int, Tuple[int, int, int]], pygame.Surface] = {}
        self._font = None

    def open(self) -> None:
        pygame.init()
        pygame.display.set_caption(WINDOW_TITLE)
        self.surface = pygame.display.set_mode(self.size, pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        logger.info(f"Opened {self.size[0]}x{self.size[1]} window")

    def close(self) -> None:
        self._tinted.clear()
        pygame.quit()

    # -----------------------
    # Texture collaborator
    # -----------------------

    def create_texture(self, radius: float) -> pygame.Surface:
        return self.textures.acquire(radius)

    def release_texture(self, texture: pygame.Surface) -> None:
        self.textures.release(texture)
        if texture not in self.textures:
            tid = id(texture)
            for key in [k for k in self._tinted if k[0] == tid]:
                del self._tinted[key]

    def _tinted_sprite(self, texture: pygame.Surface, color: Tuple[int, int, int]) -> pygame.Surface:
        key = (id(texture), tuple(color))
        sprite = self._tinted.get(key)
        if sprite is None:
            sprite = texture.copy()
            sprite.fill((color[0], color[1], color[2], 255), special_flags=pygame.BLEND_RGBA_MULT)
            self._tinted[key] = sprite
        return sprite

    # -----------------------
    # Input
    # -----------------------

    def poll_input(self, sim: SimulationController) -> InputSignals:
        """Pump window events and return the held state of every control key."""
        signals = InputSignals()
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                signals.exit = True
            elif event.type == pygame.VIDEORESIZE and event.w > 0 and event.h > 0:
                self.size = (event.w, event.h)
                self.surface = pygame.display.set_mode(self.size, pygame.RESIZABLE)
                sim.set_surface_size(event.w, event.h)

        keys = pygame.key.get_pressed()
        signals.restart = bool(keys[pygame.K_SPACE])
        signals.next_scene = bool(keys[pygame.K_RIGHT])
        signals.previous_scene = bool(keys[pygame.K_LEFT])
        signals.toggle_forces = bool(keys[pygame.K_f])
        signals.exit = signals.exit or bool(keys[pygame.K_ESCAPE])
        return signals

    def tick(self) -> float:
        """Limit FPS and return the elapsed wall-clock seconds since the last tick."""
        return self.clock.tick(self.fps) / 1000.0

    # -----------------------
    # Drawing
    # -----------------------

    def draw(self, sim: SimulationController) -> None:
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)

        if sim.show_forces:
            self.draw_force_vectors(surf, sim)

        for b in sim.bodies:
            if b.texture is None:
                continue
            sprite = self._tinted_sprite(b.texture, b.color)
            half = sprite.get_width() // 2
            top_left = _safe_point((b.position[0] - half, b.position[1] - half))
            if top_left:
                surf.blit(sprite, top_left)

        self.draw_hud(surf, sim)
        pygame.display.flip()

    def draw_force_vectors(self, surf, sim: SimulationController) -> None:
        forces = sim.forces
        if len(forces) != len(sim.bodies):
            return
        for b, f in zip(sim.bodies, forces):
            magnitude = vec_len(f)
            if not magnitude >= MIN_DRAWN_FORCE:
                continue
            start = b.position
            end = (start[0] + f[0] * FORCE_SCALE, start[1] + f[1] * FORCE_SCALE)
            start_s = _safe_point(start)
            end_s = _safe_point(end)
            if start_s and end_s:
                pygame.draw.line(surf, FORCE_VECTOR_COLOR, start_s, end_s, FORCE_LINE_WIDTH)
                draw_arrow_head(surf, end_s, start_s, FORCE_VECTOR_COLOR)

    def draw_hud(self, surf, sim: SimulationController) -> None:
        y = 8
        for line in CONTROLS_TEXT:
            self.draw_text(surf, line, 8, y, HUD_TEXT_COLOR)
            y += 20
        status = (f"Scene {sim.scene_index + 1}/{sim.scene_count}: {sim.scene.name}"
                  f"  |  Bodies: {len(sim.bodies)}"
                  f"  |  Forces: {'on' if sim.show_forces else 'off'}"
                  f"  |  FPS: {self.clock.get_fps():.0f}")
        self.draw_text(surf, status, 8, y + 4, HUD_TEXT_COLOR)

    def draw_text(self, surface, text, x, y, color):
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.SysFont("consolas", 18)
        img = self._font.render(text, True, color)
        surface.blit(img, (x, y))


def _safe_point(pt) -> Optional[Tuple[int, int]]:
    x, y = pt[0], pt[1]
    if not (math.isfinite(x) and math.isfinite(y)):
        return None
    x, y = int(x), int(y)
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None


def draw_arrow_head(surface, tip, tail, color):
    # Small triangle for arrow head
    dx = tip[0] - tail[0]
    dy = tip[1] - tail[1]
    ang = math.atan2(dy, dx)
    size = ARROW_HEAD_SIZE
    left = (tip[0] - size * math.cos(ang - math.pi / 6), tip[1] - size * math.sin(ang - math.pi / 6))
    right = (tip[0] - size * math.cos(ang + math.pi / 6), tip[1] - size * math.sin(ang + math.pi / 6))
    left_s = _safe_point(left)
    right_s = _safe_point(right)
    if left_s and right_s:
        pygame.draw.polygon(surface, color, [tip, left_s, right_s])
