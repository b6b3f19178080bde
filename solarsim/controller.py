#!/usr/bin/env python3
"""
Simulation controller: owns the live scene and drives it frame by frame.

The controller holds the active scene index, builds scenes on request, turns
per-frame input signals into actions through rising-edge triggers, and runs
the physics step. It never touches pixels; sprite textures come from an
injected factory and are handed back to an injected release callback before a
scene is replaced.

Everything happens on the caller's thread in a fixed order per frame:
handle_input(), then step(), then the renderer reads the bodies.
"""
import logging
import math
from dataclasses import dataclass, fields
from typing import Any, Callable, List, Optional, Sequence

from .data_models import Body, Scene, SceneConfigurationError
from .physics import NBodyPhysics
from .scenes import DEFAULT_SCENE_INDEX, SCENE_ORDER, SceneKind, build_scene
from .triggers import RisingEdge
from .vector_utils import Vec2

logger = logging.getLogger(__name__)

TextureFactory = Callable[[float], Any]
TextureRelease = Callable[[Any], None]


@dataclass
class InputSignals:
    """Pre-polled discrete inputs for one frame (True while held/pressed)."""
    restart: bool = False
    next_scene: bool = False
    previous_scene: bool = False
    toggle_forces: bool = False
    exit: bool = False

    def merged(self, other: "InputSignals") -> "InputSignals":
        """Field-wise OR of two signal sets (e.g. keyboard plus control panel)."""
        return InputSignals(**{f.name: getattr(self, f.name) or getattr(other, f.name) for f in fields(self)})


class SimulationController:
    """
    Scene selection, input dispatch and per-frame integration.

    Scenes are cycled with wraparound over the given scene kinds. Each rebuild
    replaces the whole body list; the body count never changes within a scene.
    """

    def __init__(self, width: float, height: float,
                 texture_factory: Optional[TextureFactory] = None,
                 texture_release: Optional[TextureRelease] = None,
                 scene_index: int = DEFAULT_SCENE_INDEX,
                 scenes: Sequence[SceneKind] = SCENE_ORDER,
                 physics: Optional[NBodyPhysics] = None):
        if not scenes:
            raise SceneConfigurationError("At least one scene is required")
        if not 0 <= scene_index < len(scenes):
            raise SceneConfigurationError(f"Scene index {scene_index} out of range for {len(scenes)} scenes")

        self.width = width
        self.height = height
        self.texture_factory = texture_factory
        self.texture_release = texture_release
        self.scenes = tuple(scenes)
        self.scene_index = scene_index
        self.physics = physics or NBodyPhysics()

        self.scene: Optional[Scene] = None
        self.running = True
        self.show_forces = False
        self.sim_time = 0.0
        self.frame_count = 0
        self._non_finite_reported = False

        self._restart_edge = RisingEdge()
        self._next_edge = RisingEdge()
        self._previous_edge = RisingEdge()
        self._forces_edge = RisingEdge()

        self.rebuild_scene()

    # -----------------------
    # Scene management
    # -----------------------

    @property
    def scene_count(self) -> int:
        return len(self.scenes)

    @property
    def scene_kind(self) -> SceneKind:
        return self.scenes[self.scene_index]

    @property
    def bodies(self) -> List[Body]:
        return self.scene.bodies if self.scene is not None else []

    @property
    def forces(self) -> List[Vec2]:
        """Net forces from the most recent step (empty right after a rebuild)."""
        return self.physics.forces

    def set_surface_size(self, width: float, height: float) -> None:
        """Record a new surface size; it applies from the next rebuild.

        A non-positive size (e.g. a minimised window) is ignored and the last
        valid size is kept.
        """
        if width <= 0 or height <= 0:
            logger.debug(f"Ignoring surface size {width}x{height}, keeping {self.width}x{self.height}")
            return
        self.width = width
        self.height = height

    def rebuild_scene(self) -> Scene:
        """Build the current scene from scratch and make it live."""
        return self._load_scene(self.scene_index)

    def _load_scene(self, index: int) -> Scene:
        scene = build_scene(self.scenes[index], self.width, self.height)
        self.replace_scene(scene)
        self.scene_index = index
        return scene

    def replace_scene(self, scene: Scene) -> None:
        """
        Release the old scene's textures, then create textures for the new one.

        If texture creation fails, the textures already made for the new scene
        are released, the old scene gets its textures back and stays live, and
        the error is re-raised.
        """
        previous = self.scene
        self._release_textures(previous)
        try:
            self._create_textures(scene)
        except Exception:
            logger.warning(f"Texture creation failed for scene '{scene.name}'; keeping the current scene")
            self._release_textures(scene)
            self._create_textures(previous)
            raise
        self.scene = scene
        self.physics.reset()
        self.sim_time = 0.0
        self._non_finite_reported = False

    def _create_textures(self, scene: Optional[Scene]) -> None:
        if scene is None or self.texture_factory is None:
            return
        for body in scene.bodies:
            body.texture = self.texture_factory(body.radius)

    def _release_textures(self, scene: Optional[Scene]) -> None:
        if scene is None:
            return
        for body in scene.bodies:
            if body.texture is not None and self.texture_release is not None:
                self.texture_release(body.texture)
            body.texture = None

    def select_scene(self, index: int) -> Scene:
        """Make scene `index` live; the current index only changes if the build succeeds."""
        if not 0 <= index < self.scene_count:
            raise SceneConfigurationError(f"Scene index {index} out of range for {self.scene_count} scenes")
        return self._load_scene(index)

    def next_scene(self) -> Scene:
        return self.select_scene((self.scene_index + 1) % self.scene_count)

    def previous_scene(self) -> Scene:
        return self.select_scene((self.scene_index - 1 + self.scene_count) % self.scene_count)

    def toggle_forces(self) -> bool:
        self.show_forces = not self.show_forces
        logger.info(f"Force display {'on' if self.show_forces else 'off'}")
        return self.show_forces

    # -----------------------
    # Per-frame entry points
    # -----------------------

    def handle_input(self, signals: InputSignals) -> None:
        """Clock every trigger with this frame's signals and act on rising edges."""
        if signals.exit:
            self.running = False

        # Clock all triggers every frame so their state tracks the inputs
        toggle = self._forces_edge.clock(signals.toggle_forces)
        restart = self._restart_edge.clock(signals.restart)
        forward = self._next_edge.clock(signals.next_scene)
        backward = self._previous_edge.clock(signals.previous_scene)

        if toggle:
            self.toggle_forces()
        if restart:
            self.rebuild_scene()
        if forward:
            self.next_scene()
        if backward:
            self.previous_scene()

    def step(self, dt_raw: float) -> float:
        """Integrate the live scene by one frame; returns the clamped step used."""
        t = self.physics.step(self.bodies, dt_raw)
        self.sim_time += t
        self.frame_count += 1
        if not self._non_finite_reported and not all(
            math.isfinite(b.position[0]) and math.isfinite(b.position[1]) for b in self.bodies
        ):
            self._non_finite_reported = True
            logger.warning(f"Scene '{self.scene.name}' produced a non-finite body position; restart to recover")
        return t
