#!/usr/bin/env python3
"""
Data models for the Solar System simulator.

This module defines the Body and Scene dataclasses shared between physics,
scene building, rendering, and the controller.

Units and usage
- position is in pixels, velocity in pixels per second, radius in pixels.
- mass is in arbitrary simulation units tuned together with G.
- texture is an opaque handle owned by the renderer; the core only stores it.
"""
import math
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple


class SceneConfigurationError(ValueError):
    """Raised when a body or scene is built from invalid parameters."""


@dataclass
class Body:
    """
    Represents one point mass in the simulation.

    Fields:
    - name: Identifier for the body
    - mass: Mass, finite and strictly positive (the integrator divides by it)
    - radius: Visual radius in pixels, not used by the force law
    - position: 2D position (x, y) in pixels
    - velocity: 2D velocity (vx, vy) in pixels/second
    - color: RGB tuple used for rendering
    - texture: Renderer-owned sprite handle, None until the renderer provides one
    """
    name: str
    mass: float
    radius: float
    position: Tuple[float, float]
    velocity: Tuple[float, float]
    color: Tuple[int, int, int] = (200, 200, 255)
    texture: Any = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        if not math.isfinite(self.mass) or self.mass <= 0:
            raise SceneConfigurationError(f"{self.name}: mass must be positive, got {self.mass!r}")
        if not math.isfinite(self.radius) or self.radius < 0:
            raise SceneConfigurationError(f"{self.name}: radius must be non-negative, got {self.radius!r}")


@dataclass
class Scene:
    """
    An ordered set of bodies created in bulk by a scene builder.

    anchor_index names the dominant body (the sun) when the scene has one.
    The body count is fixed for the lifetime of the scene.
    """
    name: str
    bodies: List[Body]
    anchor_index: Optional[int] = None

    def __post_init__(self):
        if self.anchor_index is not None and not 0 <= self.anchor_index < len(self.bodies):
            raise SceneConfigurationError(
                f"{self.name}: anchor index {self.anchor_index} out of range for {len(self.bodies)} bodies"
            )

    @property
    def anchor(self) -> Optional[Body]:
        if self.anchor_index is None:
            return None
        return self.bodies[self.anchor_index]
