#!/usr/bin/env python3
"""
Shared constants for the Solar System simulator (screen units: pixels and seconds).

Keeping constants in one place helps ensure values are consistent across the
codebase and makes tuning easier. G and the masses are tuning values chosen so
motion reads well on screen, not physical quantities.
"""
import math

# Physics controls
G = 35.0  # tuning constant, px^3 / (mass unit * s^2)
MAX_TIME_STEP = 0.020  # seconds; raw frame delta is clamped to this
MIN_DISTANCE = 1.0  # px; squared distance in the force law never drops below this squared

# Scene geometry
EARTH_ORBIT_RADIUS = 500.0  # px; base offset of the orbit sweep
EARTH_RADIUS = 6.0
SUN_RADIUS = 66.833
SUN_MASS = 333054.2531815

GRID_ROWS = 15
GRID_COLUMNS = 10
GRID_BODY_MASS = 1000.0

SUN_DANCE_SPEED = 350.0
SUN_DANCE_BODY_MASS = 700000.0
SUN_DANCE_SEPARATION = 100.0  # px between the two heavy bodies

FULL_TURN = 2.0 * math.pi

# Colors (RGB 0..255)
SUN_COLOR = (255, 255, 0)
BODY_PALETTE = (
    (255, 0, 0),  # red
    (0, 0, 255),  # blue
    (0, 255, 0),  # green
    (237, 130, 237),  # violet
    (128, 0, 128),  # purple
    (255, 166, 0),  # orange
    (255, 69, 0),  # orange-red
)
BACKGROUND_COLOR = (0, 0, 0)
FORCE_VECTOR_COLOR = (255, 0, 0)
HUD_TEXT_COLOR = (230, 230, 230)

# Force overlay
FORCE_SCALE = 0.5  # px per force unit
MIN_DRAWN_FORCE = 0.01
FORCE_LINE_WIDTH = 2
ARROW_HEAD_SIZE = 8

# Sprites: ring thickness as a fraction of the radius
RING_THICKNESS = 0.2

# Window
VIEW_WIDTH = 1920
VIEW_HEIGHT = 1080
TARGET_FPS = 60
WINDOW_TITLE = "Solar System"

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000

CONTROLS_TEXT = (
    "Space: restart    Left/Right: next/prev",
    "F: toggle forces    Esc: exit",
)
