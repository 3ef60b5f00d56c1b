"""
Configuration & Global Constants
================================
This module is the central registry for the tunable constants of the
particle scene.

Why is this file needed?
------------------------
1. Single source: the radii, rates and render settings are aesthetic
   parameters that several layers (model, controller, view) must agree on.
2. Overrides: the command line (see ``zenparticles.main``) starts from these
   defaults instead of repeating literals.

3. Deployment: It resolves the assets directory both in development and when
   frozen by PyInstaller (sys._MEIPASS).

Exports:
    ASSETS_PATH (str): Absolute path to the assets directory.
    DEMO_GESTURE_SCRIPT (str): Recorded gesture samples for the scripted source.
    PARTICLE_COUNT (int): Number of particles in a rendering session.
    DEFAULT_COLOR (str): Initial particle colour (hex).
    POINT_SIZE, POINT_OPACITY, BLEND_MODE: Render surface configuration.
"""
import sys
import os
from pathlib import Path


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # config.py is in src/zenparticles/
    project_root: Path = Path(__file__).parent.parent.parent
    return os.path.join(str(project_root), relative_path)


# --- Paths ---
ASSETS_PATH: str = get_resource_path("assets")
DEMO_GESTURE_SCRIPT: str = os.path.join(ASSETS_PATH, "gestures_demo.json")

# --- Session ---
PARTICLE_COUNT: int = 3000
DEFAULT_COLOR: str = "#4f46e5"  # Indigo 600
DEFAULT_SHAPE: str = "Heart"

# --- Render surface ---
POINT_SIZE: float = 0.06
POINT_OPACITY: float = 0.8
BLEND_MODE: str = "additive"
BACKGROUND_COLOR: str = "#050505"
CAMERA_POSITION: tuple[float, float, float] = (0.0, 0.0, 6.0)
CAMERA_FOV: float = 60.0

# --- Starfield backdrop ---
STAR_COUNT: int = 5000
STAR_RADIUS: float = 100.0
STAR_DEPTH: float = 50.0
STAR_COLOR: str = "#ffffff"

# --- Camera auto-rotate (idle, no gesture source) ---
AUTO_ROTATE_SPEED: float = 0.5
AUTO_ROTATE_TENSION_LIMIT: float = 0.1

# --- Timing ---
GESTURE_RATE_HZ: float = 2.0
TICK_INTERVAL_MS: int = 16  # ~60 FPS
MAX_DELTA_TIME: float = 0.1
