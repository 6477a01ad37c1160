"""
Configuration & Path Management
===============================
This module serves as the central registry for resource paths and the global
constants of the animation.

Why is this file needed?
------------------------
1. Abstraction: It prevents frame counts and magic factors from being
   scattered throughout the engine and the renderer.
2. Deployment: It handles the logic required by PyInstaller (sys._MEIPASS) to
   find packaged resources (the palette JSON) when the app is frozen.

Exports:
    RESOURCES_PATH (str): Absolute path to the packaged resources directory.
    DEFAULT_PALETTE_PATH (str): Absolute path to the default bubble palette.
"""
import logging
import sys
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller temp folder
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, "bubblewall", relative_path)

    # config.py is in src/bubblewall/
    package_path: Path = Path(__file__).parent
    return os.path.join(str(package_path), relative_path)


# Paths
RESOURCES_PATH: str = get_resource_path("resources")
DEFAULT_PALETTE_PATH: str = os.path.join(RESOURCES_PATH, "palette.json")

if not os.path.exists(RESOURCES_PATH):
    logger.warning(f"Resources path not found at {RESOURCES_PATH}")

# Holo blue, used when the host has no accent color of its own
DEFAULT_ACCENT_COLOR: str = "#ff33b5e5"

# Touch feedback
PULSE_FRAMES: int = 5
PULSE_STEP: float = 1.0

# Day/night crossfade runs CROSSFADE_STEPS + 1 frames
CROSSFADE_STEPS: int = 20

# Smooth resize
SMOOTH_STEP_FRACTION: float = 0.05
MIN_SPEED_MODIFIER: float = 0.001

# Trigger factors
MIN_ZOOM_FACTOR: float = 0.2
LOCKED_FACTOR: float = 1 / 3
FULL_FACTOR: float = 1.0

# Background gradient
GRADIENT_HEIGHT_FRACTION: float = 0.75
GRADIENT_DARK_ALPHA_NIGHT: float = 0.1
GRADIENT_DARK_ALPHA_DAY: float = 0.6
GRADIENT_BRIGHT_ALPHA: float = 0.3
