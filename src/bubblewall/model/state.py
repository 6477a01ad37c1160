"""
Animation State
===============
The handful of values the engine carries between animations.

zoom_level survives layout regeneration since it describes the host (how far
the launcher is zoomed), everything else is reset with the layout.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class AnimationState:
    zoom_level: float = 0.0
    current_gradient_factor: float = 0.0
    pressed_index: Optional[int] = None

    def reset(self) -> None:
        """Clear per-layout state for a freshly generated layout."""
        self.current_gradient_factor = 0.0
        self.pressed_index = None
        logger.debug("Animation state has been reset.")
