"""
Bubble Layout Generator
=======================
Fills a rectangular surface with non-overlapping bubbles by rejection
sampling.

Algorithm:
    1. Draw a radius from [min_bubble_radius, max_bubble_radius).
    2. Draw a center so the bubble plus padding stays inside the surface.
    3. Reject the candidate if it comes closer than
       ``r1 + r2 + padding`` to any bubble already placed.
    4. Each bubble gets ``overlap_retry_count`` attempts. When all of them
       fail the surface is considered full and generation stops.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Optional, Union

import numpy as np

from bubblewall.model.bubble import Bubble, Layout
from bubblewall.model.geometry import circles_too_close, random_int_in_range
from bubblewall.model.palette import Palette, PaletteError

logger = logging.getLogger(__name__)

RandomSource = Union[np.random.Generator, int, None]


@dataclass(frozen=True)
class LayoutConfig:
    bubble_padding: int = 50
    max_bubble_radius: int = 250
    min_bubble_radius: int = 20
    overlap_retry_count: int = 50
    outline_size: int = 30

    def __post_init__(self) -> None:
        if self.min_bubble_radius < 1:
            raise ValueError(f"min_bubble_radius must be at least 1, got {self.min_bubble_radius}.")
        if self.max_bubble_radius <= self.min_bubble_radius:
            raise ValueError(
                f"max_bubble_radius ({self.max_bubble_radius}) must be greater than "
                f"min_bubble_radius ({self.min_bubble_radius})."
            )
        if self.bubble_padding < 0:
            raise ValueError(f"bubble_padding must not be negative, got {self.bubble_padding}.")
        if self.overlap_retry_count < 1:
            raise ValueError(f"overlap_retry_count must be at least 1, got {self.overlap_retry_count}.")
        if self.outline_size < 0:
            raise ValueError(f"outline_size must not be negative, got {self.outline_size}.")


def make_rng(source: RandomSource = None) -> np.random.Generator:
    """Accept a Generator, a seed or nothing."""
    if isinstance(source, np.random.Generator):
        return source
    return np.random.default_rng(source)


def _overlaps_any(layout: Layout, x: int, y: int, radius: int, padding: int) -> bool:
    for bubble in layout.bubbles:
        if circles_too_close(x, y, radius, bubble.base_x, bubble.base_y, bubble.base_radius, padding):
            return True
    return False


def _place_bubble(
    layout: Layout,
    config: LayoutConfig,
    palette: Palette,
    rng: np.random.Generator
) -> Optional[Bubble]:
    """Try to place one more bubble. None means the retry budget ran out."""
    padding = config.bubble_padding

    for _ in range(config.overlap_retry_count):
        radius = int(rng.integers(config.min_bubble_radius, config.max_bubble_radius))
        x = random_int_in_range(rng, radius + padding, layout.surface_width - radius - padding)
        y = random_int_in_range(rng, radius + padding, layout.surface_height - radius - padding)

        # Surface too small for this radius
        if x is None or y is None:
            continue

        if _overlaps_any(layout, x, y, radius, padding):
            continue

        outline, fill = palette.choose(rng)
        return Bubble(base_x=x, base_y=y, base_radius=radius, outline_color=outline, fill_color=fill)

    return None


def generate(
    surface_width: int,
    surface_height: int,
    config: LayoutConfig,
    palette: Palette,
    rng: RandomSource = None
) -> Layout:
    """
    Generate a new Layout for the given surface.

    Args:
        surface_width: Surface width in pixels.
        surface_height: Surface height in pixels.
        config: Radius range, padding and retry budget.
        palette: Color pairs to draw from.
        rng: numpy Generator or seed. Fresh entropy when omitted.

    Returns:
        A Layout whose bubbles satisfy the padded non-overlap rule. Empty when
        the surface cannot hold even one bubble.

    Raises:
        PaletteError: If `palette` is not a usable Palette.
    """
    if not isinstance(palette, Palette):
        # Palette validates itself on construction, anything else is malformed
        raise PaletteError(f"Expected a Palette, got {type(palette).__name__}.")

    generator = make_rng(rng)
    layout = Layout(surface_width=surface_width, surface_height=surface_height)

    while True:
        bubble = _place_bubble(layout, config, palette, generator)
        if bubble is None:
            break
        layout.bubbles.append(bubble)

    logger.debug(f"Generated {len(layout)} bubbles for a {surface_width}x{surface_height} surface.")
    return layout
