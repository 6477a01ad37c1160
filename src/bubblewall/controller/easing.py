from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from bubblewall.config import MIN_SPEED_MODIFIER

if TYPE_CHECKING:
    import numpy.typing as npt


def speed_modifier(
    full_range: npt.NDArray[np.float64],
    to_go: npt.NDArray[np.float64]
) -> npt.NDArray[np.float64]:
    """
    Triangular velocity profile for the smooth resize.

    The modifier ramps linearly up from the floor to 1 over the first half of
    the range and back down over the second half. It never drops below
    MIN_SPEED_MODIFIER so every step makes progress.

    Args:
        full_range: Absolute distance each radius had to travel at the start.
        to_go: Absolute distance each radius still has to travel.

    Returns:
        Per-bubble multipliers for the base step.
    """
    full_range = np.asarray(full_range, dtype=np.float64)
    to_go = np.asarray(to_go, dtype=np.float64)

    half_range = full_range / 2
    # A zero range means the bubble is already on target, it gets the floor
    safe_half = np.where(half_range > 0, half_range, 1.0)
    modifier = np.where(half_range > 0, to_go / safe_half, 0.0)

    # Start bringing the modifier back down once half the range is covered
    modifier = np.where(modifier > 1, 2 - modifier, modifier)
    return np.maximum(modifier, MIN_SPEED_MODIFIER)
