from __future__ import annotations

from math import sqrt
from typing import Optional

import numpy as np


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points in the surface plane."""
    return sqrt((x1 - x2) ** 2 + (y1 - y2) ** 2)


def circles_too_close(
    x1: float, y1: float, r1: float,
    x2: float, y2: float, r2: float,
    padding: float = 0.0
) -> bool:
    """
    Check whether two circles violate the padded non-overlap rule.

    Two circles are far enough apart when the distance between their centers
    is at least ``r1 + r2 + padding``.

    Args:
        x1, y1, r1: Center and radius of the first circle.
        x2, y2, r2: Center and radius of the second circle.
        padding: Extra clearance required between the two rims.

    Returns:
        True if the circles are closer than allowed.
    """
    return distance(x1, y1, x2, y2) < r1 + r2 + padding


def point_in_circle(px: float, py: float, cx: float, cy: float, radius: float) -> bool:
    """Strict containment: points on the rim are outside."""
    return (px - cx) ** 2 + (py - cy) ** 2 < radius ** 2


def random_int_in_range(rng: np.random.Generator, low: int, high: int) -> Optional[int]:
    """
    Sample an integer uniformly from the half-open range [low, high).

    Returns None when the range is empty or inverted instead of raising,
    the caller decides what an impossible draw means.
    """
    if high <= low:
        return None
    return int(rng.integers(low, high))
