"""
Bubble Colors & Palette
=======================
Defines the color value used by the model and the palette table bubbles draw
their outline/fill pairs from.

The palette file is a flat list of hex colors where every even entry is an
outline color and the entry after it is the matching fill color:

    {"bubble_colors": ["#ff1565c0", "#ff42a5f5", ...]}
"""
from __future__ import annotations

from dataclasses import dataclass
import json
import logging
import math
import re
from typing import Optional, Sequence, Tuple

import numpy as np

from bubblewall.config import DEFAULT_PALETTE_PATH

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


class PaletteError(ValueError):
    """Raised for palettes that cannot be used to color bubbles."""


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positive values."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class Color:
    """An ARGB color with 8-bit channels."""
    alpha: int
    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        for channel in (self.alpha, self.red, self.green, self.blue):
            if not 0 <= channel <= 255:
                raise PaletteError(f"Color channel out of range: {channel}")

    @classmethod
    def parse(cls, text: str) -> Color:
        """Parse '#RRGGBB' or '#AARRGGBB'. Missing alpha means opaque."""
        if not isinstance(text, str) or not _HEX_COLOR.match(text):
            raise PaletteError(f"Unknown color: {text!r}")
        digits = text[1:]
        if len(digits) == 6:
            digits = "ff" + digits
        a, r, g, b = (int(digits[i:i + 2], 16) for i in range(0, 8, 2))
        return cls(alpha=a, red=r, green=g, blue=b)

    def with_alpha_factor(self, factor: float) -> Color:
        """Return the same color with its alpha scaled by `factor`."""
        alpha = min(255, max(0, round_half_up(self.alpha * factor)))
        return Color(alpha=alpha, red=self.red, green=self.green, blue=self.blue)


ColorPair = Tuple[Color, Color]


@dataclass(frozen=True)
class Palette:
    """
    Ordered table of (outline, fill) color pairs.
    """
    pairs: Tuple[ColorPair, ...]

    def __post_init__(self) -> None:
        if not self.pairs:
            raise PaletteError("Palette needs at least one outline/fill pair.")
        for pair in self.pairs:
            if not (isinstance(pair, tuple) and len(pair) == 2 and all(isinstance(c, Color) for c in pair)):
                raise PaletteError(f"Malformed palette entry: {pair!r}")

    def __len__(self) -> int:
        return len(self.pairs)

    @classmethod
    def from_flat(cls, colors: Sequence[str]) -> Palette:
        """
        Build a palette from the flat color table (outline at even index,
        fill right after it).
        """
        if len(colors) < 2:
            raise PaletteError(f"Palette needs at least 2 colors, got {len(colors)}.")
        if len(colors) % 2 != 0:
            raise PaletteError(f"Palette needs an even number of colors, got {len(colors)}.")

        parsed = [Color.parse(c) for c in colors]
        pairs = tuple(zip(parsed[0::2], parsed[1::2]))
        return cls(pairs=pairs)

    @classmethod
    def load(cls, path: Optional[str] = None) -> Palette:
        """Load a palette from a JSON file (the packaged default if no path)."""
        path = path or DEFAULT_PALETTE_PATH
        logger.info(f"Loading palette from: {path}")
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, dict) or "bubble_colors" not in data:
            raise PaletteError(f"'{path}' has no 'bubble_colors' list.")

        colors = data["bubble_colors"]
        if not isinstance(colors, list):
            raise PaletteError(f"'bubble_colors' in '{path}' must be a list.")

        palette = cls.from_flat(colors)
        logger.debug(f"Loaded {len(palette)} color pairs.")
        return palette

    def choose(self, rng: np.random.Generator) -> ColorPair:
        """Draw one pair uniformly."""
        return self.pairs[int(rng.integers(0, len(self.pairs)))]
