"""
Frame Contract
==============
What the engine hands to whoever puts pixels on the screen, and what it asks
the host for in return.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

from bubblewall.model.bubble import Bubble
from bubblewall.model.palette import Color, Palette


@dataclass(frozen=True)
class BackgroundDescriptor:
    brightness: float           # 0 = black, 1 = white
    gradient_factor: float      # how far up the accent gradient reaches
    accent_color: Color
    is_night_mode: bool
    surface_width: int
    surface_height: int


@dataclass(frozen=True)
class BubbleDrawState:
    x: float
    y: float
    radius: float
    outline_color: Color
    fill_color: Color

    @classmethod
    def from_bubble(cls, bubble: Bubble) -> BubbleDrawState:
        return cls(
            x=bubble.current_x,
            y=bubble.current_y,
            radius=bubble.current_radius,
            outline_color=bubble.outline_color,
            fill_color=bubble.fill_color,
        )


class FrameSink(Protocol):
    def present_frame(self, background: BackgroundDescriptor, bubbles: Sequence[BubbleDrawState]) -> None: ...


class ThemeProvider(Protocol):
    def get_theme_accent_color(self) -> Color: ...
    def get_is_night_mode(self) -> bool: ...
    def get_palette(self) -> Palette: ...
