from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import pytest

# Must be set before the first Qt import
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from bubblewall.controller.engine import AnimationEngine
from bubblewall.controller.frame import BackgroundDescriptor, BubbleDrawState
from bubblewall.model.bubble import Bubble, Layout
from bubblewall.model.layout import LayoutConfig
from bubblewall.model.palette import Color, Palette

TEST_COLORS = ["#ff1565c0", "#ff42a5f5", "#ffc62828", "#ffef5350"]


@dataclass
class RecordingSink:
    """FrameSink that keeps every presented frame."""
    frames: List[Tuple[BackgroundDescriptor, Sequence[BubbleDrawState]]] = field(default_factory=list)

    def present_frame(self, background: BackgroundDescriptor, bubbles: Sequence[BubbleDrawState]) -> None:
        self.frames.append((background, list(bubbles)))

    @property
    def backgrounds(self) -> List[BackgroundDescriptor]:
        return [background for background, _ in self.frames]

    def radii(self, index: int) -> List[float]:
        return [bubbles[index].radius for _, bubbles in self.frames]


@dataclass
class StaticTheme:
    night_mode: bool = False
    accent: Color = field(default_factory=lambda: Color.parse("#ff33b5e5"))
    palette: Palette = field(default_factory=lambda: Palette.from_flat(TEST_COLORS))

    def get_theme_accent_color(self) -> Color:
        return self.accent

    def get_is_night_mode(self) -> bool:
        return self.night_mode

    def get_palette(self) -> Palette:
        return self.palette


def make_layout(specs: Sequence[Tuple[int, int, int]], width: int = 1000, height: int = 1000) -> Layout:
    """Layout from (x, y, radius) triples, all bubbles share one color pair."""
    outline, fill = Palette.from_flat(TEST_COLORS).pairs[0]
    bubbles = [
        Bubble(base_x=x, base_y=y, base_radius=r, outline_color=outline, fill_color=fill)
        for x, y, r in specs
    ]
    return Layout(surface_width=width, surface_height=height, bubbles=bubbles)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def theme() -> StaticTheme:
    return StaticTheme()


@pytest.fixture
def engine(sink: RecordingSink, theme: StaticTheme) -> AnimationEngine:
    return AnimationEngine(frame_sink=sink, theme=theme, config=LayoutConfig(), rng=1234)


@pytest.fixture
def three_bubbles(engine: AnimationEngine) -> AnimationEngine:
    """Engine holding a small hand-made layout with integer radii."""
    engine.layout = make_layout([(200, 200, 100), (700, 300, 60), (500, 800, 150)])
    return engine


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app
