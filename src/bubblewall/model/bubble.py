from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from bubblewall.model.geometry import point_in_circle
from bubblewall.model.palette import Color


@dataclass
class Bubble:
    """
    One filled and outlined circle.

    The base_* fields are chosen by the layout generator and never change.
    The current_* fields are what actually gets drawn and are driven by the
    animation engine.
    """
    base_x: int
    base_y: int
    base_radius: int
    outline_color: Color
    fill_color: Color
    current_x: float = field(init=False)
    current_y: float = field(init=False)
    current_radius: float = field(init=False)

    def __post_init__(self) -> None:
        self.current_x = float(self.base_x)
        self.current_y = float(self.base_y)
        self.current_radius = float(self.base_radius)

    @property
    def base_position(self) -> tuple[int, int]:
        return self.base_x, self.base_y

    @property
    def current_position(self) -> tuple[float, float]:
        return self.current_x, self.current_y


@dataclass
class Layout:
    """Ordered bubbles valid for one surface size."""
    surface_width: int = 0
    surface_height: int = 0
    bubbles: List[Bubble] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.bubbles)

    def __iter__(self) -> Iterator[Bubble]:
        return iter(self.bubbles)

    def __getitem__(self, index: int) -> Bubble:
        return self.bubbles[index]

    def bubble_at(self, x: float, y: float) -> Optional[int]:
        """
        Index of the first bubble whose BASE circle contains the point.

        Bubbles may be drawn shifted or scaled, hit testing still uses the
        geometry they were generated with.
        """
        for index, bubble in enumerate(self.bubbles):
            if point_in_circle(x, y, bubble.base_x, bubble.base_y, bubble.base_radius):
                return index
        return None
