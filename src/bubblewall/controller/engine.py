"""
Animation Engine
================
Owns the current Layout and Animation State and moves the bubbles frame by
frame.

Every animation is a blocking loop: each iteration mutates the current
geometry of the bubbles, then presents one frame to the FrameSink. Nothing is
scheduled, the call returns once the last frame was presented. Callers must
not invoke the engine again while a loop is running (Qt guarantees this by
delivering events one at a time on the GUI thread).

Classes:
    AnimationEngine: Animations, hit testing and the host trigger handlers.
"""
from __future__ import annotations

import logging
from typing import Optional, TYPE_CHECKING

import numpy as np

from bubblewall.config import (
    CROSSFADE_STEPS,
    FULL_FACTOR,
    LOCKED_FACTOR,
    MIN_ZOOM_FACTOR,
    PULSE_FRAMES,
    PULSE_STEP,
    SMOOTH_STEP_FRACTION,
)
from bubblewall.controller.easing import speed_modifier
from bubblewall.controller.frame import BackgroundDescriptor, BubbleDrawState, FrameSink, ThemeProvider
from bubblewall.model.bubble import Layout
from bubblewall.model.layout import LayoutConfig, RandomSource, generate, make_rng
from bubblewall.model.state import AnimationState

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


class AnimationEngine:
    def __init__(
        self,
        frame_sink: FrameSink,
        theme: ThemeProvider,
        config: Optional[LayoutConfig] = None,
        rng: RandomSource = None
    ) -> None:
        self.frame_sink = frame_sink
        self.theme = theme
        self.config = config or LayoutConfig()
        self.layout = Layout()
        self.state = AnimationState()
        self._rng = make_rng(rng)

    # ------------------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------------------

    def regenerate(self, width: int, height: int) -> None:
        """Replace the layout for a new surface size. Invalidates the pressed bubble."""
        palette = self.theme.get_palette()
        self.layout = generate(width, height, self.config, palette, self._rng)
        self.state.reset()
        logger.info(f"Layout regenerated: {len(self.layout)} bubbles on {width}x{height}.")

    def bubble_at(self, x: float, y: float) -> Optional[int]:
        return self.layout.bubble_at(x, y)

    # ------------------------------------------------------------------------------
    # Frames
    # ------------------------------------------------------------------------------

    def _present(self, brightness: Optional[float] = None, gradient_factor: Optional[float] = None) -> None:
        """Present the current bubbles. The gradient factor given becomes the current one."""
        is_night_mode = self.theme.get_is_night_mode()
        if brightness is None:
            brightness = 0.0 if is_night_mode else 1.0
        if gradient_factor is not None:
            self.state.current_gradient_factor = gradient_factor

        background = BackgroundDescriptor(
            brightness=brightness,
            gradient_factor=self.state.current_gradient_factor,
            accent_color=self.theme.get_theme_accent_color(),
            is_night_mode=is_night_mode,
            surface_width=self.layout.surface_width,
            surface_height=self.layout.surface_height,
        )
        bubbles = [BubbleDrawState.from_bubble(bubble) for bubble in self.layout]
        self.frame_sink.present_frame(background, bubbles)

    def redraw(self) -> None:
        """One frame at the current radii, e.g. after the palette source changed."""
        self._present()

    # ------------------------------------------------------------------------------
    # Animations
    # ------------------------------------------------------------------------------

    def set_factor(self, factor: float) -> None:
        """Resize every bubble to `factor` of its base radius in a single frame."""
        for bubble in self.layout:
            bubble.current_radius = bubble.base_radius * factor
        self._present(gradient_factor=factor)

    def pulse(self, index: int, expand: bool) -> None:
        """
        Grow (or shrink) one bubble by PULSE_STEP per frame for PULSE_FRAMES
        frames. A shrinking pulse releases the pressed bubble afterwards.

        Raises:
            IndexError: If `index` is not a bubble of the current layout.
        """
        if not 0 <= index < len(self.layout):
            raise IndexError(f"No bubble at index {index} (layout has {len(self.layout)}).")

        bubble = self.layout[index]
        delta = PULSE_STEP if expand else -PULSE_STEP
        for _ in range(PULSE_FRAMES):
            bubble.current_radius += delta
            self._present()

        if not expand:
            self.state.pressed_index = None

    def animate_to_factor_smoothly(self, target_factor: float) -> int:
        """
        Ease every bubble towards `target_factor` of its base radius.

        Bubble 0 drives the animation: its initial distance to the target
        decides the direction, its progress drives the background gradient,
        and the loop ends once it reaches its target exactly. Other bubbles
        that are not on target by then stay where they are.

        Returns:
            Number of frames presented.
        """
        if not np.isfinite(target_factor):
            raise ValueError(f"Target factor must be finite, got {target_factor}.")
        if not len(self.layout):
            return 0

        base = np.array([b.base_radius for b in self.layout], dtype=np.float64)
        current = np.array([b.current_radius for b in self.layout], dtype=np.float64)
        targets = base * target_factor
        ranges = targets - current
        steps = base * SMOOTH_STEP_FRACTION
        abs_ranges = np.abs(ranges)

        is_expansion = bool(ranges[0] > 0)
        direction = 1.0 if is_expansion else -1.0

        frames = 0
        while current[0] != targets[0]:
            gradient_factor = self._smooth_gradient_factor(
                abs(targets[0] - current[0]), abs_ranges[0], is_expansion
            )

            remaining = np.abs(targets - current)
            current = current + steps * speed_modifier(abs_ranges, remaining) * direction
            current = np.minimum(current, targets) if is_expansion else np.maximum(current, targets)
            self._write_radii(current)

            self._present(gradient_factor=gradient_factor)
            frames += 1

        logger.debug(f"Smooth resize to factor {target_factor:g} took {frames} frames.")
        return frames

    def _smooth_gradient_factor(self, remaining: float, full_range: float, is_expansion: bool) -> float:
        # Only let the gradient move towards the target so it does not jump back
        progress = 1 - remaining / full_range
        if is_expansion:
            factor = max(progress, self.state.current_gradient_factor)
        else:
            factor = min(progress, self.state.current_gradient_factor)
        return min(max(factor, 0.0), 1.0)

    def _write_radii(self, radii: npt.NDArray[np.float64]) -> None:
        for bubble, radius in zip(self.layout, radii):
            bubble.current_radius = float(radius)

    def crossfade_ui_mode(self, to_night: bool) -> None:
        """Fade the background brightness over CROSSFADE_STEPS + 1 frames."""
        steps = range(CROSSFADE_STEPS, -1, -1) if to_night else range(0, CROSSFADE_STEPS + 1)
        for x in steps:
            self._present(brightness=x / CROSSFADE_STEPS)

    def apply_zoom_offset(self, factor: float) -> None:
        """
        Pull every bubble towards the surface center by `factor` of its
        distance from the center. 0 puts bubbles back on their base position.
        """
        half_width = self.layout.surface_width // 2
        half_height = self.layout.surface_height // 2
        for bubble in self.layout:
            bubble.current_x = bubble.base_x - (bubble.base_x - half_width) * factor
            bubble.current_y = bubble.base_y - (bubble.base_y - half_height) * factor

    # ------------------------------------------------------------------------------
    # Host triggers
    # ------------------------------------------------------------------------------

    def on_surface_changed(self, width: int, height: int) -> None:
        logger.debug(f"Surface changed to {width}x{height}.")
        self.regenerate(width, height)
        # Twice, the first frame after a surface change may be dropped by the host
        self.set_factor(FULL_FACTOR)
        self.set_factor(FULL_FACTOR)

    def on_press(self, x: float, y: float) -> Optional[int]:
        index = self.bubble_at(x, y)
        logger.debug(f"Press at ({x:g}, {y:g}) hit bubble {index}.")
        self.state.pressed_index = index
        if index is not None:
            self.pulse(index, expand=True)
        return index

    def on_release(self) -> None:
        if self.state.pressed_index is None:
            return
        logger.debug(f"Release of bubble {self.state.pressed_index}.")
        self.pulse(self.state.pressed_index, expand=False)

    def on_zoom_changed(self, zoom: float) -> None:
        logger.debug(f"Zoom changed to {zoom:g}.")
        self.state.zoom_level = zoom
        self.apply_zoom_offset(zoom)
        self.set_factor(max(1 - zoom, MIN_ZOOM_FACTOR))

    def on_unlocked(self) -> None:
        logger.debug("Unlocked, restoring zoom and size.")
        self.apply_zoom_offset(self.state.zoom_level)
        self.animate_to_factor_smoothly(FULL_FACTOR)

    def on_locked(self) -> None:
        logger.debug("Locked, shrinking bubbles.")
        self.apply_zoom_offset(0.0)
        self.set_factor(LOCKED_FACTOR)

    def on_ui_mode_changed(self) -> None:
        to_night = self.theme.get_is_night_mode()
        logger.debug(f"UI mode changed, night mode: {to_night}.")
        self.crossfade_ui_mode(to_night)

    def on_palette_changed(self) -> None:
        logger.debug("Palette source changed, redrawing.")
        self.redraw()
