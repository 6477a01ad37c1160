"""
Frame Renderer
==============
Paints one engine frame with QPainter: a grey background, an accent colored
gradient rising from the bottom edge, then every bubble as a soft shadow, a
filled disc and a thick outline ring.
"""
from __future__ import annotations

from typing import Sequence

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QBrush, QColor, QGradient, QImage, QLinearGradient, QPainter, QPen, QRadialGradient

from bubblewall.config import (
    GRADIENT_BRIGHT_ALPHA,
    GRADIENT_DARK_ALPHA_DAY,
    GRADIENT_DARK_ALPHA_NIGHT,
    GRADIENT_HEIGHT_FRACTION,
)
from bubblewall.controller.frame import BackgroundDescriptor, BubbleDrawState
from bubblewall.model.palette import Color, round_half_up


def to_qcolor(color: Color) -> QColor:
    return QColor(color.red, color.green, color.blue, color.alpha)


class FrameRenderer:
    def __init__(self, outline_size: int = 30) -> None:
        self.outline_size = outline_size

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def render(
        self,
        painter: QPainter,
        background: BackgroundDescriptor,
        bubbles: Sequence[BubbleDrawState]
    ) -> None:
        """Paint a full frame on an active painter."""
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        self._draw_background(painter, background)
        for bubble in bubbles:
            self._draw_bubble(painter, bubble)

    def render_image(
        self,
        background: BackgroundDescriptor,
        bubbles: Sequence[BubbleDrawState]
    ) -> QImage:
        """Paint a frame into a new ARGB image the size of the surface."""
        width = max(1, background.surface_width)
        height = max(1, background.surface_height)
        image = QImage(width, height, QImage.Format.Format_ARGB32)
        image.fill(Qt.GlobalColor.transparent)

        painter = QPainter(image)
        try:
            self.render(painter, background, bubbles)
        finally:
            painter.end()
        return image

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _draw_background(self, painter: QPainter, background: BackgroundDescriptor) -> None:
        width = float(background.surface_width)
        height = float(background.surface_height)
        surface = QRectF(0.0, 0.0, width, height)

        level = round_half_up(255 * background.brightness)
        painter.fillRect(surface, QColor(level, level, level, 255))

        dark_alpha = GRADIENT_DARK_ALPHA_NIGHT if background.is_night_mode else GRADIENT_DARK_ALPHA_DAY
        dark = background.accent_color.with_alpha_factor(dark_alpha)
        bright = background.accent_color.with_alpha_factor(GRADIENT_BRIGHT_ALPHA)

        top = height - height * (background.gradient_factor * GRADIENT_HEIGHT_FRACTION)
        gradient = QLinearGradient(0.0, height, 0.0, top)
        gradient.setColorAt(0.0, to_qcolor(dark))
        gradient.setColorAt(1.0, to_qcolor(bright))
        gradient.setSpread(QGradient.Spread.PadSpread)
        painter.fillRect(surface, QBrush(gradient))

    def _draw_bubble(self, painter: QPainter, bubble: BubbleDrawState) -> None:
        radius = bubble.radius
        if radius <= 0:
            return
        center = QPointF(bubble.x, bubble.y)

        # Shadow, offset towards the bottom right
        shadow_center = QPointF(bubble.x + radius / 6, bubble.y + radius / 6)
        shadow = QRadialGradient(shadow_center, radius)
        shadow.setColorAt(0.0, QColor(0, 0, 0, 255))
        shadow.setColorAt(1.0, QColor(0, 0, 0, 0))
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(shadow))
        painter.drawEllipse(shadow_center, radius, radius)

        painter.setBrush(QBrush(to_qcolor(bubble.fill_color)))
        painter.drawEllipse(center, radius, radius)

        # The ring is stroked on its center line, keep it inside the disc
        ring_radius = radius - self.outline_size / 2
        if ring_radius > 0 and self.outline_size > 0:
            painter.setBrush(Qt.BrushStyle.NoBrush)
            painter.setPen(QPen(to_qcolor(bubble.outline_color), self.outline_size))
            painter.drawEllipse(center, ring_radius, ring_radius)
