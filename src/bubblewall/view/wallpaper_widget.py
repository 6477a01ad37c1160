"""
Wallpaper Widget (Desktop Host)
===============================
A QWidget that plays the part of the wallpaper surface for the engine.

It is both collaborators the engine talks to:
    - FrameSink: every presented frame is stored and painted synchronously
      with repaint(), so the engine's blocking loops show every frame.
    - ThemeProvider: accent color and night mode come from the Qt palette and
      style hints (overridable from the command line or QSettings), the bubble palette from a
      JSON file.

Qt events are translated into the engine triggers:
    resize                    -> surface changed
    left button press/release -> press/release
    mouse wheel               -> zoom changed (steps of ZOOM_STEP)
    application (in)active    -> locked/unlocked
    color scheme change       -> day/night crossfade
    keys L / N / P            -> toggle lock, toggle night mode, redraw after a palette edit
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from PySide6.QtCore import QSettings, Qt
from PySide6.QtGui import (
    QColor,
    QGuiApplication,
    QKeyEvent,
    QMouseEvent,
    QPainter,
    QPaintEvent,
    QPalette,
    QResizeEvent,
    QWheelEvent,
)
from PySide6.QtWidgets import QWidget

from bubblewall.config import DEFAULT_ACCENT_COLOR
from bubblewall.controller.engine import AnimationEngine
from bubblewall.controller.frame import BackgroundDescriptor, BubbleDrawState
from bubblewall.model.layout import LayoutConfig, RandomSource
from bubblewall.model.palette import Color, Palette
from bubblewall.view.renderer import FrameRenderer

logger = logging.getLogger(__name__)

ZOOM_STEP = 0.1

SETTINGS_NIGHT_MODE = "ui/night_mode"
SETTINGS_PALETTE_PATH = "ui/palette_path"


class WallpaperWidget(QWidget):
    def __init__(
        self,
        settings: Optional[QSettings] = None,
        config: Optional[LayoutConfig] = None,
        rng: RandomSource = None,
        palette_path: Optional[str] = None,
        night_mode: Optional[bool] = None,
        parent: QWidget | None = None
    ) -> None:
        super().__init__(parent=parent)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setAttribute(Qt.WidgetAttribute.WA_OpaquePaintEvent)

        self.settings = settings or QSettings()
        self.palette_path = palette_path
        self._night_mode_override = night_mode
        config = config or LayoutConfig()
        self.renderer = FrameRenderer(outline_size=config.outline_size)
        self.engine = AnimationEngine(frame_sink=self, theme=self, config=config, rng=rng)

        self._frame: tuple[BackgroundDescriptor, Sequence[BubbleDrawState]] | None = None
        self._locked = False
        self._last_night_mode = self.get_is_night_mode()

        self._connect_host_signals()

    # ------------------------------------------------------------------------------
    # FrameSink
    # ------------------------------------------------------------------------------

    def present_frame(self, background: BackgroundDescriptor, bubbles: Sequence[BubbleDrawState]) -> None:
        self._frame = (background, bubbles)
        self.repaint()

    def last_frame(self) -> tuple[BackgroundDescriptor, Sequence[BubbleDrawState]] | None:
        return self._frame

    # ------------------------------------------------------------------------------
    # ThemeProvider
    # ------------------------------------------------------------------------------

    def get_theme_accent_color(self) -> Color:
        palette = self.palette()
        role = getattr(QPalette.ColorRole, "Accent", QPalette.ColorRole.Highlight)
        color: QColor = palette.color(role)
        if not color.isValid():
            return Color.parse(DEFAULT_ACCENT_COLOR)
        return Color(alpha=color.alpha(), red=color.red(), green=color.green(), blue=color.blue())

    def get_is_night_mode(self) -> bool:
        if self._night_mode_override is not None:
            return self._night_mode_override
        override = self.settings.value(SETTINGS_NIGHT_MODE, None)
        if override is not None:
            return str(override).lower() in ("true", "1", "yes")

        hints = QGuiApplication.styleHints()
        if hasattr(hints, "colorScheme"):
            scheme = hints.colorScheme()
            if scheme != Qt.ColorScheme.Unknown:
                return scheme == Qt.ColorScheme.Dark

        # Older Qt: guess from the window background
        return self.palette().color(QPalette.ColorRole.Window).lightness() < 128

    def get_palette(self) -> Palette:
        path = self.palette_path or self.settings.value(SETTINGS_PALETTE_PATH, None) or None
        return Palette.load(path)

    # ------------------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------------------

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        try:
            if self._frame is None:
                painter.fillRect(self.rect(), Qt.GlobalColor.black)
                return
            background, bubbles = self._frame
            self.renderer.render(painter, background, bubbles)
        finally:
            painter.end()

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        size = event.size()
        self.engine.on_surface_changed(size.width(), size.height())

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() != Qt.MouseButton.LeftButton:
            return super().mousePressEvent(event)
        pos = event.position()
        self.engine.on_press(int(pos.x()), int(pos.y()))

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if event.button() != Qt.MouseButton.LeftButton:
            return super().mouseReleaseEvent(event)
        self.engine.on_release()

    def wheelEvent(self, event: QWheelEvent) -> None:
        delta = event.angleDelta().y()
        if delta == 0:
            return
        step = ZOOM_STEP if delta > 0 else -ZOOM_STEP
        zoom = min(1.0, max(0.0, round(self.engine.state.zoom_level + step, 6)))
        self.engine.on_zoom_changed(zoom)

    def keyPressEvent(self, event: QKeyEvent) -> None:
        key = event.key()
        if key == Qt.Key.Key_L:
            self.set_locked(not self._locked)
        elif key == Qt.Key.Key_N:
            self._night_mode_override = not self.get_is_night_mode()
            self._on_color_scheme_changed()
        elif key == Qt.Key.Key_P:
            self.engine.on_palette_changed()
        else:
            super().keyPressEvent(event)

    # ------------------------------------------------------------------------------
    # Host lifecycle
    # ------------------------------------------------------------------------------

    def set_locked(self, locked: bool) -> None:
        if locked == self._locked:
            return
        self._locked = locked
        logger.info(f"Host {'locked' if locked else 'unlocked'}.")
        if locked:
            self.engine.on_locked()
        else:
            self.engine.on_unlocked()

    def _connect_host_signals(self) -> None:
        app = QGuiApplication.instance()
        if app is None:
            return
        app.applicationStateChanged.connect(self._on_application_state_changed)
        hints = QGuiApplication.styleHints()
        if hasattr(hints, "colorSchemeChanged"):
            hints.colorSchemeChanged.connect(lambda *_: self._on_color_scheme_changed())

    def _on_application_state_changed(self, state: Qt.ApplicationState) -> None:
        if state == Qt.ApplicationState.ApplicationActive:
            self.set_locked(False)
        elif state in (Qt.ApplicationState.ApplicationInactive, Qt.ApplicationState.ApplicationSuspended):
            self.set_locked(True)

    def _on_color_scheme_changed(self) -> None:
        night_mode = self.get_is_night_mode()
        if night_mode == self._last_night_mode:
            return
        self._last_night_mode = night_mode
        self.engine.on_ui_mode_changed()
