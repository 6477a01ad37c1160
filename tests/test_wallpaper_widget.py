import json

import pytest

from bubblewall.config import LOCKED_FACTOR
from bubblewall.model.palette import Color, Palette


@pytest.fixture
def settings(tmp_path):
    from PySide6.QtCore import QSettings

    return QSettings(str(tmp_path / "bubblewall.ini"), QSettings.Format.IniFormat)


@pytest.fixture
def widget(qapp, settings):
    from bubblewall.view.wallpaper_widget import WallpaperWidget

    w = WallpaperWidget(settings=settings, rng=5, night_mode=False)
    yield w
    w.deleteLater()


def test_night_mode_override_wins(qapp, settings):
    from bubblewall.view.wallpaper_widget import SETTINGS_NIGHT_MODE, WallpaperWidget

    settings.setValue(SETTINGS_NIGHT_MODE, False)
    assert WallpaperWidget(settings=settings, night_mode=True).get_is_night_mode()
    assert not WallpaperWidget(settings=settings).get_is_night_mode()

    settings.setValue(SETTINGS_NIGHT_MODE, True)
    assert WallpaperWidget(settings=settings).get_is_night_mode()


def test_accent_color_is_a_model_color(widget):
    assert isinstance(widget.get_theme_accent_color(), Color)


def test_default_palette(widget):
    assert widget.get_palette() == Palette.load()


def test_palette_path_from_settings(qapp, settings, tmp_path):
    from bubblewall.view.wallpaper_widget import SETTINGS_PALETTE_PATH, WallpaperWidget

    path = tmp_path / "mine.json"
    path.write_text(json.dumps({"bubble_colors": ["#ff0000", "#00ff00"]}), encoding="utf-8")
    settings.setValue(SETTINGS_PALETTE_PATH, str(path))

    assert len(WallpaperWidget(settings=settings).get_palette()) == 1


def test_present_frame_keeps_last_frame(widget):
    widget.engine.on_surface_changed(400, 600)

    background, bubbles = widget.last_frame()
    assert (background.surface_width, background.surface_height) == (400, 600)
    assert len(bubbles) == len(widget.engine.layout)


def test_lock_and_unlock(widget):
    widget.engine.on_surface_changed(600, 900)
    first = widget.engine.layout[0]

    widget.set_locked(True)
    assert first.current_radius == pytest.approx(first.base_radius * LOCKED_FACTOR)

    # Locking twice does not animate again
    widget.set_locked(True)
    assert first.current_radius == pytest.approx(first.base_radius * LOCKED_FACTOR)

    widget.set_locked(False)
    assert first.current_radius == first.base_radius


def test_night_toggle_crossfades(widget):
    from PySide6.QtCore import QEvent, Qt
    from PySide6.QtGui import QKeyEvent

    widget.engine.on_surface_changed(300, 300)
    widget.keyPressEvent(QKeyEvent(QEvent.Type.KeyPress, Qt.Key.Key_N, Qt.KeyboardModifier.NoModifier))

    background, _ = widget.last_frame()
    assert widget.get_is_night_mode()
    assert background.brightness == 0.0
