from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QSettings
from PySide6.QtWidgets import QMainWindow

from bubblewall.app.application import VISIBLE_APP_NAME
from bubblewall.model.layout import LayoutConfig, RandomSource
from bubblewall.view.wallpaper_widget import WallpaperWidget


class MainWindow(QMainWindow):
    def __init__(
        self,
        settings: Optional[QSettings] = None,
        config: Optional[LayoutConfig] = None,
        rng: RandomSource = None,
        palette_path: Optional[str] = None,
        night_mode: Optional[bool] = None
    ) -> None:
        super().__init__()
        self.setWindowTitle(VISIBLE_APP_NAME)

        self.wallpaper = WallpaperWidget(
            settings=settings,
            config=config,
            rng=rng,
            palette_path=palette_path,
            night_mode=night_mode,
            parent=self,
        )
        self.setCentralWidget(self.wallpaper)
        self.wallpaper.setFocus()
