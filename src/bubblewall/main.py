"""
Application Initialization
==========================
This module parses the command line, sets up logging and starts the Qt Event
Loop with the wallpaper window.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Configures logging before anything else logs.
2. Validates the palette up front so a broken palette fails before a window
   is shown.
3. Instantiates the Main Window, which owns the wallpaper widget and its
   animation engine.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from bubblewall.logging_config import setup_logging
from bubblewall.model.palette import Palette

logger = logging.getLogger(__name__)


def parse_size(text: str) -> tuple[int, int]:
    """Parse 'WIDTHxHEIGHT'."""
    try:
        width, height = (int(part) for part in text.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected WIDTHxHEIGHT, got '{text}'.")
    if width <= 0 or height <= 0:
        raise argparse.ArgumentTypeError(f"Size must be positive, got '{text}'.")
    return width, height


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bubblewall", description="Animated bubble wallpaper.")
    parser.add_argument("--debug", action="store_true", help="Verbose logging.")
    parser.add_argument("--log-file", default=None, help="Also write the log to this file.")
    parser.add_argument("--palette", default=None, help="JSON palette file to color the bubbles with.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible layout.")
    parser.add_argument("--size", type=parse_size, default=(540, 960), help="Window size, e.g. 540x960.")

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--night", dest="night_mode", action="store_true", default=None,
                      help="Force night mode.")
    mode.add_argument("--day", dest="night_mode", action="store_false",
                      help="Force day mode.")
    return parser


def resolve_palette_path(cli_path: Optional[str], settings) -> Optional[str]:
    """The palette file the wallpaper will load: CLI first, then the saved setting."""
    from bubblewall.view.wallpaper_widget import SETTINGS_PALETTE_PATH

    return cli_path or settings.value(SETTINGS_PALETTE_PATH, None) or None


def _palette_loads(path: Optional[str]) -> bool:
    try:
        Palette.load(path)
    except (OSError, ValueError):
        logger.exception(f"Could not load the bubble palette from: {path or 'the packaged default'}")
        return False
    return True


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # 1. Setup Logging (Console + Optional File)
    setup_logging(level=logging.DEBUG if args.debug else logging.INFO, log_file=args.log_file)

    # 2. Fail fast on a palette that cannot color bubbles
    if not _palette_loads(args.palette):
        return 1

    # Qt is only needed from here on
    from bubblewall.app.application import create_app
    from bubblewall.app.main_window import MainWindow
    from PySide6.QtCore import QSettings

    # 3. Create the Qt Application
    app = create_app()

    # A palette path saved in the settings gets the same check
    palette_path = resolve_palette_path(args.palette, QSettings())
    if palette_path != args.palette and not _palette_loads(palette_path):
        return 1

    # 4. Initialize the Main Window
    window = MainWindow(rng=args.seed, palette_path=palette_path, night_mode=args.night_mode)
    window.resize(*args.size)
    window.show()

    # 5. Start Event Loop
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
