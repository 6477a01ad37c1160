"""
BubbleWall
==========
A field of non-overlapping bubbles that breathes with zoom, lock/unlock,
touch and day/night changes.

Layers:
    model       Pure data and algorithms (layout generation, colors, state).
    controller  The frame-stepped animation engine.
    view        Qt rendering of frames and the desktop host widget.
    app         QApplication setup and the main window.
"""
from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("bubblewall")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
