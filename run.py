"""
Entry Point Script (Bootstrap)
==============================
Starts the wallpaper window straight from a source checkout.

Why is this file needed?
------------------------
1. It is located outside the 'src' package to act as a convenient runner.
2. It modifies 'sys.path' so 'from bubblewall...' resolves without installing
   the package first.

Usage:
    $ python run.py --debug
"""
import sys
import os

current_dir: str = os.path.dirname(os.path.abspath(__file__))
src_path: str = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)

appid = 'bubblewall.desktop'  # Arbitrary string
try:
    import ctypes
    ctypes.windll.shell32.SetCurrentProcessExplicitAppUserModelID(appid)
except (AttributeError, ImportError):
    # Not on Windows or ctypes not available
    pass

from bubblewall.main import main

if __name__ == "__main__":
    sys.exit(main())
