"""Command-line interface."""
import sys

from bubblewall.main import main

if __name__ == "__main__":
    sys.exit(main())
