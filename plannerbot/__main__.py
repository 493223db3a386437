"""Entry point for `python -m plannerbot`."""

import sys

from plannerbot.cli import main

if __name__ == "__main__":
    sys.exit(main())
