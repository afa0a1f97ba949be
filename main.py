"""Entry Point - Root Module.

Allows running the monitor with ``python main.py`` from a checkout.
It imports from the quakewatch package.
"""

import sys

from quakewatch.main import main

__all__ = [
    "main",
]


if __name__ == "__main__":
    sys.exit(main())
