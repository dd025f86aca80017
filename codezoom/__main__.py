"""Module entrypoint for ``python -m codezoom``.

All argument parsing and dispatch happen in ``codezoom.cli``.
"""

import sys

from .cli import main


if __name__ == "__main__":
    sys.exit(main())
