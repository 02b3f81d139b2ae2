"""Module entrypoint for ``python -m lazylauncher``."""

import sys

from .cli import main


if __name__ == "__main__":
    sys.exit(main())
