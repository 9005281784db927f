"""Module entrypoint for ``python -m catls``.

This keeps module-mode execution behavior identical to the console script.
"""

import sys

from .cli import main


if __name__ == "__main__":
    sys.exit(main())
