"""Module entrypoint for ``python -m tez``.

All argument parsing and runtime setup happen in ``tez.cli``.
"""

import sys

from .cli import main


if __name__ == "__main__":
    sys.exit(main())
